"""
Copy primitives mirroring stdlib shutil, with failures translated to FilesystemError.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import os
import shutil
import subprocess

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import FilesystemError, os_reason

# Constants ------------------------------------------------------------------------------------------------------------
COPY_TREE_COMMAND = ("cp", "-R")

logger = logging.getLogger(__name__)


# Methods --------------------------------------------------------------------------------------------------------------

def copy_file(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> str:
    """
    Copy the contents of a single file to dst.

    The destination is created or truncated. Only content is copied; permissions and timestamps of
    a new destination follow the process umask and current time.

    Args:
        src: Existing source file.
        dst: Full destination file path (not a directory).

    Returns:
        str: The destination path.

    Raises:
        FilesystemError: If the OS copy fails. The OSError is chained as the cause.

    Examples:
        >>> copy_file("/tmp/a.txt", "/tmp/b.txt")
        '/tmp/b.txt'
    """
    src, dst = os.fspath(src), os.fspath(dst)
    logger.debug("copy file %s -> %s", src, dst)
    try:
        shutil.copyfile(src, dst)
    except (OSError, shutil.Error) as exc:
        raise FilesystemError("copy", src, dst, reason=os_reason(exc)) from exc
    return dst


def copy_tree(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> str:
    """
    Recursively copy a directory by running the external copy command.

    Runs ``cp -R src dst`` (see COPY_TREE_COMMAND) and waits for it. If dst is an existing
    directory the command copies src into it, so callers resolve the final path first.

    Args:
        src: Existing source directory.
        dst: Destination path for the copy.

    Returns:
        str: The destination path.

    Raises:
        FilesystemError: If the command cannot be started or exits with a non-zero status. The
            command's diagnostic output is included in the message.

    Examples:
        >>> copy_tree("/srv/site", "/srv/site-backup")
        '/srv/site-backup'
    """
    src, dst = os.fspath(src), os.fspath(dst)
    args = [*COPY_TREE_COMMAND, src, dst]
    logger.debug("run %s", args)

    try:
        result = subprocess.run(args, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise FilesystemError("copy", src, dst, reason=os_reason(exc)) from exc

    if result.returncode != 0:
        diagnostic = (result.stderr or result.stdout or "").strip()
        reason = diagnostic or f"{COPY_TREE_COMMAND[0]} exited with status {result.returncode}"
        raise FilesystemError("copy", src, dst, reason=reason)

    return dst
