"""
Shared move, rename, copy and delete primitives for file and directory handles.

Each primitive follows the same convention: resolve a bare-directory target to ``target/<name>``,
check that the source exists, call the OS, and translate any OSError into FilesystemError.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import os

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import FilesystemError
from .shutil import copy_file

if TYPE_CHECKING:
    from .entity import PathEntity

logger = logging.getLogger(__name__)


# Methods --------------------------------------------------------------------------------------------------------------

@contextmanager
def translate_errors(operation: str, *paths: str | os.PathLike[str]) -> Iterator[None]:
    """
    Context manager converting OSError raised inside the block into FilesystemError.

    Args:
        operation: Verb used in the error message, e.g. "read".
        paths: Paths named in the error message.

    Raises:
        FilesystemError: Chained from the original OSError.

    Examples:
        >>> with translate_errors("read", "/etc/shadow"):
        ...     open("/etc/shadow", "rb").read()
        Traceback (most recent call last):
        ...
        fshandle.errors.FilesystemError: Unable to read /etc/shadow (Permission denied)
    """
    try:
        yield
    except OSError as exc:
        raise FilesystemError.from_os_error(operation, exc, *paths) from exc


def resolve_target(name: str, target: str | os.PathLike[str]) -> str:
    """
    Resolve a move or copy target.

    If target names an existing directory, the item keeps its name inside that directory.
    Otherwise target is taken as the full new path.

    Args:
        name: Last path segment of the item being moved or copied.
        target: New path, or directory that will contain the item. Any path-like object is
            accepted, including a DirectoryHandle.

    Returns:
        str: The full destination path.

    Raises:
        TypeError: If target is not a str or path-like object.
    """
    if not isinstance(target, (str, os.PathLike)):
        raise TypeError(f"Invalid target type: {type(target).__name__}. A path or directory is required")

    target = os.fspath(target)
    if os.path.isdir(target):
        target = os.path.join(target, name)
    return target


def move_item(entity: "PathEntity", target: str | os.PathLike[str]) -> str:
    """
    Move an existing item to target, optionally changing its name.

    Args:
        entity: Handle of the item to move.
        target: Full new path, or directory that will contain the item.

    Returns:
        str: Canonical path of the item at its new location.

    Raises:
        FilesystemError: If the item does not exist or the OS rename fails.
    """
    source = entity.get_path()
    if not entity.exists():
        raise FilesystemError(
            "move", source, message=f"The item {source} cannot be moved because it does not exist")

    new_path = resolve_target(entity.get_name(), target)
    logger.debug("move %s -> %s", source, new_path)

    with translate_errors("move", source, new_path):
        os.rename(source, new_path)

    return os.path.realpath(new_path)


def copy_item(entity: "PathEntity", target: str | os.PathLike[str]) -> str:
    """
    Copy an existing file to target, optionally changing its name.

    Args:
        entity: Handle of the file to copy.
        target: Full path of the copy, or directory that will contain it.

    Returns:
        str: Path of the new copy. The caller wraps it in the matching handle type.

    Raises:
        FilesystemError: If the item does not exist or the OS copy fails.
    """
    source = entity.get_path()
    if not entity.exists():
        raise FilesystemError(
            "copy", source, message=f"The item {source} cannot be copied because it does not exist")

    new_path = resolve_target(entity.get_name(), target)
    return copy_file(source, new_path)


def delete_item(entity: "PathEntity") -> None:
    """
    Remove a non-directory item if it exists.

    Args:
        entity: Handle of the item to remove.

    Raises:
        FilesystemError: If the item exists and the OS unlink fails.
    """
    if not entity.exists():
        return

    path = entity.get_path()
    logger.debug("delete %s", path)
    with translate_errors("delete", path):
        os.unlink(path)


def rename_item(entity: "PathEntity", new_name: str) -> str:
    """
    Give an existing item a new name within its current parent directory.

    Unlike move_item(), new_name is never resolved against an existing directory: a sibling
    directory of that name is an OS error, not a move target.

    Args:
        entity: Handle of the item to rename.
        new_name: Plain name, without any directory part.

    Returns:
        str: Canonical path of the item under its new name.

    Raises:
        FilesystemError: If new_name is a self or parent reference, the item has no parent
            directory, the item does not exist, or the OS rename fails.
    """
    source = entity.get_path()
    if new_name in ("", os.curdir, os.pardir):
        raise FilesystemError("rename", source, message=f"Invalid name for {source}: {new_name!r}")

    parent = entity.get_parent_path()
    if parent is None:
        raise FilesystemError(
            "rename", source, message=f"The item {source} cannot be renamed because it has no parent directory")
    if not entity.exists():
        raise FilesystemError(
            "rename", source, message=f"The item {source} cannot be renamed because it does not exist")

    new_path = os.path.join(parent, new_name)
    logger.debug("rename %s -> %s", source, new_path)

    with translate_errors("rename", source, new_path):
        os.rename(source, new_path)

    return os.path.realpath(new_path)


def remove_tree(path: str | os.PathLike[str]) -> None:
    """
    Remove a directory and everything inside it.

    Symbolic links are removed as links, never followed: the target of a link inside the tree is
    left untouched, and dangling links are removed like any other entry.

    Args:
        path: Directory to remove.

    Raises:
        FilesystemError: On the first entry that cannot be removed. Entries already removed stay
            removed.
    """
    path = os.fspath(path)
    with translate_errors("remove directory", path):
        with os.scandir(path) as entries:
            children = [(entry.path, entry.is_dir(follow_symlinks=False)) for entry in entries]

    for child_path, is_dir in children:
        if is_dir:
            remove_tree(child_path)
            continue
        logger.debug("delete %s", child_path)
        with translate_errors("delete", child_path):
            os.unlink(child_path)

    logger.debug("remove directory %s", path)
    with translate_errors("remove directory", path):
        os.rmdir(path)
