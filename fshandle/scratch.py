#
# fshandle Temporary Files and Directories
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import os
import tempfile

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .directory import DirectoryHandle
from .errors import FilesystemError, os_reason
from .file import FileHandle

# Constants ------------------------------------------------------------------------------------------------------------
TEMP_FILE_PREFIX = "TemporaryFile_"
TEMP_DIR_PREFIX = "TemporaryDir_"

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class TemporaryItem(ABC):
    """
    Mixin giving a file or directory handle ownership of the item it points to.

    When the owner is done with the item it calls ``close()``, or leaves a ``with`` block. If
    delete_on_exit is still set and the item exists, it is deleted then. Cleanup is best-effort:
    failures are logged at debug level and never raised. Calling ``close()`` more than once is
    harmless.

    Cleanup is never left to garbage collection. A temporary item that is neither closed nor used
    in a ``with`` block stays on disk.
    """

    _delete_on_exit: bool = True

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def delete_on_exit(self) -> bool:
        """Whether the item is deleted when this handle is closed."""
        return self._delete_on_exit

    @delete_on_exit.setter
    def delete_on_exit(self, value: bool) -> None:
        self._delete_on_exit = bool(value)

    def get_delete_on_exit(self) -> bool:
        return self._delete_on_exit

    def set_delete_on_exit(self, value: bool) -> Self:
        """
        Set whether the item is deleted when this handle is closed.

        Clearing the flag does not guarantee the item is kept: the OS may still clean up its
        temporary area.
        """
        self._delete_on_exit = bool(value)
        return self

    def close(self) -> None:
        """Release held resources and, if delete_on_exit is set, delete the item. Never raises."""
        try:
            parent_close = getattr(super(), "close", None)
            if parent_close is not None:
                parent_close()
            if self._delete_on_exit and self.exists():
                self._discard()
        except Exception as exc:
            logger.debug("ignored failure cleaning up %s: %s", self.get_path(), exc)

    @abstractmethod
    def _discard(self) -> None:
        """Delete the underlying item."""


class TemporaryFileHandle(TemporaryItem, FileHandle):
    """
    A temporary file, deleted when the handle is closed.

    Examples:
        >>> with TemporaryFileHandle.create_new() as tmp:
        ...     tmp.set_contents(b"scratch data")
        ...     tmp.get_size()
        12
    """

    @classmethod
    def create_new(cls, base_dir: str | os.PathLike[str] | None = None) -> Self:
        """
        Create a new, empty, uniquely named file.

        Args:
            base_dir: Directory to create the file in. Defaults to the system temporary directory.

        Returns:
            TemporaryFileHandle: Handle for the new file, with delete_on_exit set.

        Raises:
            FilesystemError: If the file cannot be created.
        """
        base_dir = tempfile.gettempdir() if base_dir is None else os.fspath(base_dir)
        try:
            fd, path = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX, dir=base_dir)
        except OSError as exc:
            raise FilesystemError(
                "create a temporary file in", base_dir, reason=os_reason(exc)) from exc

        os.close(fd)
        logger.debug("created temporary file %s", path)
        return cls(path)

    def _discard(self) -> None:
        self.delete()


class TemporaryDirectoryHandle(TemporaryItem, DirectoryHandle):
    """
    A temporary directory, deleted together with its contents when the handle is closed.

    Examples:
        >>> with TemporaryDirectoryHandle.create_new() as tmp:
        ...     tmp.get_file("notes.txt", allow_missing=True).set_contents("hello")
        ...     tmp.has_child("notes.txt")
        True
    """

    @classmethod
    def create_new(cls, base_dir: str | os.PathLike[str] | None = None) -> Self:
        """
        Create a new, empty, uniquely named directory.

        Args:
            base_dir: Directory to create the new directory in. Defaults to the system temporary
                directory.

        Returns:
            TemporaryDirectoryHandle: Handle for the new directory, with delete_on_exit set.

        Raises:
            FilesystemError: If the directory cannot be created.
        """
        base_dir = tempfile.gettempdir() if base_dir is None else os.fspath(base_dir)
        try:
            path = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX, dir=base_dir)
        except OSError as exc:
            raise FilesystemError(
                "create a temporary directory in", base_dir, reason=os_reason(exc)) from exc

        logger.debug("created temporary directory %s", path)
        return cls(path)

    def _discard(self) -> None:
        self.delete(recursive=True)


# Methods --------------------------------------------------------------------------------------------------------------


@contextmanager
def temp_file(dir: str | os.PathLike[str] | None = None, *, delete: bool = True) -> Iterator[TemporaryFileHandle]:
    """
    Context manager that provides a handle to a new temporary file.

    The file is removed upon exiting the 'with' block unless delete is False or the caller cleared
    delete_on_exit on the handle.
    """
    with TemporaryFileHandle.create_new(dir).set_delete_on_exit(delete) as tmp:
        yield tmp


@contextmanager
def temp_dir(dir: str | os.PathLike[str] | None = None, *, delete: bool = True) -> Iterator[TemporaryDirectoryHandle]:
    """
    Context manager that provides a handle to a new temporary directory.

    The directory and its contents are removed upon exiting the 'with' block unless delete is False
    or the caller cleared delete_on_exit on the handle.
    """
    with TemporaryDirectoryHandle.create_new(dir).set_delete_on_exit(delete) as tmp:
        yield tmp
