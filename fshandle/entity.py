"""
Abstract base for handles to filesystem entries.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING

# Local ----------------------------------------------------------------------------------------------------------------
from .os import translate_errors
from .utils import class_name, split_extension

if TYPE_CHECKING:
    from .directory import DirectoryHandle


# Classes --------------------------------------------------------------------------------------------------------------

class PathEntity(os.PathLike):
    """
    Handle for a path on the filesystem.

    A handle is an in-memory object representing a path, whether or not anything currently exists
    there. Subclasses decide what "exists" means: FileHandle requires a regular file, DirectoryHandle
    a directory.

    Handles are path-like, so they can be passed to ``open()``, ``os.stat()`` or any fshandle
    operation expecting a path.

    Args:
        path: Path of the entry. It is canonicalized by the subclass when the entry already exists.
    """

    _path: str

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = os.fspath(path)

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"{class_name(self)}({self._path!r})"

    @abstractmethod
    def exists(self) -> bool:
        """Check whether an entry of this handle's kind exists at the path."""
        ...

    @property
    def path(self) -> str:
        """The path this handle refers to."""
        return self._path

    @property
    def name(self) -> str:
        """The last component of the path."""
        return self.get_name()

    def get_path(self) -> str:
        return self._path

    def get_name(self) -> str:
        """Return the last component of the path."""
        return os.path.basename(self._path.rstrip(os.sep) or self._path)

    def get_extension(self) -> str | None:
        """
        Return the portion of the name following the final period.

        Returns:
            str | None: The extension without its period, or None if the name has no period or its
            final period is the first character.

        Examples:
            >>> FileHandle("photo.jpg").get_extension()
            'jpg'
            >>> FileHandle(".bashrc").get_extension() is None
            True
        """
        return split_extension(self.get_name())[1]

    def get_name_without_extension(self) -> str:
        """Return the name with the final period and anything after it removed."""
        return split_extension(self.get_name())[0]

    def get_parent_path(self) -> str | None:
        """
        Return the path of the directory containing this entry.

        Returns:
            str | None: Parent path, or None if this entry is a filesystem root.
        """
        parent = os.path.dirname(self._path.rstrip(os.sep) or self._path) or os.curdir
        if parent == self._path:
            return None
        return parent

    def get_parent_directory(self) -> "DirectoryHandle | None":
        """
        Return the directory containing this entry.

        Returns:
            DirectoryHandle | None: Handle for the parent, or None if this entry is a filesystem root.
        """
        from .directory import DirectoryHandle

        parent = self.get_parent_path()
        if not parent:
            return None
        return DirectoryHandle(parent)

    def get_last_modified_date(self) -> datetime | None:
        """
        Get the modification time of the entry.

        Returns:
            datetime | None: Timezone-aware local datetime, or None if the entry does not exist.

        Raises:
            FilesystemError: If the entry exists but its modification time cannot be read.
        """
        if not self.exists():
            return None

        with translate_errors("determine modification date of", self._path):
            timestamp = os.path.getmtime(self._path)

        return datetime.fromtimestamp(timestamp).astimezone()

    def is_readable(self) -> bool:
        """Check the entry exists and the current process may read it."""
        return self.exists() and os.access(self._path, os.R_OK)

    def is_writable(self) -> bool:
        """Check the entry exists and the current process may write to it."""
        return self.exists() and os.access(self._path, os.W_OK)
