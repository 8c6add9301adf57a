"""
Handle for a regular file on the filesystem.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os
import shutil
import sys

from typing import BinaryIO, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .entity import PathEntity
from .errors import FilesystemError
from .os import copy_item, delete_item, move_item, rename_item, translate_errors


# Classes --------------------------------------------------------------------------------------------------------------

class FileHandle(PathEntity):
    """
    Represents a file on the filesystem.

    - The file does not necessarily exist.
    - A directory is not considered to be a file.
    - The handle can carry metadata, a media type and a display name, which exist only on the
      object and are never written to the filesystem.

    All mutating operations act on the filesystem immediately.

    Args:
        path: Path of the file. If a regular file exists there, the path is canonicalized.

    Attributes:
        media_type: Internet media type (MIME type) associated with the handle, or None.
        display_name: 'Virtual' filename associated with the handle, or None.

    Examples:
        >>> f = FileHandle("/tmp/report.csv")
        >>> f.set_contents(b"a,b\\n1,2\\n").get_size()
        8
        >>> f.get_extension()
        'csv'
        >>> f.rename_to("old-report.csv").get_path()
        '/tmp/old-report.csv'
    """

    media_type: str | None
    display_name: str | None

    def __init__(self, path: str | os.PathLike[str]) -> None:
        path = os.fspath(path)
        if os.path.isfile(path):
            path = os.path.realpath(path)
        super().__init__(path)
        self.media_type = None
        self.display_name = None

    def exists(self) -> bool:
        """Check whether a regular file exists at the path."""
        return os.path.isfile(self._path)

    def get_size(self) -> int | None:
        """
        Get the size of the file.

        Returns:
            int | None: Size in bytes, or None if the file does not exist.

        Raises:
            FilesystemError: If the file exists but its size cannot be read.
        """
        if not self.exists():
            return None

        with translate_errors("determine size of file", self._path):
            return os.path.getsize(self._path)

    def get_contents(self) -> bytes | None:
        """
        Read the whole file.

        Returns:
            bytes | None: File contents, or None if the file does not exist.

        Raises:
            FilesystemError: If the file exists but cannot be read.
        """
        if not self.exists():
            return None

        with translate_errors("read file", self._path):
            with open(self._path, "rb") as f:
                return f.read()

    def set_contents(self, contents: bytes | str) -> Self:
        """
        Replace the contents of the file, creating it if necessary.

        Args:
            contents: New contents. A str is written as UTF-8.

        Returns:
            Self: This handle.

        Raises:
            FilesystemError: If the file cannot be written.
            TypeError: If contents is neither bytes-like nor str. The file is left untouched.
        """
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        elif not isinstance(contents, (bytes, bytearray, memoryview)):
            raise TypeError(f"Invalid contents type: {type(contents).__name__}. bytes or str is required")

        with translate_errors("write to file", self._path):
            with open(self._path, "wb") as f:
                f.write(contents)

        # The file may not have existed when the handle was built
        self._path = os.path.realpath(self._path)
        return self

    def output(self, stream: BinaryIO | None = None) -> Self:
        """
        Write the whole file to standard output, or to the given binary stream.

        Does nothing if the file does not exist.

        Args:
            stream: Binary stream to write to. Defaults to the binary buffer of sys.stdout.

        Returns:
            Self: This handle.

        Raises:
            FilesystemError: If the file exists but cannot be read.
        """
        if not self.exists():
            return self

        if stream is None:
            sys.stdout.flush()
            stream = sys.stdout.buffer

        with translate_errors("output file", self._path):
            with open(self._path, "rb") as f:
                shutil.copyfileobj(f, stream)
            stream.flush()

        return self

    def copy_to(self, target: str | os.PathLike[str]) -> "FileHandle":
        """
        Copy the file to a new location, optionally changing its name.

        Args:
            target: Full path the copy will have, or the directory that will contain it.

        Returns:
            FileHandle: Handle for the new file.

        Raises:
            FilesystemError: If this file does not exist or the copy fails.
        """
        return FileHandle(copy_item(self, target))

    def move_to(self, target: str | os.PathLike[str]) -> Self:
        """
        Move the file to a new location, optionally changing its name.

        Args:
            target: Full path the file will have, or the directory that will contain it.

        Returns:
            Self: This handle, now pointing at the new location.

        Raises:
            FilesystemError: If this file does not exist or the move fails.
        """
        self._path = move_item(self, target)
        return self

    def rename_to(self, new_name: str) -> Self:
        """
        Change the name of the file, leaving it in the same directory.

        Raises:
            FilesystemError: If new_name is a path rather than a plain name, or the rename fails.
        """
        if os.path.basename(new_name) != new_name:
            raise FilesystemError(
                "rename", self._path, message="This method accepts a file name only, not a path")

        self._path = rename_item(self, new_name)
        return self

    def delete(self) -> Self:
        """
        Remove the file from the filesystem, if it exists.

        Raises:
            FilesystemError: If the file exists and cannot be removed.
        """
        delete_item(self)
        return self

    def get_media_type(self) -> str | None:
        return self.media_type

    def set_media_type(self, value: str | None) -> Self:
        """Associate an Internet media type with this handle. The file itself is not affected."""
        self.media_type = value
        return self

    def get_display_name(self) -> str | None:
        return self.display_name

    def set_display_name(self, value: str | None) -> Self:
        """Associate a 'virtual' filename with this handle. The file itself is not affected."""
        self.display_name = value
        return self
