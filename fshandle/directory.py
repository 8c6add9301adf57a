"""
Handle for a directory on the filesystem, with lazy child iteration.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import os

from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Iterator, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .entity import PathEntity
from .errors import FilesystemError
from .file import FileHandle
from .os import move_item, remove_tree, rename_item, resolve_target, translate_errors
from .shutil import copy_tree

# Constants ------------------------------------------------------------------------------------------------------------
DEFAULT_DIR_MODE = 0o777

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ChildKind(StrEnum):
    """Kind of entry found when probing a child name."""
    FILE = "file"
    DIRECTORY = "directory"
    MISSING = "missing"


@dataclass(frozen=True)
class Child:
    """
    Result of looking up a child name inside a directory.

    Attributes:
        name: The child name that was probed.
        kind: What the OS reported at that path.
        handle: FileHandle or DirectoryHandle matching kind, or None when kind is MISSING.
    """
    name: str
    kind: ChildKind
    handle: "FileHandle | DirectoryHandle | None" = None

    @property
    def is_file(self) -> bool:
        return self.kind is ChildKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is ChildKind.DIRECTORY

    @property
    def is_missing(self) -> bool:
        return self.kind is ChildKind.MISSING


class DirectoryCursor:
    """
    Lazy, stateful cursor over the children of a directory.

    The cursor holds an OS directory stream and the name of the entry it is positioned on. It is
    Unopened when built; the first call to any of rewind(), next(), current(), key() or valid()
    opens the stream and positions it on the first entry. Once the stream runs out the cursor is
    exhausted and stays so until rewind() is called. The self and parent entries ("." and "..")
    are never reported.

    The directory's existence is checked on every access: while it does not exist the cursor
    behaves as empty. Enumeration order is whatever the OS returns.

    The cursor is also a Python iterator yielding FileHandle or DirectoryHandle objects. Entries
    that disappear between being listed and being probed are skipped. Iteration is finite and is
    not restartable without rewind().

    The stream is released by close(), which is called on leaving a ``with`` block.

    Args:
        directory: The directory to iterate.

    Examples:
        >>> with DirectoryCursor(DirectoryHandle("/etc")) as cursor:
        ...     names = [child.get_name() for child in cursor]
    """

    def __init__(self, directory: "DirectoryHandle") -> None:
        self._directory = directory
        self._stream = None
        self._entry: str | None = None
        self._pending = False

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> "FileHandle | DirectoryHandle":
        stream = self._open()
        if stream is None:
            raise StopIteration

        # A freshly opened or rewound stream is already positioned on an entry not yet yielded
        if not self._pending:
            self._advance(stream)
        self._pending = False

        while self._entry is not None:
            child = self.current()
            if child is not None:
                return child
            self._advance(stream)
        raise StopIteration

    @property
    def is_open(self) -> bool:
        """Check whether the OS directory stream is currently held."""
        return self._stream is not None

    def rewind(self) -> None:
        """Reset the stream to its start and position on the first entry."""
        if self._open() is None:
            return

        # os.scandir streams cannot seek, so start a new one
        self._release()
        self._open()

    def next(self) -> None:
        """Advance to the next entry, or to the exhausted state when there are no more."""
        stream = self._open()
        if stream is None:
            return
        self._advance(stream)
        self._pending = True

    def current(self) -> "FileHandle | DirectoryHandle | None":
        """Return a handle for the entry under the cursor, or None if exhausted or missing."""
        if self._open() is None or self._entry is None:
            return None
        return self._directory.get_child(self._entry)

    def key(self) -> str | None:
        """Return the name of the entry under the cursor, or None if exhausted or missing."""
        if self._open() is None:
            return None
        return self._entry

    def valid(self) -> bool:
        """Check the directory exists and the cursor is positioned on an entry."""
        if self._open() is None:
            return False
        return self._entry is not None

    def close(self) -> None:
        """Release the directory stream. The cursor returns to the Unopened state."""
        self._release()
        self._entry = None
        self._pending = False

    def _open(self):
        if not self._directory.exists():
            return None

        if self._stream is None:
            path = self._directory.get_path()
            with translate_errors("open directory", path):
                stream = os.scandir(path)
            self._stream = stream
            self._advance(stream)
            self._pending = True

        return self._stream

    def _advance(self, stream) -> None:
        try:
            while True:
                entry = next(stream, None)
                if entry is None:
                    self._entry = None
                    return
                if entry.name not in (".", ".."):
                    self._entry = entry.name
                    return
        except OSError as exc:
            self._entry = None
            raise FilesystemError.from_os_error("read directory", exc, self._directory.get_path()) from exc

    def _release(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()


class DirectoryHandle(PathEntity):
    """
    Represents a directory on the filesystem.

    The directory does not necessarily exist. Children are looked up on demand and returned as
    fresh FileHandle or DirectoryHandle objects; nothing is cached.

    A handle carries one shared DirectoryCursor that backs ``rewind()``, ``next()``, ``current()``,
    ``key()``, ``valid()`` and ``iter(handle)``. A second ``for`` loop over the same handle
    continues from where the first stopped until ``rewind()`` is called. Use ``children()`` for an
    independent pass that always starts at the beginning and releases its stream when done.

    The shared cursor's stream is released by ``close()`` or on leaving a ``with`` block.

    Args:
        path: Path of the directory. If a directory exists there, the path is canonicalized.

    Examples:
        >>> with DirectoryHandle("/var/log") as logs:
        ...     for child in logs:
        ...         print(child.get_name(), isinstance(child, DirectoryHandle))

        >>> site = DirectoryHandle("/srv/site")
        >>> backup = site.copy_to("/srv/backups")
        >>> backup.get_path()
        '/srv/backups/site'
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        path = os.fspath(path)
        if os.path.isdir(path):
            path = os.path.realpath(path)
        super().__init__(path)
        self._cursor: DirectoryCursor | None = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __iter__(self) -> Iterator["FileHandle | DirectoryHandle"]:
        return self._shared_cursor()

    def exists(self) -> bool:
        """Check whether a directory exists at the path."""
        return os.path.isdir(self._path)

    def close(self) -> None:
        """Release the directory stream held by the shared cursor, if any."""
        self._release_cursor()

    def create(self, mode: int = DEFAULT_DIR_MODE, make_parents: bool = False) -> Self:
        """
        Create the directory.

        Args:
            mode: Permission bits for the new directory, subject to the process umask.
            make_parents: Whether to create missing parent directories as well.

        Returns:
            Self: This handle.

        Raises:
            FilesystemError: If the directory already exists, a parent is missing and make_parents
                is False, or the OS refuses the creation.
        """
        logger.debug("create directory %s (mode=%o, parents=%s)", self._path, mode, make_parents)
        with translate_errors("create directory", self._path):
            if make_parents:
                os.makedirs(self._path, mode)
            else:
                os.mkdir(self._path, mode)

        self._path = os.path.realpath(self._path)
        return self

    def copy_to(self, target: str | os.PathLike[str]) -> "DirectoryHandle":
        """
        Recursively copy this directory and its contents to a new location.

        Args:
            target: Full path the copy will have, or the existing directory that will contain it.

        Returns:
            DirectoryHandle: Handle for the new copy.

        Raises:
            FilesystemError: If this directory does not exist or the copy command fails. The
                command's diagnostic output is part of the message.
        """
        new_path = resolve_target(self.get_name(), target)
        if not self.exists():
            raise FilesystemError(
                "copy", self._path, message=f"The item {self._path} cannot be copied because it does not exist")

        copy_tree(self._path, new_path)
        return DirectoryHandle(new_path)

    def move_to(self, target: str | os.PathLike[str]) -> Self:
        """
        Move the directory to a new location, optionally changing its name.

        Args:
            target: Full path the directory will have, or the directory that will contain it.

        Returns:
            Self: This handle, now pointing at the new location.

        Raises:
            FilesystemError: If this directory does not exist or the move fails.
        """
        new_path = move_item(self, target)
        self._release_cursor()
        self._path = new_path
        return self

    def rename_to(self, new_name: str) -> Self:
        """
        Change the name of the directory, leaving it in the same location.

        Raises:
            FilesystemError: If new_name is a path rather than a plain name, or the rename fails.
        """
        if os.path.basename(new_name) != new_name:
            raise FilesystemError(
                "rename", self._path, message="This method accepts a name only, not a path")

        new_path = rename_item(self, new_name)
        self._release_cursor()
        self._path = new_path
        return self

    def delete(self, recursive: bool = False) -> Self:
        """
        Remove this directory from the filesystem.

        Unlike FileHandle.delete(), a missing directory is an error: deleting the same directory
        twice fails on the second call.

        Args:
            recursive: If True, delete everything inside the directory first. Symbolic links
                are removed, not followed. If False, the directory must be empty.

        Returns:
            Self: This handle.

        Raises:
            FilesystemError: If any child or the directory itself cannot be removed. The first
                failure stops the operation; items already removed stay removed.
        """
        self._release_cursor()
        if recursive:
            remove_tree(self._path)
            return self

        logger.debug("remove directory %s", self._path)
        with translate_errors("remove directory", self._path):
            os.rmdir(self._path)

        return self

    def has_child(self, name: str) -> bool:
        """Check whether anything named name exists in this directory."""
        return os.path.exists(self._child_path(name))

    def probe_child(self, name: str) -> Child:
        """
        Look up a child by name and report what kind of entry it is.

        Returns:
            Child: Tagged result. ``handle`` is a DirectoryHandle for a directory, a FileHandle for
            anything else that exists, and None when nothing exists at that name.
        """
        path = self._child_path(name)
        if os.path.isdir(path):
            return Child(name, ChildKind.DIRECTORY, DirectoryHandle(path))
        if os.path.exists(path):
            return Child(name, ChildKind.FILE, FileHandle(path))
        return Child(name, ChildKind.MISSING)

    def get_child(self, name: str) -> "FileHandle | DirectoryHandle | None":
        """Get a child file or directory by name, or None if it does not exist."""
        return self.probe_child(name).handle

    def get_file(self, name: str, allow_missing: bool = False) -> FileHandle | None:
        """
        Get a file within this directory.

        Args:
            name: Name of the file.
            allow_missing: Return a handle even if the file does not exist, e.g. to create it.

        Returns:
            FileHandle | None: The file, or None if it is missing or is a directory (unless
            allow_missing is set).
        """
        if allow_missing:
            return FileHandle(self._child_path(name))

        child = self.get_child(name)
        return child if isinstance(child, FileHandle) else None

    def get_subdirectory(self, name: str, allow_missing: bool = False) -> "DirectoryHandle | None":
        """
        Get a directory within this directory.

        Args:
            name: Name of the subdirectory.
            allow_missing: Return a handle even if the directory does not exist, e.g. to create it.

        Returns:
            DirectoryHandle | None: The subdirectory, or None if it is missing or is a file (unless
            allow_missing is set).
        """
        if allow_missing:
            return DirectoryHandle(self._child_path(name))

        child = self.get_child(name)
        return child if isinstance(child, DirectoryHandle) else None

    def cursor(self) -> DirectoryCursor:
        """Return a new, independent cursor over this directory's children."""
        return DirectoryCursor(self)

    def children(self) -> Iterator["FileHandle | DirectoryHandle"]:
        """
        Yield every child of this directory from a fresh cursor.

        The cursor's stream is closed when the generator finishes, fails or is closed early.
        Yields nothing if the directory does not exist.
        """
        with self.cursor() as cursor:
            yield from cursor

    def rewind(self) -> None:
        self._shared_cursor().rewind()

    def next(self) -> None:
        self._shared_cursor().next()

    def current(self) -> "FileHandle | DirectoryHandle | None":
        return self._shared_cursor().current()

    def key(self) -> str | None:
        return self._shared_cursor().key()

    def valid(self) -> bool:
        return self._shared_cursor().valid()

    def _shared_cursor(self) -> DirectoryCursor:
        if self._cursor is None:
            self._cursor = DirectoryCursor(self)
        return self._cursor

    def _release_cursor(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None

    def _child_path(self, name: str) -> str:
        return os.path.join(self._path, name)
