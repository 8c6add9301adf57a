#
# fshandle - PathEntity Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import errno
import os
from pathlib import Path

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from fshandle.directory import DirectoryHandle
from fshandle.entity import PathEntity
from fshandle.errors import FilesystemError
from fshandle.file import FileHandle


# Tests ----------------------------------------------------------------------------------------------------------------


class TestPathEntity:
    def test_abstract(self):
        """Refuse to instantiate the base class."""
        with pytest.raises(TypeError):
            PathEntity("/tmp")  # type: ignore[abstract]

    def test_path_like(self, tmp_path: Path):
        """Behave as an os.PathLike object."""
        handle = DirectoryHandle(tmp_path)
        assert isinstance(handle, os.PathLike)
        assert os.fspath(handle) == handle.get_path() == handle.path

    def test_repr(self):
        """Show class name and path."""
        assert repr(FileHandle("/no/such/file.txt")) == "FileHandle('/no/such/file.txt')"

    def test_existing_path_is_canonical(self, tmp_path: Path):
        """Canonicalize the path of an existing entry at construction."""
        sub = tmp_path / "sub"
        sub.mkdir()
        handle = DirectoryHandle(os.path.join(os.fspath(sub), "..", "sub"))
        assert handle.get_path() == os.path.realpath(sub)

    def test_missing_path_kept_verbatim(self):
        """Keep the path as given when nothing exists there."""
        assert FileHandle("relative/missing.txt").get_path() == "relative/missing.txt"


class TestNames:
    @pytest.mark.parametrize(
        "path, name, extension, base",
        [
            pytest.param("/tmp/file.jpg", "file.jpg", "jpg", "file", id="simple"),
            pytest.param("/tmp/file", "file", None, "file", id="no-extension"),
            pytest.param("/tmp/.dotfile", ".dotfile", None, ".dotfile", id="dotfile"),
            pytest.param("/tmp/.tar.gz", ".tar.gz", "gz", ".tar", id="dotfile-with-extension"),
            pytest.param("/tmp/archive.tar.gz", "archive.tar.gz", "gz", "archive.tar", id="double-extension"),
            pytest.param("/tmp/dir.d/", "dir.d", "d", "dir", id="trailing-separator"),
        ],
    )
    def test_name_parts(self, path, name, extension, base):
        """Split the last path segment into name, extension and base name."""
        handle = FileHandle(path)
        assert handle.get_name() == name
        assert handle.name == name
        assert handle.get_extension() == extension
        assert handle.get_name_without_extension() == base


class TestParents:
    def test_parent_path(self, missing_path: Path):
        """Return the containing directory path for a non-root entry."""
        handle = DirectoryHandle(missing_path)
        assert handle.get_parent_path() == os.path.dirname(os.fspath(missing_path))

    def test_parent_directory(self, missing_path: Path, tmp_path: Path):
        """Return a DirectoryHandle for the canonical parent."""
        parent = FileHandle(missing_path).get_parent_directory()
        assert isinstance(parent, DirectoryHandle)
        assert parent.get_path() == os.path.realpath(tmp_path)

    def test_root_has_no_parent(self):
        """Return None for the filesystem root."""
        root = DirectoryHandle(os.sep)
        assert root.get_parent_path() is None
        assert root.get_parent_directory() is None

    def test_relative_name_parent(self):
        """Use the current directory as the parent of a bare name."""
        assert FileHandle("missing-name.txt").get_parent_path() == os.curdir


class TestQueries:
    def test_nonexistent_handles(self, missing_path: Path):
        """Report a nonexistent path as absent, unreadable and unwritable."""
        for handle in (FileHandle(missing_path), DirectoryHandle(missing_path)):
            assert handle.exists() is False
            assert handle.is_readable() is False
            assert handle.is_writable() is False
            assert handle.get_last_modified_date() is None

    def test_existing_directory(self, tmp_path: Path):
        """Report an existing directory as readable and writable."""
        handle = DirectoryHandle(tmp_path)
        assert handle.exists()
        assert handle.is_readable()
        assert handle.is_writable()

    def test_kind_mismatch(self, tmp_path: Path):
        """Treat a directory as a missing file and a file as a missing directory."""
        f = tmp_path / "f"
        f.write_text("x")
        assert FileHandle(tmp_path).exists() is False
        assert DirectoryHandle(f).exists() is False
        assert FileHandle(tmp_path).is_readable() is False

    def test_last_modified_date(self, tmp_path: Path):
        """Return an aware local datetime matching the OS modification time."""
        f = tmp_path / "f"
        f.write_text("x")
        stamp = dt.datetime(2024, 10, 11, 14, 30, 22).timestamp()
        os.utime(f, (stamp, stamp))

        date = FileHandle(f).get_last_modified_date()

        assert isinstance(date, dt.datetime)
        assert date.tzinfo is not None
        assert date.timestamp() == pytest.approx(stamp)

    def test_last_modified_date_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Raise FilesystemError when the entry exists but cannot be stat'ed."""
        f = tmp_path / "f"
        f.write_text("x")
        handle = FileHandle(f)

        def failing_getmtime(path):
            raise OSError(errno.EIO, "Input/output error")

        monkeypatch.setattr("fshandle.entity.os.path.getmtime", failing_getmtime, raising=True)

        with pytest.raises(FilesystemError, match=r"modification date of .*\(Input/output error\)"):
            handle.get_last_modified_date()
