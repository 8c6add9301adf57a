#
# fshandle - Errors Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import errno
import os

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from fshandle.errors import FilesystemError, os_reason


# Tests ----------------------------------------------------------------------------------------------------------------


class TestFilesystemError:
    def test_message_with_two_paths_and_reason(self):
        """Embed operation, both paths and the OS reason."""
        err = FilesystemError("move", "/tmp/a", "/tmp/b", reason="Permission denied")
        assert str(err) == "Unable to move /tmp/a to /tmp/b (Permission denied)"
        assert err.operation == "move"
        assert err.paths == ("/tmp/a", "/tmp/b")
        assert err.reason == "Permission denied"

    def test_message_without_reason(self):
        """Omit the parenthesised reason when none is known."""
        assert str(FilesystemError("read file", "/x")) == "Unable to read file /x"

    def test_explicit_message_wins(self):
        """Use an explicit message verbatim while keeping structured fields."""
        err = FilesystemError("rename", "/x", message="names only")
        assert str(err) == "names only"
        assert err.paths == ("/x",)

    def test_paths_accept_pathlike(self, tmp_path):
        """Convert path-like arguments to strings."""
        err = FilesystemError("delete", tmp_path)
        assert err.paths == (os.fspath(tmp_path),)

    def test_is_runtime_error(self):
        """Derive from RuntimeError so generic handlers catch it."""
        with pytest.raises(RuntimeError):
            raise FilesystemError("copy", "/a")

    def test_from_os_error(self):
        """Take the reason from the OSError strerror."""
        exc = OSError(errno.ENOENT, "No such file or directory", "/gone")
        err = FilesystemError.from_os_error("read file", exc, "/gone")
        assert str(err) == "Unable to read file /gone (No such file or directory)"


class TestOsReason:
    @pytest.mark.parametrize(
        "exc, expected",
        [
            pytest.param(OSError(errno.EACCES, "Permission denied"), "Permission denied", id="strerror"),
            pytest.param(OSError("simulated failure"), "simulated failure", id="message-only"),
            pytest.param(ValueError(""), None, id="empty"),
        ],
    )
    def test_reason(self, exc, expected):
        """Prefer strerror, fall back to the text, and return None when empty."""
        assert os_reason(exc) == expected
