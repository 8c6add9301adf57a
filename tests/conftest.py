#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def populated_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a directory holding one file named 'testfile' and one subdirectory named 'subdir'."""
    root = tmp_path / "populated"
    root.mkdir()
    (root / "testfile").write_bytes(b"payload")
    (root / "subdir").mkdir()
    return root


@pytest.fixture
def nested_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a directory with mixed contents (files and nested subdirectories)."""
    root = tmp_path / "nested"
    root.mkdir()
    (root / "a.txt").write_text("A")
    (root / "b.log").write_text("B")
    sub = root / "sub"
    sub.mkdir()
    (sub / "c.dat").write_text("C")
    (sub / "d.bin").write_bytes(b"\x00\x01")
    deep = sub / "deep"
    deep.mkdir()
    (deep / "e.txt").write_text("E")
    return root


@pytest.fixture
def missing_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """Return a path inside tmp_path where nothing exists."""
    return tmp_path / "this_does_not_exist"
