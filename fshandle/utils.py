"""
fshandle utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for non-builtin classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(FileHandle, fully_qualified=True)
        'fshandle.file.FileHandle'
    """
    cls = obj if isinstance(obj, type) else obj.__class__

    if fully_qualified and cls.__module__ != "builtins":
        return cls.__module__ + "." + cls.__qualname__
    return cls.__name__


def split_extension(name: str) -> tuple[str, str | None]:
    """
    Split a path segment into base name and extension at its final period.

    A name with no period, or whose only candidate period is the first character, has no
    extension. Only the position of the final period is considered, so a leading-period name
    with further periods is split at the last one.

    Parameters:
        name (str): A single path segment.

    Returns:
        tuple[str, str | None]: (base name, extension or None).

    Examples:
        >>> split_extension("file.jpg")
        ('file', 'jpg')
        >>> split_extension(".dotfile")
        ('.dotfile', None)
        >>> split_extension(".tar.gz")
        ('.tar', 'gz')
    """
    pos = name.rfind(".")
    if pos <= 0:
        return name, None
    return name[:pos], name[pos + 1:]
