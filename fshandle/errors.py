"""
Error type raised by every fshandle operation.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os


# Classes --------------------------------------------------------------------------------------------------------------

class FilesystemError(RuntimeError):
    """
    A failed filesystem operation.

    The message embeds the attempted operation, the path(s) involved and, where the OS exposed one,
    the underlying diagnostic text.

    Attributes:
        operation: Short verb describing the attempt, e.g. "move" or "read".
        paths: Paths involved, source first.
        reason: OS diagnostic text, or None if none was available.

    Examples:
        >>> raise FilesystemError("move", "/tmp/a", "/tmp/b", reason="Permission denied")
        Traceback (most recent call last):
        ...
        fshandle.errors.FilesystemError: Unable to move /tmp/a to /tmp/b (Permission denied)
    """

    operation: str | None
    paths: tuple[str, ...]
    reason: str | None

    def __init__(self, operation: str | None = None, *paths: str | os.PathLike[str],
                 reason: str | None = None, message: str | None = None) -> None:
        self.operation = operation
        self.paths = tuple(os.fspath(p) for p in paths)
        self.reason = reason
        if message is None:
            message = self._format_message()
        super().__init__(message)

    def _format_message(self) -> str:
        subject = " to ".join(self.paths)
        text = f"Unable to {self.operation or 'access'}"
        if subject:
            text += f" {subject}"
        if self.reason:
            text += f" ({self.reason})"
        return text

    @classmethod
    def from_os_error(cls, operation: str, exc: OSError, *paths: str | os.PathLike[str]) -> "FilesystemError":
        """Build an error from an OSError, keeping its diagnostic text."""
        return cls(operation, *paths, reason=os_reason(exc))


# Methods --------------------------------------------------------------------------------------------------------------

def os_reason(exc: BaseException) -> str | None:
    """
    Extract the human-readable diagnostic from an OS-level exception.

    Returns the strerror of an OSError when set (e.g. "No such file or directory"), otherwise
    the exception text, or None when there is nothing to report.
    """
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    text = str(exc).strip()
    return text or None
