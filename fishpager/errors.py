"""Error taxonomy for the pager.

Every fatal condition is a ``PagerError`` tagged with an ``ErrorKind``.
The CLI prints ``str(error)`` as a single line and exits cleanly.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    FILE_ACCESS = "file_access"
    TERMINAL = "terminal"
    PROGRESS_CORRUPT = "progress_corrupt"
    USAGE = "usage"


class PagerError(Exception):
    """Fatal pager error carrying an explicit kind and a human-readable message."""

    kind: ErrorKind = ErrorKind.USAGE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FileAccessError(PagerError):
    kind = ErrorKind.FILE_ACCESS


class TerminalError(PagerError):
    kind = ErrorKind.TERMINAL


class TerminalQueryError(TerminalError):
    """Raised when the output device cannot report its dimensions."""


class ProgressCorruptError(PagerError):
    kind = ErrorKind.PROGRESS_CORRUPT


class UsageError(PagerError):
    kind = ErrorKind.USAGE
