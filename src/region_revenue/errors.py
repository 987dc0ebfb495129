"""
Exception hierarchy for the region revenue pipeline.

UsageError, FileAccessError and ParseError are fatal. OutputWriteError is
raised by the result file writer and handled by the sink, so a failed
write never touches the computed result.
"""

from pathlib import Path


class RegionRevenueError(Exception):
    """Base class for all pipeline errors."""


class UsageError(RegionRevenueError):
    """Missing or invalid command-line arguments."""


class FileAccessError(RegionRevenueError):
    """An input table file could not be opened or read."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"cannot read table file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ParseError(RegionRevenueError):
    """A field of an input line could not be converted to its type."""

    def __init__(self, source: str, line_number: int, line: str, reason: str) -> None:
        self.source = source
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"{source}:{line_number}: {reason} (line: {line!r})")


class OutputWriteError(RegionRevenueError):
    """The result file could not be created or written."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"cannot write result file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
