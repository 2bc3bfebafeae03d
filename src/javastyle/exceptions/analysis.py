"""Analysis-related exceptions: file access and parsing."""

from pathlib import Path
from typing import Optional

from .base import JavaStyleError


class AnalysisError(JavaStyleError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when the front-end reports a lexical or syntax error.

    Parsing errors are terminal for the whole file: no partial verdict is
    produced.
    """

    def __init__(
        self,
        reason: str,
        filepath: Optional[Path] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        details = {"reason": reason}
        if filepath is not None:
            details["filepath"] = str(filepath)
        if line is not None:
            details["line"] = str(line)
        if column is not None:
            details["column"] = str(column)

        target = filepath if filepath is not None else "<source>"
        super().__init__(f"Failed to parse Java source: {target}", details=details)
        self.filepath = filepath
        self.reason = reason
        self.line = line
        self.column = column
