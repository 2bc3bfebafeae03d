"""Exception hierarchy for javastyle."""

from .analysis import AnalysisError, FileAccessError, ParsingError
from .base import JavaStyleError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError
from .taxonomy import ErrorCode, IndexOutOfRange, InvariantViolation, StyleError

__all__ = [
    "JavaStyleError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "ErrorCode",
    "StyleError",
    "InvariantViolation",
    "IndexOutOfRange",
]
