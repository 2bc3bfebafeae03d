"""Structured error taxonomy with error codes.

Error Code Convention:
    JS1xx - Scanning errors (front-end, token stream)
    JS2xx - Syntax model errors (scope walk, classification)
    JS3xx - Evaluation errors (rule application)
    JS4xx - Aggregation errors (summaries, verdict)

Every error in this module is an internal-consistency failure: it means
the rule tables are out of sync with the grammar or a pipeline stage ran
out of order. None of them are recoverable for the file being analyzed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Structured error codes for observability and debugging."""

    # Scanning errors (JS1xx)
    JS100 = "JS100"  # Token index accessed out of range
    JS101 = "JS101"  # Token stream out of lexical order
    JS102 = "JS102"  # Unknown token type code
    JS103 = "JS103"  # Non-whitespace text between tree leaves

    # Syntax model errors (JS2xx)
    JS200 = "JS200"  # Classification read before finalization
    JS201 = "JS201"  # Classification finalized twice
    JS202 = "JS202"  # Syntax model built twice
    JS203 = "JS203"  # Unbalanced scope events
    JS204 = "JS204"  # Token outside the syntax model

    # Evaluation errors (JS3xx)
    JS300 = "JS300"  # Primitive evaluated twice
    JS301 = "JS301"  # Evaluation result read before evaluation
    JS302 = "JS302"  # Unreachable rule branch

    # Aggregation errors (JS4xx)
    JS400 = "JS400"  # Summary included an unevaluated item
    JS401 = "JS401"  # Summary or verdict modified after completion
    JS402 = "JS402"  # Summary or verdict completed twice
    JS403 = "JS403"  # Summary or verdict read before completion


@dataclass
class StyleError(Exception):
    """Base exception with structured context for logging.

    Attributes:
        message: Human-readable error description
        code: Structured error code for categorization
        context: Additional context (line number, token text, etc.)
        recoverable: Whether the error can be recovered from
    """

    message: str
    code: ErrorCode
    context: dict[str, Any] = field(default_factory=dict)
    recoverable: bool = False

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
        }


class InvariantViolation(StyleError):
    """An internal invariant does not hold; the run for this file aborts."""

    pass


class IndexOutOfRange(InvariantViolation):
    """A token or line index fell outside the declared bounds."""

    pass
