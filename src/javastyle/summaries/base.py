"""Base class for per-category summaries of evaluated primitives."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..exceptions import ErrorCode, InvariantViolation
from ..format.index import Line
from ..format.tokens import FormatPrimitive

T = TypeVar("T", bound=FormatPrimitive)


@dataclass(frozen=True)
class Violation:
    """One failed rule, pointing at the token or line it was found on."""

    rule: str
    target: FormatPrimitive
    detail: str = ""

    @property
    def line(self) -> int:
        if isinstance(self.target, Line):
            return self.target.number
        return self.target.line  # type: ignore[attr-defined]

    @property
    def column(self) -> int:
        return getattr(self.target, "column", 0)

    @property
    def text(self) -> str:
        if isinstance(self.target, Line):
            return ""
        return self.target.text  # type: ignore[attr-defined]

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "line": self.line,
            "column": self.column + 1,
            "text": self.text.split("\n", 1)[0],
            "detail": self.detail,
        }


class CategorySummary(ABC, Generic[T]):
    """Counts and ordered violation lists for one category.

    Lifecycle: include() any number of evaluated items, then summarize()
    exactly once. After that the summary is read-only, and only then are
    its violations and pass/fail decision readable.
    """

    #: Key of the summary in the verdict
    category: str = ""

    def __init__(self) -> None:
        self._violations: list[Violation] = []
        self._summarized = False
        self.count = 0

    def include(self, item: T) -> None:
        """Add one evaluated item.

        Raises:
            InvariantViolation: If the item was not evaluated, or the summary
                is already summarized
        """
        if self._summarized:
            raise InvariantViolation(
                f"{self.category} summary already summarized", ErrorCode.JS401
            )
        if not item.evaluated:
            raise InvariantViolation(
                f"{item!r} included before evaluation", ErrorCode.JS400
            )
        self.count += 1
        self._include(item)

    def summarize(self) -> None:
        """Complete the summary.

        Raises:
            InvariantViolation: If called twice
        """
        if self._summarized:
            raise InvariantViolation(
                f"{self.category} summary summarized twice", ErrorCode.JS402
            )
        self._summarize()
        self._summarized = True

    @property
    def summarized(self) -> bool:
        return self._summarized

    @property
    def violations(self) -> tuple[Violation, ...]:
        self._check_summarized()
        return tuple(self._violations)

    @property
    def passed(self) -> bool:
        return not self.violations

    def to_dict(self) -> dict[str, Any]:
        self._check_summarized()
        return {
            "count": self.count,
            **self._counters(),
            "passed": self.passed,
            "violations": [violation.to_dict() for violation in self._violations],
        }

    @abstractmethod
    def _include(self, item: T) -> None:
        """Category-specific bookkeeping for one evaluated item."""

    def _summarize(self) -> None:
        pass

    def _counters(self) -> dict[str, Any]:
        return {}

    def _record(self, rule: str, target: FormatPrimitive, detail: str = "") -> Violation:
        violation = Violation(rule=rule, target=target, detail=detail)
        self._violations.append(violation)
        return violation

    def _check_summarized(self) -> None:
        if not self._summarized:
            raise InvariantViolation(
                f"{self.category} summary read before summarize()", ErrorCode.JS403
            )
