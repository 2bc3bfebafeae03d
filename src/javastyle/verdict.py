"""Verdict: the final, immutable result of checking one file."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .exceptions import ErrorCode, InvariantViolation
from .summaries.base import CategorySummary, Violation


class Verdict:
    """Aggregate of the category summaries of one file.

    Summaries are included one per category, then finalize() is called
    exactly once. After that the verdict cannot change, and its decision
    becomes readable: the file passes when the total number of violations
    does not exceed ``allowed_violations``.
    """

    def __init__(self, path: Optional[Path] = None, allowed_violations: int = 0) -> None:
        self._path = path
        self._allowed_violations = allowed_violations
        self._summaries: dict[str, CategorySummary[Any]] = {}
        self._total = 0
        self._passed = False
        self._finalized = False

    def include(self, summary: CategorySummary[Any]) -> None:
        """Add a completed summary.

        Raises:
            InvariantViolation: If the verdict is finalized, the summary is
                not summarized, or its category is already present
        """
        if self._finalized:
            raise InvariantViolation("Verdict is already finalized", ErrorCode.JS401)
        if not summary.summarized:
            raise InvariantViolation(
                f"{summary.category} summary included before summarize()", ErrorCode.JS400
            )
        if summary.category in self._summaries:
            raise InvariantViolation(
                f"{summary.category} summary included twice", ErrorCode.JS401
            )
        self._summaries[summary.category] = summary

    def finalize(self) -> None:
        """Fix the verdict.

        Raises:
            InvariantViolation: If called twice
        """
        if self._finalized:
            raise InvariantViolation("Verdict finalized twice", ErrorCode.JS402)
        self._total = sum(len(summary.violations) for summary in self._summaries.values())
        self._passed = self._total <= self._allowed_violations
        self._finalized = True

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def allowed_violations(self) -> int:
        return self._allowed_violations

    @property
    def summaries(self) -> Mapping[str, CategorySummary[Any]]:
        return MappingProxyType(self._summaries)

    def summary(self, category: str) -> CategorySummary[Any]:
        return self._summaries[category]

    @property
    def total_violations(self) -> int:
        self._check_finalized()
        return self._total

    @property
    def passed(self) -> bool:
        self._check_finalized()
        return self._passed

    @property
    def violations(self) -> list[Violation]:
        """All violations, ordered by line, then column."""
        self._check_finalized()
        merged = [v for summary in self._summaries.values() for v in summary.violations]
        merged.sort(key=lambda violation: (violation.line, violation.column))
        return merged

    def to_dict(self) -> dict[str, Any]:
        self._check_finalized()
        return {
            "path": str(self.path) if self.path is not None else None,
            "passed": self.passed,
            "total_violations": self._total,
            "allowed_violations": self.allowed_violations,
            "categories": {
                category: summary.to_dict() for category, summary in self._summaries.items()
            },
        }

    def _check_finalized(self) -> None:
        if not self._finalized:
            raise InvariantViolation("Verdict read before finalize()", ErrorCode.JS403)

    def __repr__(self) -> str:
        state = "passed" if self._finalized and self.passed else "open"
        if self._finalized and not self.passed:
            state = f"failed ({self._total} violations)"
        return f"Verdict({self.path}, {state})"
