"""Summary of source lines."""

from __future__ import annotations

from typing import Any

from ..format.index import Line
from .base import CategorySummary


class LineSummary(CategorySummary[Line]):
    category = "line"

    def __init__(self, max_line_length: int = 100) -> None:
        super().__init__()
        self.max_line_length = max_line_length
        self.num_empty = 0
        self.longest = 0
        self.too_long: list[Line] = []
        self.trailing_whitespace: list[Line] = []
        self.mixed_indentation: list[Line] = []

    def _include(self, item: Line) -> None:
        evaluation = item.evaluation
        if item.is_empty:
            self.num_empty += 1
        self.longest = max(self.longest, evaluation.visual_length)
        if evaluation.too_long:
            self.too_long.append(item)
            self._record(
                "line_too_long", item, f"{evaluation.visual_length} > {self.max_line_length}"
            )
        if evaluation.trailing_whitespace:
            self.trailing_whitespace.append(item)
            self._record("trailing_whitespace", item)
        if evaluation.mixed_indentation:
            self.mixed_indentation.append(item)
            self._record("mixed_indentation", item)

    def _counters(self) -> dict[str, Any]:
        return {"empty": self.num_empty, "longest": self.longest}
