"""Summary of whitespace tokens."""

from __future__ import annotations

from typing import Any

from ..format.tokens import Token
from .base import CategorySummary


class WhitespaceSummary(CategorySummary[Token]):
    category = "whitespace"

    def __init__(self) -> None:
        super().__init__()
        self.num_with_tabs = 0
        self.mixed_tabs_and_spaces: list[Token] = []

    def _include(self, item: Token) -> None:
        evaluation = item.evaluation
        if evaluation.has_tab:
            self.num_with_tabs += 1
        if evaluation.mixed_tabs_and_spaces:
            self.mixed_tabs_and_spaces.append(item)
            self._record("mixed_tabs_and_spaces", item)

    def _counters(self) -> dict[str, Any]:
        return {"with_tabs": self.num_with_tabs}
