"""Summary of ordinary (non-doc) comments."""

from __future__ import annotations

from typing import Any

from ..format.tokens import Token
from .base import CategorySummary


class CommentSummary(CategorySummary[Token]):
    category = "comment"

    def __init__(self) -> None:
        super().__init__()
        self.num_line_comments = 0
        self.missing_space: list[Token] = []

    def _include(self, item: Token) -> None:
        evaluation = item.evaluation
        if evaluation.is_line_comment:
            self.num_line_comments += 1
        if evaluation.missing_space:
            self.missing_space.append(item)
            self._record("comment_space", item)

    def _counters(self) -> dict[str, Any]:
        return {"line_comments": self.num_line_comments}
