"""Summary of doc comments."""

from __future__ import annotations

from ..format.tokens import Token
from .base import CategorySummary


class DocCommentSummary(CategorySummary[Token]):
    """Doc comments that do not match what follows them.

    A bad doc comment is listed once, under the first problem found:
    subject mismatch, then unmatched tags, then undocumented parameters,
    then a missing ``@return``.
    """

    category = "doc_comment"

    def __init__(self) -> None:
        super().__init__()
        self.bad_doc_comments: list[Token] = []

    def _include(self, item: Token) -> None:
        evaluation = item.evaluation
        if evaluation.subject_mismatch:
            self._bad(item, "doc_subject_mismatch")
        elif evaluation.unmatched_tags:
            self._bad(item, "doc_unmatched_tags", ", ".join(evaluation.unmatched_tags))
        elif evaluation.undocumented_parameters:
            self._bad(
                item, "doc_undocumented_parameters", ", ".join(evaluation.undocumented_parameters)
            )
        elif evaluation.return_missing:
            self._bad(item, "doc_return_missing")

    def _bad(self, item: Token, rule: str, detail: str = "") -> None:
        self.bad_doc_comments.append(item)
        self._record(rule, item, detail)
