"""Summary of code tokens: identifiers, spacing and brace placement."""

from __future__ import annotations

from collections import Counter
from typing import Any, Optional

from ..format.evaluator import BraceStyle, CodeEvaluation, IdentifierEvaluation, SpacingRule
from ..format.tokens import DECLARED_NAME_TYPES, CodeToken
from .base import CategorySummary

_SPACING_RULES = {
    SpacingRule.ONE_LINE_SCOPE: "one_line_scope_space",
    SpacingRule.COMMA: "space_after_comma",
    SpacingRule.SEMICOLON: "space_after_semicolon",
    SpacingRule.OPERATOR: "space_around_operator",
}


class CodeTokenSummary(CategorySummary[CodeToken]):
    """Identifier and spacing findings plus brace-style consistency.

    Brace placement is only known file-wide: at summarize() the dominant
    determined style is the most frequent one, ties going to the style of
    the first determined brace. Determined braces of any other style are
    inconsistent. UNDETERMINED braces are counted but never judged.
    """

    category = "code"

    def __init__(self) -> None:
        super().__init__()
        self.num_identifiers = 0
        self.too_short: list[CodeToken] = []
        self.too_long: list[CodeToken] = []
        self.bad_naming: list[CodeToken] = []
        self.bad_spacing: list[CodeToken] = []
        self.brace_styles: Counter[BraceStyle] = Counter()
        self.dominant_brace_style: Optional[BraceStyle] = None
        self.inconsistent_braces: list[CodeToken] = []
        self._braces: list[tuple[CodeToken, BraceStyle]] = []

    def _include(self, item: CodeToken) -> None:
        if item.token_type in DECLARED_NAME_TYPES:
            self._include_identifier(item, item.evaluation)
        else:
            self._include_code(item, item.evaluation)

    def _include_identifier(self, token: CodeToken, evaluation: IdentifierEvaluation) -> None:
        self.num_identifiers += 1
        if evaluation.too_short:
            self.too_short.append(token)
            self._record("identifier_too_short", token)
        elif evaluation.too_long:
            self.too_long.append(token)
            self._record("identifier_too_long", token)
        if not evaluation.naming_correct:
            self.bad_naming.append(token)
            self._record(
                "naming_style",
                token,
                f"{evaluation.naming_style.value}, expected {evaluation.expected_style.value}",
            )

    def _include_code(self, token: CodeToken, evaluation: CodeEvaluation) -> None:
        if not evaluation.meets_expectation:
            self.bad_spacing.append(token)
            self._record(_SPACING_RULES.get(evaluation.rule, "spacing"), token)
        if evaluation.brace_style is not None:
            self.brace_styles[evaluation.brace_style] += 1
            self._braces.append((token, evaluation.brace_style))

    def _summarize(self) -> None:
        determined = [
            (token, style) for token, style in self._braces if style is not BraceStyle.UNDETERMINED
        ]
        if not determined:
            return

        counts = Counter(style for _, style in determined)
        first_style = determined[0][1]
        best = max(counts.values())
        if counts[first_style] == best:
            self.dominant_brace_style = first_style
        else:
            self.dominant_brace_style = next(
                style for _, style in determined if counts[style] == best
            )

        for token, style in determined:
            if style is not self.dominant_brace_style:
                self.inconsistent_braces.append(token)
                self._record(
                    "brace_style",
                    token,
                    f"{style.value}, file uses {self.dominant_brace_style.value}",
                )
        self._violations.sort(key=lambda violation: violation.target.global_index)  # type: ignore[attr-defined]

    def _counters(self) -> dict[str, Any]:
        return {
            "identifiers": self.num_identifiers,
            "brace_styles": {style.value: count for style, count in self.brace_styles.items()},
            "dominant_brace_style": (
                self.dominant_brace_style.value if self.dominant_brace_style else None
            ),
        }
