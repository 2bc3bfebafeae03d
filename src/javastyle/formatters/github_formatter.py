"""GitHub Actions formatter: one annotation per violation."""

from typing import List

from ..verdict import Verdict
from .base import BaseFormatter


class GithubFormatter(BaseFormatter):
    """Output GitHub Actions ``::error`` / ``::warning`` annotations.

    Violations of a failing file are errors; those of a file that still
    passes (within ``allowed_violations``) are warnings.
    """

    def render(self, verdicts: List[Verdict]) -> None:
        text = self.format(verdicts)
        if text:
            print(text)

    def format(self, verdicts: List[Verdict]) -> str:
        lines: list[str] = []
        for verdict in verdicts:
            level = "warning" if verdict.passed else "error"
            for v in verdict.violations:
                msg = v.rule.replace("_", " ")
                if v.detail:
                    msg = f"{msg}: {v.detail}"
                lines.append(
                    f"::{level} file={verdict.path},line={v.line},col={v.column + 1}::{msg}"
                )
        return "\n".join(lines)
