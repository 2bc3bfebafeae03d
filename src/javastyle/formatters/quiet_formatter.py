"""Quiet formatter: failing file paths only."""

from typing import List

from ..verdict import Verdict
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """Render the path of every failing file, one per line."""

    def render(self, verdicts: List[Verdict]) -> None:
        text = self.format(verdicts)
        if text:
            print(text)

    def format(self, verdicts: List[Verdict]) -> str:
        return "\n".join(str(v.path) for v in verdicts if not v.passed)
