"""JSON formatter for javastyle."""

import json
from typing import List

from ..verdict import Verdict
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render verdicts as a JSON document."""

    def render(self, verdicts: List[Verdict]) -> None:
        print(self.format(verdicts))

    def format(self, verdicts: List[Verdict]) -> str:
        data = {
            "passed": all(v.passed for v in verdicts),
            "files": [v.to_dict() for v in verdicts],
        }
        return json.dumps(data, indent=2)
