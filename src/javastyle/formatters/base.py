"""Base formatter interface for javastyle report rendering."""

from abc import ABC, abstractmethod
from typing import List

from ..verdict import Verdict


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, verdicts: List[Verdict]) -> None:
        """Render verdicts to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, verdicts: List[Verdict]) -> str:
        """Return formatted string representation of verdicts."""
