"""Output formatters for javastyle."""

from .base import BaseFormatter
from .github_formatter import GithubFormatter
from .json_formatter import JsonFormatter
from .quiet_formatter import QuietFormatter
from .rich_formatter import RichFormatter


def get_formatter(name: str, verbose: bool = False) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json", "quiet", "github"
        verbose: Show per-category counts (rich only)

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    if name == "rich":
        return RichFormatter(verbose=verbose)
    formatters = {
        "json": JsonFormatter,
        "quiet": QuietFormatter,
        "github": GithubFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        choices = ", ".join(sorted([*formatters, "rich"]))
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {choices}")
    return cls()


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "JsonFormatter",
    "QuietFormatter",
    "GithubFormatter",
    "get_formatter",
]
