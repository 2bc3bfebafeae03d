"""Per-category summaries of evaluated tokens and lines."""

from .base import CategorySummary, Violation
from .code import CodeTokenSummary
from .comment import CommentSummary
from .javadoc import DocCommentSummary
from .line import LineSummary
from .whitespace import WhitespaceSummary

__all__ = [
    "CategorySummary",
    "Violation",
    "CodeTokenSummary",
    "CommentSummary",
    "DocCommentSummary",
    "LineSummary",
    "WhitespaceSummary",
]
