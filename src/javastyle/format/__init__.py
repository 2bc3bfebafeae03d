"""Format analysis: token model, token index, naming styles and rule evaluation.

The evaluator is imported from ``javastyle.format.evaluator`` directly; it
depends on the syntax model, which in turn depends on the modules exported
here.
"""

from .index import Line, TokenIndex
from .naming import NamingStyle, detect_naming_style, expected_naming_style
from .tokens import (
    AccessModifier,
    Classification,
    CodeToken,
    CoarseClassification,
    OtherModifier,
    Token,
    TokenCategory,
    TokenType,
)

__all__ = [
    "Line",
    "TokenIndex",
    "NamingStyle",
    "detect_naming_style",
    "expected_naming_style",
    "AccessModifier",
    "Classification",
    "CodeToken",
    "CoarseClassification",
    "OtherModifier",
    "Token",
    "TokenCategory",
    "TokenType",
]
