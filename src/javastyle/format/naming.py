"""Identifier naming styles.

Classifies declared names into one of four naming styles and decides which
style a declaration is expected to use:

    PASCAL_CASE           FooBar, Http2Client       (types)
    CAMEL_CASE            fooBar, toString2         (methods, variables)
    UPPERCASE_UNDERSCORE  MAX_VALUE, ABC, HTTP2     (constants, enum constants)
    OTHER                 foo_bar, Foo_Bar, _x

All styles allow digits anywhere after the first character.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING

from ..exceptions import ErrorCode, InvariantViolation
from .tokens import OtherModifier, TokenType

if TYPE_CHECKING:
    from ..config import StyleConfig


class NamingStyle(Enum):
    """How an identifier is named."""

    PASCAL_CASE = "pascal_case"
    CAMEL_CASE = "camel_case"
    UPPERCASE_UNDERSCORE = "uppercase_underscore"
    OTHER = "other"


PASCAL_REGEX = r"[A-Z][\da-z]*([\dA-Z][\da-z]*)*"
CAMEL_REGEX = r"[a-z][\da-z]*([\dA-Z][\da-z]*)*"
UPPERCASE_REGEX = r"[A-Z\d]+(_[A-Z\d]+)*"

_PASCAL_PATTERN = re.compile(PASCAL_REGEX)
_CAMEL_PATTERN = re.compile(CAMEL_REGEX)
_UPPERCASE_PATTERN = re.compile(UPPERCASE_REGEX)


def detect_naming_style(text: str) -> NamingStyle:
    """Classify an identifier's naming style.

    An all-caps word such as ``ABC`` could be read as three one-letter
    Pascal words; it is always classified UPPERCASE_UNDERSCORE.

    Args:
        text: Raw identifier text (non-empty)

    Returns:
        The detected NamingStyle
    """
    if not text:
        return NamingStyle.OTHER

    if text[0].isupper():
        if _UPPERCASE_PATTERN.fullmatch(text):
            return NamingStyle.UPPERCASE_UNDERSCORE
        if _PASCAL_PATTERN.fullmatch(text):
            return NamingStyle.PASCAL_CASE
        return NamingStyle.OTHER

    if _CAMEL_PATTERN.fullmatch(text):
        return NamingStyle.CAMEL_CASE
    return NamingStyle.OTHER


def expected_naming_style(
    token_type: TokenType, other_modifiers: OtherModifier, config: StyleConfig
) -> NamingStyle:
    """Decide the naming style a declared name should follow.

    Fields and variables declared ``static`` or ``final`` are constants.
    Parameters and for-loop variables always use the variable style.

    Raises:
        InvariantViolation: If ``token_type`` is not a declared-name role
    """
    if token_type in (TokenType.CLASS_NAME, TokenType.INTERFACE_NAME, TokenType.ENUM_NAME):
        return config.class_naming_style
    if token_type in (TokenType.CONSTRUCTOR_NAME, TokenType.METHOD_NAME):
        return config.method_naming_style
    if token_type in (TokenType.FIELD_NAME, TokenType.VARIABLE_NAME):
        if other_modifiers & (OtherModifier.STATIC | OtherModifier.FINAL):
            return config.constant_naming_style
        return config.variable_naming_style
    if token_type in (TokenType.FOR_VARIABLE_NAME, TokenType.PARAMETER_NAME):
        return config.variable_naming_style
    raise InvariantViolation(
        f"No naming style for {token_type.value}",
        ErrorCode.JS302,
        context={"token_type": token_type.value},
    )
