"""Token model: typed tokens with position geometry and classification.

A Token wraps one lexical unit from the front-end. Its category is a closed
tag (code, whitespace, comment, doc comment); rules and summaries dispatch
on that tag.

Code tokens are classified twice:
    1. CoarseClassification, from the grammar's node type alone, fixed when
       the token is created.
    2. Classification, the final role plus modifiers and annotations,
       written exactly once by the syntax scope builder.

Tokens and lines share the one-shot evaluation state of FormatPrimitive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Any, Optional

from ..exceptions import ErrorCode, InvariantViolation
from ..scanning.lexer import Channel, RawToken

TAB_WIDTH = 4


class TokenCategory(Enum):
    CODE = "code"
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    DOC_COMMENT = "doc_comment"


CATEGORY_BY_CHANNEL = {
    Channel.CODE: TokenCategory.CODE,
    Channel.WHITESPACE: TokenCategory.WHITESPACE,
    Channel.COMMENT: TokenCategory.COMMENT,
    Channel.DOC_COMMENT: TokenCategory.DOC_COMMENT,
}


class TokenType(Enum):
    """Semantic type of a code token."""

    KEYWORD = "keyword"

    # Literals
    STRING_LITERAL = "string_literal"
    NUMBER_LITERAL = "number_literal"
    BOOL_LITERAL = "bool_literal"
    NULL_LITERAL = "null_literal"

    # Punctuation
    SEMICOLON = "semicolon"
    COMMA = "comma"
    DOT = "dot"
    L_PARENTHESIS = "l_parenthesis"
    R_PARENTHESIS = "r_parenthesis"
    L_SBRACKET = "l_sbracket"
    R_SBRACKET = "r_sbracket"
    L_CBRACKET = "l_cbracket"
    R_CBRACKET = "r_cbracket"

    # Identifiers. IDENTIFIER_UNCLASSIFIED only exists before the syntax pass.
    IDENTIFIER_UNCLASSIFIED = "identifier_unclassified"
    IDENTIFIER_REFERENCE = "identifier_reference"
    CLASS_NAME = "class_name"
    INTERFACE_NAME = "interface_name"
    ENUM_NAME = "enum_name"
    CONSTRUCTOR_NAME = "constructor_name"
    METHOD_NAME = "method_name"
    FIELD_NAME = "field_name"
    FOR_VARIABLE_NAME = "for_variable_name"
    VARIABLE_NAME = "variable_name"
    PARAMETER_NAME = "parameter_name"

    # Operators
    OPERATOR_LOW_PRECEDENCE = "operator_low_precedence"
    OTHER_OPERATORS = "other_operators"

    OTHERS = "others"


DECLARED_NAME_TYPES = frozenset(
    {
        TokenType.CLASS_NAME,
        TokenType.INTERFACE_NAME,
        TokenType.ENUM_NAME,
        TokenType.CONSTRUCTOR_NAME,
        TokenType.METHOD_NAME,
        TokenType.FIELD_NAME,
        TokenType.FOR_VARIABLE_NAME,
        TokenType.VARIABLE_NAME,
        TokenType.PARAMETER_NAME,
    }
)


class AccessModifier(IntFlag):
    """Access and inheritance modifiers."""

    NONE = 0
    PUBLIC = 0x1
    PROTECTED = 0x2
    PRIVATE = 0x4
    DEFAULT = 0x8
    ABSTRACT = 0x10


class OtherModifier(IntFlag):
    """Modifiers unrelated to access or inheritance."""

    NONE = 0
    FINAL = 0x1
    STATIC = 0x2
    STRICTFP = 0x4
    NATIVE = 0x8
    SYNCHRONIZED = 0x10
    TRANSIENT = 0x20
    VOLATILE = 0x40


ACCESS_MODIFIER_KEYWORDS = {
    "public": AccessModifier.PUBLIC,
    "protected": AccessModifier.PROTECTED,
    "private": AccessModifier.PRIVATE,
    "default": AccessModifier.DEFAULT,
    "abstract": AccessModifier.ABSTRACT,
}

OTHER_MODIFIER_KEYWORDS = {
    "final": OtherModifier.FINAL,
    "static": OtherModifier.STATIC,
    "strictfp": OtherModifier.STRICTFP,
    "native": OtherModifier.NATIVE,
    "synchronized": OtherModifier.SYNCHRONIZED,
    "transient": OtherModifier.TRANSIENT,
    "volatile": OtherModifier.VOLATILE,
}


# Grammar node type -> coarse semantic type. Anonymous keyword nodes carry
# their own text as type and are looked up in JAVA_KEYWORDS instead.
_TYPE_CODE_TABLE = {
    # Keywords that the grammar exposes as named leaves
    "void_type": TokenType.KEYWORD,
    "boolean_type": TokenType.KEYWORD,
    "this": TokenType.KEYWORD,
    "super": TokenType.KEYWORD,
    "@interface": TokenType.KEYWORD,
    # Literals
    "decimal_integer_literal": TokenType.NUMBER_LITERAL,
    "hex_integer_literal": TokenType.NUMBER_LITERAL,
    "octal_integer_literal": TokenType.NUMBER_LITERAL,
    "binary_integer_literal": TokenType.NUMBER_LITERAL,
    "decimal_floating_point_literal": TokenType.NUMBER_LITERAL,
    "hex_floating_point_literal": TokenType.NUMBER_LITERAL,
    "string_literal": TokenType.STRING_LITERAL,
    "character_literal": TokenType.STRING_LITERAL,
    "text_block": TokenType.STRING_LITERAL,
    "true": TokenType.BOOL_LITERAL,
    "false": TokenType.BOOL_LITERAL,
    "null_literal": TokenType.NULL_LITERAL,
    # Punctuation
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "(": TokenType.L_PARENTHESIS,
    ")": TokenType.R_PARENTHESIS,
    "[": TokenType.L_SBRACKET,
    "]": TokenType.R_SBRACKET,
    "{": TokenType.L_CBRACKET,
    "}": TokenType.R_CBRACKET,
    # Identifiers
    "identifier": TokenType.IDENTIFIER_UNCLASSIFIED,
    "type_identifier": TokenType.IDENTIFIER_UNCLASSIFIED,
    # Operators, lowest precedence first: assignment
    "=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "+=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "-=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "*=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "/=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "&=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "|=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "^=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "%=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "<<=": TokenType.OPERATOR_LOW_PRECEDENCE,
    ">>=": TokenType.OPERATOR_LOW_PRECEDENCE,
    ">>>=": TokenType.OPERATOR_LOW_PRECEDENCE,
    # ternary
    "?": TokenType.OPERATOR_LOW_PRECEDENCE,
    ":": TokenType.OPERATOR_LOW_PRECEDENCE,
    # logical and/or
    "&&": TokenType.OPERATOR_LOW_PRECEDENCE,
    "||": TokenType.OPERATOR_LOW_PRECEDENCE,
    # bitwise and/or/xor
    "&": TokenType.OPERATOR_LOW_PRECEDENCE,
    "|": TokenType.OPERATOR_LOW_PRECEDENCE,
    "^": TokenType.OPERATOR_LOW_PRECEDENCE,
    # equality and relational
    "==": TokenType.OPERATOR_LOW_PRECEDENCE,
    "!=": TokenType.OPERATOR_LOW_PRECEDENCE,
    ">": TokenType.OPERATOR_LOW_PRECEDENCE,
    "<": TokenType.OPERATOR_LOW_PRECEDENCE,
    ">=": TokenType.OPERATOR_LOW_PRECEDENCE,
    "<=": TokenType.OPERATOR_LOW_PRECEDENCE,
    # shift and above
    "<<": TokenType.OTHER_OPERATORS,
    ">>": TokenType.OTHER_OPERATORS,
    ">>>": TokenType.OTHER_OPERATORS,
    "!": TokenType.OTHER_OPERATORS,
    "~": TokenType.OTHER_OPERATORS,
    "++": TokenType.OTHER_OPERATORS,
    "--": TokenType.OTHER_OPERATORS,
    "+": TokenType.OTHER_OPERATORS,
    "-": TokenType.OTHER_OPERATORS,
    "*": TokenType.OTHER_OPERATORS,
    "/": TokenType.OTHER_OPERATORS,
    "%": TokenType.OTHER_OPERATORS,
    # Misc
    "->": TokenType.OTHERS,
    "::": TokenType.OTHERS,
    "@": TokenType.OTHERS,
    "...": TokenType.OTHERS,
    "asterisk": TokenType.OTHERS,
    "underscore_pattern": TokenType.OTHERS,
}

JAVA_KEYWORDS = frozenset(
    {
        # Reserved words
        "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
        "class", "const", "continue", "default", "do", "double", "else", "enum",
        "extends", "final", "finally", "float", "for", "goto", "if", "implements",
        "import", "instanceof", "int", "interface", "long", "native", "new",
        "package", "private", "protected", "public", "return", "short", "static",
        "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
        "transient", "try", "void", "volatile", "while",
        # Contextual keywords
        "exports", "module", "non-sealed", "open", "opens", "permits", "provides",
        "record", "requires", "sealed", "to", "transitive", "uses", "var", "when",
        "with", "yield",
    }
)


def coarse_type(type_code: str) -> TokenType:
    """Map a grammar node type to its coarse semantic type.

    Raises:
        InvariantViolation: If the type code is not known to the rule tables
    """
    token_type = _TYPE_CODE_TABLE.get(type_code)
    if token_type is not None:
        return token_type
    if type_code in JAVA_KEYWORDS:
        return TokenType.KEYWORD
    raise InvariantViolation(
        f"Unknown token type code {type_code!r}",
        ErrorCode.JS102,
        context={"type_code": type_code},
    )


def visual_length(text: str, category: TokenCategory, column: int) -> int:
    """How many columns a token occupies when displayed from ``column``.

    Only the part up to the first line break is measured; a token spanning
    lines is displayed on the line it is indexed under.

    Whitespace: a space is one column, a tab advances to the next multiple
    of TAB_WIDTH, anything else (line terminators, form feeds) takes none.
    Other tokens: one column per character.
    """
    first_line = text.split("\n", 1)[0]
    if category is TokenCategory.WHITESPACE:
        length = 0
        for ch in first_line:
            if ch == " ":
                length += 1
            elif ch == "\t":
                length += TAB_WIDTH - (column + length) % TAB_WIDTH
        return length
    return len(first_line.rstrip("\r"))


def end_column(text: str, category: TokenCategory) -> int:
    """Column where the text after a token's last line break ends.

    The next token on that line starts there.
    """
    return visual_length(text.rsplit("\n", 1)[-1], category, 0)


@dataclass(frozen=True)
class CoarseClassification:
    """What the grammar alone says about a code token."""

    token_type: TokenType


@dataclass(frozen=True)
class Classification:
    """Final classification of a code token after the syntax pass."""

    token_type: TokenType
    access_modifiers: AccessModifier = AccessModifier.NONE
    other_modifiers: OtherModifier = OtherModifier.NONE
    annotations: tuple[str, ...] = ()

    def has_access_modifier(self, modifier: AccessModifier) -> bool:
        return bool(self.access_modifiers & modifier)

    def has_other_modifier(self, modifier: OtherModifier) -> bool:
        return bool(self.other_modifiers & modifier)

    @property
    def is_declared_name(self) -> bool:
        return self.token_type in DECLARED_NAME_TYPES


class FormatPrimitive:
    """Something the format evaluator judges exactly once."""

    _evaluation: Any = None

    @property
    def evaluated(self) -> bool:
        return self._evaluation is not None

    @property
    def evaluation(self) -> Any:
        if self._evaluation is None:
            raise InvariantViolation(
                f"{self!r} has not been evaluated", ErrorCode.JS301
            )
        return self._evaluation

    def record_evaluation(self, result: Any) -> None:
        """Store the evaluation result; the primitive is then evaluated.

        Raises:
            InvariantViolation: If the primitive was already evaluated
        """
        if self._evaluation is not None:
            raise InvariantViolation(
                f"{self!r} already evaluated", ErrorCode.JS300
            )
        self._evaluation = result


@dataclass(eq=False)
class Token(FormatPrimitive):
    """One lexical unit with its position geometry.

    Attributes:
        text: Raw text
        category: Closed category tag
        line: 1-based line number
        index_in_line: 0-based position among the tokens of its line
        global_index: 0-based position in the whole file
        column: Visual column where the token starts
        visual_length: Columns the token occupies
        type_code: Grammar node type ("whitespace" for whitespace)
        start_byte: Source offset of the first byte
        end_byte: Source offset one past the last byte
    """

    text: str
    category: TokenCategory
    line: int
    index_in_line: int
    global_index: int
    column: int
    visual_length: int
    type_code: str
    start_byte: int
    end_byte: int

    @property
    def is_whitespace(self) -> bool:
        return self.category is TokenCategory.WHITESPACE

    @property
    def is_code(self) -> bool:
        return self.category is TokenCategory.CODE

    @property
    def is_visible(self) -> bool:
        return self.category is not TokenCategory.WHITESPACE

    def __repr__(self) -> str:
        return f"{self.category.value} {self.text!r} at {self.line}:{self.index_in_line}"


@dataclass(eq=False, repr=False)
class CodeToken(Token):
    """A token on the code channel, carrying its classification."""

    coarse: CoarseClassification = field(init=False)
    _classification: Optional[Classification] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.coarse = CoarseClassification(coarse_type(self.type_code))

    @property
    def classified(self) -> bool:
        return self._classification is not None

    @property
    def classification(self) -> Classification:
        if self._classification is None:
            raise InvariantViolation(
                f"{self!r} read before the syntax pass finished", ErrorCode.JS200
            )
        return self._classification

    @property
    def token_type(self) -> TokenType:
        return self.classification.token_type

    def finalize_classification(self, classification: Classification) -> None:
        """Write the final classification. Only the syntax scope builder calls this."""
        if self._classification is not None:
            raise InvariantViolation(
                f"{self!r} classified twice", ErrorCode.JS201
            )
        if classification.token_type is TokenType.IDENTIFIER_UNCLASSIFIED:
            raise InvariantViolation(
                f"{self!r} left unclassified", ErrorCode.JS201
            )
        self._classification = classification


def make_token(raw: RawToken, index_in_line: int, global_index: int, column: int) -> Token:
    """Create the Token (or CodeToken) for a raw front-end token."""
    category = CATEGORY_BY_CHANNEL[raw.channel]
    cls = CodeToken if category is TokenCategory.CODE else Token
    return cls(
        text=raw.text,
        category=category,
        line=raw.line,
        index_in_line=index_in_line,
        global_index=global_index,
        column=column,
        visual_length=visual_length(raw.text, category, column),
        type_code=raw.type_code,
        start_byte=raw.start_byte,
        end_byte=raw.end_byte,
    )
