"""FormatEvaluator: applies the style rules to every token and line.

Rules are chosen through dispatch tables: first by token category, then,
for code tokens, by final token type. Each rule returns an immutable result
that is recorded on the primitive exactly once.

Code tokens:
    declared names      length within bounds, naming style as expected
    { and }             one-line scopes need inner padding; multi-line
                        scopes get their brace placement classified
    ,                   whitespace (or end of file) right after
    ;                   whitespace, a new line or end of file right after
    low-precedence ops  whitespace (or file boundary) on both sides
    anything else       passes

Whitespace:  no run mixes tabs and spaces
Comments:    ``//`` is followed by a space
Doc comments: the tags match the declaration that follows
Lines:       not too long, no trailing whitespace, no mixed indentation
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Union, cast

from ..exceptions import ErrorCode, InvariantViolation
from ..logging_config import get_logger
from ..syntax.model import Declaration
from .javadoc import DocComment, match_declaration, parse_doc_comment
from .naming import NamingStyle, detect_naming_style, expected_naming_style
from .tokens import DECLARED_NAME_TYPES, CodeToken, Token, TokenCategory, TokenType

if TYPE_CHECKING:
    from ..config import StyleConfig
    from ..syntax.model import SyntaxModel
    from .index import Line, TokenIndex

logger = get_logger(__name__)


class BraceStyle(Enum):
    """Placement of the opening brace of a multi-line scope."""

    STARTS_NEW_LINE = "starts_new_line"
    STAYS_IN_OLD_LINE = "stays_in_old_line"
    # Preceded by whitespace which itself has a predecessor: not decided
    UNDETERMINED = "undetermined"


class SpacingRule(Enum):
    NONE = "none"
    ONE_LINE_SCOPE = "one_line_scope"
    COMMA = "comma"
    SEMICOLON = "semicolon"
    OPERATOR = "operator"


@dataclass(frozen=True)
class IdentifierEvaluation:
    too_short: bool
    too_long: bool
    naming_style: NamingStyle
    expected_style: NamingStyle

    @property
    def naming_correct(self) -> bool:
        return self.naming_style is self.expected_style

    @property
    def meets_expectation(self) -> bool:
        return not self.too_short and not self.too_long and self.naming_correct


@dataclass(frozen=True)
class CodeEvaluation:
    """Spacing result of a non-identifier code token.

    Only the flag of the applied rule can be False; the others keep their
    default. ``brace_style`` is set for the ``{`` of multi-line scopes.
    """

    rule: SpacingRule = SpacingRule.NONE
    one_line_scope_space: bool = True
    space_after_comma: bool = True
    space_or_newline_after_semicolon: bool = True
    space_around_operator: bool = True
    brace_style: Optional[BraceStyle] = None

    @property
    def meets_expectation(self) -> bool:
        return (
            self.one_line_scope_space
            and self.space_after_comma
            and self.space_or_newline_after_semicolon
            and self.space_around_operator
        )


@dataclass(frozen=True)
class WhitespaceEvaluation:
    has_tab: bool
    mixed_tabs_and_spaces: bool

    @property
    def meets_expectation(self) -> bool:
        return not self.mixed_tabs_and_spaces


@dataclass(frozen=True)
class CommentEvaluation:
    is_line_comment: bool
    missing_space: bool

    @property
    def meets_expectation(self) -> bool:
        return not self.missing_space


@dataclass(frozen=True)
class DocCommentEvaluation:
    doc: DocComment
    declaration: Optional[Declaration]
    subject_mismatch: bool
    unmatched_tags: tuple[str, ...]
    undocumented_parameters: tuple[str, ...]
    return_missing: bool

    @property
    def meets_expectation(self) -> bool:
        return not (
            self.subject_mismatch
            or self.unmatched_tags
            or self.undocumented_parameters
            or self.return_missing
        )


@dataclass(frozen=True)
class LineEvaluation:
    visual_length: int
    too_long: bool
    trailing_whitespace: bool
    mixed_indentation: bool

    @property
    def meets_expectation(self) -> bool:
        return not (self.too_long or self.trailing_whitespace or self.mixed_indentation)


TokenEvaluation = Union[
    IdentifierEvaluation,
    CodeEvaluation,
    WhitespaceEvaluation,
    CommentEvaluation,
    DocCommentEvaluation,
]


def brace_style(prev: Optional[Token], prev_prev: Optional[Token]) -> BraceStyle:
    """Classify an opening brace from the two tokens before it."""
    if prev is None:
        return BraceStyle.STARTS_NEW_LINE
    if not prev.is_whitespace:
        return BraceStyle.STAYS_IN_OLD_LINE
    if prev_prev is None:
        return BraceStyle.STARTS_NEW_LINE
    return BraceStyle.UNDETERMINED


def mixes_tabs_and_spaces(text: str) -> bool:
    return " " in text and "\t" in text


class FormatEvaluator:
    """Evaluates the tokens and lines of one file against a StyleConfig.

    The token index and syntax model must be complete; the evaluator only
    reads them.
    """

    def __init__(self, index: TokenIndex, model: SyntaxModel, config: StyleConfig) -> None:
        self._index = index
        self._model = model
        self._config = config

        self._category_rules: dict[TokenCategory, Callable[[Any], TokenEvaluation]] = {
            TokenCategory.CODE: self._evaluate_code,
            TokenCategory.WHITESPACE: self._evaluate_whitespace,
            TokenCategory.COMMENT: self._evaluate_comment,
            TokenCategory.DOC_COMMENT: self._evaluate_doc_comment,
        }
        self._code_rules: dict[TokenType, Callable[[CodeToken], TokenEvaluation]] = {
            TokenType.L_CBRACKET: self._open_brace,
            TokenType.R_CBRACKET: self._close_brace,
            TokenType.COMMA: self._comma,
            TokenType.SEMICOLON: self._semicolon,
            TokenType.OPERATOR_LOW_PRECEDENCE: self._operator,
        }
        for token_type in DECLARED_NAME_TYPES:
            self._code_rules[token_type] = self._identifier

    # -- entry points --------------------------------------------------

    def evaluate_all(self) -> None:
        """Evaluate every token, then every line, in file order."""
        for token in self._index:
            self.evaluate_token(token)
        for line in self._index.lines:
            self.evaluate_line(line)
        logger.debug(
            f"Evaluated {self._index.count()} tokens on {self._index.num_lines()} lines"
        )

    def evaluate_token(self, token: Token) -> TokenEvaluation:
        """Apply the rules for the token's category and record the result.

        Raises:
            InvariantViolation: If the token was already evaluated or does not
                belong to this file
        """
        if not self._index.includes(token):
            raise InvariantViolation(f"{token!r} is not part of this file", ErrorCode.JS204)
        if token.evaluated:
            raise InvariantViolation(f"{token!r} already evaluated", ErrorCode.JS300)
        result = self._category_rules[token.category](token)
        token.record_evaluation(result)
        return result

    def evaluate_line(self, line: Line) -> LineEvaluation:
        """Apply the line rules and record the result.

        Raises:
            InvariantViolation: If the line was already evaluated
        """
        if line.evaluated:
            raise InvariantViolation(f"{line!r} already evaluated", ErrorCode.JS300)

        length = line.visual_length
        indentation = line.indentation
        result = LineEvaluation(
            visual_length=length,
            too_long=length > self._config.max_line_length,
            trailing_whitespace=has_trailing_whitespace(line),
            mixed_indentation=indentation is not None and mixes_tabs_and_spaces(indentation.text),
        )
        line.record_evaluation(result)
        return result

    # -- category rules ------------------------------------------------

    def _evaluate_code(self, token: CodeToken) -> TokenEvaluation:
        rule = self._code_rules.get(token.token_type)
        if rule is None:
            return CodeEvaluation()
        return rule(token)

    def _evaluate_whitespace(self, token: Token) -> WhitespaceEvaluation:
        # Only the part on the token's own line; line terminators end the run
        run = token.text.split("\n", 1)[0]
        return WhitespaceEvaluation(
            has_tab="\t" in run,
            mixed_tabs_and_spaces=mixes_tabs_and_spaces(run),
        )

    def _evaluate_comment(self, token: Token) -> CommentEvaluation:
        text = token.text
        if not text.startswith("//"):
            return CommentEvaluation(is_line_comment=False, missing_space=False)
        body = text[2:].rstrip("\r\n")
        # "//" alone and separator lines such as "//////" are fine
        missing = bool(body.strip("/")) and not body[0].isspace()
        return CommentEvaluation(is_line_comment=True, missing_space=missing)

    def _evaluate_doc_comment(self, token: Token) -> DocCommentEvaluation:
        doc = parse_doc_comment(token.text)
        following = self._index.next_code(token)
        declaration = self._model.declaration_at(following) if following is not None else None
        match = match_declaration(doc, declaration)
        return DocCommentEvaluation(
            doc=doc,
            declaration=declaration,
            subject_mismatch=match.subject_mismatch,
            unmatched_tags=match.unmatched_tags,
            undocumented_parameters=match.undocumented_parameters,
            return_missing=match.return_missing,
        )

    # -- code rules ----------------------------------------------------

    def _identifier(self, token: CodeToken) -> IdentifierEvaluation:
        classification = token.classification
        length = len(token.text)
        too_long = length > self._config.max_identifier_length
        too_short = not too_long and length < self._config.min_identifier_length
        return IdentifierEvaluation(
            too_short=too_short,
            too_long=too_long,
            naming_style=detect_naming_style(token.text),
            expected_style=expected_naming_style(
                classification.token_type, classification.other_modifiers, self._config
            ),
        )

    def _open_brace(self, token: CodeToken) -> CodeEvaluation:
        scope = self._model.scope_of(token)
        if scope.one_line:
            following = self._index.next(token)
            if following is None:
                raise InvariantViolation(
                    f"{token!r} opens a scope but ends the file", ErrorCode.JS302
                )
            if following.is_code and cast(CodeToken, following).token_type is TokenType.R_CBRACKET:
                padded = True
            else:
                padded = following.is_whitespace
            return CodeEvaluation(rule=SpacingRule.ONE_LINE_SCOPE, one_line_scope_space=padded)

        prev = self._index.prev(token)
        prev_prev = self._index.prev(prev) if prev is not None else None
        return CodeEvaluation(brace_style=brace_style(prev, prev_prev))

    def _close_brace(self, token: CodeToken) -> CodeEvaluation:
        scope = self._model.scope_of(token)
        if not scope.one_line:
            return CodeEvaluation()
        prev = self._index.prev(token)
        if prev is None:
            raise InvariantViolation(
                f"{token!r} closes a scope but starts the file", ErrorCode.JS302
            )
        if prev.is_code and cast(CodeToken, prev).token_type is TokenType.L_CBRACKET:
            padded = True
        else:
            padded = prev.is_whitespace
        return CodeEvaluation(rule=SpacingRule.ONE_LINE_SCOPE, one_line_scope_space=padded)

    def _comma(self, token: CodeToken) -> CodeEvaluation:
        following = self._index.next(token)
        spaced = following is None or following.is_whitespace
        return CodeEvaluation(rule=SpacingRule.COMMA, space_after_comma=spaced)

    def _semicolon(self, token: CodeToken) -> CodeEvaluation:
        following = self._index.next(token)
        spaced = following is None or following.is_whitespace or following.line > token.line
        return CodeEvaluation(rule=SpacingRule.SEMICOLON, space_or_newline_after_semicolon=spaced)

    def _operator(self, token: CodeToken) -> CodeEvaluation:
        prev = self._index.prev(token)
        following = self._index.next(token)
        before = prev is None or prev.is_whitespace
        after = following is None or following.is_whitespace
        return CodeEvaluation(rule=SpacingRule.OPERATOR, space_around_operator=before and after)


def has_trailing_whitespace(line: Line) -> bool:
    """True if spaces or tabs follow the last visible token of the line.

    A line holding nothing but spaces or tabs has no tokens of its own; its
    run comes from the line break token that crosses it.
    """
    last = line.last
    if last is None:
        run = line.blank_run
    elif last.is_whitespace:
        run = last.text.split("\n", 1)[0]
    else:
        return False
    run = run.rstrip("\r")
    return bool(run.strip("\f"))
