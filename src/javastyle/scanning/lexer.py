"""Lexical token stream derived from a tree-sitter parse tree.

tree-sitter keeps comments in the tree but drops whitespace. The stream
produced here puts it back: every gap between two leaves becomes one or two
whitespace tokens, so the concatenated token texts reproduce the source
exactly.

A gap that spans line breaks is split in two:
    - the part up to and including its last line terminator stays on the
      line where the gap starts;
    - the remaining indentation becomes a separate token on the line of the
      next leaf.
Blank lines in between carry no tokens at all.

Channels:
    CODE         keywords, identifiers, literals, punctuation, operators
    WHITESPACE   spaces, tabs, form feeds, line terminators
    COMMENT      // and /* */ comments
    DOC_COMMENT  /** */ comments
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..exceptions import ErrorCode, InvariantViolation
from .walker import iter_leaves

if TYPE_CHECKING:
    from .treesitter_parser import Tree

WHITESPACE_TYPE_CODE = "whitespace"
_WHITESPACE_CHARS = " \t\f\r\n"


class Channel(Enum):
    CODE = "code"
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    DOC_COMMENT = "doc_comment"


@dataclass(frozen=True)
class RawToken:
    """One lexical unit as reported by the front-end.

    Attributes:
        text: Raw source text
        line: 1-based line the token starts on
        type_code: tree-sitter node type, or "whitespace" for gap tokens
        channel: Which channel the token belongs to
        start_byte: Offset of the first byte in the source
        end_byte: Offset one past the last byte in the source
    """

    text: str
    line: int
    type_code: str
    channel: Channel
    start_byte: int
    end_byte: int


def comment_channel(text: str) -> Channel:
    """Doc comments start with ``/**``; ``/**/`` is an empty block comment."""
    if text.startswith("/**") and text != "/**/":
        return Channel.DOC_COMMENT
    return Channel.COMMENT


def tokenize(tree: Tree, code: bytes) -> list[RawToken]:
    """Build the ordered token stream for a parsed file.

    Args:
        tree: Parse tree from JavaParser.parse()
        code: The exact bytes that were parsed

    Returns:
        Tokens in strictly increasing lexical order
    """
    tokens: list[RawToken] = []
    position = 0
    row = 0

    for leaf in iter_leaves(tree.root_node):
        if leaf.start_byte > position:
            tokens.extend(_gap_tokens(code, position, leaf.start_byte, row))
        text = code[leaf.start_byte : leaf.end_byte].decode("utf-8")
        if leaf.type in ("line_comment", "block_comment"):
            channel = comment_channel(text)
        else:
            channel = Channel.CODE
        tokens.append(
            RawToken(
                text=text,
                line=leaf.start_point[0] + 1,
                type_code=leaf.type,
                channel=channel,
                start_byte=leaf.start_byte,
                end_byte=leaf.end_byte,
            )
        )
        position = leaf.end_byte
        row = leaf.end_point[0]

    if len(code) > position:
        tokens.extend(_gap_tokens(code, position, len(code), row))

    return tokens


def _gap_tokens(code: bytes, start: int, end: int, row: int) -> list[RawToken]:
    """Whitespace tokens for code[start:end], which begins on 0-based ``row``."""
    gap = code[start:end].decode("utf-8")
    if gap.strip(_WHITESPACE_CHARS):
        raise InvariantViolation(
            "Non-whitespace text between tree leaves",
            ErrorCode.JS103,
            context={"line": row + 1, "text": gap.strip(_WHITESPACE_CHARS)[:20]},
        )

    last_newline = gap.rfind("\n")
    if last_newline == -1:
        return [_whitespace(gap, row + 1, start)]

    head = gap[: last_newline + 1]
    tail = gap[last_newline + 1 :]
    head_end = start + len(head.encode("utf-8"))
    pieces = [_whitespace(head, row + 1, start)]
    if tail:
        pieces.append(_whitespace(tail, row + 1 + head.count("\n"), head_end))
    return pieces


def _whitespace(text: str, line: int, start_byte: int) -> RawToken:
    return RawToken(
        text=text,
        line=line,
        type_code=WHITESPACE_TYPE_CODE,
        channel=Channel.WHITESPACE,
        start_byte=start_byte,
        end_byte=start_byte + len(text.encode("utf-8")),
    )
