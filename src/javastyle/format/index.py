"""Token index: tokens grouped by line with random and neighbour access.

Lines are 1-based and contiguous: a line without tokens (blank line, or a
line covered by a multi-line comment) is kept as an empty entry. Besides
the line structure, a flat table maps every global token index to its
(line, index-in-line) position.

prev()/next() cross line boundaries and skip empty lines, returning None
only at the start or end of the file. They are pure functions of the line
structure and the token's own position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..exceptions import ErrorCode, IndexOutOfRange, InvariantViolation
from ..scanning.lexer import RawToken
from .tokens import FormatPrimitive, Token, TokenCategory, end_column, make_token


@dataclass(eq=False)
class Line(FormatPrimitive):
    """One source line and the tokens indexed under it."""

    number: int
    tokens: tuple[Token, ...]
    # Spaces and tabs of a line that holds no tokens, from the line break
    # token that runs across it
    blank_run: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    @property
    def first(self) -> Optional[Token]:
        return self.tokens[0] if self.tokens else None

    @property
    def last(self) -> Optional[Token]:
        return self.tokens[-1] if self.tokens else None

    @property
    def visual_length(self) -> int:
        """Column just after the last visible character of the line."""
        if not self.tokens:
            return 0
        last = self.tokens[-1]
        return last.column + last.visual_length

    @property
    def indentation(self) -> Optional[Token]:
        """Leading whitespace token, if the line starts with one."""
        first = self.first
        if first is not None and first.is_whitespace:
            return first
        return None

    def __repr__(self) -> str:
        return f"line {self.number} ({len(self.tokens)} tokens)"


def prev_position(
    lines: list[tuple[Token, ...]], line: int, index_in_line: int
) -> Optional[tuple[int, int]]:
    """Position of the token before (line, index_in_line), skipping empty lines."""
    if index_in_line > 0:
        return line, index_in_line - 1
    row = line - 2
    while row >= 0:
        if lines[row]:
            return row + 1, len(lines[row]) - 1
        row -= 1
    return None


def next_position(
    lines: list[tuple[Token, ...]], line: int, index_in_line: int
) -> Optional[tuple[int, int]]:
    """Position of the token after (line, index_in_line), skipping empty lines."""
    if index_in_line + 1 < len(lines[line - 1]):
        return line, index_in_line + 1
    row = line
    while row < len(lines):
        if lines[row]:
            return row + 1, 0
        row += 1
    return None


class TokenIndex:
    """All tokens of one file, by line and by global index."""

    def __init__(self) -> None:
        self._lines: list[tuple[Token, ...]] = []
        self._table: list[tuple[int, int]] = []
        self._by_offset: dict[int, Token] = {}
        self._line_objects: list[Line] = []
        self._doc_comments: list[Token] = []

    @classmethod
    def build(cls, raw_tokens: Iterable[RawToken]) -> TokenIndex:
        """Create the index from front-end tokens in file order.

        Raises:
            InvariantViolation: If the tokens are not in lexical order
        """
        index = cls()
        current: list[Token] = []
        current_line = 1
        column = 0
        last_offset = -1
        # Line where the last multi-line token ends, and the column it ends at
        resume_line = 0
        resume_column = 0
        blank_runs: dict[int, str] = {}

        for raw in raw_tokens:
            if not raw.text:
                continue
            if raw.start_byte <= last_offset or raw.line < current_line:
                raise InvariantViolation(
                    "Token stream out of lexical order",
                    ErrorCode.JS101,
                    context={"line": raw.line, "text": raw.text[:20]},
                )
            last_offset = raw.start_byte

            # Materialize skipped lines as empty entries
            while current_line < raw.line:
                index._lines.append(tuple(current))
                current = []
                current_line += 1
                column = resume_column if current_line == resume_line else 0

            token = make_token(
                raw,
                index_in_line=len(current),
                global_index=len(index._table),
                column=column,
            )
            current.append(token)
            index._table.append((current_line, token.index_in_line))
            index._by_offset[token.start_byte] = token
            if token.category is TokenCategory.DOC_COMMENT:
                index._doc_comments.append(token)
            column += token.visual_length

            breaks = token.text.count("\n")
            if breaks:
                resume_line = token.line + breaks
                resume_column = end_column(token.text, token.category)
                if token.is_whitespace:
                    segments = token.text.split("\n")
                    for offset, segment in enumerate(segments[1:-1], start=1):
                        blank_runs[token.line + offset] = segment

        index._lines.append(tuple(current))
        index._line_objects = [
            Line(number=i + 1, tokens=tokens, blank_run=blank_runs.get(i + 1, ""))
            for i, tokens in enumerate(index._lines)
        ]
        return index

    # -- random access -------------------------------------------------

    def count(self) -> int:
        return len(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[Token]:
        for tokens in self._lines:
            yield from tokens

    def at(self, global_index: int) -> Token:
        """Token at a global index.

        Raises:
            IndexOutOfRange: Outside [0, count())
        """
        if global_index < 0 or global_index >= len(self._table):
            raise IndexOutOfRange(
                "Token index is out of range",
                ErrorCode.JS100,
                context={"index": global_index, "count": len(self._table)},
            )
        line, index_in_line = self._table[global_index]
        return self._lines[line - 1][index_in_line]

    def position_of(self, global_index: int) -> tuple[int, int]:
        """(line, index_in_line) of a global index."""
        token = self.at(global_index)
        return token.line, token.index_in_line

    def at_position(self, line: int, index_in_line: int) -> Optional[Token]:
        """The index_in_line-th token of a 1-based line, or None."""
        if line < 1 or line > len(self._lines):
            return None
        tokens = self._lines[line - 1]
        if index_in_line < 0 or index_in_line >= len(tokens):
            return None
        return tokens[index_in_line]

    def by_offset(self, start_byte: int) -> Optional[Token]:
        """Token starting at a source byte offset."""
        return self._by_offset.get(start_byte)

    def includes(self, token: Optional[Token]) -> bool:
        """True iff ``token`` is one of this index's tokens."""
        if token is None:
            return False
        return self.at_position(token.line, token.index_in_line) is token

    # -- navigation ----------------------------------------------------

    def prev(self, token: Token) -> Optional[Token]:
        """Token immediately before ``token``, across empty lines; None at file start."""
        position = prev_position(self._lines, token.line, token.index_in_line)
        if position is None:
            return None
        return self._lines[position[0] - 1][position[1]]

    def next(self, token: Token) -> Optional[Token]:
        """Token immediately after ``token``, across empty lines; None at file end."""
        position = next_position(self._lines, token.line, token.index_in_line)
        if position is None:
            return None
        return self._lines[position[0] - 1][position[1]]

    def next_code(self, token: Token) -> Optional[Token]:
        """First code token after ``token``, skipping whitespace and comments."""
        following = self.next(token)
        while following is not None and not following.is_code:
            following = self.next(following)
        return following

    # -- lines ---------------------------------------------------------

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._line_objects)

    def num_lines(self) -> int:
        return len(self._line_objects)

    def line(self, number: int) -> Line:
        """Line by 1-based number.

        Raises:
            IndexOutOfRange: Outside [1, num_lines()]
        """
        if number < 1 or number > len(self._line_objects):
            raise IndexOutOfRange(
                "Line number is out of range",
                ErrorCode.JS100,
                context={"line": number, "count": len(self._line_objects)},
            )
        return self._line_objects[number - 1]

    @property
    def doc_comments(self) -> tuple[Token, ...]:
        return tuple(self._doc_comments)
