"""Read-only syntax model of one file: scopes, declarations, contexts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from ..exceptions import ErrorCode, InvariantViolation

if TYPE_CHECKING:
    from ..format.index import Line, TokenIndex
    from ..format.tokens import Token


@dataclass(eq=False)
class Scope:
    """A brace-delimited region, or the implicit file scope.

    Attributes:
        kind: Grammar node type owning the braces ("file" for the file scope)
        parent: Enclosing scope, None for the file scope
        first_line: Line of the opening brace
        last_line: Line of the closing brace
        start_byte: Offset of the opening brace
        end_byte: Offset just past the closing brace
        declaration: Innermost declaration enclosing the opening brace
    """

    kind: str
    parent: Optional[Scope]
    first_line: int
    last_line: int
    start_byte: int
    end_byte: int
    declaration: Optional[Declaration] = None
    depth: int = field(init=False)

    def __post_init__(self) -> None:
        self.depth = 0 if self.parent is None else self.parent.depth + 1

    @property
    def one_line(self) -> bool:
        return self.first_line == self.last_line

    @property
    def is_file_scope(self) -> bool:
        return self.parent is None

    def __repr__(self) -> str:
        return f"Scope({self.kind}, lines {self.first_line}-{self.last_line})"


class DeclarationKind(Enum):
    TYPE = "type"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    ANNOTATION_ELEMENT = "annotation_element"
    FIELD = "field"
    ENUM_CONSTANT = "enum_constant"


CALLABLE_KINDS = frozenset(
    {DeclarationKind.METHOD, DeclarationKind.CONSTRUCTOR, DeclarationKind.ANNOTATION_ELEMENT}
)


@dataclass(frozen=True)
class Declaration:
    """A named member or type declaration.

    Attributes:
        kind: What is declared
        name: Declared name (the first one for multi-variable fields)
        node_type: Grammar node type of the declaration
        line: Line where the declaration starts (modifiers included)
        start_byte: Offset where the declaration starts
        parameters: Parameter names (record components for records)
        type_parameters: Generic type parameter names
        returns_value: True for methods whose return type is not void
        thrown_types: Exception types of the throws clause, as written
    """

    kind: DeclarationKind
    name: str
    node_type: str
    line: int
    start_byte: int
    parameters: tuple[str, ...] = ()
    type_parameters: tuple[str, ...] = ()
    returns_value: bool = False
    thrown_types: tuple[str, ...] = ()

    @property
    def is_callable(self) -> bool:
        return self.kind in CALLABLE_KINDS

    @property
    def is_record(self) -> bool:
        return self.node_type == "record_declaration"


@dataclass(frozen=True)
class SyntaxContext:
    """Where a token or line sits in the syntax structure."""

    scope: Scope
    declaration: Optional[Declaration] = None


class SyntaxModel:
    """Scopes, declarations and per-token contexts of one file.

    Only SyntaxScopeBuilder creates this, after its walk has completed.
    """

    def __init__(
        self,
        index: TokenIndex,
        file_scope: Scope,
        scopes: list[Scope],
        declarations: dict[int, Declaration],
        contexts: dict[Token, SyntaxContext],
    ) -> None:
        self._index = index
        self._file_scope = file_scope
        self._scopes = tuple(scopes)
        self._declarations = dict(declarations)
        self._contexts = dict(contexts)

    @property
    def file_scope(self) -> Scope:
        return self._file_scope

    @property
    def scopes(self) -> tuple[Scope, ...]:
        return self._scopes

    @property
    def declarations(self) -> tuple[Declaration, ...]:
        return tuple(self._declarations.values())

    def scope_of(self, token: Token) -> Scope:
        return self.context_of(token).scope

    def context_of(self, primitive: Union[Token, Line]) -> SyntaxContext:
        """Context of a token, or of a line.

        A line takes the context of its first token. An empty line takes the
        context of the closest token before it (the line break that precedes
        it), or the file context at the top of the file.

        Raises:
            InvariantViolation: If the token is not part of this file
        """
        from ..format.index import Line

        if isinstance(primitive, Line):
            return self._line_context(primitive)
        try:
            return self._contexts[primitive]
        except KeyError:
            raise InvariantViolation(
                f"{primitive!r} is not part of the syntax model", ErrorCode.JS204
            ) from None

    def declaration_at(self, token: Token) -> Optional[Declaration]:
        """Declaration whose first token is ``token``, if any."""
        return self._declarations.get(token.start_byte)

    def _line_context(self, line: Line) -> SyntaxContext:
        if line.first is not None:
            return self.context_of(line.first)
        number = line.number - 1
        while number >= 1:
            previous = self._index.line(number)
            if previous.last is not None:
                return self.context_of(previous.last)
            number -= 1
        return SyntaxContext(scope=self._file_scope)
