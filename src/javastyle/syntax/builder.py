"""SyntaxScopeBuilder: one walk over the parse tree producing a SyntaxModel.

The walk consumes enter/exit events in document order and does three things
at once:

    1. Scopes: entering a node whose first child is ``{`` and last child is
       ``}`` opens a scope; exiting it closes the scope.
    2. Declarations: entering a declaration node opens a pending record keyed
       by the node's id. Its name node(s) are registered against the same
       key, and the keywords and annotations of its ``modifiers`` child are
       buffered there. Everything is flushed onto the name tokens when the
       declaration node exits.
    3. Contexts: every leaf's token gets the current (scope, declaration);
       whitespace following a leaf gets the same context, except after a
       closing brace, where it belongs to the enclosing scope.

After the walk every code token is finalized exactly once.

Usage:
    builder = SyntaxScopeBuilder(index, code)
    model = builder.build(tree.root_node)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, cast

from ..exceptions import ErrorCode, InvariantViolation
from ..format.tokens import (
    ACCESS_MODIFIER_KEYWORDS,
    OTHER_MODIFIER_KEYWORDS,
    AccessModifier,
    Classification,
    CodeToken,
    OtherModifier,
    Token,
    TokenType,
)
from ..logging_config import get_logger
from ..scanning.walker import WalkEvent, is_leaf, walk
from .model import Declaration, DeclarationKind, Scope, SyntaxContext, SyntaxModel

if TYPE_CHECKING:
    from ..format.index import TokenIndex
    from ..scanning.treesitter_parser import Node

logger = get_logger(__name__)

# Declaration node type -> role of its declared name(s)
NAME_ROLES = {
    "class_declaration": TokenType.CLASS_NAME,
    "record_declaration": TokenType.CLASS_NAME,
    "interface_declaration": TokenType.INTERFACE_NAME,
    "annotation_type_declaration": TokenType.INTERFACE_NAME,
    "enum_declaration": TokenType.ENUM_NAME,
    "constructor_declaration": TokenType.CONSTRUCTOR_NAME,
    "compact_constructor_declaration": TokenType.CONSTRUCTOR_NAME,
    "method_declaration": TokenType.METHOD_NAME,
    "annotation_type_element_declaration": TokenType.METHOD_NAME,
    "field_declaration": TokenType.FIELD_NAME,
    "constant_declaration": TokenType.FIELD_NAME,
    "enum_constant": TokenType.FIELD_NAME,
    "local_variable_declaration": TokenType.VARIABLE_NAME,
    "resource": TokenType.VARIABLE_NAME,
    "instanceof_expression": TokenType.VARIABLE_NAME,
    "enhanced_for_statement": TokenType.FOR_VARIABLE_NAME,
    "formal_parameter": TokenType.PARAMETER_NAME,
    "spread_parameter": TokenType.PARAMETER_NAME,
    "catch_formal_parameter": TokenType.PARAMETER_NAME,
    "lambda_expression": TokenType.PARAMETER_NAME,
}

DECLARATION_KINDS = {
    "class_declaration": DeclarationKind.TYPE,
    "record_declaration": DeclarationKind.TYPE,
    "interface_declaration": DeclarationKind.TYPE,
    "annotation_type_declaration": DeclarationKind.TYPE,
    "enum_declaration": DeclarationKind.TYPE,
    "constructor_declaration": DeclarationKind.CONSTRUCTOR,
    "compact_constructor_declaration": DeclarationKind.CONSTRUCTOR,
    "method_declaration": DeclarationKind.METHOD,
    "annotation_type_element_declaration": DeclarationKind.ANNOTATION_ELEMENT,
    "field_declaration": DeclarationKind.FIELD,
    "constant_declaration": DeclarationKind.FIELD,
    "enum_constant": DeclarationKind.ENUM_CONSTANT,
}

# Interface constants and enum constants are implicitly static final
IMPLICIT_MODIFIERS = {
    "constant_declaration": OtherModifier.STATIC | OtherModifier.FINAL,
    "enum_constant": OtherModifier.STATIC | OtherModifier.FINAL,
}

# Parents under which "<", ">", "?", "&", "|", ":" are type, case or label syntax
TYPE_SYNTAX_PARENTS = frozenset(
    {
        "type_arguments",
        "type_parameters",
        "type_bound",
        "wildcard",
        "cast_expression",
        "catch_type",
        "switch_label",
        "switch_block_statement_group",
        "labeled_statement",
    }
)

_NAME_NODE_TYPES = ("identifier", "type_identifier")


@dataclass
class PendingDeclaration:
    """Attributes collected for one declaration node until it exits."""

    node_type: str
    role: TokenType
    names: list[CodeToken] = field(default_factory=list)
    access_modifiers: AccessModifier = AccessModifier.NONE
    other_modifiers: OtherModifier = OtherModifier.NONE
    annotations: list[str] = field(default_factory=list)

    def classification(self) -> Classification:
        implicit = IMPLICIT_MODIFIERS.get(self.node_type, OtherModifier.NONE)
        return Classification(
            token_type=self.role,
            access_modifiers=self.access_modifiers,
            other_modifiers=self.other_modifiers | implicit,
            annotations=tuple(self.annotations),
        )


class SyntaxScopeBuilder:
    """Builds the SyntaxModel of one file and finalizes its code tokens."""

    def __init__(self, index: TokenIndex, code: bytes) -> None:
        self._index = index
        self._code = code
        self._file_scope = Scope(
            kind="file",
            parent=None,
            first_line=1,
            last_line=max(index.num_lines(), 1),
            start_byte=0,
            end_byte=len(code),
        )
        self._scopes: list[Scope] = [self._file_scope]
        self._scope_stack: list[Scope] = [self._file_scope]
        self._declaration_stack: list[tuple[int, Declaration]] = []
        self._declarations: dict[int, Declaration] = {}
        self._pending: dict[int, PendingDeclaration] = {}
        self._name_owners: dict[int, int] = {}
        self._assigned: dict[Token, Classification] = {}
        self._demoted: set[Token] = set()
        self._contexts: dict[Token, SyntaxContext] = {}
        self._built = False

    def build(self, root: Node) -> SyntaxModel:
        """Walk the tree once and return the finished model.

        Raises:
            InvariantViolation: If called twice, if scopes do not balance, or
                if a leaf has no token in the index
        """
        if self._built:
            raise InvariantViolation("Syntax model already built", ErrorCode.JS202)
        self._built = True

        if self._index.count():
            self._assign_whitespace_from(None, SyntaxContext(scope=self._file_scope))

        for event, node in walk(root):
            if event is WalkEvent.ENTER:
                self._enter(node)
            else:
                self._exit(node)

        if len(self._scope_stack) != 1 or self._pending:
            raise InvariantViolation(
                "Scopes or declarations left open after the walk",
                ErrorCode.JS203,
                context={"open_scopes": len(self._scope_stack) - 1, "pending": len(self._pending)},
            )

        self._finalize_tokens()
        logger.debug(
            f"Syntax model: {len(self._scopes)} scopes, {len(self._declarations)} declarations"
        )
        return SyntaxModel(
            index=self._index,
            file_scope=self._file_scope,
            scopes=self._scopes,
            declarations=self._declarations,
            contexts=self._contexts,
        )

    # -- walk events ---------------------------------------------------

    def _enter(self, node: Node) -> None:
        if opens_scope(node):
            self._open_scope(node)

        if node.type in NAME_ROLES:
            self._open_declaration(node)

        parent = node.parent
        if parent is not None and parent.type == "modifiers":
            self._buffer_modifier(node, parent)

        if is_leaf(node) and node.parent is not None and node.end_byte > node.start_byte:
            self._visit_leaf(node)

    def _exit(self, node: Node) -> None:
        pending = self._pending.pop(node.id, None)
        if pending is not None:
            classification = pending.classification()
            for token in pending.names:
                self._assigned[token] = classification
        if self._declaration_stack and self._declaration_stack[-1][0] == node.id:
            self._declaration_stack.pop()

        if opens_scope(node):
            scope = self._scope_stack.pop()
            if scope.start_byte != node.start_byte or scope.end_byte != node.end_byte:
                raise InvariantViolation(
                    "Scope closed out of order",
                    ErrorCode.JS203,
                    context={"scope": repr(scope), "node": node.type},
                )

    def _open_scope(self, node: Node) -> None:
        scope = Scope(
            kind=node.type,
            parent=self._scope_stack[-1],
            first_line=node.start_point[0] + 1,
            last_line=node.end_point[0] + 1,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            declaration=self._current_declaration(),
        )
        self._scopes.append(scope)
        self._scope_stack.append(scope)

    def _open_declaration(self, node: Node) -> None:
        role = NAME_ROLES[node.type]
        if node.type == "local_variable_declaration":
            parent = node.parent
            if parent is not None and parent.type == "for_statement":
                role = TokenType.FOR_VARIABLE_NAME

        name_nodes = declared_name_nodes(node)
        if name_nodes:
            self._pending[node.id] = PendingDeclaration(node_type=node.type, role=role)
            for name_node in name_nodes:
                self._name_owners[name_node.id] = node.id

        kind = DECLARATION_KINDS.get(node.type)
        if kind is not None:
            declaration = self._make_declaration(node, kind, name_nodes)
            self._declarations.setdefault(declaration.start_byte, declaration)
            self._declaration_stack.append((node.id, declaration))

    def _buffer_modifier(self, node: Node, modifiers: Node) -> None:
        owner = modifiers.parent
        if owner is None:
            return
        pending = self._pending.get(owner.id)
        if pending is None:
            return
        if node.type in ACCESS_MODIFIER_KEYWORDS:
            pending.access_modifiers |= ACCESS_MODIFIER_KEYWORDS[node.type]
        elif node.type in OTHER_MODIFIER_KEYWORDS:
            pending.other_modifiers |= OTHER_MODIFIER_KEYWORDS[node.type]
        elif node.type in ("annotation", "marker_annotation"):
            name = node.child_by_field_name("name")
            if name is not None:
                pending.annotations.append(self._text(name))

    def _visit_leaf(self, node: Node) -> None:
        token = self._index.by_offset(node.start_byte)
        if token is None or token.end_byte != node.end_byte:
            raise InvariantViolation(
                "Tree leaf has no matching token",
                ErrorCode.JS204,
                context={"type": node.type, "line": node.start_point[0] + 1},
            )

        scope = self._scope_stack[-1]
        context = SyntaxContext(scope=scope, declaration=self._current_declaration())
        self._contexts[token] = context

        if token.is_code:
            token = cast(CodeToken, token)
            owner = self._name_owners.pop(node.id, None)
            if owner is not None:
                self._pending[owner].names.append(token)
            elif (
                token.coarse.token_type is TokenType.OPERATOR_LOW_PRECEDENCE
                and node.parent is not None
                and node.parent.type in TYPE_SYNTAX_PARENTS
            ):
                self._demoted.add(token)

        # Whitespace after a closing brace belongs to the enclosing scope
        if node.type == "}" and scope.parent is not None and node.end_byte == scope.end_byte:
            context = SyntaxContext(scope=scope.parent, declaration=scope.parent.declaration)
        self._assign_whitespace_from(token, context)

    def _assign_whitespace_from(self, token: Optional[Token], context: SyntaxContext) -> None:
        following = self._index.at(0) if token is None else self._index.next(token)
        while following is not None and following.is_whitespace:
            self._contexts[following] = context
            following = self._index.next(following)

    # -- declarations --------------------------------------------------

    def _current_declaration(self) -> Optional[Declaration]:
        return self._declaration_stack[-1][1] if self._declaration_stack else None

    def _make_declaration(
        self, node: Node, kind: DeclarationKind, name_nodes: list[Node]
    ) -> Declaration:
        name = self._text(name_nodes[0]) if name_nodes else ""

        parameters: tuple[str, ...] = ()
        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            parameters = tuple(
                self._text(name_node)
                for child in params_node.children
                if child.type in ("formal_parameter", "spread_parameter")
                for name_node in declared_name_nodes(child)
            )

        type_parameters: tuple[str, ...] = ()
        type_params_node = node.child_by_field_name("type_parameters")
        if type_params_node is not None:
            type_parameters = tuple(
                self._text(ident)
                for child in type_params_node.children
                if child.type == "type_parameter"
                for ident in child.children
                if ident.type in _NAME_NODE_TYPES
            )

        returns_value = False
        if kind in (DeclarationKind.METHOD, DeclarationKind.ANNOTATION_ELEMENT):
            return_type = node.child_by_field_name("type")
            returns_value = return_type is not None and return_type.type != "void_type"

        thrown_types = tuple(
            self._text(exception)
            for clause in node.children
            if clause.type == "throws"
            for exception in clause.children
            if exception.is_named and exception.type not in ("line_comment", "block_comment")
        )

        return Declaration(
            kind=kind,
            name=name,
            node_type=node.type,
            line=node.start_point[0] + 1,
            start_byte=node.start_byte,
            parameters=parameters,
            type_parameters=type_parameters,
            returns_value=returns_value,
            thrown_types=thrown_types,
        )

    # -- finalization --------------------------------------------------

    def _finalize_tokens(self) -> None:
        for token in self._index:
            if token not in self._contexts:
                raise InvariantViolation(
                    f"{token!r} was not reached by the syntax walk", ErrorCode.JS204
                )
            if not token.is_code:
                continue
            token = cast(CodeToken, token)
            classification = self._assigned.get(token)
            if classification is None:
                coarse = token.coarse.token_type
                if coarse is TokenType.IDENTIFIER_UNCLASSIFIED:
                    coarse = TokenType.IDENTIFIER_REFERENCE
                elif token in self._demoted:
                    coarse = TokenType.OTHERS
                classification = Classification(token_type=coarse)
            token.finalize_classification(classification)

    def _text(self, node: Node) -> str:
        return self._code[node.start_byte : node.end_byte].decode("utf-8")


def opens_scope(node: Node) -> bool:
    """True for nodes delimited by their own curly braces."""
    if node.child_count < 2:
        return False
    children = node.children
    return children[0].type == "{" and children[-1].type == "}"


def declared_name_nodes(node: Node) -> list[Node]:
    """Identifier nodes a declaration node introduces, in source order."""
    if node.type in ("field_declaration", "constant_declaration", "local_variable_declaration"):
        names = [
            declarator.child_by_field_name("name")
            for declarator in node.children_by_field_name("declarator")
        ]
    elif node.type == "spread_parameter":
        names = [
            child.child_by_field_name("name")
            for child in node.children
            if child.type == "variable_declarator"
        ]
    elif node.type == "lambda_expression":
        params = node.child_by_field_name("parameters")
        if params is None:
            names = []
        elif params.type == "identifier":
            names = [params]
        elif params.type == "inferred_parameters":
            names = [child for child in params.children if child.type == "identifier"]
        else:
            # formal_parameters: each formal_parameter declares its own name
            names = []
    else:
        names = [node.child_by_field_name("name")]
    return [name for name in names if name is not None and name.type in _NAME_NODE_TYPES]
