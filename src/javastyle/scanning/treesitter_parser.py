"""Tree-sitter parser wrapper for Java.

Wraps the tree-sitter runtime and the tree-sitter-java grammar behind a
small interface. Parsing is strict: tree-sitter recovers from syntax errors
by inserting ERROR and MISSING nodes, and any such node turns into a
ParsingError here so that no partial verdict is ever produced.

Usage:
    parser = JavaParser()
    tree = parser.parse(code_bytes)
    root = tree.root_node
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import tree_sitter
import tree_sitter_java

from ..exceptions import ParsingError
from ..logging_config import get_logger

if TYPE_CHECKING:
    # Structural view of the tree-sitter objects used by javastyle
    class Node:
        type: str
        is_named: bool
        is_missing: bool
        has_error: bool
        id: int
        start_byte: int
        end_byte: int
        start_point: tuple[int, int]
        end_point: tuple[int, int]
        children: list[Node]
        child_count: int
        parent: Node | None

        def child_by_field_name(self, name: str) -> Node | None: ...

        def children_by_field_name(self, name: str) -> list[Node]: ...

    class Tree:
        root_node: Node

logger = get_logger(__name__)


class JavaParser:
    """tree-sitter parser bound to the Java grammar."""

    def __init__(self) -> None:
        # tree-sitter >= 0.23 grammars return a PyCapsule; wrap in Language()
        self._language: Any = tree_sitter.Language(tree_sitter_java.language())
        self._parser: Any = tree_sitter.Parser(self._language)

    def parse(self, code: bytes, filepath: Optional[Path] = None) -> Tree:
        """Parse Java source into a syntax tree.

        Args:
            code: Source code as UTF-8 bytes
            filepath: Used for error reporting only

        Returns:
            Tree object whose root node is a ``program``

        Raises:
            ParsingError: If the source contains lexical or syntax errors
        """
        tree: Tree = self._parser.parse(code)
        error_node = find_first_error(tree.root_node)
        if error_node is not None:
            line = error_node.start_point[0] + 1
            column = error_node.start_point[1] + 1
            reason = describe_error(error_node, code)
            logger.debug(f"Syntax error at {line}:{column}: {reason}")
            raise ParsingError(reason, filepath=filepath, line=line, column=column)
        return tree


def find_first_error(root: Node) -> Node | None:
    """Return the first ERROR or MISSING node in document order, if any."""
    if not root.has_error and not root.is_missing:
        return None

    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        # Push in reverse so the leftmost child is examined first
        for child in reversed(node.children):
            if child.has_error or child.is_missing:
                stack.append(child)
    return root


def describe_error(node: Node, code: bytes) -> str:
    """Human-readable description of an ERROR or MISSING node."""
    if node.is_missing:
        return f"missing '{node.type}'"
    snippet = code[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    snippet = snippet.strip().splitlines()[0] if snippet.strip() else ""
    if len(snippet) > 40:
        snippet = snippet[:37] + "..."
    if not snippet:
        return "unexpected end of input"
    return f"unexpected '{snippet}'"
