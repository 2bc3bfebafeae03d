"""Document-order enter/exit walk over a tree-sitter tree.

Comments and literal nodes whose text is a single lexical unit (string and
character literals, text blocks) are treated as leaves: the walk never
descends into them. The lexer and the syntax scope builder both rely on
this, so that a tree leaf and a code token are always the same thing.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .treesitter_parser import Node

ATOMIC_NODE_TYPES = frozenset(
    {
        "string_literal",
        "character_literal",
        "text_block",
        "line_comment",
        "block_comment",
    }
)


class WalkEvent(Enum):
    ENTER = "enter"
    EXIT = "exit"


def is_leaf(node: Node) -> bool:
    return node.child_count == 0 or node.type in ATOMIC_NODE_TYPES


def walk(root: Node) -> Iterator[tuple[WalkEvent, Node]]:
    """Yield (ENTER, node) and (EXIT, node) events in document order.

    Every node is entered exactly once and exited exactly once, children
    strictly between their parent's enter and exit events.
    """
    cursor = root.walk()
    while True:
        node = cursor.node
        yield WalkEvent.ENTER, node
        if not is_leaf(node) and cursor.goto_first_child():
            continue
        yield WalkEvent.EXIT, node
        while not cursor.goto_next_sibling():
            if not cursor.goto_parent():
                return
            yield WalkEvent.EXIT, cursor.node


def iter_leaves(root: Node) -> Iterator[Node]:
    """Yield the non-empty leaves of the tree in document order.

    A root without children (an empty file) is not a leaf.
    """
    for event, node in walk(root):
        if event is not WalkEvent.ENTER or not is_leaf(node) or node.parent is None:
            continue
        if node.end_byte > node.start_byte:
            yield node
