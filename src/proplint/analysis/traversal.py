"""Tree traversal.

Iterative pre-order walk with enter/leave callbacks, plus a bounded
subtree search. Both avoid Python recursion so deeply nested JSX does not
hit the interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Protocol

from proplint.analysis.nodes import Node


class Visitor(Protocol):
    def enter(self, node: Node) -> None: ...

    def leave(self, node: Node) -> None: ...


def walk(root: Node, visitor: Visitor) -> None:
    """Visit every named node under ``root`` in source order.

    ``leave`` fires after all descendants of a node have been entered and
    left, so ``leave(root)`` is always the final callback.
    """
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, exiting = stack.pop()
        if exiting:
            visitor.leave(node)
            continue
        visitor.enter(node)
        stack.append((node, True))
        children = node.named_children
        for child in reversed(children):
            stack.append((child, False))


def iter_subtree(
    root: Node,
    predicate: Callable[[Node], bool],
    *,
    descend_into_matches: bool = False,
) -> Iterator[Node]:
    """Yield descendants of ``root`` (excluding root) matching ``predicate``."""
    stack = list(reversed(root.named_children))
    while stack:
        node = stack.pop()
        if predicate(node):
            yield node
            if not descend_into_matches:
                continue
        stack.extend(reversed(node.named_children))
