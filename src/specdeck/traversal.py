"""Generic depth-first traversal over document trees."""

from __future__ import annotations

from typing import Callable, Iterator

from specdeck.schemas.nodes import Node, NodeKind


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order (pre-order)."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def collect_nodes(node: Node, predicate: Callable[[Node], bool]) -> list[Node]:
    """Return every node in the tree under ``node`` that satisfies ``predicate``."""
    return [candidate for candidate in iter_nodes(node) if predicate(candidate)]


def is_kind(kind: NodeKind) -> Callable[[Node], bool]:
    """Build a predicate matching nodes of a single kind."""

    def _matches(node: Node) -> bool:
        return node.kind is kind

    return _matches
