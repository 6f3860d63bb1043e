"""Heading outline extraction."""

from __future__ import annotations

from specdeck.inline import flatten_text
from specdeck.schemas.nodes import Node, NodeKind
from specdeck.schemas.outline import HeadingEntry
from specdeck.traversal import collect_nodes, is_kind


def extract_headings(root: Node) -> list[HeadingEntry]:
    """Return every heading in the tree as ``(depth, text)`` in document order."""
    return [
        HeadingEntry(depth=heading.depth, text=flatten_text(heading))
        for heading in collect_nodes(root, is_kind(NodeKind.HEADING))
    ]
