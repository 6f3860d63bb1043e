"""Heading-delimited section lookup."""

from __future__ import annotations

from enum import Enum

from specdeck.inline import flatten_text
from specdeck.schemas.nodes import Node, NodeKind


class ScanState(str, Enum):
    """States of the section scanner."""

    SCANNING = "scanning"
    CAPTURING = "capturing"


def is_section_boundary(node: Node, target_depth: int) -> bool:
    """Return True if ``node`` closes a section opened at ``target_depth``."""
    return node.kind is NodeKind.HEADING and node.depth is not None and node.depth <= target_depth


def find_section(root: Node, heading_text: str) -> list[Node]:
    """Return the top-level nodes owned by the first heading titled ``heading_text``.

    The section runs from just after the matching heading up to, but not
    including, the next heading of the same or a shallower depth. Only the
    root's direct children are scanned, and the title must match the
    heading's flattened text exactly.

    Returns:
        The section's nodes, or an empty list if no heading matches.
    """
    state = ScanState.SCANNING
    target_depth = 0
    section: list[Node] = []

    for node in root.children:
        if state is ScanState.SCANNING:
            if node.kind is NodeKind.HEADING and flatten_text(node) == heading_text:
                state = ScanState.CAPTURING
                target_depth = node.depth or 0
            continue

        if is_section_boundary(node, target_depth):
            break
        section.append(node)

    return section
