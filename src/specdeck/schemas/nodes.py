"""Markdown document tree models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NodeKind(str, Enum):
    """Closed set of node kinds produced by the parser."""

    ROOT = "root"
    FRONT_MATTER = "frontMatter"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_CELL = "tableCell"
    TEXT = "text"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    OTHER_BLOCK = "otherBlock"


# Kinds carrying a string payload and never any children.
LEAF_KINDS = frozenset({NodeKind.TEXT, NodeKind.OTHER_BLOCK, NodeKind.FRONT_MATTER})

# Kinds whose children are inline nodes.
INLINE_CONTAINER_KINDS = frozenset(
    {
        NodeKind.HEADING,
        NodeKind.PARAGRAPH,
        NodeKind.TABLE_CELL,
        NodeKind.EMPHASIS,
        NodeKind.STRONG,
    }
)

INLINE_KINDS = frozenset({NodeKind.TEXT, NodeKind.EMPHASIS, NodeKind.STRONG})

_ALLOWED_CHILDREN: dict[NodeKind, frozenset[NodeKind]] = {
    NodeKind.ROOT: frozenset(
        {
            NodeKind.FRONT_MATTER,
            NodeKind.HEADING,
            NodeKind.PARAGRAPH,
            NodeKind.TABLE,
            NodeKind.OTHER_BLOCK,
        }
    ),
    NodeKind.TABLE: frozenset({NodeKind.TABLE_ROW}),
    NodeKind.TABLE_ROW: frozenset({NodeKind.TABLE_CELL}),
    **{kind: INLINE_KINDS for kind in INLINE_CONTAINER_KINDS},
    **{kind: frozenset() for kind in LEAF_KINDS},
}


class Node(BaseModel):
    """A single immutable node of a parsed markdown document.

    Attributes:
        kind: The node's tag.
        children: Owned child nodes in document order.
        value: Text payload of ``text`` and ``otherBlock`` nodes.
        raw_value: Undecoded payload of a ``frontMatter`` node.
        depth: Heading level of a ``heading`` node (1-6).
    """

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    children: tuple["Node", ...] = ()
    value: str | None = None
    raw_value: str | None = None
    depth: int | None = Field(default=None, ge=1, le=6)

    @model_validator(mode="after")
    def check_kind_attributes(self) -> "Node":
        """Reject attribute sets that do not belong to the node's kind."""
        if (self.value is not None) != (self.kind in {NodeKind.TEXT, NodeKind.OTHER_BLOCK}):
            raise ValueError(f"{self.kind.value} node has an invalid 'value' attribute")
        if (self.raw_value is not None) != (self.kind is NodeKind.FRONT_MATTER):
            raise ValueError(f"{self.kind.value} node has an invalid 'raw_value' attribute")
        if (self.depth is not None) != (self.kind is NodeKind.HEADING):
            raise ValueError(f"{self.kind.value} node has an invalid 'depth' attribute")

        allowed = _ALLOWED_CHILDREN[self.kind]
        for child in self.children:
            if child.kind not in allowed:
                raise ValueError(f"{child.kind.value} node cannot be a child of {self.kind.value}")
        return self
