"""Table extraction and conversion to row records."""

from __future__ import annotations

from specdeck.inline import flatten_text
from specdeck.schemas.nodes import Node, NodeKind
from specdeck.traversal import collect_nodes, is_kind


def extract_tables(root: Node) -> list[Node]:
    """Return every ``table`` node in the tree in document order."""
    return collect_nodes(root, is_kind(NodeKind.TABLE))


def table_to_grid(table: Node) -> list[list[str]]:
    """Flatten a table into rows of cell text, header row first."""
    return [[flatten_text(cell) for cell in row.children] for row in table.children]


def table_to_records(table: Node) -> list[dict[str, str]]:
    """Convert a table into one mapping per data row, keyed by header labels.

    A table with only a header row has no records. When two columns share a
    header label, the rightmost column's value is kept.
    """
    grid = table_to_grid(table)
    if len(grid) < 2:
        return []

    header = grid[0]
    records: list[dict[str, str]] = []
    for row in grid[1:]:
        record: dict[str, str] = {}
        for index, label in enumerate(header):
            record[label] = row[index] if index < len(row) else ""
        records.append(record)
    return records
