"""Read and edit overlay documents (per-repository Jira mappings and notes)."""

from __future__ import annotations

import logging
import re

from specdeck.exceptions import FrontMatterDecodeError
from specdeck.front_matter import extract_front_matter
from specdeck.inline import flatten_text
from specdeck.parser import (
    is_heading_line,
    is_table_row,
    is_table_start,
    parse_markdown,
    split_table_cells,
)
from specdeck.schemas import Node, NodeKind, OverlayData
from specdeck.sections import find_section
from specdeck.tables import table_to_grid
from specdeck.traversal import iter_nodes

logger = logging.getLogger(__name__)

JIRA_MAPPINGS_HEADING = "Jira Mappings"
NOTES_HEADING = "Notes"

_OVERLAY_TITLE_RE = re.compile(r"Overlay:\s*([A-Z0-9-]+)")
# Legacy list format: "- **STORY-ID**: JIRA-123" (flattened, markers stripped).
_LEGACY_MAPPING_RE = re.compile(r"^-\s*([A-Z0-9-]+):\s*([A-Z]+-\d+)")


def parse_overlay(content: str) -> OverlayData:
    """Extract the feature ID, Jira mappings and notes from an overlay document.

    The feature ID comes from the ``feature`` front matter key, falling back
    to a ``# Overlay: <ID>`` title. Jira mappings are read, in document order,
    from every two-column ``Story ID | Jira Ticket`` table and from legacy
    ``- **STORY-ID**: JIRA-123`` lines. Notes come from a
    ``Story ID | Note`` table under the ``Notes`` heading.
    """
    root = parse_markdown(content)
    feature_id = _feature_id_from_front_matter(root) or _feature_id_from_title(root)

    jira_mappings: dict[str, str] = {}
    for node in iter_nodes(root):
        if node.kind is NodeKind.TABLE and _has_header(table_to_grid(node), "story", "jira"):
            jira_mappings.update(_pairs_from_table(node))
        elif node.kind is NodeKind.PARAGRAPH:
            for line in flatten_text(node).split("\n"):
                match = _LEGACY_MAPPING_RE.match(line.strip())
                if match:
                    jira_mappings[match.group(1)] = match.group(2)

    notes: dict[str, str] = {}
    for node in find_section(root, NOTES_HEADING):
        if node.kind is NodeKind.TABLE and _has_header(table_to_grid(node), "story", "note"):
            notes.update(_pairs_from_table(node))

    return OverlayData(feature_id=feature_id, jira_mappings=jira_mappings, notes=notes)


def create_overlay_markdown(feature_id: str) -> str:
    """Return the scaffold for a new overlay document."""
    return (
        f"---\n"
        f"feature: {feature_id}\n"
        f"---\n"
        f"\n"
        f"# Overlay: {feature_id}\n"
        f"\n"
        f"## {JIRA_MAPPINGS_HEADING}\n"
        f"\n"
        f"| Story ID | Jira Ticket |\n"
        f"|----------|-------------|\n"
        f"\n"
        f"## {NOTES_HEADING}\n"
        f"\n"
        f"| Story ID | Note |\n"
        f"|----------|------|\n"
    )


def add_jira_mapping(content: str, story_id: str, jira_ticket: str) -> str:
    """Add a story -> Jira ticket mapping to an overlay document.

    Appends a row to the first ``Story ID | Jira Ticket`` table. Documents
    in the legacy list format get a new list line in their ``Jira Mappings``
    section instead. Content with neither is returned unchanged.
    """
    lines = content.split("\n")

    for index in range(len(lines)):
        if is_table_start(lines, index) and _has_header(
            [split_table_cells(lines[index])], "story", "jira"
        ):
            end = index + 2
            while end < len(lines) and is_table_row(lines[end]) and not is_heading_line(lines[end]):
                end += 1
            lines.insert(end, f"| {story_id} | {jira_ticket} |")
            return "\n".join(lines)

    for index, line in enumerate(lines):
        if is_heading_line(line) and line.lstrip("# \t").strip() == JIRA_MAPPINGS_HEADING:
            entry = f"- **{story_id}**: {jira_ticket}"
            last_item = None
            position = index + 1
            while position < len(lines) and not is_heading_line(lines[position]):
                if lines[position].lstrip().startswith("- "):
                    last_item = position
                position += 1
            if last_item is None:
                lines[index + 1 : index + 1] = ["", entry]
            else:
                lines.insert(last_item + 1, entry)
            return "\n".join(lines)

    logger.debug("No Jira mapping table or section found; overlay left unchanged")
    return content


def _feature_id_from_front_matter(root: Node) -> str:
    try:
        front_matter = extract_front_matter(root)
    except FrontMatterDecodeError as exc:
        logger.warning("Ignoring invalid overlay front matter: %s", exc.message)
        return ""
    if not front_matter or front_matter.get("feature") is None:
        return ""
    return str(front_matter["feature"]).strip()


def _feature_id_from_title(root: Node) -> str:
    for node in root.children:
        if node.kind is NodeKind.HEADING and node.depth == 1:
            match = _OVERLAY_TITLE_RE.search(flatten_text(node))
            if match:
                return match.group(1)
    return ""


def _has_header(grid: list[list[str]], first: str, second: str) -> bool:
    if not grid:
        return False
    header = [label.strip().lower() for label in grid[0]]
    return len(header) == 2 and first in header[0] and second in header[1]


def _pairs_from_table(table: Node) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for row in table_to_grid(table)[1:]:
        key, value = row[0].strip(), row[1].strip()
        if key and value:
            pairs[key] = value
    return pairs
