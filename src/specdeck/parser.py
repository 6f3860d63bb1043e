"""Parse markdown text into a document tree."""

from __future__ import annotations

import re

from specdeck.inline import parse_inline
from specdeck.schemas.nodes import Node, NodeKind

_FRONT_MATTER_FENCE = "---"
_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")
_CODE_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_THEMATIC_BREAK_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")


def parse_markdown(text: str) -> Node:
    """Parse a markdown document into a ``root`` node.

    Recognises a leading YAML front matter block, ATX headings, GFM pipe
    tables and paragraphs. Fenced code blocks and thematic breaks are kept
    verbatim as ``otherBlock`` nodes. Parsing never fails: anything that
    does not form a more specific block ends up in a paragraph.

    Args:
        text: The document with newlines already normalised to ``\\n``.

    Returns:
        The document's root node.
    """
    lines = text.split("\n")
    blocks: list[Node] = []
    cursor = 0

    front_matter_end = _find_front_matter_end(lines)
    if front_matter_end is not None:
        raw_value = "\n".join(lines[1:front_matter_end])
        blocks.append(Node(kind=NodeKind.FRONT_MATTER, raw_value=raw_value))
        cursor = front_matter_end + 1

    while cursor < len(lines):
        line = lines[cursor]

        if not line.strip():
            cursor += 1
            continue

        heading = _parse_heading(line)
        if heading is not None:
            blocks.append(heading)
            cursor += 1
            continue

        if _CODE_FENCE_RE.match(line):
            block, cursor = _parse_code_fence(lines, cursor)
            blocks.append(block)
            continue

        if _THEMATIC_BREAK_RE.match(line):
            blocks.append(Node(kind=NodeKind.OTHER_BLOCK, value=line))
            cursor += 1
            continue

        if is_table_start(lines, cursor):
            table, cursor = _parse_table(lines, cursor)
            blocks.append(table)
            continue

        paragraph, cursor = _parse_paragraph(lines, cursor)
        blocks.append(paragraph)

    return Node(kind=NodeKind.ROOT, children=tuple(blocks))


def _find_front_matter_end(lines: list[str]) -> int | None:
    """Return the index of the closing front matter fence, if any."""
    if not lines or lines[0] != _FRONT_MATTER_FENCE:
        return None
    for index in range(1, len(lines)):
        if lines[index] == _FRONT_MATTER_FENCE:
            return index
    return None


def _parse_heading(line: str) -> Node | None:
    match = _HEADING_RE.match(line)
    if not match:
        return None
    content = _CLOSING_HASHES_RE.sub("", match.group(2) or "").strip()
    return Node(
        kind=NodeKind.HEADING,
        depth=len(match.group(1)),
        children=parse_inline(content),
    )


def _parse_code_fence(lines: list[str], start: int) -> tuple[Node, int]:
    """Consume a fenced code block, up to the end of the document if unclosed."""
    fence = _CODE_FENCE_RE.match(lines[start]).group(1)
    closing_re = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")
    end = start + 1
    while end < len(lines):
        if closing_re.match(lines[end]):
            end += 1
            break
        end += 1
    raw = "\n".join(lines[start:end])
    return Node(kind=NodeKind.OTHER_BLOCK, value=raw), end


def split_table_cells(line: str) -> list[str]:
    """Split a pipe-delimited row into trimmed, unescaped cell strings."""
    content = line.strip()
    if content.startswith("|"):
        content = content[1:]
    if content.endswith("|") and not content.endswith("\\|"):
        content = content[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _UNESCAPED_PIPE_RE.split(content)]


def is_table_row(line: str) -> bool:
    return bool(line.strip()) and _UNESCAPED_PIPE_RE.search(line) is not None


def _is_separator_row(line: str, width: int) -> bool:
    if "|" not in line:
        return False
    cells = split_table_cells(line)
    return len(cells) == width and all(_SEPARATOR_CELL_RE.match(cell) for cell in cells)


def is_table_start(lines: list[str], index: int) -> bool:
    """A table needs a pipe row directly followed by a matching separator row."""
    if index + 1 >= len(lines) or not is_table_row(lines[index]):
        return False
    width = len(split_table_cells(lines[index]))
    return _is_separator_row(lines[index + 1], width)


def _parse_table(lines: list[str], start: int) -> tuple[Node, int]:
    header = split_table_cells(lines[start])
    width = len(header)
    rows = [_build_row(header, width)]

    cursor = start + 2
    while cursor < len(lines):
        line = lines[cursor]
        if not is_table_row(line) or _HEADING_RE.match(line):
            break
        rows.append(_build_row(split_table_cells(line), width))
        cursor += 1

    return Node(kind=NodeKind.TABLE, children=tuple(rows)), cursor


def _build_row(cells: list[str], width: int) -> Node:
    """Build a row padded or truncated to exactly ``width`` cells."""
    cells = cells[:width] + [""] * (width - len(cells))
    return Node(
        kind=NodeKind.TABLE_ROW,
        children=tuple(
            Node(kind=NodeKind.TABLE_CELL, children=parse_inline(cell)) for cell in cells
        ),
    )


def _interrupts_paragraph(lines: list[str], index: int) -> bool:
    line = lines[index]
    return (
        not line.strip()
        or _HEADING_RE.match(line) is not None
        or _CODE_FENCE_RE.match(line) is not None
        or _THEMATIC_BREAK_RE.match(line) is not None
        or is_table_start(lines, index)
    )


def _parse_paragraph(lines: list[str], start: int) -> tuple[Node, int]:
    collected = [lines[start].strip()]
    cursor = start + 1
    while cursor < len(lines) and not _interrupts_paragraph(lines, cursor):
        collected.append(lines[cursor].strip())
        cursor += 1
    return Node(kind=NodeKind.PARAGRAPH, children=parse_inline("\n".join(collected))), cursor


def is_heading_line(line: str) -> bool:
    """Return True if ``line`` is an ATX heading."""
    return _HEADING_RE.match(line) is not None
