"""Parse inline markdown into nodes and flatten nodes back to plain text."""

from __future__ import annotations

import string
import unicodedata
from dataclasses import dataclass

from specdeck.schemas.nodes import Node, NodeKind

_ESCAPABLE = frozenset(string.punctuation)
_EMPHASIS_CHARS = "*_"


@dataclass
class _Delimiter:
    """A run of ``*`` or ``_`` characters awaiting a partner.

    ``count`` is what is left unmatched; ``length`` is the original run size.
    """

    char: str
    count: int
    can_open: bool
    can_close: bool
    length: int


def parse_inline(text: str) -> tuple[Node, ...]:
    """Parse inline markdown into ``text``, ``emphasis`` and ``strong`` nodes.

    Unmatched delimiters stay in the output as literal text, so every input
    string parses.
    """
    return _to_nodes(_resolve_emphasis(_tokenize(text)))


def flatten_text(node: Node) -> str:
    """Return the plain text of a node with all inline markup stripped."""
    kind = node.kind
    if kind is NodeKind.TEXT or kind is NodeKind.OTHER_BLOCK:
        return node.value or ""
    if kind is NodeKind.FRONT_MATTER:
        return ""
    if kind in {
        NodeKind.ROOT,
        NodeKind.HEADING,
        NodeKind.PARAGRAPH,
        NodeKind.TABLE,
        NodeKind.TABLE_ROW,
        NodeKind.TABLE_CELL,
        NodeKind.EMPHASIS,
        NodeKind.STRONG,
    }:
        return "".join(flatten_text(child) for child in node.children)
    raise TypeError(f"Unhandled node kind: {kind!r}")


def _tokenize(text: str) -> list[str | Node | _Delimiter]:
    items: list[str | Node | _Delimiter] = []
    buffer: list[str] = []
    length = len(text)
    i = 0

    def flush() -> None:
        if buffer:
            items.append("".join(buffer))
            buffer.clear()

    while i < length:
        char = text[i]

        if char == "\\" and i + 1 < length and text[i + 1] in _ESCAPABLE:
            buffer.append(text[i + 1])
            i += 2
            continue

        if char == "`":
            run_end = _run_end(text, i, "`")
            run = run_end - i
            close = _find_code_span_close(text, run_end, run)
            if close is None:
                buffer.append(text[i:run_end])
                i = run_end
                continue
            buffer.append(_strip_code_span(text[run_end:close]))
            i = close + run
            continue

        if char in _EMPHASIS_CHARS:
            run_end = _run_end(text, i, char)
            before = text[i - 1] if i > 0 else " "
            after = text[run_end] if run_end < length else " "
            flush()
            items.append(_make_delimiter(char, run_end - i, before, after))
            i = run_end
            continue

        buffer.append(char)
        i += 1

    flush()
    return items


def _run_end(text: str, start: int, char: str) -> int:
    end = start
    while end < len(text) and text[end] == char:
        end += 1
    return end


def _find_code_span_close(text: str, start: int, run: int) -> int | None:
    """Find a backtick run of exactly ``run`` characters at or after ``start``."""
    position = start
    while True:
        found = text.find("`" * run, position)
        if found == -1:
            return None
        end = _run_end(text, found, "`")
        if end - found == run:
            return found
        position = end


def _strip_code_span(content: str) -> str:
    content = content.replace("\n", " ")
    if len(content) >= 2 and content[0] == " " and content[-1] == " " and content.strip():
        return content[1:-1]
    return content


def _is_punctuation(char: str) -> bool:
    return char in _ESCAPABLE or unicodedata.category(char).startswith("P")


def _make_delimiter(char: str, count: int, before: str, after: str) -> _Delimiter:
    left_flanking = not after.isspace() and (
        not _is_punctuation(after) or before.isspace() or _is_punctuation(before)
    )
    right_flanking = not before.isspace() and (
        not _is_punctuation(before) or after.isspace() or _is_punctuation(after)
    )
    if char == "*":
        return _Delimiter(char, count, left_flanking, right_flanking, count)
    # Underscores inside words (snake_case) never delimit.
    can_open = left_flanking and (not right_flanking or _is_punctuation(before))
    can_close = right_flanking and (not left_flanking or _is_punctuation(after))
    return _Delimiter(char, count, can_open, can_close, count)


def _resolve_emphasis(items: list[str | Node | _Delimiter]) -> list[str | Node | _Delimiter]:
    """Pair delimiter runs into emphasis/strong nodes.

    Potential openers wait on a stack. ``openers_bottom`` remembers, per
    kind of closer, how much of the stack a failed search already ruled out,
    so no part of the stack is searched twice for the same kind of closer.
    """
    output: list[str | Node | _Delimiter] = []
    openers: list[int] = []
    openers_bottom: dict[tuple[str, bool, int], int] = {}

    for item in items:
        if isinstance(item, _Delimiter):
            if item.can_close:
                _close_emphasis(item, output, openers, openers_bottom)
            output.append(item)
            if item.can_open and item.count:
                openers.append(len(output) - 1)
        else:
            output.append(item)
    return output


def _close_emphasis(
    closer: _Delimiter,
    output: list[str | Node | _Delimiter],
    openers: list[int],
    openers_bottom: dict[tuple[str, bool, int], int],
) -> None:
    key = (closer.char, closer.can_open, closer.length % 3)
    while closer.count:
        bottom = openers_bottom.get(key, 0)
        position = len(openers) - 1
        while position >= bottom and not _can_pair(output[openers[position]], closer):
            position -= 1
        if position < bottom:
            openers_bottom[key] = len(openers)
            return

        opener_index = openers[position]
        opener = output[opener_index]
        assert isinstance(opener, _Delimiter)
        used = 2 if opener.count >= 2 and closer.count >= 2 else 1
        kind = NodeKind.STRONG if used == 2 else NodeKind.EMPHASIS
        node = Node(kind=kind, children=_to_nodes(output[opener_index + 1 :]))
        del output[opener_index + 1 :]
        output.append(node)
        opener.count -= used
        closer.count -= used

        # Openers inside the new node are spent, as is an exhausted opener.
        del openers[position if opener.count == 0 else position + 1 :]
        for other in openers_bottom:
            openers_bottom[other] = min(openers_bottom[other], len(openers))


def _can_pair(opener: _Delimiter, closer: _Delimiter) -> bool:
    if opener.char != closer.char:
        return False
    # A run that can both open and close only pairs with a run whose combined
    # length is not a multiple of 3, unless both lengths are.
    if (opener.can_close or closer.can_open) and (opener.length + closer.length) % 3 == 0:
        return opener.length % 3 == 0 and closer.length % 3 == 0
    return True


def _to_nodes(items: list[str | Node | _Delimiter]) -> tuple[Node, ...]:
    nodes: list[Node] = []
    pending: list[str] = []

    for item in items:
        if isinstance(item, Node):
            text = "".join(pending)
            if text:
                nodes.append(Node(kind=NodeKind.TEXT, value=text))
            pending.clear()
            nodes.append(item)
        elif isinstance(item, _Delimiter):
            pending.append(item.char * item.count)
        else:
            pending.append(item)

    text = "".join(pending)
    if text:
        nodes.append(Node(kind=NodeKind.TEXT, value=text))
    return tuple(nodes)
