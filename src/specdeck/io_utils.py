"""File helpers for reading and writing markdown documents."""

from __future__ import annotations

import asyncio
from pathlib import Path

from specdeck.config import SPECDECK_MAX_DOCUMENT_BYTES
from specdeck.exceptions import ParseError


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and bare ``\\r`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def check_document_size(path: Path, max_bytes: int = SPECDECK_MAX_DOCUMENT_BYTES) -> None:
    """Reject documents larger than ``max_bytes``.

    Args:
        path: Path to the document.
        max_bytes: Size ceiling in bytes. If <= 0, any size is accepted.

    Raises:
        ParseError: If the file exceeds the ceiling.
    """
    if max_bytes <= 0:
        return
    size = path.stat().st_size
    if size > max_bytes:
        raise ParseError(f"{path} is {size} bytes, larger than the {max_bytes} byte limit")


def list_markdown_files(directory: Path) -> list[Path]:
    """Return the ``*.md`` files directly inside ``directory``, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(path for path in directory.glob("*.md") if path.is_file())


async def read_document_async(
    path: Path,
    encoding: str = "utf-8",
    max_bytes: int = SPECDECK_MAX_DOCUMENT_BYTES,
) -> str:
    """Read a markdown document with size checking and newline normalisation.

    Args:
        path: Path to the document.
        encoding: Text encoding to use.
        max_bytes: Size ceiling passed to ``check_document_size``.

    Returns:
        The document text with ``\\n`` line endings.

    Raises:
        ParseError: If the document is too large or not valid ``encoding``.
    """
    check_document_size(path, max_bytes)
    try:
        text = await asyncio.to_thread(path.read_text, encoding=encoding)
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path} is not valid {encoding}: {exc}") from exc
    return normalize_newlines(text)


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file asynchronously using a thread pool.

    Args:
        path: Path to the file to write.
        content: Text content to write.
        encoding: Text encoding to use.
    """
    await asyncio.to_thread(path.write_text, content, encoding=encoding)


async def mkdir_async(
    path: Path, parents: bool = False, exist_ok: bool = False
) -> None:
    """Create a directory asynchronously using a thread pool.

    Args:
        path: Path to the directory to create.
        parents: If True, create parent directories as needed.
        exist_ok: If True, don't raise an error if directory exists.
    """
    await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)
