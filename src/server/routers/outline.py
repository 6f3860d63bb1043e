"""Analyse a posted markdown document."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from server.models import OutlineRequest, OutlineResult
from server.routers.utils import error_response, success_response
from specdeck import (
    FrontMatterDecodeError,
    extract_front_matter,
    extract_headings,
    extract_tables,
    find_section,
    flatten_text,
    parse_markdown,
    table_to_records,
)
from specdeck.io_utils import normalize_newlines

router = APIRouter()


@router.post("/api/outline")
async def outline(outline_request: OutlineRequest) -> JSONResponse:
    """Return front matter, heading outline and table records of a document.

    When ``section`` is given, the flattened text of that heading's section
    is returned as well (blocks separated by blank lines).
    """
    root = parse_markdown(normalize_newlines(outline_request.content))
    try:
        front_matter = extract_front_matter(root)
    except FrontMatterDecodeError as exc:
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "FRONT_MATTER_INVALID", str(exc))

    section = None
    if outline_request.section is not None:
        nodes = find_section(root, outline_request.section)
        section = "\n\n".join(flatten_text(node) for node in nodes)

    result = OutlineResult(
        front_matter=front_matter,
        headings=extract_headings(root),
        tables=[table_to_records(table) for table in extract_tables(root)],
        section=section,
    )
    return success_response(result.model_dump(mode="json"))
