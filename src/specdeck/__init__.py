"""specdeck: parse planning documents written in markdown."""

from specdeck.exceptions import (
    DocumentNotFoundError,
    FrontMatterDecodeError,
    InvalidIdentifierError,
    MissingFrontMatterError,
    OverlayError,
    ParseError,
    SpecdeckError,
)
from specdeck.front_matter import extract_front_matter
from specdeck.headings import extract_headings
from specdeck.inline import flatten_text
from specdeck.parser import parse_markdown
from specdeck.schemas import HeadingEntry, Node, NodeKind
from specdeck.sections import find_section
from specdeck.tables import extract_tables, table_to_grid, table_to_records

__all__ = [
    "DocumentNotFoundError",
    "FrontMatterDecodeError",
    "HeadingEntry",
    "InvalidIdentifierError",
    "MissingFrontMatterError",
    "Node",
    "NodeKind",
    "OverlayError",
    "ParseError",
    "SpecdeckError",
    "extract_front_matter",
    "extract_headings",
    "extract_tables",
    "find_section",
    "flatten_text",
    "parse_markdown",
    "table_to_grid",
    "table_to_records",
]
