"""Pydantic models for the API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from server.server_config import MAX_OUTLINE_CHARS
from specdeck.schemas import HeadingEntry


class ErrorDetail(BaseModel):
    """Machine readable error code with a human readable message."""

    code: str = Field(..., description="Error code, e.g. NOT_FOUND")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Envelope for failed requests."""

    success: bool = False
    error: ErrorDetail


class SuccessResponse(BaseModel):
    """Envelope for successful requests.

    Attributes
    ----------
    success : bool
        Always True.
    data : Any
        The requested resource(s).
    meta : dict[str, Any] | None
        Extra information such as result counts.

    """

    success: bool = True
    data: Any
    meta: dict[str, Any] | None = None


class OutlineRequest(BaseModel):
    """Request model for the /api/outline endpoint."""

    content: str = Field(..., description="Markdown document to analyse")
    section: str | None = Field(default=None, description="Heading whose section should be returned")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Reject documents larger than the configured ceiling."""
        if len(v) > MAX_OUTLINE_CHARS:
            err = f"content exceeds {MAX_OUTLINE_CHARS} characters"
            raise ValueError(err)
        return v


class OutlineResult(BaseModel):
    """Structure recovered from a markdown document."""

    front_matter: dict[str, Any] | None = None
    headings: list[HeadingEntry] = Field(default_factory=list)
    tables: list[list[dict[str, str]]] = Field(default_factory=list)
    section: str | None = Field(default=None, description="Flattened text of the requested section")
