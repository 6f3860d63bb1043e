"""Heading outline models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HeadingEntry(BaseModel):
    """A heading's level and flattened text."""

    model_config = ConfigDict(frozen=True)

    depth: int = Field(..., ge=1, le=6)
    text: str
