"""Feature entity model."""

from __future__ import annotations

from pydantic import BaseModel, Field

FEATURE_ID_PATTERN = r"^[A-Z]+-[A-Z0-9]+(-[A-Z0-9]+)*$"


class Feature(BaseModel):
    """A feature row from a release document's feature table.

    Attributes:
        id: Feature identifier, ``PREFIX-NUMBER`` shaped (e.g. ``AUTH-01``).
        title: Human readable feature title.
        description: Optional free-text description.
        release_id: Identifier of the release the feature belongs to.
        openspec_change: Optional name of the linked OpenSpec change.
        repos: Repositories touched by the feature.
        story_count: Number of stories planned for the feature.
    """

    id: str = Field(..., pattern=FEATURE_ID_PATTERN)
    title: str = Field(..., min_length=1)
    description: str | None = None
    release_id: str
    openspec_change: str | None = None
    repos: list[str] = Field(default_factory=list)
    story_count: int = 0
