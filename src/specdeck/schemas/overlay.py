"""Overlay document model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OverlayData(BaseModel):
    """Repository-local data attached to a feature.

    Attributes:
        feature_id: The feature the overlay belongs to (may be empty when
            the document does not name one).
        jira_mappings: Story ID -> Jira ticket.
        notes: Story ID -> free-text note.
    """

    feature_id: str = ""
    jira_mappings: dict[str, str] = Field(default_factory=dict)
    notes: dict[str, str] = Field(default_factory=dict)
