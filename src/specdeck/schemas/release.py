"""Release entity models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from specdeck.schemas.feature import Feature

RELEASE_ID_PATTERN = r"^[A-Za-z0-9]+(-[A-Za-z0-9]+)*$"


class Release(BaseModel):
    """A release described by a release document's front matter."""

    id: str = Field(..., pattern=RELEASE_ID_PATTERN)
    title: str = Field(..., min_length=1)
    timeframe: str | None = None
    objectives: list[str] = Field(default_factory=list)
    success_metrics: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)


class ReleaseWithFeatures(Release):
    """A release together with the features listed in its body."""

    feature_list: list[Feature] = Field(default_factory=list)
