"""Shared schemas for specdeck."""

from specdeck.schemas.feature import Feature
from specdeck.schemas.nodes import Node, NodeKind
from specdeck.schemas.outline import HeadingEntry
from specdeck.schemas.overlay import OverlayData
from specdeck.schemas.release import Release, ReleaseWithFeatures

__all__ = [
    "Feature",
    "HeadingEntry",
    "Node",
    "NodeKind",
    "OverlayData",
    "Release",
    "ReleaseWithFeatures",
]
