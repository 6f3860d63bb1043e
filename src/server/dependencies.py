"""Request-scoped dependencies."""

from __future__ import annotations

from specdeck.config import SPECDECK_OVERLAYS_DIR, SPECDECK_RELEASES_DIR
from specdeck.repositories import OverlayRepository, ReleaseRepository
from specdeck.services import ReleaseService


def get_release_service() -> ReleaseService:
    return ReleaseService(release_repository=ReleaseRepository(SPECDECK_RELEASES_DIR))


def get_overlay_repository() -> OverlayRepository:
    return OverlayRepository(SPECDECK_OVERLAYS_DIR)
