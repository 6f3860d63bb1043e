"""Tests for ReleaseService."""

from __future__ import annotations

from pathlib import Path

import pytest

from specdeck.repositories import FeatureRepository
from specdeck.services import ReleaseService


class TestReleaseService:
    """Tests for ReleaseService."""

    @pytest.mark.asyncio
    async def test_list_releases(self, specdeck_dir: Path) -> None:
        """Readable releases are listed."""
        releases = await ReleaseService(specdeck_dir).list_releases()

        assert [release.id for release in releases] == ["R1", "R2"]

    @pytest.mark.asyncio
    async def test_get_release(self, specdeck_dir: Path) -> None:
        """A single release is returned by ID."""
        release = await ReleaseService(specdeck_dir).get_release("R2")

        assert release is not None
        assert release.title == "Second Release"

    @pytest.mark.asyncio
    async def test_get_release_with_features(self, specdeck_dir: Path) -> None:
        """Feature rows are attached to the release."""
        release = await ReleaseService(specdeck_dir).get_release_with_features("R1")

        assert release is not None
        assert release.id == "R1"
        assert [feature.id for feature in release.feature_list] == ["AUTH-01", "AUTH-03"]
        assert all(feature.release_id == "R1" for feature in release.feature_list)

    @pytest.mark.asyncio
    async def test_get_missing_release_with_features(self, specdeck_dir: Path) -> None:
        """Unknown releases return None."""
        assert await ReleaseService(specdeck_dir).get_release_with_features("R99") is None

    @pytest.mark.asyncio
    async def test_list_features(self, specdeck_dir: Path) -> None:
        """Features of every release are listed in release order."""
        features = await ReleaseService(specdeck_dir).list_features()

        assert [(feature.release_id, feature.id) for feature in features] == [
            ("R1", "AUTH-01"),
            ("R1", "AUTH-03"),
            ("R2", "BILL-01"),
        ]

    @pytest.mark.asyncio
    async def test_get_features_by_release(self, specdeck_dir: Path) -> None:
        """Features are returned for one release, and none for unknown ones."""
        service = ReleaseService(specdeck_dir)

        assert [feature.id for feature in await service.get_features_by_release("R2")] == [
            "BILL-01"
        ]
        assert await service.get_features_by_release("R99") == []

    @pytest.mark.asyncio
    async def test_custom_feature_repository(self, specdeck_dir: Path) -> None:
        """The feature section heading can be swapped."""
        service = ReleaseService(
            specdeck_dir, feature_repository=FeatureRepository(section_heading="Risks")
        )

        release = await service.get_release_with_features("R1")

        assert release is not None
        assert [feature.id for feature in release.feature_list] == ["RISK-01"]
