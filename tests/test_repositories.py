"""Tests for the release, feature and overlay repositories."""

from __future__ import annotations

from pathlib import Path

import pytest

from specdeck.exceptions import (
    DocumentNotFoundError,
    InvalidIdentifierError,
    MissingFrontMatterError,
    OverlayError,
)
from specdeck.repositories import FeatureRepository, OverlayRepository, ReleaseRepository


class TestFeatureRepository:
    """Tests for FeatureRepository.extract_from_release."""

    def test_valid_rows_become_features(self, release_r1: str) -> None:
        """Invalid rows are skipped and valid ones are kept in order."""
        features = FeatureRepository().extract_from_release(release_r1, "R1")

        assert [feature.id for feature in features] == ["AUTH-01", "AUTH-03"]

    def test_feature_fields(self, release_r1: str) -> None:
        """Columns map onto feature fields."""
        login, sessions = FeatureRepository().extract_from_release(release_r1, "R1")

        assert login.title == "Login"
        assert login.description == "User login"
        assert login.repos == ["api", "web"]
        assert login.story_count == 3
        assert login.release_id == "R1"
        assert sessions.title == "Sessions"

    def test_only_features_section_is_read(self, release_r1: str) -> None:
        """Tables in other sections are not features."""
        features = FeatureRepository().extract_from_release(release_r1, "R1")

        assert "RISK-01" not in [feature.id for feature in features]

    def test_custom_section_heading(self) -> None:
        """The section heading can be configured."""
        content = "## Scope\n\n| ID | Title |\n|---|---|\n| OPS-1 | Deploy |"

        features = FeatureRepository(section_heading="Scope").extract_from_release(content, "R9")

        assert [feature.id for feature in features] == ["OPS-1"]

    def test_missing_section(self) -> None:
        """No features section means no features."""
        assert FeatureRepository().extract_from_release("# Release\n\nText.", "R1") == []

    def test_feature_column_and_openspec_change(self) -> None:
        """Alternate column names are recognised."""
        content = (
            "## Features\n\n"
            "| ID | Feature | OpenSpec Change |\n"
            "|---|---|---|\n"
            "| BILL-01 | Invoices | add-invoices |"
        )

        (feature,) = FeatureRepository().extract_from_release(content, "R2")

        assert feature.title == "Invoices"
        assert feature.openspec_change == "add-invoices"
        assert feature.story_count == 0


class TestReleaseRepository:
    """Tests for ReleaseRepository."""

    @pytest.mark.asyncio
    async def test_find_by_id(self, specdeck_dir: Path) -> None:
        """Front matter fields are read into the release."""
        repository = ReleaseRepository(specdeck_dir / "releases")

        release = await repository.find_by_id("R1")

        assert release is not None
        assert release.id == "R1"
        assert release.title == "First Release"
        assert release.timeframe == "Q1 2025"
        assert release.objectives == ["Ship authentication"]
        assert release.success_metrics == ["99% uptime"]
        assert release.features == ["AUTH-01"]

    @pytest.mark.asyncio
    async def test_id_defaults_to_file_name(self, specdeck_dir: Path) -> None:
        """Releases without an id use their file name."""
        release = await ReleaseRepository(specdeck_dir / "releases").find_by_id("R2")

        assert release is not None
        assert release.id == "R2"
        assert release.timeframe is None

    @pytest.mark.asyncio
    async def test_missing_release(self, specdeck_dir: Path) -> None:
        """Unknown releases return None."""
        assert await ReleaseRepository(specdeck_dir / "releases").find_by_id("R99") is None

    @pytest.mark.asyncio
    async def test_missing_front_matter_raises(self, specdeck_dir: Path) -> None:
        """A release document needs front matter."""
        with pytest.raises(MissingFrontMatterError):
            await ReleaseRepository(specdeck_dir / "releases").find_by_id("broken")

    @pytest.mark.asyncio
    async def test_read_all_skips_broken_documents(self, specdeck_dir: Path) -> None:
        """Unreadable documents are skipped."""
        releases = await ReleaseRepository(specdeck_dir / "releases").read_all()

        assert [release.id for release in releases] == ["R1", "R2"]

    @pytest.mark.asyncio
    async def test_read_all_skips_undecodable_document(self, specdeck_dir: Path) -> None:
        """A file that is not valid UTF-8 does not break the listing."""
        (specdeck_dir / "releases" / "bad.md").write_bytes(b"---\nid: bad\n---\n\xff\xfe\n")

        releases = await ReleaseRepository(specdeck_dir / "releases").read_all()

        assert [release.id for release in releases] == ["R1", "R2"]

    @pytest.mark.parametrize("release_id", ["..", "../secret", "R1.md", "R1\n"])
    def test_path_for_rejects_invalid_ids(self, tmp_path: Path, release_id: str) -> None:
        """Release IDs cannot name paths outside the releases directory."""
        with pytest.raises(InvalidIdentifierError):
            ReleaseRepository(tmp_path).path_for(release_id)

    @pytest.mark.asyncio
    async def test_find_outside_directory_returns_none(self, specdeck_dir: Path) -> None:
        """Documents outside the releases directory are never read."""
        (specdeck_dir / "secret.md").write_text("---\nid: secret\ntitle: Secret\n---\n")

        release = await ReleaseRepository(specdeck_dir / "releases").find_by_id("../secret")

        assert release is None

    @pytest.mark.asyncio
    async def test_read_all_documents_keeps_content(self, specdeck_dir: Path) -> None:
        """Each release is paired with its markdown."""
        documents = await ReleaseRepository(specdeck_dir / "releases").read_all_documents()

        assert "## Features" in documents[0][1]

    @pytest.mark.asyncio
    async def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing releases directory has no releases."""
        assert await ReleaseRepository(tmp_path / "missing").read_all() == []


class TestOverlayRepository:
    """Tests for OverlayRepository."""

    @pytest.mark.asyncio
    async def test_create_and_read(self, tmp_path: Path) -> None:
        """A created overlay can be read back."""
        repository = OverlayRepository(tmp_path / "overlays")

        path = await repository.create("api", "AUTH-01")
        overlay = await repository.read("api", "AUTH-01")

        assert path == tmp_path / "overlays" / "api" / "AUTH-01.md"
        assert overlay is not None
        assert overlay.feature_id == "AUTH-01"
        assert overlay.jira_mappings == {}

    @pytest.mark.asyncio
    async def test_create_existing_raises(self, tmp_path: Path) -> None:
        """Overlays are never overwritten."""
        repository = OverlayRepository(tmp_path)
        await repository.create("api", "AUTH-01")

        with pytest.raises(OverlayError):
            await repository.create("api", "AUTH-01")

    @pytest.mark.asyncio
    async def test_add_mapping(self, tmp_path: Path) -> None:
        """Mappings are persisted to the overlay file."""
        repository = OverlayRepository(tmp_path)
        await repository.create("api", "AUTH-01")

        updated = await repository.add_mapping("api", "AUTH-01", "AUTH-01-01", "PROJ-1")
        reread = await repository.read("api", "AUTH-01")

        assert updated.jira_mappings == {"AUTH-01-01": "PROJ-1"}
        assert reread == updated

    @pytest.mark.asyncio
    async def test_add_mapping_missing_overlay(self, tmp_path: Path) -> None:
        """Adding to a missing overlay raises."""
        with pytest.raises(DocumentNotFoundError):
            await OverlayRepository(tmp_path).add_mapping("api", "AUTH-01", "S-1", "P-1")

    @pytest.mark.asyncio
    async def test_read_missing(self, tmp_path: Path) -> None:
        """Missing overlays return None."""
        assert await OverlayRepository(tmp_path).read("api", "AUTH-01") is None

    @pytest.mark.asyncio
    async def test_feature_id_falls_back_to_file_name(self, tmp_path: Path) -> None:
        """Overlays that do not name a feature take it from the file name."""
        (tmp_path / "web").mkdir()
        (tmp_path / "web" / "UI-01.md").write_text("Just notes.\n", encoding="utf-8")

        overlays = await OverlayRepository(tmp_path).read_all_for_repo("web")

        assert overlays["UI-01"].feature_id == "UI-01"

    @pytest.mark.asyncio
    async def test_read_all(self, tmp_path: Path) -> None:
        """Overlays are grouped by repository."""
        repository = OverlayRepository(tmp_path)
        await repository.create("web", "UI-01")
        await repository.create("api", "AUTH-01")
        await repository.create("api", "AUTH-02")

        result = await repository.read_all()

        assert list(result) == ["api", "web"]
        assert sorted(result["api"]) == ["AUTH-01", "AUTH-02"]

    @pytest.mark.asyncio
    async def test_read_all_for_repo_skips_undecodable_overlay(self, tmp_path: Path) -> None:
        """A file that is not valid UTF-8 is skipped."""
        repository = OverlayRepository(tmp_path)
        await repository.create("web", "UI-01")
        (tmp_path / "web" / "UI-02.md").write_bytes(b"# Overlay: UI-02\n\xff\xfe\n")

        overlays = await repository.read_all_for_repo("web")

        assert list(overlays) == ["UI-01"]

    @pytest.mark.asyncio
    async def test_invalid_segments(self, tmp_path: Path) -> None:
        """Repository names and feature IDs cannot escape the overlays directory."""
        repository = OverlayRepository(tmp_path / "overlays")
        (tmp_path / "AUTH-01.md").write_text("# Overlay: AUTH-01\n", encoding="utf-8")

        assert await repository.read("..", "AUTH-01") is None
        assert await repository.read_all_for_repo("..") == {}
        with pytest.raises(InvalidIdentifierError):
            await repository.create("api", "../AUTH-01")
        with pytest.raises(InvalidIdentifierError):
            await repository.add_mapping("..", "AUTH-01", "S-1", "P-1")
