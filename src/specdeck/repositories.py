"""File-backed repositories for releases, features and overlays."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from specdeck.config import SPECDECK_FEATURES_SECTION
from specdeck.exceptions import (
    DocumentNotFoundError,
    InvalidIdentifierError,
    MissingFrontMatterError,
    OverlayError,
    ParseError,
    SpecdeckError,
)
from specdeck.front_matter import extract_front_matter
from specdeck.io_utils import (
    list_markdown_files,
    mkdir_async,
    read_document_async,
    write_text_async,
)
from specdeck.overlay import add_jira_mapping, create_overlay_markdown, parse_overlay
from specdeck.parser import parse_markdown
from specdeck.schemas import Feature, NodeKind, OverlayData, Release
from specdeck.schemas.feature import FEATURE_ID_PATTERN
from specdeck.schemas.release import RELEASE_ID_PATTERN
from specdeck.sections import find_section
from specdeck.tables import table_to_records

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*(-?\d+)")
_RELEASE_ID_RE = re.compile(RELEASE_ID_PATTERN)
_FEATURE_ID_RE = re.compile(FEATURE_ID_PATTERN)
# Repository directory names share the release ID alphabet.
_REPO_NAME_RE = _RELEASE_ID_RE


class FeatureRepository:
    """Read features from the feature table of a release document."""

    def __init__(self, section_heading: str = SPECDECK_FEATURES_SECTION) -> None:
        self.section_heading = section_heading

    def extract_from_release(self, release_content: str, release_id: str) -> list[Feature]:
        """Return the valid features listed in a release document.

        The first table under the features heading is read as one feature
        per row. Rows that do not validate are logged and skipped.

        Args:
            release_content: Markdown text of the release document.
            release_id: Identifier stamped onto every feature.

        Returns:
            Features in table order; empty if the section or table is missing.
        """
        root = parse_markdown(release_content)
        section = find_section(root, self.section_heading)
        tables = [node for node in section if node.kind is NodeKind.TABLE]
        if not tables:
            return []

        features: list[Feature] = []
        for record in table_to_records(tables[0]):
            try:
                features.append(Feature.model_validate(_feature_fields(record, release_id)))
            except ValidationError as exc:
                logger.warning("Skipping invalid feature in release %s: %s", release_id, exc)
        return features


def _feature_fields(record: dict[str, str], release_id: str) -> dict[str, Any]:
    repos = record.get("Repos", "")
    fields: dict[str, Any] = {
        "id": record.get("ID") or record.get("id"),
        "title": record.get("Title") or record.get("title") or record.get("Feature"),
        "description": record.get("Description") or record.get("description") or None,
        "release_id": release_id,
        "openspec_change": record.get("OpenSpec Change") or record.get("openspecChange") or None,
        "repos": [repo.strip() for repo in repos.split(",") if repo.strip()],
    }
    stories = record.get("Stories")
    if stories:
        match = _LEADING_INT_RE.match(stories)
        # Non-numeric story counts fail validation and the row is skipped.
        fields["story_count"] = int(match.group(1)) if match else stories
    return fields


class ReleaseRepository:
    """Read release documents from a directory of ``<release-id>.md`` files."""

    def __init__(self, releases_dir: Path) -> None:
        self.releases_dir = Path(releases_dir)

    def path_for(self, release_id: str) -> Path:
        """Return the document path of a release.

        Raises:
            InvalidIdentifierError: If ``release_id`` is not a release ID.
        """
        _check_identifier(release_id, _RELEASE_ID_RE, "release ID")
        return self.releases_dir / f"{release_id}.md"

    async def read_all(self) -> list[Release]:
        """Read every release, skipping (and logging) documents that fail."""
        return [release for release, _ in await self.read_all_documents()]

    async def read_all_documents(self) -> list[tuple[Release, str]]:
        """Read every release together with its markdown text."""
        documents: list[tuple[Release, str]] = []
        for path in list_markdown_files(self.releases_dir):
            try:
                documents.append(await self._read_from_file(path))
            except (SpecdeckError, OSError) as exc:
                logger.warning("Failed to read release %s: %s", path.name, exc)
        return documents

    async def find_by_id(self, release_id: str) -> Release | None:
        """Return the release stored as ``<release_id>.md``, or None if absent."""
        document = await self.find_document(release_id)
        return document[0] if document else None

    async def find_document(self, release_id: str) -> tuple[Release, str] | None:
        """Return the release and its markdown text, or None if absent."""
        try:
            path = self.path_for(release_id)
        except InvalidIdentifierError:
            return None
        if not path.is_file():
            return None
        return await self._read_from_file(path)

    async def _read_from_file(self, path: Path) -> tuple[Release, str]:
        content = await read_document_async(path)
        front_matter = extract_front_matter(parse_markdown(content))
        if front_matter is None:
            raise MissingFrontMatterError(f"No YAML front matter found in {path}")

        try:
            release = Release.model_validate(
                {
                    "id": str(front_matter.get("id") or path.stem),
                    "title": _optional_str(front_matter.get("title")),
                    "timeframe": _optional_str(front_matter.get("timeframe")),
                    "objectives": _str_list(front_matter.get("objectives")),
                    "success_metrics": _str_list(front_matter.get("successMetrics")),
                    "features": _str_list(front_matter.get("features")),
                }
            )
        except ValidationError as exc:
            raise ParseError(f"Invalid release document {path}: {exc}") from exc
        logger.debug("Read release %s from %s", release.id, path)
        return release, content


def _check_identifier(value: str, pattern: re.Pattern[str], label: str) -> None:
    if not pattern.fullmatch(value):
        raise InvalidIdentifierError(f"Invalid {label}: {value!r}")


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


class OverlayRepository:
    """Read and write overlay documents at ``<overlays_dir>/<repo>/<feature>.md``."""

    def __init__(self, overlays_dir: Path) -> None:
        self.overlays_dir = Path(overlays_dir)

    def path_for(self, repo_name: str, feature_id: str) -> Path:
        """Return the document path of an overlay.

        Raises:
            InvalidIdentifierError: If either segment is not a valid identifier.
        """
        _check_identifier(repo_name, _REPO_NAME_RE, "repository name")
        _check_identifier(feature_id, _FEATURE_ID_RE, "feature ID")
        return self.overlays_dir / repo_name / f"{feature_id}.md"

    async def read(self, repo_name: str, feature_id: str) -> OverlayData | None:
        """Return the overlay for a feature in a repository, or None if absent."""
        try:
            path = self.path_for(repo_name, feature_id)
        except InvalidIdentifierError:
            return None
        if not path.is_file():
            return None
        overlay = parse_overlay(await read_document_async(path))
        if not overlay.feature_id:
            overlay.feature_id = feature_id
        return overlay

    async def read_all_for_repo(self, repo_name: str) -> dict[str, OverlayData]:
        """Return every overlay of a repository keyed by feature ID."""
        if not _REPO_NAME_RE.fullmatch(repo_name):
            return {}
        overlays: dict[str, OverlayData] = {}
        for path in list_markdown_files(self.overlays_dir / repo_name):
            try:
                overlay = parse_overlay(await read_document_async(path))
            except (SpecdeckError, OSError) as exc:
                logger.warning("Failed to read overlay %s: %s", path, exc)
                continue
            if not overlay.feature_id:
                overlay.feature_id = path.stem
            overlays[path.stem] = overlay
        return overlays

    async def read_all(self) -> dict[str, dict[str, OverlayData]]:
        """Return overlays for every repository directory, keyed by repository."""
        if not self.overlays_dir.is_dir():
            return {}
        result: dict[str, dict[str, OverlayData]] = {}
        for repo_dir in sorted(path for path in self.overlays_dir.iterdir() if path.is_dir()):
            result[repo_dir.name] = await self.read_all_for_repo(repo_dir.name)
        return result

    async def create(self, repo_name: str, feature_id: str) -> Path:
        """Write a scaffold overlay for a feature.

        Raises:
            OverlayError: If the overlay already exists.
        """
        path = self.path_for(repo_name, feature_id)
        if path.exists():
            raise OverlayError(f"Overlay already exists: {path}")
        await mkdir_async(path.parent, parents=True, exist_ok=True)
        await write_text_async(path, create_overlay_markdown(feature_id))
        logger.info("Created overlay %s", path)
        return path

    async def add_mapping(
        self, repo_name: str, feature_id: str, story_id: str, jira_ticket: str
    ) -> OverlayData:
        """Add a Jira mapping to an existing overlay and return the updated data.

        Raises:
            DocumentNotFoundError: If the overlay does not exist.
        """
        path = self.path_for(repo_name, feature_id)
        if not path.is_file():
            raise DocumentNotFoundError(f"Overlay not found: {path}")
        updated = add_jira_mapping(await read_document_async(path), story_id, jira_ticket)
        await write_text_async(path, updated)
        overlay = parse_overlay(updated)
        if not overlay.feature_id:
            overlay.feature_id = feature_id
        return overlay
