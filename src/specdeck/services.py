"""Release service: stitch release front matter to the features in its body."""

from __future__ import annotations

from pathlib import Path

from specdeck.config import SPECDECK_DIR
from specdeck.repositories import FeatureRepository, ReleaseRepository
from specdeck.schemas import Feature, Release, ReleaseWithFeatures


class ReleaseService:
    """Read releases and their features from ``<specdeck_dir>/releases``."""

    def __init__(
        self,
        specdeck_dir: Path = SPECDECK_DIR,
        *,
        release_repository: ReleaseRepository | None = None,
        feature_repository: FeatureRepository | None = None,
    ) -> None:
        self.release_repository = release_repository or ReleaseRepository(
            Path(specdeck_dir) / "releases"
        )
        self.feature_repository = feature_repository or FeatureRepository()

    async def list_releases(self) -> list[Release]:
        return await self.release_repository.read_all()

    async def get_release(self, release_id: str) -> Release | None:
        return await self.release_repository.find_by_id(release_id)

    async def get_release_with_features(self, release_id: str) -> ReleaseWithFeatures | None:
        """Return a release with the features from its feature table, or None."""
        document = await self.release_repository.find_document(release_id)
        if document is None:
            return None
        return self._stitch(*document)

    async def list_releases_with_features(self) -> list[ReleaseWithFeatures]:
        documents = await self.release_repository.read_all_documents()
        return [self._stitch(release, content) for release, content in documents]

    async def list_features(self) -> list[Feature]:
        """Return the features of every readable release, in release order."""
        features: list[Feature] = []
        for release in await self.list_releases_with_features():
            features.extend(release.feature_list)
        return features

    async def get_features_by_release(self, release_id: str) -> list[Feature]:
        release = await self.get_release_with_features(release_id)
        return release.feature_list if release else []

    def _stitch(self, release: Release, content: str) -> ReleaseWithFeatures:
        features = self.feature_repository.extract_from_release(content, release.id)
        return ReleaseWithFeatures(**release.model_dump(), feature_list=features)
