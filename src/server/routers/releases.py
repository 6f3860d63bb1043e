"""Release and feature endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from server.dependencies import get_release_service
from server.routers.utils import COMMON_RESPONSES, error_response, success_response
from specdeck.services import ReleaseService

router = APIRouter()


@router.get("/api/releases", responses=COMMON_RESPONSES)
async def list_releases(service: ReleaseService = Depends(get_release_service)) -> JSONResponse:
    """List every readable release."""
    releases = await service.list_releases()
    return success_response(
        [release.model_dump(mode="json") for release in releases],
        meta={"total": len(releases)},
    )


@router.get("/api/releases/{release_id}", responses=COMMON_RESPONSES)
async def get_release(
    release_id: str, service: ReleaseService = Depends(get_release_service)
) -> JSONResponse:
    """Return a release together with the features listed in its body."""
    release = await service.get_release_with_features(release_id)
    if release is None:
        return error_response(status.HTTP_404_NOT_FOUND, "NOT_FOUND", f"Release {release_id} not found")
    return success_response(release.model_dump(mode="json"))


@router.get("/api/releases/{release_id}/features", responses=COMMON_RESPONSES)
async def get_release_features(
    release_id: str, service: ReleaseService = Depends(get_release_service)
) -> JSONResponse:
    """Return the features of a single release."""
    release = await service.get_release_with_features(release_id)
    if release is None:
        return error_response(status.HTTP_404_NOT_FOUND, "NOT_FOUND", f"Release {release_id} not found")
    features = [feature.model_dump(mode="json") for feature in release.feature_list]
    return success_response(features, meta={"total": len(features)})


@router.get("/api/features", responses=COMMON_RESPONSES)
async def list_features(service: ReleaseService = Depends(get_release_service)) -> JSONResponse:
    """List the features of every release."""
    features = await service.list_features()
    return success_response(
        [feature.model_dump(mode="json") for feature in features],
        meta={"total": len(features)},
    )
