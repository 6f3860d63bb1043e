"""Overlay endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from server.dependencies import get_overlay_repository
from server.routers.utils import COMMON_RESPONSES, error_response, success_response
from specdeck.repositories import OverlayRepository

router = APIRouter()


@router.get("/api/overlays/{repo_name}/{feature_id}", responses=COMMON_RESPONSES)
async def get_overlay(
    repo_name: str,
    feature_id: str,
    repository: OverlayRepository = Depends(get_overlay_repository),
) -> JSONResponse:
    """Return the Jira mappings and notes of one feature's overlay."""
    overlay = await repository.read(repo_name, feature_id)
    if overlay is None:
        return error_response(
            status.HTTP_404_NOT_FOUND,
            "NOT_FOUND",
            f"Overlay for {feature_id} in {repo_name} not found",
        )
    return success_response(overlay.model_dump(mode="json"))
