"""FastAPI application."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from server.routers import outline, overlays, releases
from server.routers.utils import error_response
from specdeck.exceptions import SpecdeckError
from specdeck.utils.logging_config import get_logger

logger = get_logger(__name__)

app = FastAPI(title="specdeck", description="Releases, features and overlays from markdown")

app.include_router(releases.router)
app.include_router(overlays.router)
app.include_router(outline.router)


@app.exception_handler(SpecdeckError)
async def specdeck_error_handler(request: Request, exc: SpecdeckError) -> JSONResponse:
    logger.error("Request %s failed: %s", request.url.path, exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", str(exc))


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
