"""Helpers shared by the API routers."""

from __future__ import annotations

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from server.models import ErrorDetail, ErrorResponse, SuccessResponse

COMMON_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Document not found"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Internal error"},
}


def success_response(data: Any, meta: dict[str, Any] | None = None) -> JSONResponse:
    body = SuccessResponse(data=data, meta=meta)
    return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(mode="json"))


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
