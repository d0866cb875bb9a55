"""Structured error responses for the JSON API."""

from typing import Any

from fastapi.responses import JSONResponse

from feuerwehr.schemas.common import ErrorCode, ErrorDetail, ErrorResponse

VALIDATION_ERROR: ErrorCode = "VALIDATION_ERROR"
CONFLICT: ErrorCode = "CONFLICT"
INTERNAL_ERROR: ErrorCode = "INTERNAL_ERROR"


def error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    detail: dict[str, Any] | None = None,
) -> JSONResponse:
    """{"error": {"code", "message", "detail"}} with the given status."""
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail))
    return JSONResponse(status_code=status_code, content=body.model_dump())
