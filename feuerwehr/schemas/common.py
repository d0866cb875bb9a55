"""Error envelope shared by the JSON API.

Every failed write (and any unhandled error) answers with

    {"error": {"code": "CONFLICT", "message": "...", "detail": {...} | null}}
"""

from typing import Any, Literal

from pydantic import BaseModel

ErrorCode = Literal["VALIDATION_ERROR", "CONFLICT", "INTERNAL_ERROR"]


class ErrorDetail(BaseModel):
    code: ErrorCode
    # Human-readable; shown to site visitors by the contact and register forms
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
