"""Pydantic schemas for API request/response validation and page views."""

from feuerwehr.schemas.common import ErrorDetail, ErrorResponse
from feuerwehr.schemas.content import (
    CategoryOut,
    MediaOut,
    PageOut,
    PostDetail,
    PostSummary,
)
from feuerwehr.schemas.api import (
    AlertTopBarResponse,
    ContactRequest,
    RegisterRequest,
    SearchHit,
    SearchResponse,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "CategoryOut",
    "MediaOut",
    "PageOut",
    "PostDetail",
    "PostSummary",
    "AlertTopBarResponse",
    "ContactRequest",
    "RegisterRequest",
    "SearchHit",
    "SearchResponse",
]
