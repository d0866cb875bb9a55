"""Admin endpoints for content management.

Every endpoint needs the `X-Admin-Token` header matching ADMIN_TOKEN. With no
token configured the admin API is disabled (403).
"""

import logging
import secrets
from typing import Any

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Query, status

from feuerwehr.models.post import STATUS_DRAFT, STATUS_PUBLISHED
from feuerwehr.schemas.admin import (
    CategoryActive,
    CategoryWrite,
    ContactStatusUpdate,
    CreatedResponse,
    InitGlobalResponse,
    PageWrite,
    PostWrite,
)
from feuerwehr.schemas.content import ContactSubmissionOut
from feuerwehr.services.cms_globals import (
    GLOBAL_DEFAULTS,
    default_global,
    init_alert_top_bar,
    init_map_settings,
    merge_global_update,
)
from feuerwehr.services.contact import is_valid_status
from feuerwehr.services.localization import normalize_locale
from feuerwehr.services.pages import PageValidationError, prepare_page_write
from feuerwehr.services.posts import PostValidationError, prepare_category_write, prepare_post_write
from feuerwehr.services.repository import ContentRepository, get_repository
from feuerwehr.services.slugs import SlugKind, unique_slugs
from feuerwehr.settings import get_settings
from feuerwehr.stores.postgres import DuplicateRecordError

logger = logging.getLogger("uvicorn.error")


async def require_admin(x_admin_token: str | None = Header(default=None)) -> None:
    """Check the admin token header."""
    expected = get_settings().admin_token
    if not expected:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin API is disabled")
    if not x_admin_token or not secrets.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid admin token")


router = APIRouter(dependencies=[Depends(require_admin)])


def _write_data(body: Any) -> dict[str, Any]:
    return body.model_dump(exclude_unset=True, exclude={"locale"})


async def _dedupe_slugs(
    repo: ContentRepository,
    kind: SlugKind,
    values: dict[str, Any],
    exclude_id: int | None = None,
) -> dict[str, Any]:
    if values.get("slug"):
        values["slug"] = await unique_slugs(repo, kind, values["slug"], exclude_id=exclude_id)
    return values


def _conflict(e: DuplicateRecordError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


# ============================================================
# Posts
# ============================================================


@router.post("/posts", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostWrite,
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    try:
        values = prepare_post_write(_write_data(body), normalize_locale(body.locale))
    except PostValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    values = await _dedupe_slugs(repo, "posts", values)
    try:
        post_id = await repo.create_post(values)
    except DuplicateRecordError as e:
        raise _conflict(e)
    logger.info("[admin] created post %s", post_id)
    return CreatedResponse(id=post_id)


async def _update_post(repo: ContentRepository, post_id: int, data: dict[str, Any], locale: str) -> CreatedResponse:
    existing = await repo.get_post_raw(post_id)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Post {post_id} not found")
    try:
        values = prepare_post_write(data, normalize_locale(locale), existing)
    except PostValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    values = await _dedupe_slugs(repo, "posts", values, post_id)
    try:
        await repo.update_post(post_id, values)
    except DuplicateRecordError as e:
        raise _conflict(e)
    return CreatedResponse(id=post_id)


@router.patch("/posts/{post_id}", response_model=CreatedResponse)
async def update_post(
    post_id: int,
    body: PostWrite,
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    return await _update_post(repo, post_id, _write_data(body), body.locale)


@router.post("/posts/{post_id}/publish", response_model=CreatedResponse)
async def publish_post(
    post_id: int,
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    result = await _update_post(repo, post_id, {"status": STATUS_PUBLISHED}, "de")
    logger.info("[admin] published post %s", post_id)
    return result


@router.post("/posts/{post_id}/unpublish", response_model=CreatedResponse)
async def unpublish_post(
    post_id: int,
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    return await _update_post(repo, post_id, {"status": STATUS_DRAFT}, "de")


# ============================================================
# Categories
# ============================================================


@router.post("/categories", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryWrite,
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    try:
        values = prepare_category_write(_write_data(body), normalize_locale(body.locale))
    except PostValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    values = await _dedupe_slugs(repo, "categories", values)
    try:
        return CreatedResponse(id=await repo.create_category(values))
    except DuplicateRecordError as e:
        raise _conflict(e)


@router.patch("/categories/{category_id}/active", response_model=CreatedResponse)
async def set_category_active(
    category_id: int,
    body: CategoryActive,
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    if not await repo.set_category_active(category_id, body.active):
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return CreatedResponse(id=category_id)


# ============================================================
# Pages
# ============================================================


@router.post("/pages", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_page(
    body: PageWrite,
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    try:
        values = prepare_page_write(_write_data(body), normalize_locale(body.locale))
    except PageValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    values = await _dedupe_slugs(repo, "pages", values)
    try:
        return CreatedResponse(id=await repo.create_page(values))
    except DuplicateRecordError as e:
        raise _conflict(e)


@router.patch("/pages/{page_id}", response_model=CreatedResponse)
async def update_page(
    page_id: int,
    body: PageWrite,
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    existing = await repo.get_page_raw(page_id)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Page {page_id} not found")
    try:
        values = prepare_page_write(_write_data(body), normalize_locale(body.locale), existing)
    except PageValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    values = await _dedupe_slugs(repo, "pages", values, page_id)
    try:
        await repo.update_page(page_id, values)
    except DuplicateRecordError as e:
        raise _conflict(e)
    return CreatedResponse(id=page_id)


# ============================================================
# Globals
# ============================================================


def _check_global(slug: str) -> None:
    if slug not in GLOBAL_DEFAULTS:
        raise HTTPException(status_code=404, detail=f"Unknown global: {slug}")


@router.get("/globals/{slug}")
async def get_global(
    slug: str,
    repo: ContentRepository = Depends(get_repository),
) -> dict[str, Any]:
    """Stored document with locale maps intact."""
    _check_global(slug)
    data = await repo.get_global_raw(slug)
    if data is None:
        raise HTTPException(status_code=404, detail=f"Global {slug} not initialized")
    return data


@router.put("/globals/{slug}")
async def update_global(
    slug: str,
    update: dict[str, Any] = Body(...),
    locale: str = Query(default="de"),
    repo: ContentRepository = Depends(get_repository),
) -> dict[str, Any]:
    """Write fields of a global for one locale (also invalidates its cache)."""
    _check_global(slug)
    existing = await repo.get_global_raw(slug) or default_global(slug)
    data = merge_global_update(existing, update, normalize_locale(locale))
    await repo.save_global(slug, data)
    return data


@router.post("/init-alert-top-bar", response_model=InitGlobalResponse)
async def post_init_alert_top_bar(
    repo: ContentRepository = Depends(get_repository),
) -> InitGlobalResponse:
    message, data = await init_alert_top_bar(repo)
    return InitGlobalResponse(message=message, data=data)


@router.post("/init-map-settings", response_model=InitGlobalResponse)
async def post_init_map_settings(
    repo: ContentRepository = Depends(get_repository),
) -> InitGlobalResponse:
    message, data = await init_map_settings(repo)
    return InitGlobalResponse(message=message, data=data)


# ============================================================
# Contact submissions
# ============================================================


@router.get("/contact-submissions", response_model=list[ContactSubmissionOut])
async def list_contact_submissions(
    status_filter: str | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=500),
    repo: ContentRepository = Depends(get_repository),
) -> list[ContactSubmissionOut]:
    if status_filter is not None and not is_valid_status(status_filter):
        raise HTTPException(status_code=400, detail=f"Unknown status: {status_filter}")
    return await repo.list_contact_submissions(status=status_filter, limit=limit)


@router.patch("/contact-submissions/{submission_id}", response_model=ContactSubmissionOut)
async def set_contact_status(
    submission_id: int,
    body: ContactStatusUpdate,
    repo: ContentRepository = Depends(get_repository),
) -> ContactSubmissionOut:
    if not is_valid_status(body.status):
        raise HTTPException(status_code=400, detail=f"Unknown status: {body.status}")
    submission = await repo.set_contact_status(submission_id, body.status)
    if submission is None:
        raise HTTPException(status_code=404, detail=f"Submission {submission_id} not found")
    return submission
