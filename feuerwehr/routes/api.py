"""Public JSON API for client-side widgets and forms.

Read endpoints keep answering 200 when the CMS fails: the payload is null or
empty and `error` says what went wrong, so the page around the widget still
renders. The failure is logged with its traceback.

Write endpoints (contact form, registration) answer 201, or the structured
error envelope with 400 / 409.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from feuerwehr.routes.errors import CONFLICT, VALIDATION_ERROR, error_response
from feuerwehr.schemas.api import (
    AlertTopBarResponse,
    CategoriesResponse,
    ContactInfoResponse,
    ContactRequest,
    ContactResponse,
    HomePagesResponse,
    MapSettingsResponse,
    PagesResponse,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    SearchResponse,
    SidebarWidgetsResponse,
    SiteSettingsResponse,
)
from feuerwehr.services.accounts import DuplicateUserError, RegistrationError, register_user
from feuerwehr.services.cms_globals import (
    CONTACT_INFO,
    COOKIE_BANNER,
    HOME_PAGES,
    MAP_SETTINGS,
    SIDEBAR_WIDGETS,
    SITE_SETTINGS,
    alert_top_bar_payload,
)
from feuerwehr.services.contact import ContactValidationError, submit_contact
from feuerwehr.services.localization import Locale, normalize_locale
from feuerwehr.services.repository import ContentRepository, get_repository
from feuerwehr.services.search import search_posts
from feuerwehr.settings import get_settings

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


def request_locale(
    lang: str | None = Query(default=None, description="Locale (de, en); anything else means the configured default"),
    locale: str | None = Query(default=None, description="Alias of lang"),
) -> Locale:
    return normalize_locale(lang or locale, normalize_locale(get_settings().default_locale))


# ============================================================
# Read endpoints
# ============================================================


@router.get("/site-settings", response_model=SiteSettingsResponse)
async def get_site_settings(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> SiteSettingsResponse:
    try:
        return SiteSettingsResponse(site_settings=await repo.get_global(SITE_SETTINGS, locale))
    except Exception:
        logger.exception("[globals] failed to fetch site settings")
        return SiteSettingsResponse(error="Failed to fetch site settings")


@router.get("/contact-info", response_model=ContactInfoResponse)
async def get_contact_info(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> ContactInfoResponse:
    try:
        return ContactInfoResponse(contact_info=await repo.get_global(CONTACT_INFO, locale))
    except Exception:
        logger.exception("[globals] failed to fetch contact info")
        return ContactInfoResponse(error="Failed to fetch contact info")


@router.get("/sidebar-widgets", response_model=SidebarWidgetsResponse)
async def get_sidebar_widgets(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> SidebarWidgetsResponse:
    try:
        return SidebarWidgetsResponse(sidebar_widgets=await repo.get_global(SIDEBAR_WIDGETS, locale))
    except Exception:
        logger.exception("[globals] failed to fetch sidebar widgets")
        return SidebarWidgetsResponse(error="Failed to fetch sidebar widgets")


@router.get("/map-settings", response_model=MapSettingsResponse)
async def get_map_settings(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> MapSettingsResponse:
    try:
        return MapSettingsResponse(map_settings=await repo.get_global(MAP_SETTINGS, locale))
    except Exception:
        logger.exception("[globals] failed to fetch map settings")
        return MapSettingsResponse(error="Failed to fetch map settings")


@router.get("/home-pages", response_model=HomePagesResponse)
async def get_home_pages(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> HomePagesResponse:
    try:
        return HomePagesResponse(home_pages=await repo.get_global(HOME_PAGES, locale))
    except Exception:
        logger.exception("[globals] failed to fetch home pages")
        return HomePagesResponse(error="Failed to fetch home pages")


@router.get("/cookie-banner")
async def get_cookie_banner(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> JSONResponse:
    """The resolved cookie-banner document itself (null when missing)."""
    try:
        return JSONResponse(content=await repo.get_global(COOKIE_BANNER, locale))
    except Exception:
        logger.exception("[globals] failed to fetch cookie banner")
        return JSONResponse(content={"error": "Failed to fetch cookie banner"})


@router.get(
    "/alert-top-bar",
    response_model=AlertTopBarResponse,
    response_model_exclude_none=True,
)
async def get_alert_top_bar(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> AlertTopBarResponse:
    try:
        return await alert_top_bar_payload(repo, locale)
    except Exception:
        logger.exception("[globals] failed to fetch alert top bar")
        return AlertTopBarResponse(error="Failed to fetch alert top bar")


@router.get("/public-categories", response_model=CategoriesResponse)
async def get_public_categories(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> CategoriesResponse:
    try:
        return CategoriesResponse(categories=await repo.list_categories(locale))
    except Exception:
        logger.exception("[categories] failed to fetch categories")
        return CategoriesResponse(error="Failed to fetch categories")


@router.get("/published-pages", response_model=PagesResponse)
async def get_published_pages(
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> PagesResponse:
    try:
        return PagesResponse(pages=await repo.list_pages(locale))
    except Exception:
        logger.exception("[pages] failed to fetch published pages")
        return PagesResponse(error="Failed to fetch pages")


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str | None = Query(default=None, description="Search term (at least 2 characters)"),
    locale: Locale = Depends(request_locale),
    repo: ContentRepository = Depends(get_repository),
) -> SearchResponse:
    try:
        return SearchResponse(posts=await search_posts(repo, q, locale))
    except Exception:
        logger.exception("[search] search failed")
        return SearchResponse(error="Search failed")


# ============================================================
# Write endpoints
# ============================================================


@router.post("/contact", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact_submission(
    form: ContactRequest,
    repo: ContentRepository = Depends(get_repository),
) -> ContactResponse | JSONResponse:
    try:
        submission = await submit_contact(repo, form)
    except ContactValidationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR, str(e))
    return ContactResponse(message="Contact submission created successfully", id=submission.id)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    repo: ContentRepository = Depends(get_repository),
) -> RegisterResponse | JSONResponse:
    try:
        user = await register_user(repo, body.email, body.password)
    except DuplicateUserError as e:
        return error_response(status.HTTP_409_CONFLICT, CONFLICT, str(e))
    except RegistrationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR, str(e))
    return RegisterResponse(
        message="User registered successfully",
        user=RegisteredUser(id=user.id, email=user.email),
    )
