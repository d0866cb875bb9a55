"""Public HTML pages.

Every page gets the shared layout data (site settings, navigation, contact
info, alert bar) from `layout_context`. A failing layout section is logged
and rendered empty so the page itself still shows.

The catch-all category routes are registered last: `/{category}` and
`/{category}/{slug}` must not shadow the fixed pages.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Form, Query, Request
from starlette.responses import Response

from feuerwehr.schemas.api import AlertTopBarResponse, ContactRequest
from feuerwehr.schemas.content import CategoryOut
from feuerwehr.services.about import about_text
from feuerwehr.services.accounts import DuplicateUserError, RegistrationError, register_user
from feuerwehr.services.cms_globals import (
    CONTACT_INFO,
    HOME_PAGES,
    MAP_SETTINGS,
    SIDEBAR_WIDGETS,
    SITE_SETTINGS,
    alert_top_bar_payload,
)
from feuerwehr.services.contact import ContactValidationError, submit_contact
from feuerwehr.services.localization import Locale, normalize_locale, other_locale
from feuerwehr.services.navigation import build_navigation
from feuerwehr.services.posts import find_post
from feuerwehr.services.repository import ContentRepository, get_repository
from feuerwehr.services.slider import SlideCursor
from feuerwehr.settings import get_settings
from feuerwehr.templating import render_template

router = APIRouter()
logger = logging.getLogger("uvicorn.error")

NEWS_PAGE_SIZE = 12
HOME_NEWS_COUNT = 6

TEAM_PAGES = {
    "/kommando": "kommando",
    "/clerk": "clerk",
    "/aktive-mitglieder": "active-members",
    "/fire-brigade-youth": "fire-brigade-youth",
    "/reserve": "reserve",
}


def page_locale(lang: str | None = Query(default=None)) -> Locale:
    return normalize_locale(lang, normalize_locale(get_settings().default_locale))


async def _safe(label: str, default: Any, coro: Any) -> Any:
    try:
        return await coro
    except Exception:
        logger.exception("[site] failed to load %s", label)
        return default


async def layout_context(repo: ContentRepository, locale: Locale) -> dict[str, Any]:
    """Data shared by every page (header, footer, alert bar)."""
    categories = await _safe("categories", [], repo.list_categories(locale))
    pages = await _safe("pages", [], repo.list_pages(locale))
    return {
        "locale": locale,
        "other_locale": other_locale(locale),
        "site_settings": await _safe("site settings", None, repo.get_global(SITE_SETTINGS, locale)) or {},
        "contact_info": await _safe("contact info", None, repo.get_global(CONTACT_INFO, locale)) or {},
        "alert": await _safe("alert bar", AlertTopBarResponse(), alert_top_bar_payload(repo, locale)),
        "categories": categories,
        "navigation": build_navigation(pages, categories, locale),
    }


async def _render(
    request: Request,
    repo: ContentRepository,
    locale: Locale,
    name: str,
    status_code: int = 200,
    **context: Any,
) -> Response:
    layout = await layout_context(repo, locale)
    return render_template(request, name, {**layout, **context}, status_code=status_code)


async def _not_found(request: Request, repo: ContentRepository, locale: Locale) -> Response:
    return await _render(request, repo, locale, "404.html", status_code=404)


# ============================================================
# Home and news
# ============================================================


@router.get("/")
async def home(
    request: Request,
    slide: int = Query(default=0),
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    """Magazine slider, latest news with sidebar widgets, tasks, sponsors."""
    slides = await _safe("magazine slides", [], repo.list_magazine_slides(locale))
    cursor = SlideCursor(len(slides), slide)
    previous_index = SlideCursor(len(slides), cursor.index).previous()
    next_index = SlideCursor(len(slides), cursor.index).next()

    return await _render(
        request,
        repo,
        locale,
        "home.html",
        slides=slides,
        slide_index=cursor.index,
        previous_slide=previous_index,
        next_slide=next_index,
        posts=await _safe("latest posts", [], repo.list_posts(locale, limit=HOME_NEWS_COUNT)),
        sidebar_widgets=await _safe("sidebar widgets", None, repo.get_global(SIDEBAR_WIDGETS, locale)) or {},
        home_pages=await _safe("home pages", None, repo.get_global(HOME_PAGES, locale)) or {},
        tasks=await _safe("tasks", [], repo.list_tasks(locale)),
        sponsors=await _safe("sponsors", [], repo.list_sponsors(locale)),
    )


async def _post_list(
    request: Request,
    repo: ContentRepository,
    locale: Locale,
    *,
    category: CategoryOut | None,
    page: int,
    title: str,
    base_path: str,
) -> Response:
    category_id = category.id if category is not None else None
    offset = (page - 1) * NEWS_PAGE_SIZE
    posts = await _safe(
        "posts",
        [],
        repo.list_posts(locale, category_id=category_id, limit=NEWS_PAGE_SIZE, offset=offset),
    )
    total = await _safe("post count", 0, repo.count_posts(category_id=category_id))
    return await _render(
        request,
        repo,
        locale,
        "news_list.html",
        title=title,
        category=category,
        posts=posts,
        page=page,
        has_next=offset + len(posts) < total,
        base_path=base_path,
    )


@router.get("/news")
async def news(
    request: Request,
    page: int = Query(default=1, ge=1),
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    return await _post_list(request, repo, locale, category=None, page=page, title="News", base_path="/news")


@router.get("/all_posts")
async def all_posts(
    request: Request,
    category: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    """All posts, optionally filtered by category slug."""
    selected = None
    if category:
        selected = await _safe("category", None, repo.get_category_by_slug(category, locale))
    title = selected.name if selected is not None else ("Alle Beiträge" if locale == "de" else "All posts")
    return await _post_list(
        request, repo, locale, category=selected, page=page, title=title, base_path="/all_posts"
    )


async def _post_page(
    request: Request,
    repo: ContentRepository,
    locale: Locale,
    key: str,
    category: CategoryOut | None,
) -> Response:
    post = await find_post(repo, key, locale, category_id=category.id if category else None)
    if post is None:
        return await _not_found(request, repo, locale)

    previous_post, next_post = await _safe(
        "adjacent posts",
        (None, None),
        repo.adjacent_posts(
            post.published_date,
            locale,
            category_id=post.category.id if post.category else None,
        ),
    )
    return await _render(
        request,
        repo,
        locale,
        "post.html",
        post=post,
        previous_post=previous_post,
        next_post=next_post,
    )


@router.get("/news/{slug}")
async def news_post(
    slug: str,
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    return await _post_page(request, repo, locale, slug, category=None)


# ============================================================
# Fixed pages
# ============================================================


@router.get("/gallery")
async def gallery(
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    items = await _safe("gallery", [], repo.list_gallery_items(locale))
    return await _render(request, repo, locale, "gallery.html", items=items)


async def _contact_page(
    request: Request,
    repo: ContentRepository,
    locale: Locale,
    *,
    form: ContactRequest | None = None,
    message: str | None = None,
    error: str | None = None,
    status_code: int = 200,
) -> Response:
    map_settings = await _safe("map settings", None, repo.get_global(MAP_SETTINGS, locale)) or {}
    return await _render(
        request,
        repo,
        locale,
        "contact.html",
        status_code=status_code,
        map_settings=map_settings,
        form=form or ContactRequest(),
        message=message,
        error=error,
    )


@router.get("/kontakt")
async def contact(
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    return await _contact_page(request, repo, locale)


@router.post("/kontakt")
async def contact_submit(
    request: Request,
    name: str = Form(default=""),
    email: str = Form(default=""),
    phone: str = Form(default=""),
    subject: str = Form(default=""),
    message: str = Form(default=""),
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    """Form fallback of POST /api/contact."""
    form = ContactRequest(name=name, email=email, phone=phone, subject=subject, message=message)
    try:
        await submit_contact(repo, form)
    except ContactValidationError as e:
        return await _contact_page(request, repo, locale, form=form, error=str(e), status_code=400)
    thanks = "Vielen Dank für Ihre Nachricht!" if locale == "de" else "Thank you for your message!"
    return await _contact_page(request, repo, locale, message=thanks)


async def _legal_page(request: Request, repo: ContentRepository, locale: Locale, kind: str) -> Response:
    page = await _safe(kind, None, repo.get_legal_page(kind, locale))
    if page is None:
        return await _not_found(request, repo, locale)
    return await _render(request, repo, locale, "legal.html", page=page)


@router.get("/impressum")
async def impressum(
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    return await _legal_page(request, repo, locale, "impressum")


@router.get("/datenschutz")
async def datenschutz(
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    return await _legal_page(request, repo, locale, "datenschutz")


@router.get("/about")
async def about(
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    return await _render(request, repo, locale, "about.html", about=about_text(locale))


@router.get("/geschichte")
async def history(
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    page = await _safe("history", None, repo.get_history(locale))
    if page is None:
        return await _not_found(request, repo, locale)
    return await _render(request, repo, locale, "history.html", history=page)


def _team_route(path: str, key: str) -> None:
    async def team_page(
        request: Request,
        locale: Locale = Depends(page_locale),
        repo: ContentRepository = Depends(get_repository),
    ) -> Response:
        roster = await _safe(f"team {key}", None, repo.get_team_roster(key, locale))
        if roster is None:
            return await _not_found(request, repo, locale)
        return await _render(request, repo, locale, "team.html", roster=roster)

    router.add_api_route(path, team_page, methods=["GET"], name=f"team_{key.replace('-', '_')}")


for _path, _key in TEAM_PAGES.items():
    _team_route(_path, _key)


async def _register_page(
    request: Request,
    repo: ContentRepository,
    locale: Locale,
    *,
    email: str = "",
    message: str | None = None,
    error: str | None = None,
    status_code: int = 200,
) -> Response:
    return await _render(
        request,
        repo,
        locale,
        "register.html",
        status_code=status_code,
        email=email,
        message=message,
        error=error,
    )


@router.get("/register")
async def register_form(
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    return await _register_page(request, repo, locale)


@router.post("/register")
async def register_submit(
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    """Form fallback of POST /api/register."""
    try:
        await register_user(repo, email, password)
    except DuplicateUserError as e:
        return await _register_page(request, repo, locale, email=email, error=str(e), status_code=409)
    except RegistrationError as e:
        return await _register_page(request, repo, locale, email=email, error=str(e), status_code=400)
    done = "Registrierung erfolgreich." if locale == "de" else "Registration successful."
    return await _register_page(request, repo, locale, message=done, status_code=201)


@router.get("/pages/{slug}")
async def content_page(
    slug: str,
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    page = await _safe("page", None, repo.get_page_by_slug(slug, locale))
    if page is None:
        return await _not_found(request, repo, locale)
    return await _render(request, repo, locale, "page.html", page=page)


# ============================================================
# Category catch-alls (keep last)
# ============================================================


@router.get("/{category_slug}")
async def category_page(
    category_slug: str,
    request: Request,
    page: int = Query(default=1, ge=1),
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    category = await _safe("category", None, repo.get_category_by_slug(category_slug, locale))
    if category is None:
        return await _not_found(request, repo, locale)
    return await _post_list(
        request,
        repo,
        locale,
        category=category,
        page=page,
        title=category.name,
        base_path=f"/{category.slug}",
    )


@router.get("/{category_slug}/{slug}")
async def category_post(
    category_slug: str,
    slug: str,
    request: Request,
    locale: Locale = Depends(page_locale),
    repo: ContentRepository = Depends(get_repository),
) -> Response:
    """Post page: slug in the requested locale, then the other locale, then numeric id."""
    category = await _safe("category", None, repo.get_category_by_slug(category_slug, locale))
    if category is None:
        return await _not_found(request, repo, locale)
    try:
        return await _post_page(request, repo, locale, slug, category)
    except Exception:
        logger.exception("[site] failed to load post %s/%s", category_slug, slug)
        return await _not_found(request, repo, locale)
