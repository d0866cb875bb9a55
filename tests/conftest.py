"""Shared fixtures: an in-memory content repository and an HTTP client.

The ASGI transport does not run the app lifespan, so no database or Redis
connection is opened. Routes get `FakeRepository` through
`app.dependency_overrides`.
"""

import copy
from datetime import datetime, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from feuerwehr.main import app
from feuerwehr.schemas.content import (
    CategoryOut,
    ContactSubmissionOut,
    GalleryItemOut,
    HistoryOut,
    LegalPageOut,
    MagazineSlideOut,
    PageOut,
    PostDetail,
    PostSummary,
    SponsorOut,
    TaskOut,
    TeamRosterOut,
    UserOut,
)
from feuerwehr.services.localization import Locale, resolve_document
from feuerwehr.services.repository import get_repository
from feuerwehr.settings import get_settings
from feuerwehr.stores.postgres import DuplicateRecordError


class FakeRepository:
    """ContentRepository kept in memory.

    Posts are stored per locale (`posts[locale]`), already resolved, and only
    published ones are handed out like the SQL repository does.
    """

    def __init__(self) -> None:
        self.categories: dict[Locale, list[CategoryOut]] = {"de": [], "en": []}
        self.posts: dict[Locale, list[PostDetail]] = {"de": [], "en": []}
        self.pages: list[PageOut] = []
        self.globals: dict[str, dict[str, Any]] = {}
        self.users: list[UserOut] = []
        self.password_hashes: dict[str, str] = {}
        self.submissions: list[ContactSubmissionOut] = []
        self.raw_posts: dict[int, dict[str, Any]] = {}
        self.raw_pages: dict[int, dict[str, Any]] = {}
        self.tasks: list[TaskOut] = []
        self.sponsors: list[SponsorOut] = []
        self.slides: list[MagazineSlideOut] = []
        self.gallery: list[GalleryItemOut] = []
        self.history: HistoryOut | None = None
        self.legal: dict[str, LegalPageOut] = {}
        self.rosters: dict[str, TeamRosterOut] = {}
        self.list_posts_calls: list[tuple[Locale, dict[str, Any]]] = []
        self.fail_on: set[str] = set()

    def _check(self, name: str) -> None:
        if name in self.fail_on:
            raise RuntimeError(f"{name} failed")

    # Slugs
    async def slug_exists(
        self,
        kind: str,
        slug: str,
        locale: Locale,
        *,
        exclude_id: int | None = None,
    ) -> bool:
        taken: list[tuple[int, str]] = []
        if kind == "categories":
            taken = [(c.id, c.slug) for c in self.categories[locale]]
        elif kind == "posts":
            taken = [(p.id, p.slug) for p in self.posts[locale]]
            taken += [(i, (v.get("slug") or {}).get(locale)) for i, v in self.raw_posts.items()]
        elif kind == "pages":
            taken = [(p.id, p.slug) for p in self.pages]
            taken += [(i, (v.get("slug") or {}).get(locale)) for i, v in self.raw_pages.items()]
        return any(s == slug and i != exclude_id for i, s in taken)

    # Categories
    async def list_categories(self, locale: Locale) -> list[CategoryOut]:
        self._check("list_categories")
        return [c for c in self.categories[locale] if c.active]

    async def get_category(self, category_id: int, locale: Locale) -> CategoryOut | None:
        return next((c for c in self.categories[locale] if c.id == category_id), None)

    async def get_category_by_slug(self, slug: str, locale: Locale) -> CategoryOut | None:
        self._check("get_category_by_slug")
        for loc in (locale, "en" if locale == "de" else "de"):
            for category in self.categories[loc]:
                if category.slug == slug:
                    return await self.get_category(category.id, locale)
        return None

    async def create_category(self, values: dict[str, Any]) -> int:
        category_id = len(self.categories["de"]) + 1
        for locale in ("de", "en"):
            doc = resolve_document(values, locale)
            self.categories[locale].append(CategoryOut(id=category_id, name=doc["name"], slug=doc["slug"]))
        return category_id

    async def set_category_active(self, category_id: int, active: bool) -> bool:
        found = False
        for locale in ("de", "en"):
            for category in self.categories[locale]:
                if category.id == category_id:
                    category.active = active
                    found = True
        return found

    # Posts
    def _published(self, locale: Locale, category_id: int | None = None) -> list[PostDetail]:
        posts = [p for p in self.posts[locale] if p.status == "published"]
        if category_id is not None:
            posts = [p for p in posts if p.category and p.category.id == category_id]
        return sorted(
            posts,
            key=lambda p: p.published_date or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )

    async def list_posts(
        self,
        locale: Locale,
        *,
        category_id: int | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[PostSummary]:
        self._check("list_posts")
        self.list_posts_calls.append((locale, {"category_id": category_id, "limit": limit}))
        return self._published(locale, category_id)[offset : offset + limit]

    async def count_posts(self, *, category_id: int | None = None) -> int:
        return len(self._published("de", category_id))

    async def get_post_by_slug(
        self,
        slug: str,
        *,
        slug_locale: Locale,
        locale: Locale,
        category_id: int | None = None,
    ) -> PostDetail | None:
        for post in self._published(slug_locale, category_id):
            if post.slug == slug:
                return await self.get_post(post.id, locale)
        return None

    async def get_post(self, post_id: int, locale: Locale) -> PostDetail | None:
        return next((p for p in self._published(locale) if p.id == post_id), None)

    async def adjacent_posts(
        self,
        published_date: datetime | None,
        locale: Locale,
        *,
        category_id: int | None = None,
    ) -> tuple[PostSummary | None, PostSummary | None]:
        posts = self._published(locale, category_id)
        older = [p for p in posts if p.published_date and published_date and p.published_date < published_date]
        newer = [p for p in posts if p.published_date and published_date and p.published_date > published_date]
        return (older[0] if older else None, newer[-1] if newer else None)

    async def get_post_raw(self, post_id: int) -> dict[str, Any] | None:
        return copy.deepcopy(self.raw_posts.get(post_id))

    async def create_post(self, values: dict[str, Any]) -> int:
        post_id = len(self.raw_posts) + 1
        self.raw_posts[post_id] = copy.deepcopy(values)
        return post_id

    async def update_post(self, post_id: int, values: dict[str, Any]) -> bool:
        if post_id not in self.raw_posts:
            return False
        self.raw_posts[post_id].update(copy.deepcopy(values))
        return True

    # Pages
    async def list_pages(self, locale: Locale) -> list[PageOut]:
        self._check("list_pages")
        return list(self.pages)

    async def get_page_by_slug(self, slug: str, locale: Locale) -> PageOut | None:
        return next((p for p in self.pages if p.slug == slug), None)

    async def get_page_raw(self, page_id: int) -> dict[str, Any] | None:
        return copy.deepcopy(self.raw_pages.get(page_id))

    async def create_page(self, values: dict[str, Any]) -> int:
        page_id = len(self.raw_pages) + 1
        self.raw_pages[page_id] = copy.deepcopy(values)
        return page_id

    async def update_page(self, page_id: int, values: dict[str, Any]) -> bool:
        if page_id not in self.raw_pages:
            return False
        self.raw_pages[page_id].update(copy.deepcopy(values))
        return True

    # Globals
    async def get_global(self, slug: str, locale: Locale) -> dict[str, Any] | None:
        self._check("get_global")
        data = self.globals.get(slug)
        return resolve_document(copy.deepcopy(data), locale) if data is not None else None

    async def get_global_raw(self, slug: str) -> dict[str, Any] | None:
        return copy.deepcopy(self.globals.get(slug))

    async def save_global(self, slug: str, data: dict[str, Any]) -> None:
        self.globals[slug] = copy.deepcopy(data)

    # Home page sections and standalone pages
    async def list_tasks(self, locale: Locale) -> list[TaskOut]:
        return list(self.tasks)

    async def list_sponsors(self, locale: Locale) -> list[SponsorOut]:
        return list(self.sponsors)

    async def list_magazine_slides(self, locale: Locale) -> list[MagazineSlideOut]:
        return list(self.slides)

    async def list_gallery_items(self, locale: Locale) -> list[GalleryItemOut]:
        return list(self.gallery)

    async def get_history(self, locale: Locale) -> HistoryOut | None:
        return self.history

    async def get_legal_page(self, kind: str, locale: Locale) -> LegalPageOut | None:
        return self.legal.get(kind)

    async def get_team_roster(self, key: str, locale: Locale) -> TeamRosterOut | None:
        return self.rosters.get(key)

    # Users
    async def get_user_by_email(self, email: str) -> UserOut | None:
        return next((u for u in self.users if u.email.lower() == email.lower()), None)

    async def create_user(self, email: str, password_hash: str, roles: list[str]) -> UserOut:
        if any(u.email == email for u in self.users):
            raise DuplicateRecordError(email)
        user = UserOut(id=len(self.users) + 1, email=email, roles=roles)
        self.users.append(user)
        self.password_hashes[email] = password_hash
        return user

    # Contact submissions
    async def create_contact_submission(self, values: dict[str, Any]) -> ContactSubmissionOut:
        self._check("create_contact_submission")
        submission = ContactSubmissionOut(id=len(self.submissions) + 1, **values)
        self.submissions.append(submission)
        return submission

    async def list_contact_submissions(
        self,
        *,
        status: str | None = None,
        limit: int = 100,
    ) -> list[ContactSubmissionOut]:
        items = [s for s in self.submissions if status is None or s.status == status]
        return items[:limit]

    async def set_contact_status(self, submission_id: int, status: str) -> ContactSubmissionOut | None:
        for submission in self.submissions:
            if submission.id == submission_id:
                submission.status = status
                return submission
        return None


def make_post(
    post_id: int,
    title: str,
    slug: str,
    *,
    category: CategoryOut | None = None,
    day: int = 1,
    text: str = "",
    status: str = "published",
) -> PostDetail:
    content = None
    if text:
        content = {
            "root": {
                "type": "root",
                "children": [{"type": "paragraph", "children": [{"type": "text", "text": text}]}],
            }
        }
    return PostDetail(
        id=post_id,
        title=title,
        slug=slug,
        status=status,
        category=category,
        published_date=datetime(2024, 5, day, 12, 0, tzinfo=timezone.utc),
        content=content,
    )


@pytest.fixture
def repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
async def client(repo: FakeRepository):
    """Test client with the fake repository wired in."""
    app.dependency_overrides[get_repository] = lambda: repo
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_token(monkeypatch: pytest.MonkeyPatch):
    """Configure ADMIN_TOKEN for the duration of a test."""
    monkeypatch.setenv("ADMIN_TOKEN", "test-admin-token")
    get_settings.cache_clear()
    yield "test-admin-token"
    get_settings.cache_clear()
