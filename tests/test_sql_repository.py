"""Tests for SqlContentRepository and its row-to-view conversion.

ORM rows are built in memory; `get_session` and the Redis cache helpers are
monkeypatched so no database or Redis is needed.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from feuerwehr.models import Category, Media, Post, SiteGlobal, TeamRoster, User
from feuerwehr.stores import cms
from feuerwehr.stores.cms import SqlContentRepository, _category_out, _post_fields, _text
from feuerwehr.stores.postgres import DuplicateRecordError


class FakeResult:
    def __init__(self, rows):
        self._rows = list(rows)

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None


class FakeSession:
    """Answers `execute` calls from a queue of row lists and `get` from a dict."""

    def __init__(self, results=None, objects=None, flush_error=None):
        self.results = list(results or [])
        self.objects = objects or {}
        self.flush_error = flush_error
        self.statements = []
        self.added = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        return FakeResult(self.results.pop(0) if self.results else [])

    async def get(self, model, key):
        return self.objects.get((model, key))

    def add(self, obj):
        self.added.append(obj)

    async def flush(self):
        if self.flush_error is not None:
            raise self.flush_error
        for number, obj in enumerate(self.added, start=1):
            if getattr(obj, "id", None) is None:
                obj.id = number


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


@pytest.fixture
def use_session(monkeypatch):
    def install(session: FakeSession) -> FakeSession:
        @asynccontextmanager
        async def fake_get_session():
            yield session

        monkeypatch.setattr(cms, "get_session", fake_get_session)
        return session

    return install


@pytest.fixture
def cache(monkeypatch):
    """In-memory stand-in for the Redis cache helpers."""
    store = {}

    async def get_global_cache(slug, locale):
        return store.get(("global", slug, locale))

    async def set_global_cache(slug, locale, data):
        store[("global", slug, locale)] = data

    async def get_categories_cache(locale):
        return store.get(("categories", locale))

    async def set_categories_cache(locale, categories):
        store[("categories", locale)] = categories

    monkeypatch.setattr(cms, "get_global_cache", get_global_cache)
    monkeypatch.setattr(cms, "set_global_cache", set_global_cache)
    monkeypatch.setattr(cms, "get_categories_cache", get_categories_cache)
    monkeypatch.setattr(cms, "set_categories_cache", set_categories_cache)
    return store


def _category():
    return Category(
        id=3,
        name={"de": "Einsatz", "en": "Operation"},
        slug={"de": "einsatz", "en": "operation"},
        description={"de": "Einsätze"},
        active=True,
        icon="🚒",
    )


# ============================================================
# Row -> view conversion
# ============================================================


def test_text_falls_back_to_other_locale():
    assert _text({"de": "Übung", "en": ""}, "en") == "Übung"
    assert _text(None, "de") == ""
    assert _text({"de": {"root": {}}}, "de") == ""


def test_category_out_resolves_locale():
    out = _category_out(_category(), "en")
    assert out.name == "Operation"
    assert out.slug == "operation"
    # Missing English description falls back to German
    assert out.description == "Einsätze"
    assert _category_out(None, "de") is None


def test_post_fields_resolve_every_locale_map():
    created = datetime(2024, 5, 1, tzinfo=timezone.utc)
    post = Post(
        id=7,
        title={"de": "Brand in Droß", "en": "Fire in Droß"},
        slug={"de": "brand-in-dross"},
        content={"de": {"root": {"type": "root", "children": []}}},
        status="published",
        published_date=None,
        category=_category(),
        featured_image=Media(id=2, url="https://cdn.example/a.jpg", alt={"de": "Feuer"}, mime_type="image/jpeg"),
    )
    post.created_at = created

    fields = _post_fields(post, "en")
    assert fields["title"] == "Fire in Droß"
    assert fields["slug"] == "brand-in-dross"
    assert fields["category"].name == "Operation"
    assert fields["featured_image"].alt == "Feuer"
    assert fields["featured_image"].mime_type == "image/jpeg"
    assert fields["content"] == {"root": {"type": "root", "children": []}}
    # Unpublished date falls back to creation time
    assert fields["published_date"] == created


# ============================================================
# Globals and cache
# ============================================================


@pytest.mark.asyncio
async def test_get_global_resolves_and_caches(use_session, cache):
    session = use_session(
        FakeSession(
            objects={
                (SiteGlobal, "site-settings"): SiteGlobal(
                    slug="site-settings",
                    data={"siteName": {"de": "Feuerwehr Droß", "en": "Fire Brigade Droß"}, "logo": None},
                )
            }
        )
    )
    repo = SqlContentRepository()

    resolved = await repo.get_global("site-settings", "en")
    assert resolved == {"siteName": "Fire Brigade Droß", "logo": None}
    assert cache[("global", "site-settings", "en")] == resolved

    # Served from the cache once stored
    session.objects.clear()
    assert await repo.get_global("site-settings", "en") == resolved


@pytest.mark.asyncio
async def test_get_global_without_redis(use_session):
    row = SiteGlobal(slug="alert-top-bar", data={"enabled": True})
    use_session(FakeSession(objects={(SiteGlobal, "alert-top-bar"): row}))
    # Redis never initialised: the cache is skipped
    assert await SqlContentRepository().get_global("alert-top-bar", "de") == {"enabled": True}


@pytest.mark.asyncio
async def test_missing_global_is_none(use_session, cache):
    use_session(FakeSession())
    assert await SqlContentRepository().get_global("cookie-banner", "de") is None
    assert cache == {}


# ============================================================
# Categories and slugs
# ============================================================


@pytest.mark.asyncio
async def test_list_categories_sorted_by_name(use_session, cache):
    session = use_session(FakeSession(results=[[_category()]]))
    categories = await SqlContentRepository().list_categories("de")

    assert [c.name for c in categories] == ["Einsatz"]
    assert "ORDER BY categories.name ->>" in _sql(session.statements[0])
    assert cache[("categories", "de")][0]["slug"] == "einsatz"


@pytest.mark.asyncio
async def test_slug_exists_excludes_record(use_session):
    session = use_session(FakeSession(results=[[5], []]))
    repo = SqlContentRepository()

    assert await repo.slug_exists("posts", "übung", "de") is True
    assert await repo.slug_exists("posts", "übung", "de", exclude_id=5) is False
    assert "posts.id !=" in _sql(session.statements[1])
    assert "posts.slug ->>" in _sql(session.statements[1])


@pytest.mark.asyncio
async def test_create_post_with_taken_slug(use_session):
    use_session(FakeSession(flush_error=IntegrityError("INSERT", {}, Exception("duplicate key"))))
    with pytest.raises(DuplicateRecordError):
        await SqlContentRepository().create_post({"title": {"de": "Übung"}, "slug": {"de": "übung"}})


# ============================================================
# Team rosters and users
# ============================================================


@pytest.mark.asyncio
async def test_team_roster_orders_members_and_maps_media(use_session):
    roster = TeamRoster(
        id=1,
        key="kommando",
        title={"de": "Kommando", "en": "Command"},
        intro={},
        status="published",
        members=[
            {"name": "Anna", "position": {"de": "Stellvertreterin"}, "order": 2, "image_id": 9},
            {
                "name": "Max",
                "position": {"de": "Kommandant", "en": "Commander"},
                "order": 1,
                "card_media": {"type": "video", "video_url": "https://cdn.example/max.mp4"},
            },
        ],
    )
    portrait = Media(id=9, filename="anna.jpg", alt={"de": "Anna"})
    use_session(FakeSession(results=[[roster], [portrait]]))

    out = await SqlContentRepository().get_team_roster("kommando", "en")

    assert out.title == "Command"
    assert [m.name for m in out.members] == ["Max", "Anna"]
    assert out.members[0].position == "Commander"
    assert out.members[0].card_media_type == "video"
    assert out.members[0].image is None
    assert out.members[1].position == "Stellvertreterin"
    assert out.members[1].image.filename == "anna.jpg"


@pytest.mark.asyncio
async def test_create_user_maps_integrity_error(use_session):
    use_session(FakeSession(flush_error=IntegrityError("INSERT", {}, Exception("duplicate key"))))
    with pytest.raises(DuplicateRecordError):
        await SqlContentRepository().create_user("max@example.at", "hash", ["site-admin"])


@pytest.mark.asyncio
async def test_create_user_returns_view(use_session):
    session = use_session(FakeSession())
    user = await SqlContentRepository().create_user("max@example.at", "hash", ["site-admin"])

    assert user.email == "max@example.at"
    assert user.roles == ["site-admin"]
    assert isinstance(session.added[0], User)
