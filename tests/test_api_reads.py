"""Tests for the public read endpoints."""

import pytest

from feuerwehr.schemas.content import CategoryOut, PageOut
from feuerwehr.services.cms_globals import default_global
from feuerwehr.settings import get_settings


@pytest.mark.asyncio
async def test_site_settings_resolved_for_locale(client, repo):
    repo.globals["site-settings"] = default_global("site-settings")

    de = (await client.get("/api/site-settings", params={"lang": "de"})).json()
    en = (await client.get("/api/site-settings", params={"locale": "en"})).json()

    assert de["siteSettings"]["siteName"] == "Freiwillige Feuerwehr Droß"
    assert en["siteSettings"]["siteName"] == "Volunteer Fire Brigade Droß"


@pytest.mark.asyncio
async def test_unknown_locale_falls_back_to_german(client, repo):
    repo.globals["site-settings"] = default_global("site-settings")
    data = (await client.get("/api/site-settings", params={"lang": "fr"})).json()
    assert data["siteSettings"]["siteName"] == "Freiwillige Feuerwehr Droß"


@pytest.mark.asyncio
async def test_locale_must_match_exactly(client, repo):
    repo.globals["site-settings"] = default_global("site-settings")
    data = (await client.get("/api/site-settings", params={"lang": "EN"})).json()
    assert data["siteSettings"]["siteName"] == "Freiwillige Feuerwehr Droß"


@pytest.mark.asyncio
async def test_configured_default_locale(client, repo, monkeypatch):
    monkeypatch.setenv("DEFAULT_LOCALE", "en")
    get_settings.cache_clear()
    repo.globals["site-settings"] = default_global("site-settings")
    try:
        unset = (await client.get("/api/site-settings")).json()
        german = (await client.get("/api/site-settings", params={"lang": "de"})).json()
    finally:
        get_settings.cache_clear()
    assert unset["siteSettings"]["siteName"] == "Volunteer Fire Brigade Droß"
    assert german["siteSettings"]["siteName"] == "Freiwillige Feuerwehr Droß"


@pytest.mark.asyncio
async def test_missing_global_is_null(client):
    response = await client.get("/api/contact-info")
    assert response.status_code == 200
    assert response.json()["contactInfo"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, key",
    [
        ("/api/site-settings", "siteSettings"),
        ("/api/contact-info", "contactInfo"),
        ("/api/sidebar-widgets", "sidebarWidgets"),
        ("/api/map-settings", "mapSettings"),
        ("/api/home-pages", "homePages"),
    ],
)
async def test_read_failure_answers_200_with_null(client, repo, path, key):
    repo.fail_on.add("get_global")
    response = await client.get(path)
    assert response.status_code == 200
    data = response.json()
    assert data[key] is None
    assert data["error"]


@pytest.mark.asyncio
async def test_categories_failure_answers_empty_list(client, repo):
    repo.fail_on.add("list_categories")
    response = await client.get("/api/public-categories")
    assert response.status_code == 200
    assert response.json()["categories"] == []


@pytest.mark.asyncio
async def test_public_categories_only_active(client, repo):
    repo.categories["de"] = [
        CategoryOut(id=1, name="Einsatz", slug="einsatz"),
        CategoryOut(id=2, name="Archiv", slug="archiv", active=False),
    ]
    data = (await client.get("/api/public-categories")).json()
    assert [c["slug"] for c in data["categories"]] == ["einsatz"]


@pytest.mark.asyncio
async def test_published_pages(client, repo):
    repo.pages = [PageOut(id=1, title="Verein", slug="verein", is_top_item=True, menu_label="Verein")]
    data = (await client.get("/api/published-pages")).json()
    assert data["pages"][0]["menuLabel"] == "Verein"
    assert data["pages"][0]["isTopItem"] is True


@pytest.mark.asyncio
async def test_cookie_banner_returns_document(client, repo):
    repo.globals["cookie-banner"] = default_global("cookie-banner")
    data = (await client.get("/api/cookie-banner", params={"lang": "en"})).json()
    assert data["title"] == "We use cookies"


@pytest.mark.asyncio
async def test_alert_top_bar_defaults_when_missing(client):
    data = (await client.get("/api/alert-top-bar")).json()
    assert data["active"] is False
    assert data["color"] == "red"
    assert "readMoreLink" not in data
