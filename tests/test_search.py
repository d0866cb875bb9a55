"""Tests for post search."""

import pytest

from feuerwehr.schemas.content import CategoryOut
from feuerwehr.services.search import MAX_RESULTS, search_posts
from tests.conftest import FakeRepository, make_post

EINSATZ_DE = CategoryOut(id=1, name="Einsatz", slug="einsatz")
EINSATZ_EN = CategoryOut(id=1, name="Operation", slug="operation")


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "a", " b "])
async def test_short_query_does_not_touch_storage(query):
    repo = FakeRepository()
    assert await search_posts(repo, query, "de") == []
    assert repo.list_posts_calls == []


@pytest.mark.asyncio
async def test_matches_title_case_insensitive():
    repo = FakeRepository()
    repo.posts["de"] = [
        make_post(1, "Brand in Droß", "brand-in-dross", category=EINSATZ_DE),
        make_post(2, "Sommerfest", "sommerfest"),
    ]
    hits = await search_posts(repo, "BRAND", "de")
    assert [hit.id for hit in hits] == [1]
    assert hits[0].category_label == "Einsatz"


@pytest.mark.asyncio
async def test_matches_body_text_and_truncates_description():
    repo = FakeRepository()
    body = "Die Feuerwehr übte " + " ".join(["lange"] * 30)
    repo.posts["de"] = [make_post(1, "Übung", "uebung", text=body)]
    hits = await search_posts(repo, "feuerwehr übte", "de")
    assert len(hits) == 1
    assert hits[0].description.endswith("...")
    assert len(hits[0].description.split()) == 20


@pytest.mark.asyncio
async def test_matches_category_label():
    repo = FakeRepository()
    repo.posts["en"] = [make_post(1, "Fire at the mill", "fire-at-the-mill", category=EINSATZ_DE)]
    hits = await search_posts(repo, "operation", "en")
    assert [hit.id for hit in hits] == [1]


@pytest.mark.asyncio
async def test_retries_in_other_locale():
    repo = FakeRepository()
    repo.posts["en"] = [make_post(1, "Vehicle handover", "vehicle-handover", category=EINSATZ_EN)]
    repo.posts["de"] = [make_post(1, "Fahrzeugübergabe", "fahrzeuguebergabe", category=EINSATZ_DE)]

    hits = await search_posts(repo, "fahrzeug", "en")

    assert [call[0] for call in repo.list_posts_calls] == ["en", "de"]
    assert [hit.id for hit in hits] == [1]
    # Labelled in the requested locale
    assert hits[0].category_label == "Operation"


@pytest.mark.asyncio
async def test_caps_results():
    repo = FakeRepository()
    repo.posts["de"] = [make_post(i, f"Übung {i}", f"uebung-{i}", day=(i % 28) + 1) for i in range(1, 16)]
    hits = await search_posts(repo, "übung", "de")
    assert len(hits) == MAX_RESULTS


@pytest.mark.asyncio
async def test_search_endpoint(client, repo):
    repo.posts["de"] = [make_post(1, "Brand in Droß", "brand-in-dross", category=EINSATZ_DE)]
    response = await client.get("/api/search", params={"q": "brand", "lang": "de"})
    assert response.status_code == 200
    data = response.json()
    assert data["posts"][0]["slug"] == "brand-in-dross"
    assert data["posts"][0]["categoryLabel"] == "Einsatz"
