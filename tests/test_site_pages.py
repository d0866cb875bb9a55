"""Tests for the public HTML pages."""

import pytest

from feuerwehr.schemas.content import (
    CategoryOut,
    LegalPageOut,
    MagazineSlideOut,
    PageOut,
    TaskOut,
    TeamMemberOut,
    TeamRosterOut,
)
from feuerwehr.services.cms_globals import default_global
from tests.conftest import make_post

EINSATZ = CategoryOut(id=1, name="einsatz", slug="einsatz")


@pytest.fixture
def seeded(repo):
    repo.globals["site-settings"] = default_global("site-settings")
    repo.globals["contact-info"] = default_global("contact-info")
    repo.categories["de"] = [EINSATZ]
    repo.categories["en"] = [CategoryOut(id=1, name="operation", slug="operation")]
    repo.posts["de"] = [
        make_post(1, "Erster Einsatz", "erster-einsatz", category=EINSATZ, day=1),
        make_post(2, "Zweiter Einsatz", "zweiter-einsatz", category=EINSATZ, day=2, text="Brand im Ortszentrum"),
        make_post(3, "Dritter Einsatz", "dritter-einsatz", category=EINSATZ, day=3),
    ]
    repo.tasks = [TaskOut(id=1, title="Retten", icon="rescue")]
    return repo


@pytest.mark.asyncio
async def test_home_renders(client, seeded):
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Freiwillige Feuerwehr Droß" in response.text
    assert "Retten" in response.text
    assert "Zweiter Einsatz" in response.text
    assert "/einsatz/zweiter-einsatz?lang=de" in response.text


@pytest.mark.asyncio
async def test_home_slider_wraps(client, seeded):
    seeded.slides = [MagazineSlideOut(id=1, title="Slide A"), MagazineSlideOut(id=2, title="Slide B")]
    response = await client.get("/", params={"slide": 3})
    assert "Slide B" in response.text
    assert "slide=0" in response.text


@pytest.mark.asyncio
async def test_home_survives_layout_failures(client, seeded):
    seeded.fail_on.update({"list_categories", "list_pages", "get_global"})
    response = await client.get("/")
    assert response.status_code == 200
    assert "STARTSEITE" in response.text


@pytest.mark.asyncio
async def test_english_navigation(client, seeded):
    response = await client.get("/", params={"lang": "en"})
    assert "HOMEPAGE" in response.text
    assert "Volunteer Fire Brigade Droß" in response.text


@pytest.mark.asyncio
async def test_category_page_lists_posts(client, seeded):
    response = await client.get("/einsatz")
    assert response.status_code == 200
    assert "Einsatz" in response.text
    assert "Dritter Einsatz" in response.text


@pytest.mark.asyncio
async def test_unknown_category_is_404(client, seeded):
    response = await client.get("/gibt-es-nicht")
    assert response.status_code == 404
    assert "nicht gefunden" in response.text


@pytest.mark.asyncio
async def test_post_page_with_neighbours(client, seeded):
    response = await client.get("/einsatz/zweiter-einsatz")
    assert response.status_code == 200
    assert "Brand im Ortszentrum" in response.text
    assert "Erster Einsatz" in response.text
    assert "Dritter Einsatz" in response.text


@pytest.mark.asyncio
async def test_post_page_by_id(client, seeded):
    response = await client.get("/einsatz/2")
    assert response.status_code == 200
    assert "Zweiter Einsatz" in response.text


@pytest.mark.asyncio
async def test_missing_post_is_404(client, seeded):
    response = await client.get("/einsatz/nicht-da")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_all_posts_filtered_by_category(client, seeded):
    response = await client.get("/all_posts", params={"category": "einsatz"})
    assert response.status_code == 200
    assert "Erster Einsatz" in response.text


@pytest.mark.asyncio
async def test_legal_pages(client, seeded):
    assert (await client.get("/impressum")).status_code == 404
    seeded.legal["impressum"] = LegalPageOut(id=1, kind="impressum", title="Impressum")
    response = await client.get("/impressum")
    assert response.status_code == 200
    assert "Impressum" in response.text


@pytest.mark.asyncio
async def test_about_page_is_bilingual(client, seeded):
    de = await client.get("/about")
    en = await client.get("/about", params={"lang": "en"})
    assert de.status_code == 200
    assert "Wer wir sind" in de.text
    assert "Unser Auftrag" in de.text
    assert en.status_code == 200
    assert "Who we are" in en.text
    assert "Values that guide us" in en.text
    assert 'href="/geschichte?lang=en"' in en.text


@pytest.mark.asyncio
async def test_team_page(client, seeded):
    seeded.rosters["kommando"] = TeamRosterOut(
        key="kommando",
        title="Kommando",
        members=[TeamMemberOut(name="Anna Huber", rank="HBI", position="Kommandantin")],
    )
    response = await client.get("/kommando")
    assert response.status_code == 200
    assert "Anna Huber" in response.text
    assert (await client.get("/reserve")).status_code == 404


@pytest.mark.asyncio
async def test_cms_page_and_menu(client, seeded):
    seeded.pages = [PageOut(id=1, title="Verein", slug="verein", is_top_item=True, menu_label="Verein")]
    response = await client.get("/pages/verein")
    assert response.status_code == 200
    assert "/pages/verein?lang=de" in response.text


@pytest.mark.asyncio
async def test_register_form(client, seeded):
    response = await client.post("/register", data={"email": "neu@ff-dross.at", "password": "geheim123"})
    assert response.status_code == 201
    assert seeded.users[0].email == "neu@ff-dross.at"

    response = await client.post("/register", data={"email": "neu@ff-dross.at", "password": "geheim123"})
    assert response.status_code == 409
