"""Tests for the main navigation menu."""

from feuerwehr.schemas.content import CategoryOut, PageOut
from feuerwehr.services.navigation import build_navigation


def _labels(items):
    return [item.label for item in items]


def test_fixed_entries_and_contact_last():
    items = build_navigation([], [], "de")
    assert _labels(items) == ["STARTSEITE", "ÜBER UNS", "NEWS", "GALERIE", "KONTAKT"]
    about = items[1]
    assert about.href == "/about"
    assert [child.href for child in about.children] == [
        "/geschichte",
        "/kommando",
        "/clerk",
        "/aktive-mitglieder",
        "/fire-brigade-youth",
        "/reserve",
    ]


def test_english_labels():
    items = build_navigation([], [], "en")
    assert _labels(items)[0] == "HOMEPAGE"
    assert items[-1].label == "CONTACT"


def test_news_children_are_categories():
    categories = [CategoryOut(id=1, name="Einsatz", slug="einsatz"), CategoryOut(id=2, name="Übung", slug="übung")]
    news = build_navigation([], categories, "de")[2]
    assert news.href == "/all_posts"
    assert [child.href for child in news.children] == ["/einsatz", "/übung"]


def test_cms_pages_sorted_with_children():
    pages = [
        PageOut(id=1, title="Verein", slug="verein", is_top_item=True, menu_label="Verein"),
        PageOut(id=2, title="Archiv", is_top_item=True, menu_label="Archiv"),
        PageOut(id=3, title="Vorstand", slug="vorstand", menu_parent_id=1),
        PageOut(id=4, title="Statuten", slug="statuten", menu_parent_id=1),
        PageOut(id=5, title="Ohne Slug", menu_parent_id=1),
    ]
    items = build_navigation(pages, [], "de")
    cms = items[4:-1]
    assert _labels(cms) == ["ARCHIV", "VEREIN"]
    assert cms[0].href is None
    assert cms[1].href == "/pages/verein"
    assert _labels(cms[1].children) == ["Statuten", "Vorstand"]
    assert items[-1].label == "KONTAKT"
