"""Main navigation menu.

Fixed entries (home, about us with its sub pages, news, gallery) followed by
the CMS pages: top items sorted by label, each with its sub pages sorted by
title. A top item without a slug is a label only. Contact always comes last.
"""

from feuerwehr.schemas.content import CategoryOut, NavItem, PageOut
from feuerwehr.services.localization import Locale

_LABELS: dict[str, dict[str, str]] = {
    "home": {"de": "STARTSEITE", "en": "HOMEPAGE"},
    "about": {"de": "ÜBER UNS", "en": "ABOUT US"},
    "history": {"de": "Geschichte", "en": "History"},
    "command": {"de": "Kommando", "en": "Command"},
    "clerk": {"de": "Chargen", "en": "Clerks"},
    "active": {"de": "Aktive Mitglieder", "en": "Active Members"},
    "youth": {"de": "Feuerwehrjugend", "en": "Fire Brigade Youth"},
    "reserve": {"de": "Reserve", "en": "Reserve"},
    "news": {"de": "NEWS", "en": "NEWS"},
    "gallery": {"de": "GALERIE", "en": "GALLERY"},
    "contact": {"de": "KONTAKT", "en": "CONTACT"},
}

ABOUT_PAGES = (
    ("history", "/geschichte"),
    ("command", "/kommando"),
    ("clerk", "/clerk"),
    ("active", "/aktive-mitglieder"),
    ("youth", "/fire-brigade-youth"),
    ("reserve", "/reserve"),
)


def _label(key: str, locale: Locale) -> str:
    return _LABELS[key][locale]


def _page_label(page: PageOut) -> str:
    return page.menu_label or page.title


def build_navigation(pages: list[PageOut], categories: list[CategoryOut], locale: Locale) -> list[NavItem]:
    """Menu entries for the page header. Hrefs are locale-free paths."""
    items = [
        NavItem(label=_label("home", locale), href="/"),
        NavItem(
            label=_label("about", locale),
            href="/about",
            children=[NavItem(label=_label(key, locale), href=href) for key, href in ABOUT_PAGES],
        ),
        NavItem(
            label=_label("news", locale),
            href="/all_posts",
            children=[NavItem(label=c.name, href=f"/{c.slug}") for c in categories if c.slug],
        ),
        NavItem(label=_label("gallery", locale), href="/gallery"),
    ]

    top_items = sorted(
        (page for page in pages if page.is_top_item and _page_label(page)),
        key=lambda page: _page_label(page).lower(),
    )
    for top in top_items:
        children = sorted(
            (
                page
                for page in pages
                if not page.is_top_item and page.menu_parent_id == top.id and page.slug
            ),
            key=lambda page: page.title.lower(),
        )
        items.append(
            NavItem(
                label=_page_label(top).upper(),
                href=f"/pages/{top.slug}" if top.slug.strip() else None,
                children=[NavItem(label=child.title, href=f"/pages/{child.slug}") for child in children],
            )
        )

    items.append(NavItem(label=_label("contact", locale), href="/kontakt"))
    return items
