"""URL slug generation for posts, pages and categories."""

import re
from typing import Any, Literal

from feuerwehr.services.localization import LOCALES
from feuerwehr.services.repository import ContentRepository

SlugKind = Literal["posts", "pages", "categories"]

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\-]+")
_MULTI_HYPHEN = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Create a URL-friendly slug.

    "Übung am Feuerwehrhaus!" -> "übung-am-feuerwehrhaus"
    """
    slug = str(text).lower().strip()
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_WORD.sub("", slug)
    slug = _MULTI_HYPHEN.sub("-", slug)
    return slug.strip("-")


def localized_slugs(titles: dict[str, Any]) -> dict[str, str]:
    """Slug per locale for every locale that has a non-blank title."""
    slugs: dict[str, str] = {}
    for locale in LOCALES:
        title = titles.get(locale)
        if isinstance(title, str) and title.strip():
            slug = slugify(title)
            if slug:
                slugs[locale] = slug
    return slugs


async def unique_slugs(
    repo: ContentRepository,
    kind: SlugKind,
    slugs: dict[str, Any],
    *,
    exclude_id: int | None = None,
) -> dict[str, Any]:
    """Make every slug unique among records of `kind`, per locale.

    A slug already taken by another record gets the first free numeric
    suffix: "übung" -> "übung-2" -> "übung-3". `exclude_id` is the record
    being updated, so it never collides with itself. Blank slugs are kept.
    """
    unique: dict[str, Any] = {}
    for locale in slugs:
        slug = slugs[locale]
        if locale not in LOCALES or not isinstance(slug, str) or not slug:
            unique[locale] = slug
            continue
        candidate = slug
        suffix = 2
        while await repo.slug_exists(kind, candidate, locale, exclude_id=exclude_id):
            candidate = f"{slug}-{suffix}"
            suffix += 1
        unique[locale] = candidate
    return unique
