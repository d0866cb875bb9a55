"""Admin write preparation for content pages."""

from typing import Any

from feuerwehr.models.post import STATUS_DRAFT, STATUS_PUBLISHED
from feuerwehr.services.localization import Locale, to_locale_map
from feuerwehr.services.richtext import text_to_lexical
from feuerwehr.services.slugs import localized_slugs

LOCALIZED_FIELDS = (
    "title",
    "slug",
    "description",
    "menu_label",
    "content",
    "meta_title",
    "meta_description",
    "meta_keywords",
)
PLAIN_FIELDS = ("is_top_item", "menu_parent_id", "menu_order", "status")


class PageValidationError(ValueError):
    pass


def prepare_page_write(
    data: dict[str, Any],
    locale: Locale,
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Turn an admin page write into column values.

    Top items may be bare menu labels; sub pages need a title and get a slug
    generated from it when none is given.
    """
    existing = existing or {}
    values: dict[str, Any] = {}

    for field in LOCALIZED_FIELDS:
        value = data.get(field)
        if value is None:
            continue
        if field == "content" and isinstance(value, str):
            value = text_to_lexical(value)
        values[field] = to_locale_map(value, locale, existing.get(field))

    for field in PLAIN_FIELDS:
        if data.get(field) is not None:
            values[field] = data[field]

    status = values.get("status", existing.get("status", STATUS_DRAFT))
    if status not in (STATUS_DRAFT, STATUS_PUBLISHED):
        raise PageValidationError(f"Unknown status: {status}")

    is_top_item = values.get("is_top_item", existing.get("is_top_item", False))
    if is_top_item and values.get("menu_parent_id", existing.get("menu_parent_id")) is not None:
        raise PageValidationError("Top items cannot have a parent")

    titles = values.get("title", existing.get("title")) or {}
    if not is_top_item and not existing and not any(
        isinstance(t, str) and t.strip() for t in titles.values()
    ):
        raise PageValidationError("Title is required")

    if data.get("slug") is None:
        current = dict(existing.get("slug") or {})
        missing = {k: v for k, v in localized_slugs(titles).items() if not current.get(k)}
        if missing:
            values["slug"] = {**current, **missing}

    return values
