"""Post links, lookup, dates and admin write preparation."""

from datetime import datetime, timezone
from typing import Any

from feuerwehr.models.post import STATUS_DRAFT, STATUS_PUBLISHED
from feuerwehr.schemas.content import PostDetail, PostSummary
from feuerwehr.services.categories import category_path
from feuerwehr.services.localization import Locale, other_locale, to_locale_map
from feuerwehr.services.repository import ContentRepository
from feuerwehr.services.richtext import text_to_lexical
from feuerwehr.services.slugs import localized_slugs

POST_STATUSES = (STATUS_DRAFT, STATUS_PUBLISHED)

# Fields stored as locale maps
LOCALIZED_FIELDS = ("title", "slug", "content", "meta_title", "meta_description")
PLAIN_FIELDS = (
    "category_id",
    "featured_image_id",
    "gallery_image_ids",
    "author_id",
    "status",
    "show_author",
    "published_date",
)


class PostValidationError(ValueError):
    pass


def post_link(post: PostSummary | None, locale: Locale) -> str:
    """Public URL of a post: /<category>/<slug or id>?lang=<locale>."""
    if post is None:
        return f"/news?lang={locale}"
    key = post.slug.strip() if post.slug and post.slug.strip() else str(post.id)
    return f"/{category_path(post.category)}/{key}?lang={locale}"


def format_date(value: datetime | None) -> str:
    """German date format used across the site (dd.mm.yyyy)."""
    if value is None:
        return ""
    return value.strftime("%d.%m.%Y")


def prepare_post_write(
    data: dict[str, Any],
    locale: Locale,
    existing: dict[str, Any] | None = None,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Turn an admin write into column values.

    Plain strings in localized fields are stored under `locale` and merged
    with what is already stored for the other locale. Slugs are generated
    from the title when the write does not carry one: on create for every
    titled locale, on update only for locales that have no slug yet.
    `published_date` is stamped when a post becomes published.

    Raises:
        PostValidationError: Unknown status, or a create without a title.
    """
    existing = existing or {}
    creating = not existing
    values: dict[str, Any] = {}

    for field in LOCALIZED_FIELDS:
        value = data.get(field)
        if value is None:
            continue
        if field == "content" and isinstance(value, str):
            value = text_to_lexical(value)
        values[field] = to_locale_map(value, locale, existing.get(field))

    for field in PLAIN_FIELDS:
        if field in data:
            values[field] = data[field]

    status = values.get("status", existing.get("status", STATUS_DRAFT))
    if status not in POST_STATUSES:
        raise PostValidationError(f"Unknown status: {status}")

    titles = values.get("title", existing.get("title")) or {}
    if creating and not any(isinstance(t, str) and t.strip() for t in titles.values()):
        raise PostValidationError("Title is required")

    if data.get("slug") is None:
        generated = localized_slugs(titles)
        if creating:
            if generated:
                values["slug"] = generated
        else:
            current = dict(existing.get("slug") or {})
            missing = {k: v for k, v in generated.items() if not current.get(k)}
            if missing:
                values["slug"] = {**current, **missing}

    was_published = existing.get("status") == STATUS_PUBLISHED
    published_date = values.get("published_date", existing.get("published_date"))
    if status == STATUS_PUBLISHED and (not published_date or (not creating and not was_published)):
        values["published_date"] = now or datetime.now(timezone.utc)

    return values


def prepare_category_write(data: dict[str, Any], locale: Locale) -> dict[str, Any]:
    """Column values for a new category, slug generated from the name."""
    name = data.get("name")
    if not name:
        raise PostValidationError("Name is required")
    values: dict[str, Any] = {"name": to_locale_map(name, locale)}
    if data.get("description") is not None:
        values["description"] = to_locale_map(data["description"], locale)
    if data.get("slug"):
        values["slug"] = to_locale_map(data["slug"], locale)
    else:
        values["slug"] = localized_slugs(values["name"])
    if not values["slug"]:
        raise PostValidationError("Name does not produce a slug")
    values["active"] = bool(data.get("active", True))
    if data.get("icon") is not None:
        values["icon"] = data["icon"]
    return values


async def find_post(
    repo: ContentRepository,
    key: str,
    locale: Locale,
    *,
    category_id: int | None = None,
) -> PostDetail | None:
    """Resolve a post URL segment.

    Tried in order: slug in `locale`, slug in the other locale, numeric id.
    """
    for slug_locale in (locale, other_locale(locale)):
        post = await repo.get_post_by_slug(
            key,
            slug_locale=slug_locale,
            locale=locale,
            category_id=category_id,
        )
        if post is not None:
            return post

    if key.isdigit():
        post = await repo.get_post(int(key), locale)
        if post is not None and (category_id is None or (post.category and post.category.id == category_id)):
            return post
    return None
