"""Post search for the header search box.

Substring search over published posts:
1. Fetch up to 100 published posts resolved for the requested locale
2. Match the lower-cased query against title, category label, category slug
   and the plain text of the body
3. If nothing matched, repeat with posts resolved for the other locale
4. Return at most 10 hits
"""

import logging

from feuerwehr.schemas.api import SearchHit
from feuerwehr.schemas.content import PostSummary
from feuerwehr.services.categories import category_slug, search_label
from feuerwehr.services.localization import Locale, other_locale
from feuerwehr.services.media import media_url
from feuerwehr.services.repository import ContentRepository
from feuerwehr.services.richtext import extract_text, truncate_words

logger = logging.getLogger("uvicorn.error")

MIN_QUERY_LENGTH = 2
FETCH_LIMIT = 100
MAX_RESULTS = 10
DESCRIPTION_WORDS = 20


def _matches(post: PostSummary, needle: str, locale: Locale) -> bool:
    slug = category_slug(post.category)
    haystacks = (
        post.title,
        search_label(slug, locale),
        slug,
        extract_text(post.content),
    )
    return any(needle in (text or "").lower() for text in haystacks)


def _to_hit(post: PostSummary, locale: Locale) -> SearchHit:
    return SearchHit(
        id=post.id,
        title=post.title,
        slug=post.slug,
        category=post.category,
        category_label=search_label(category_slug(post.category), locale),
        image_url=media_url(post.featured_image) or None,
        description=truncate_words(extract_text(post.content), DESCRIPTION_WORDS),
    )


async def search_posts(repo: ContentRepository, query: str | None, locale: Locale) -> list[SearchHit]:
    """Search published posts.

    Args:
        repo: Content repository.
        query: Raw query string; fewer than 2 non-blank characters returns [] without
            touching storage.
        locale: Requested locale.

    Returns:
        Up to 10 hits, labelled in the requested locale.
    """
    term = (query or "").strip()
    if len(term) < MIN_QUERY_LENGTH:
        return []

    needle = term.lower()
    posts = await repo.list_posts(locale, limit=FETCH_LIMIT)
    matched = [post for post in posts if _matches(post, needle, locale)]

    if not matched:
        fallback = other_locale(locale)
        posts = await repo.list_posts(fallback, limit=FETCH_LIMIT)
        matched = [post for post in posts if _matches(post, needle, fallback)]
        logger.debug("[search] no hits for %r in %s, %s hits in %s", term, locale, len(matched), fallback)

    hits = [_to_hit(post, locale) for post in matched[:MAX_RESULTS]]
    logger.info("[search] q=%r lang=%s hits=%s", term, locale, len(hits))
    return hits
