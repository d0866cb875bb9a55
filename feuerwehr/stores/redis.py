"""Redis store for caching resolved CMS content.

Handles:
- Caching with TTL policies
- Invalidation when the admin API writes a global

TTL policies:
- Resolved globals (site settings, banners, widgets): settings.globals_cache_ttl
- Public category list: 5 minutes
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from feuerwehr.settings import get_settings

# TTL constants (in seconds)
TTL_CATEGORIES = 300  # 5 minutes

# Key prefixes
PREFIX_GLOBAL = "cms:global:"
PREFIX_CATEGORIES = "cms:categories:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get(key: str) -> str | None:
    """Get value from cache.

    Args:
        key: Cache key.

    Returns:
        Cached value or None if not found.
    """
    return await _get_redis().get(key)


async def cache_set(key: str, value: str, ttl: int) -> None:
    """Set value in cache with TTL.

    Args:
        key: Cache key.
        value: Value to cache.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, value)


async def cache_delete(*keys: str) -> None:
    """Delete values from cache.

    Args:
        keys: Cache keys.
    """
    if keys:
        await _get_redis().delete(*keys)


async def cache_get_json(key: str) -> Any | None:
    """Get JSON value from cache.

    Args:
        key: Cache key.

    Returns:
        Parsed JSON value or None if not found.
    """
    value = await cache_get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: Any, ttl: int) -> None:
    """Set JSON value in cache.

    Args:
        key: Cache key.
        value: JSON-serialisable value to cache.
        ttl: Time-to-live in seconds.
    """
    await cache_set(key, json.dumps(value, default=str), ttl)


# ============================================================
# CMS content cache
# ============================================================


def _global_key(slug: str, locale: str) -> str:
    return f"{PREFIX_GLOBAL}{slug}:{locale}"


async def get_global_cache(slug: str, locale: str) -> dict[str, Any] | None:
    """Get a resolved global for one locale."""
    return await cache_get_json(_global_key(slug, locale))


async def set_global_cache(slug: str, locale: str, data: dict[str, Any]) -> None:
    """Cache a resolved global for one locale."""
    ttl = get_settings().globals_cache_ttl
    if ttl <= 0:
        return
    await cache_set_json(_global_key(slug, locale), data, ttl)


async def invalidate_global_cache(slug: str) -> None:
    """Drop every locale variant of a global."""
    await cache_delete(_global_key(slug, "de"), _global_key(slug, "en"))


async def get_categories_cache(locale: str) -> list[dict[str, Any]] | None:
    """Get the cached active category list for one locale."""
    return await cache_get_json(f"{PREFIX_CATEGORIES}{locale}")


async def set_categories_cache(locale: str, categories: list[dict[str, Any]]) -> None:
    """Cache the active category list for one locale."""
    await cache_set_json(f"{PREFIX_CATEGORIES}{locale}", categories, TTL_CATEGORIES)


async def invalidate_categories_cache() -> None:
    """Drop the category list for every locale."""
    await cache_delete(f"{PREFIX_CATEGORIES}de", f"{PREFIX_CATEGORIES}en")
