"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: DB session, ORM operations, pool-exhaustion retry
- Redis: caching resolved CMS content, TTL policies

No content/business logic in stores - that belongs in services.
"""
