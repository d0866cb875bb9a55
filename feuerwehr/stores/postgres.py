"""PostgreSQL store with async SQLAlchemy.

Handles:
- Database session management
- Connection pooling
- Retrying queries that failed because the pool ran out of connections
"""

import asyncio
import logging
import re
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from feuerwehr.settings import get_settings

logger = logging.getLogger("uvicorn.error")

T = TypeVar("T")

# Messages Postgres / asyncpg / SQLAlchemy use when no connection is available.
POOL_EXHAUSTED_PATTERN = re.compile(
    r"connection slots|too many clients|QueuePool limit|remaining connection",
    re.IGNORECASE,
)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


class PoolExhaustedError(RuntimeError):
    """Raised when a query still fails on pool exhaustion after all retries."""


class DuplicateRecordError(RuntimeError):
    """Raised when a write violates a unique constraint."""


# Engine and session factory (initialized on startup)
_engine = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


async def init_db() -> None:
    """Initialize database connection pool."""
    global _engine, _session_factory

    settings = get_settings()
    _engine = create_async_engine(
        settings.async_database_url,
        echo=settings.debug,
        connect_args=settings.asyncpg_connect_args,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
    )
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def close_db() -> None:
    """Close database connection pool."""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def ping_db() -> None:
    """Run a trivial query to validate connectivity."""
    async with get_session() as session:
        await session.execute(text("SELECT 1"))


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session context manager.

    Usage:
        async with get_session() as session:
            result = await session.execute(query)
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def is_pool_exhausted(exc: BaseException) -> bool:
    """Check whether an exception (or its cause) reports an exhausted pool."""
    current: BaseException | None = exc
    while current is not None:
        if POOL_EXHAUSTED_PATTERN.search(str(current)):
            return True
        current = current.__cause__
    return False


async def with_pool_retry(
    query: Callable[[], Awaitable[T]],
    *,
    attempts: int | None = None,
    base_delay: float | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run `query`, retrying only when the connection pool is exhausted.

    Retry N waits base_delay * N seconds. Any other error is re-raised
    immediately.

    Args:
        query: Zero-argument coroutine factory; called once per attempt.
        attempts: Total attempts (defaults to settings.db_retry_attempts).
        base_delay: Linear backoff step (defaults to settings.db_retry_base_delay).
        sleep: Awaitable sleep, injectable for tests.
    """
    settings = get_settings()
    attempts = attempts if attempts is not None else settings.db_retry_attempts
    base_delay = base_delay if base_delay is not None else settings.db_retry_base_delay

    for attempt in range(1, attempts + 1):
        try:
            return await query()
        except Exception as exc:
            if not is_pool_exhausted(exc):
                raise
            if attempt >= attempts:
                raise PoolExhaustedError(
                    f"Failed to connect to database after {attempts} attempts"
                ) from exc
            delay = base_delay * attempt
            logger.warning(
                "[db] connection pool exhausted, retrying in %.1fs (attempt %s/%s)",
                delay,
                attempt + 1,
                attempts,
            )
            await sleep(delay)

    # attempts < 1 is rejected by settings validation
    raise PoolExhaustedError("No attempts configured")
