"""Shared column helpers for CMS models."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

# Locale map column: {"de": ..., "en": ...}
LocaleMap = dict[str, Any]


def localized_column(nullable: bool = True) -> Mapped[Any]:
    """JSONB column holding a locale map."""
    return mapped_column(JSONB, nullable=nullable, default=dict)


class TimestampMixin:
    """created_at / updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
