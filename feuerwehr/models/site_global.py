"""CMS global model.

A global is a singleton configuration document (site settings, cookie banner,
alert bar, ...). `data` holds the whole document; localized fields inside it
are locale maps.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from feuerwehr.stores.postgres import Base


class SiteGlobal(Base):
    """Singleton CMS document keyed by slug."""

    __tablename__ = "site_globals"

    slug: Mapped[str] = mapped_column(String(100), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<SiteGlobal {self.slug}>"
