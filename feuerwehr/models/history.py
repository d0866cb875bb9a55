"""History page model (Geschichte).

Hero section plus a timeline. Timeline events are stored inline:

    [{"year": "1883", "header": {...}, "description": {...},
      "image_id": 4, "video_url": null}, ...]
"""

from typing import Any

from sqlalchemy import ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.models.media import Media
from feuerwehr.stores.postgres import Base


class HistoryPage(TimestampMixin, Base):
    """The brigade's history page."""

    __tablename__ = "history_pages"

    id: Mapped[int] = mapped_column(primary_key=True)

    hero_image_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"))
    hero_title: Mapped[LocaleMap] = localized_column()
    hero_subtitle: Mapped[LocaleMap] = localized_column()
    # Up to three hero paragraphs, each a locale map
    hero_paragraphs: Mapped[list[LocaleMap]] = mapped_column(JSONB, default=list)
    timeline_events: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, default=list)

    status: Mapped[str] = mapped_column(String(20), default="draft", index=True)

    meta_title: Mapped[LocaleMap] = localized_column()
    meta_description: Mapped[LocaleMap] = localized_column()

    hero_image: Mapped[Media | None] = relationship(lazy="joined")
