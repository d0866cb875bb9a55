"""Gallery item model."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.models.media import Media
from feuerwehr.stores.postgres import Base

GALLERY_MEDIA_TYPES = ("image", "video", "audio")


class GalleryItem(TimestampMixin, Base):
    """Image, video or audio clip on the gallery page."""

    __tablename__ = "gallery_items"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[LocaleMap] = localized_column()
    description: Mapped[LocaleMap] = localized_column()
    media_type: Mapped[str] = mapped_column(String(10), default="image")
    media_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"))
    order: Mapped[int] = mapped_column(Integer, default=0, index=True)
    featured: Mapped[bool] = mapped_column(default=False)

    media: Mapped[Media | None] = relationship(lazy="joined")
