"""Media model.

Uploaded files (images, videos, audio). Files live in object storage (`url`)
or in the local media directory (`filename`).
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.stores.postgres import Base


class Media(TimestampMixin, Base):
    """Uploaded media file."""

    __tablename__ = "media"

    id: Mapped[int] = mapped_column(primary_key=True)

    filename: Mapped[str | None] = mapped_column(String(300))
    url: Mapped[str | None] = mapped_column(Text)
    mime_type: Mapped[str | None] = mapped_column(String(100))  # e.g. "image/jpeg"
    filesize: Mapped[int | None] = mapped_column(Integer)
    width: Mapped[int | None] = mapped_column(Integer)
    height: Mapped[int | None] = mapped_column(Integer)

    alt: Mapped[LocaleMap] = localized_column()

    def __repr__(self) -> str:
        return f"<Media {self.id} {self.filename or self.url}>"
