"""Home page content models: tasks, sponsors, magazine slides."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.models.media import Media
from feuerwehr.models.post import Post
from feuerwehr.stores.postgres import Base

TASK_ICONS = ("rescue", "extinguish", "recover", "protect")


class Task(TimestampMixin, Base):
    """One of the brigade's core tasks ("Retten", "Löschen", ...)."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[LocaleMap] = localized_column(nullable=False)
    description: Mapped[LocaleMap] = localized_column(nullable=False)
    # Custom icon upload wins over the built-in icon
    icon_image_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"))
    icon: Mapped[str | None] = mapped_column(String(20))
    order: Mapped[int] = mapped_column(Integer, default=0, index=True)

    icon_image: Mapped[Media | None] = relationship(lazy="joined")


class Sponsor(TimestampMixin, Base):
    """Sponsor shown in the home page slider."""

    __tablename__ = "sponsors"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[LocaleMap] = localized_column(nullable=False)
    logo_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"))
    website: Mapped[str | None] = mapped_column(Text)
    order: Mapped[int] = mapped_column(Integer, default=0, index=True)

    logo: Mapped[Media | None] = relationship(lazy="joined")


class MagazineSlide(TimestampMixin, Base):
    """Slide of the home page magazine slider, linking to a post."""

    __tablename__ = "magazine_slides"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[LocaleMap] = localized_column(nullable=False)
    excerpt: Mapped[LocaleMap] = localized_column()
    author: Mapped[str | None] = mapped_column(String(320))
    show_author: Mapped[bool] = mapped_column(default=False)

    image_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"))
    post_id: Mapped[int | None] = mapped_column(ForeignKey("posts.id"))
    order: Mapped[int] = mapped_column(Integer, default=0, index=True)
    published_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    image: Mapped[Media | None] = relationship(lazy="joined")
    post: Mapped[Post | None] = relationship(lazy="joined")
