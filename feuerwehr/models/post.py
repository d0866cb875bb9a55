"""Post model.

News articles, operation and training reports, events. Drafts are only
visible to the backend; the public site reads published posts.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.models.category import Category
from feuerwehr.models.media import Media
from feuerwehr.models.user import User
from feuerwehr.stores.postgres import Base

STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"


class Post(TimestampMixin, Base):
    """News post."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[LocaleMap] = localized_column(nullable=False)
    slug: Mapped[LocaleMap] = localized_column(nullable=False)
    # Lexical editor state per locale
    content: Mapped[LocaleMap] = localized_column()

    # Relations
    category_id: Mapped[int | None] = mapped_column(ForeignKey("categories.id"), index=True)
    featured_image_id: Mapped[int | None] = mapped_column(ForeignKey("media.id"))
    author_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"))
    # Ordered media ids for the article slider
    gallery_image_ids: Mapped[list[int]] = mapped_column(JSONB, default=list)

    category: Mapped[Category | None] = relationship(lazy="joined")
    featured_image: Mapped[Media | None] = relationship(lazy="joined")
    author: Mapped[User | None] = relationship(lazy="joined")

    # Publishing
    status: Mapped[str] = mapped_column(String(20), default=STATUS_DRAFT, index=True)
    published_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), index=True)
    show_author: Mapped[bool] = mapped_column(default=False)

    # SEO
    meta_title: Mapped[LocaleMap] = localized_column()
    meta_description: Mapped[LocaleMap] = localized_column()

    def __repr__(self) -> str:
        return f"<Post {self.id} {self.status}>"
