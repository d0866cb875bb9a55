"""Page model.

Content pages and navigation entries. Top items are menu labels only; sub
items (with `menu_parent_id`) are full content pages.
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.stores.postgres import Base


class Page(TimestampMixin, Base):
    """Content page / menu entry."""

    __tablename__ = "pages"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Navigation
    is_top_item: Mapped[bool] = mapped_column(default=False)
    menu_label: Mapped[LocaleMap] = localized_column()
    menu_parent_id: Mapped[int | None] = mapped_column(ForeignKey("pages.id"), index=True)
    menu_order: Mapped[int] = mapped_column(Integer, default=0)

    # Content
    title: Mapped[LocaleMap] = localized_column()
    description: Mapped[LocaleMap] = localized_column()
    slug: Mapped[LocaleMap] = localized_column()
    content: Mapped[LocaleMap] = localized_column()

    status: Mapped[str] = mapped_column(String(20), default="draft", index=True)

    # SEO
    meta_title: Mapped[LocaleMap] = localized_column()
    meta_description: Mapped[LocaleMap] = localized_column()
    meta_keywords: Mapped[LocaleMap] = localized_column()

    def __repr__(self) -> str:
        return f"<Page {self.id} {self.slug}>"
