"""Category model.

Post categories ("Einsatz", "Übung", ...). Name and slug are localized; the
slug is derived from the name per locale.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.stores.postgres import Base


class Category(TimestampMixin, Base):
    """Post category."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[LocaleMap] = localized_column(nullable=False)
    slug: Mapped[LocaleMap] = localized_column(nullable=False)
    description: Mapped[LocaleMap] = localized_column()

    active: Mapped[bool] = mapped_column(default=True, index=True)
    icon: Mapped[str | None] = mapped_column(String(100))  # emoji or icon name

    def __repr__(self) -> str:
        return f"<Category {self.slug}>"
