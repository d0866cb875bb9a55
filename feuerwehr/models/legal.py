"""Legal page model (Impressum, Datenschutz).

One record per kind; the unique constraint keeps each a singleton.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from feuerwehr.models._mixins import LocaleMap, TimestampMixin, localized_column
from feuerwehr.stores.postgres import Base

LEGAL_KINDS = ("impressum", "datenschutz")


class LegalPage(TimestampMixin, Base):
    """Impressum or privacy policy."""

    __tablename__ = "legal_pages"

    id: Mapped[int] = mapped_column(primary_key=True)

    kind: Mapped[str] = mapped_column(String(20), unique=True)
    title: Mapped[LocaleMap] = localized_column(nullable=False)
    description: Mapped[LocaleMap] = localized_column()
    content: Mapped[LocaleMap] = localized_column()

    status: Mapped[str] = mapped_column(String(20), default="draft", index=True)

    meta_title: Mapped[LocaleMap] = localized_column()
    meta_description: Mapped[LocaleMap] = localized_column()
