"""Contact submission model.

Messages sent through the public contact form. Only admins read them.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from feuerwehr.models._mixins import TimestampMixin
from feuerwehr.stores.postgres import Base

CONTACT_STATUSES = ("new", "in_progress", "resolved")


class ContactSubmission(TimestampMixin, Base):
    """Contact form submission."""

    __tablename__ = "contact_submissions"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(320), index=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    subject: Mapped[str] = mapped_column(String(300))
    message: Mapped[str] = mapped_column(Text)

    status: Mapped[str] = mapped_column(String(20), default="new", index=True)

    def __repr__(self) -> str:
        return f"<ContactSubmission {self.id} {self.status}>"
