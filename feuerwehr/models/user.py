"""User model.

Accounts for the content backend. Public registration creates users with the
"site-admin" role; "admin" can additionally delete content and manage users.
"""

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from feuerwehr.models._mixins import TimestampMixin
from feuerwehr.stores.postgres import Base

ROLE_ADMIN = "admin"
ROLE_SITE_ADMIN = "site-admin"
ROLES = (ROLE_ADMIN, ROLE_SITE_ADMIN)


class User(TimestampMixin, Base):
    """Backend user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Always stored lower-cased
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(200))
    roles: Mapped[list[str]] = mapped_column(JSONB, default=lambda: [ROLE_SITE_ADMIN])

    def __repr__(self) -> str:
        return f"<User {self.email}>"
