"""Public user registration.

New users always get the "site-admin" role. Emails are stored lower-cased;
passwords are hashed with bcrypt.
"""

import logging
import re

import bcrypt

from feuerwehr.models.user import ROLE_SITE_ADMIN
from feuerwehr.schemas.content import UserOut
from feuerwehr.services.repository import ContentRepository
from feuerwehr.stores.postgres import DuplicateRecordError

logger = logging.getLogger("uvicorn.error")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8
DEFAULT_ROLES = [ROLE_SITE_ADMIN]


class RegistrationError(ValueError):
    """Invalid registration input (HTTP 400)."""


class DuplicateUserError(RegistrationError):
    """A user with this email already exists (HTTP 409)."""


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_valid_password(password: str | None) -> bool:
    return password is not None and len(password) >= MIN_PASSWORD_LENGTH


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


async def register_user(repo: ContentRepository, email: str | None, password: str | None) -> UserOut:
    """Validate and create a site-admin user.

    Raises:
        RegistrationError: Missing fields, bad email format, short password.
        DuplicateUserError: Email already registered (case-insensitive).
    """
    if not email or not password:
        raise RegistrationError("Email and password are required")
    if not is_valid_email(email):
        raise RegistrationError("Invalid email format")
    if not is_valid_password(password):
        raise RegistrationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    normalized = email.lower()
    if await repo.get_user_by_email(normalized) is not None:
        raise DuplicateUserError("User with this email already exists")

    try:
        user = await repo.create_user(normalized, hash_password(password), list(DEFAULT_ROLES))
    except DuplicateRecordError as e:
        # Lost a race with a concurrent registration
        raise DuplicateUserError("User with this email already exists") from e

    logger.info("[register] created user %s", user.id)
    return user
