"""Contact form submissions."""

import logging

from feuerwehr.models.contact import CONTACT_STATUSES
from feuerwehr.schemas.api import ContactRequest
from feuerwehr.schemas.content import ContactSubmissionOut
from feuerwehr.services.accounts import is_valid_email
from feuerwehr.services.repository import ContentRepository

logger = logging.getLogger("uvicorn.error")

STATUS_NEW = "new"


class ContactValidationError(ValueError):
    """Invalid contact form input (HTTP 400)."""


def _clean(value: str | None) -> str:
    return (value or "").strip()


async def submit_contact(repo: ContentRepository, form: ContactRequest) -> ContactSubmissionOut:
    """Validate and store a contact form submission with status "new".

    Raises:
        ContactValidationError: A required field is missing or the email is malformed.
    """
    if not form.name or not form.email or not form.subject or not form.message:
        raise ContactValidationError("Name, email, subject, and message are required")
    if not is_valid_email(form.email):
        raise ContactValidationError("Invalid email format")

    submission = await repo.create_contact_submission(
        {
            "name": _clean(form.name),
            "email": _clean(form.email).lower(),
            "phone": _clean(form.phone) or None,
            "subject": _clean(form.subject),
            "message": _clean(form.message),
            "status": STATUS_NEW,
        }
    )
    logger.info("[contact] stored submission %s", submission.id)
    return submission


def is_valid_status(status: str) -> bool:
    return status in CONTACT_STATUSES
