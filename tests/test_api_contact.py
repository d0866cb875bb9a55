"""Tests for contact form submissions."""

import pytest

from feuerwehr.schemas.api import ContactRequest
from feuerwehr.services.contact import ContactValidationError, submit_contact
from tests.conftest import FakeRepository

VALID = {
    "name": "  Max Mustermann ",
    "email": "Max@Example.AT",
    "phone": "  ",
    "subject": "Besichtigung",
    "message": "Können wir das Feuerwehrhaus besuchen?",
}


@pytest.mark.asyncio
async def test_submit_contact_cleans_fields():
    repo = FakeRepository()
    submission = await submit_contact(repo, ContactRequest(**VALID))
    assert submission.name == "Max Mustermann"
    assert submission.email == "max@example.at"
    assert submission.phone is None
    assert submission.status == "new"


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "email", "subject", "message"])
async def test_submit_contact_requires_fields(missing):
    with pytest.raises(ContactValidationError):
        await submit_contact(FakeRepository(), ContactRequest(**{**VALID, missing: ""}))


@pytest.mark.asyncio
async def test_submit_contact_rejects_bad_email():
    with pytest.raises(ContactValidationError, match="Invalid email"):
        await submit_contact(FakeRepository(), ContactRequest(**{**VALID, "email": "max@example"}))


@pytest.mark.asyncio
async def test_contact_endpoint_created(client, repo):
    response = await client.post("/api/contact", json=VALID)
    assert response.status_code == 201
    assert response.json() == {"message": "Contact submission created successfully", "id": 1}
    assert repo.submissions[0].subject == "Besichtigung"


@pytest.mark.asyncio
async def test_contact_endpoint_missing_field(client, repo):
    response = await client.post("/api/contact", json={"name": "Max", "email": "max@example.at"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert repo.submissions == []


@pytest.mark.asyncio
async def test_contact_form_page(client, repo):
    response = await client.post("/kontakt", data={**VALID, "email": "max@example.at"})
    assert response.status_code == 200
    assert "Vielen Dank" in response.text
    assert len(repo.submissions) == 1
