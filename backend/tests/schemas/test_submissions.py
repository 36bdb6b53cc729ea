"""Submission Schemas — verifies normalization and first-error messages.

Tests:
    - Email trimmed and lowercased, invalid syntax rejected with "Invalid email format"
    - Contact name/message trimmed and bounded (100 / 5000)
    - Missing fields report "<Field> is required"
"""

import pytest
from pydantic import ValidationError

from app.api.validation import first_error_message
from app.schemas.submissions import ContactSubmission, WaitlistSubscribe


def _message(schema, payload) -> str:
    with pytest.raises(ValidationError) as exc:
        schema.model_validate(payload)
    return first_error_message(exc.value.errors())


def test_email_is_trimmed_and_lowercased():
    body = WaitlistSubscribe.model_validate({"email": "  USER@Example.com "})
    assert body.email == "user@example.com"


@pytest.mark.parametrize("email", [
    "not-an-email", "a@", "@b.com", "a b@c.com", "a@@b.com",
])
def test_invalid_email_rejected(email):
    assert _message(WaitlistSubscribe, {"email": email}) == "Invalid email format"


def test_missing_email():
    assert _message(WaitlistSubscribe, {}) == "Email is required"


def test_blank_email():
    assert _message(WaitlistSubscribe, {"email": "   "}) == "Email is required"


def test_non_string_email():
    assert _message(WaitlistSubscribe, {"email": 42}) == "Email must be a string"


def test_non_object_body():
    assert _message(WaitlistSubscribe, ["a@b.com"]) == "Request body must be a JSON object"


def test_contact_normalized():
    body = ContactSubmission.model_validate({
        "name": "  Ada Lovelace ",
        "email": "Ada@Example.COM",
        "message": "\n Hello there \n",
    })
    assert body.name == "Ada Lovelace"
    assert body.email == "ada@example.com"
    assert body.message == "Hello there"


def test_contact_empty_name():
    payload = {"name": "", "email": "a@b.com", "message": "hi"}
    assert _message(ContactSubmission, payload) == "Name is required"


def test_contact_name_too_long():
    payload = {"name": "x" * 101, "email": "a@b.com", "message": "hi"}
    assert _message(ContactSubmission, payload) == "Name is too long"


def test_contact_name_at_limit_accepted():
    body = ContactSubmission.model_validate(
        {"name": "x" * 100, "email": "a@b.com", "message": "hi"},
    )
    assert len(body.name) == 100


def test_contact_empty_message():
    payload = {"name": "Ada", "email": "a@b.com", "message": "   "}
    assert _message(ContactSubmission, payload) == "Message is required"


def test_contact_message_too_long():
    payload = {"name": "Ada", "email": "a@b.com", "message": "x" * 5001}
    assert _message(ContactSubmission, payload) == "Message is too long"


def test_contact_first_failing_rule_wins():
    assert _message(ContactSubmission, {"message": ""}) == "Name is required"
