"""Submission Schemas — request bodies for the waitlist and contact endpoints.

Invariants:
    - WaitlistSubscribe.email: required, valid syntax, trimmed, lowercased, <= 255 chars
    - ContactSubmission.name: required, trimmed, 1-100 chars
    - ContactSubmission.message: required, trimmed, 1-5000 chars
    - Every rule raises PydanticCustomError so err["msg"] is the exact user-facing text

Design Decisions:
    - email-validator called directly instead of EmailStr: EmailStr keeps the local
      part's case and its messages leak parser detail ("must have exactly one @-sign")
    - Deliverability (DNS) checks disabled: validation must not do network IO
"""

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, BeforeValidator, field_validator
from pydantic_core import PydanticCustomError

EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 100
MESSAGE_MAX_LENGTH = 5000


def normalize_email(value: object) -> str:
    """Trim, check syntax, lowercase."""
    if not isinstance(value, str):
        raise PydanticCustomError("not_a_string", "Email must be a string")
    candidate = value.strip()
    if not candidate:
        raise PydanticCustomError("blank", "Email is required")
    if len(candidate) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError("text_too_long", "Email is too long")
    try:
        validated = validate_email(candidate, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("invalid_email", "Invalid email format")
    return validated.normalized.lower()


NormalizedEmail = Annotated[str, BeforeValidator(normalize_email)]


def _bounded_text(value: object, label: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise PydanticCustomError(
            "not_a_string", "{label} must be a string", {"label": label},
        )
    value = value.strip()
    if not value:
        raise PydanticCustomError(
            "blank", "{label} is required", {"label": label},
        )
    if len(value) > max_length:
        raise PydanticCustomError(
            "text_too_long", "{label} is too long", {"label": label},
        )
    return value


class WaitlistSubscribe(BaseModel):
    """POST /v1/waitlist/ body."""
    email: NormalizedEmail


class ContactSubmission(BaseModel):
    """POST /v1/contact/ body."""
    name: str
    email: NormalizedEmail
    message: str

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v: object) -> str:
        return _bounded_text(v, "Name", NAME_MAX_LENGTH)

    @field_validator("message", mode="before")
    @classmethod
    def check_message(cls, v: object) -> str:
        return _bounded_text(v, "Message", MESSAGE_MAX_LENGTH)
