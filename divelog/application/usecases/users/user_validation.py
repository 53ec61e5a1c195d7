"""Input checks shared by user creation and self-service updates."""

from __future__ import annotations

from pydantic.networks import validate_email

from ....crosscutting.config import get_settings
from ..results import ServiceError, validation_error

INVALID_EMAIL_MESSAGE = "Please include a valid email"


def normalize_email(raw: str | None) -> str:
    return (raw or "").strip().lower()


def check_email(email: str) -> ServiceError | None:
    try:
        _, parsed = validate_email(email)
    except ValueError:
        return validation_error(INVALID_EMAIL_MESSAGE)
    # R: "Name <addr>" parses, but only a bare address is stored.
    if parsed.lower() != email:
        return validation_error(INVALID_EMAIL_MESSAGE)
    return None


def check_password(password: str) -> ServiceError | None:
    min_length = get_settings().password_min_length
    if len(password) < min_length:
        return validation_error(
            f"Please enter a password with {min_length} or more characters"
        )
    return None
