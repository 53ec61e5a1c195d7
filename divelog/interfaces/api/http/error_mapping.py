"""
===============================================================================
CRC CARD: error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsibilities:
  - Translate ServiceErrorCode into RFC 7807 HTTP exceptions.
  - Keep the mapping in one place so routers stay thin.

Rules:
  - Use cases return typed errors (code + message); the message is sent
    verbatim as "detail".
  - Duplicate user emails are 400, duplicate role names 409.

Collaborators:
  - application.usecases.ServiceError / ServiceErrorCode
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from ....application.usecases import ServiceError, ServiceErrorCode
from ....crosscutting.error_responses import (
    conflict,
    duplicate,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)


def raise_service_error(error: ServiceError) -> None:
    """Raise the HTTP exception matching a use case error."""
    if error.code == ServiceErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == ServiceErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message)
    if error.code == ServiceErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == ServiceErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if error.code == ServiceErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == ServiceErrorCode.DUPLICATE:
        raise duplicate(error.message)
    raise internal_error(error.message)
