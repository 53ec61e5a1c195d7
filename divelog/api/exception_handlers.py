"""
===============================================================================
CRC CARD: divelog/api/exception_handlers.py (Centralized exception handling)
===============================================================================

Responsibilities:
  - Translate application exceptions into RFC 7807 responses.
  - Log errors with request_id + error_id.
  - Never leak internals on unhandled errors.

Collaborators:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: DiveLogError, DatabaseError
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import DatabaseError, DiveLogError
from ..crosscutting.logger import logger

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_service_error(
    request: Request,
    *,
    exc: DiveLogError,
    code: ErrorCode,
    status_code: int,
    detail: str,
) -> JSONResponse:
    request_id = _request_id_from(request)

    logger.error(
        "service error",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "error": exc.message,
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=detail,
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_service_error(
        request,
        exc=exc,
        code=ErrorCode.DATABASE_ERROR,
        status_code=503,
        detail="Database operation failed.",
    )


async def divelog_error_handler(request: Request, exc: DiveLogError) -> JSONResponse:
    return await _handle_service_error(
        request,
        exc=exc,
        code=ErrorCode.INTERNAL_ERROR,
        status_code=500,
        detail=GENERIC_ERROR_MESSAGE,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies/params -> 422 Problem Details listing each field."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    app_exc = AppHTTPException(
        status_code=422,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Request validation failed.",
        errors=errors,
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Fallback for untyped exceptions.

    - Full log (stacktrace).
    - Generic response.
    """
    request_id = _request_id_from(request)

    logger.error(
        "unhandled exception",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=GENERIC_ERROR_MESSAGE,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Register handlers on the FastAPI app.

    The generic Exception handler goes last as the fallback.
    """
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(DiveLogError, divelog_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers", "GENERIC_ERROR_MESSAGE"]
