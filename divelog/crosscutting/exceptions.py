"""
===============================================================================
MODULE: Typed internal errors
===============================================================================

Goal
----
Internal exceptions that carry:
- a stable error_code
- an error_id for log correlation
- a human message (no secrets)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  DiveLogError + subclasses

Responsibilities:
  - Standardize internal errors that are later mapped to HTTP
  - Generate error_id for tracing

Collaborators:
  - api/exception_handlers.py (maps to AppHTTPException)
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class DiveLogError(Exception):
    """Base for internal system errors."""

    error_code: str = "DIVELOG_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message} (error_id={self.error_id})"


class DatabaseError(DiveLogError):
    """Persistence failure (connection, query, constraint not handled upstream)."""

    error_code = "DATABASE_ERROR"


__all__ = ["DiveLogError", "DatabaseError"]
