"""
===============================================================================
CRC CARD: router.py (Root router / composition)
===============================================================================

Responsibilities:
  - Define the root APIRouter included by api.main under /api/v1.
  - Attach RFC 7807 responses to the OpenAPI schema.
  - Compose the per-resource routers.

Collaborators:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (one sub-router per resource)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.logbooks import router as logbooks_router
from .routers.roles import router as roles_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Build the root v1 router (no import-time side effects beyond routing)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(users_router)
    api_router.include_router(roles_router)
    api_router.include_router(logbooks_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
