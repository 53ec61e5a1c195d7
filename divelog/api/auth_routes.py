"""
===============================================================================
CRC CARD: divelog/api/auth_routes.py (Authentication and self-service)
===============================================================================

Responsibilities:
  - Login (email + password -> JWT), guarded by the per-IP login limiter.
  - Expose the current user (GET /me) and self-update (PATCH /me/update).

Collaborators:
  - application.usecases: LoginUseCase, UpdateMeUseCase
  - identity.auth_users.require_user
  - crosscutting.rate_limit.enforce_login_rate_limit
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..application.usecases import LoginUseCase, MessageResult, UpdateMeUseCase
from ..container import get_login_use_case, get_update_me_use_case
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..crosscutting.logger import logger
from ..crosscutting.rate_limit import enforce_login_rate_limit
from ..identity.auth_users import require_user
from ..identity.users import User
from ..interfaces.api.http.error_mapping import raise_service_error
from ..interfaces.api.http.schemas import (
    LoginReq,
    MessageRes,
    TokenRes,
    UpdateMeReq,
    UserEnvelope,
    UserRes,
)

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES, tags=["auth"])


@router.post(
    "/users/login",
    response_model=TokenRes,
    dependencies=[Depends(enforce_login_rate_limit)],
)
def login(
    req: LoginReq,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    result = use_case.execute(email=req.email, password=req.password)
    if result.error is not None:
        logger.info("login failed", extra={"reason": result.error.code.value})
        raise_service_error(result.error)
    return TokenRes(token=result.token)


@router.get("/me", response_model=UserEnvelope)
def me(user: User = Depends(require_user())):
    return UserEnvelope(data=UserRes.of(user))


@router.patch("/me/update", response_model=UserEnvelope | MessageRes)
def update_me(
    req: UpdateMeReq,
    user: User = Depends(require_user()),
    use_case: UpdateMeUseCase = Depends(get_update_me_use_case),
):
    result = use_case.execute(
        user, email=req.email, full_name=req.full_name, password=req.password
    )
    if result.error is not None:
        raise_service_error(result.error)
    if isinstance(result, MessageResult):
        return MessageRes(message=result.message)
    return UserEnvelope(data=UserRes.of(result.user))
