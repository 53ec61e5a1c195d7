"""
===============================================================================
CRC CARD: routers/users.py
===============================================================================

Class/Module:
    User Router

Responsibilities:
    - Expose user management endpoints (create, list, read, update, delete,
      enable/disable).
    - Convert HTTP requests into use case calls.
    - Translate ServiceError into RFC 7807.

Collaborators:
    - application.usecases (user use cases)
    - container (DI factories)
    - dependencies (current_principal, listing_query)
    - schemas.users (DTOs)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from divelog.application.usecases import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListingQuery,
    ListUsersUseCase,
    SetUserEnabledUseCase,
    UpdateUserUseCase,
)
from divelog.container import (
    get_create_user_use_case,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_set_user_enabled_use_case,
    get_update_user_use_case,
)
from divelog.domain.access_policy import Principal

from ..dependencies import current_principal, listing_query
from ..error_mapping import raise_service_error
from ..schemas import (
    CreateUserReq,
    MessageRes,
    UpdateUserReq,
    UserEnvelope,
    UserListEnvelope,
    UserRes,
)

router = APIRouter(tags=["users"])


def _message_or_raise(result) -> MessageRes:
    if result.error is not None:
        raise_service_error(result.error)
    return MessageRes(message=result.message)


@router.post("/users", response_model=UserEnvelope, status_code=201)
def create_user(
    req: CreateUserReq,
    actor: Principal = Depends(current_principal),
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
):
    result = use_case.execute(
        actor,
        email=req.email,
        full_name=req.full_name,
        password=req.password,
        role_name=req.role_name,
    )
    if result.error is not None:
        raise_service_error(result.error)
    return UserEnvelope(data=UserRes.of(result.user))


@router.get("/users", response_model=UserListEnvelope)
def list_users(
    query: ListingQuery = Depends(listing_query),
    actor: Principal = Depends(current_principal),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    result = use_case.execute(actor, query)
    if result.error is not None:
        raise_service_error(result.error)
    return UserListEnvelope(data=[UserRes.of(u) for u in result.users])


@router.patch("/users/activate/{user_id}", response_model=MessageRes)
def activate_user(
    user_id: str,
    actor: Principal = Depends(current_principal),
    use_case: SetUserEnabledUseCase = Depends(get_set_user_enabled_use_case),
):
    return _message_or_raise(use_case.execute(actor, user_id, enabled=True))


@router.patch("/users/deactivate/{user_id}", response_model=MessageRes)
def deactivate_user(
    user_id: str,
    actor: Principal = Depends(current_principal),
    use_case: SetUserEnabledUseCase = Depends(get_set_user_enabled_use_case),
):
    return _message_or_raise(use_case.execute(actor, user_id, enabled=False))


@router.get("/users/{user_id}", response_model=UserEnvelope)
def get_user(
    user_id: str,
    actor: Principal = Depends(current_principal),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = use_case.execute(actor, user_id)
    if result.error is not None:
        raise_service_error(result.error)
    return UserEnvelope(data=UserRes.of(result.user))


@router.patch("/users/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: str,
    req: UpdateUserReq,
    actor: Principal = Depends(current_principal),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    result = use_case.execute(
        actor, user_id, full_name=req.full_name, enabled=req.enabled
    )
    if result.error is not None:
        raise_service_error(result.error)
    return UserEnvelope(data=UserRes.of(result.user))


@router.delete("/users/{user_id}", response_model=MessageRes)
def delete_user(
    user_id: str,
    actor: Principal = Depends(current_principal),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    return _message_or_raise(use_case.execute(actor, user_id))
