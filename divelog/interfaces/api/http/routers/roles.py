"""
Role Router (super admin only).

Every endpoint depends on require_role(SUPER_ADMIN): a missing or unresolvable
principal gets the usual 401, any other role -> 403 "Forbidden!".
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from divelog.application.usecases import (
    CreateRoleUseCase,
    DeleteRoleUseCase,
    GetRoleUseCase,
    ListRolesUseCase,
    UpdateRoleUseCase,
)
from divelog.container import (
    get_create_role_use_case,
    get_delete_role_use_case,
    get_get_role_use_case,
    get_list_roles_use_case,
    get_update_role_use_case,
)
from divelog.identity.auth_users import require_role
from divelog.identity.roles import Role

from ..error_mapping import raise_service_error
from ..schemas import (
    CreateRoleReq,
    MessageRes,
    RoleEnvelope,
    RoleListEnvelope,
    RoleRes,
    UpdateRoleReq,
)

router = APIRouter(
    tags=["roles"], dependencies=[Depends(require_role(Role.SUPER_ADMIN))]
)


def _role_or_raise(result) -> RoleEnvelope:
    if result.error is not None:
        raise_service_error(result.error)
    return RoleEnvelope(data=RoleRes.of(result.role))


@router.post("/roles", response_model=RoleEnvelope, status_code=201)
def create_role(
    req: CreateRoleReq,
    use_case: CreateRoleUseCase = Depends(get_create_role_use_case),
):
    return _role_or_raise(use_case.execute(name=req.name, description=req.description))


@router.get("/roles", response_model=RoleListEnvelope)
def list_roles(use_case: ListRolesUseCase = Depends(get_list_roles_use_case)):
    result = use_case.execute()
    return RoleListEnvelope(data=[RoleRes.of(r) for r in result.roles])


@router.get("/roles/{role_id}", response_model=RoleEnvelope)
def get_role(
    role_id: str,
    use_case: GetRoleUseCase = Depends(get_get_role_use_case),
):
    return _role_or_raise(use_case.execute(role_id))


@router.patch("/roles/{role_id}", response_model=RoleEnvelope)
def update_role(
    role_id: str,
    req: UpdateRoleReq,
    use_case: UpdateRoleUseCase = Depends(get_update_role_use_case),
):
    return _role_or_raise(use_case.execute(role_id, description=req.description))


@router.delete("/roles/{role_id}", response_model=MessageRes)
def delete_role(
    role_id: str,
    use_case: DeleteRoleUseCase = Depends(get_delete_role_use_case),
):
    result = use_case.execute(role_id)
    if result.error is not None:
        raise_service_error(result.error)
    return MessageRes(message=result.message)
