"""
===============================================================================
USE CASES: Role records (create / list / get / update / delete)
===============================================================================

Business Goal:
    Let super admins maintain the catalog of role records. Access is enforced
    at the HTTP edge (require_role(super_admin)), so these use cases carry no
    actor.

Notes:
    - Names are unique; descriptions are free text.
    - Deleting a role leaves its users without a role; such accounts can no
      longer authenticate and are hidden from listings.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import RoleRepository
from ..identifiers import parse_id
from ..results import (
    MessageResult,
    RoleListResult,
    RoleResult,
    ServiceError,
    ServiceErrorCode,
    not_found,
    validation_error,
)


def _role_not_found(role_id) -> ServiceError:
    return not_found(f'Role with id "{role_id}" not found!')


class CreateRoleUseCase:
    def __init__(self, role_repository: RoleRepository) -> None:
        self._roles = role_repository

    def execute(self, *, name: str | None, description: str | None) -> RoleResult:
        name = (name or "").strip()
        description = (description or "").strip()
        if not name or not description:
            return RoleResult(
                error=validation_error("The fields name and description are mandatory!")
            )

        if self._roles.get_role_by_name(name) is not None:
            return RoleResult(
                error=ServiceError(
                    ServiceErrorCode.CONFLICT, f'Role with name "{name}" already exists!'
                )
            )

        role = self._roles.create_role(name=name, description=description)
        logger.info("role created", extra={"role_id": str(role.id), "role_name": name})
        return RoleResult(role=role)


class ListRolesUseCase:
    def __init__(self, role_repository: RoleRepository) -> None:
        self._roles = role_repository

    def execute(self) -> RoleListResult:
        return RoleListResult(roles=self._roles.list_roles())


class GetRoleUseCase:
    def __init__(self, role_repository: RoleRepository) -> None:
        self._roles = role_repository

    def execute(self, role_id: UUID | str) -> RoleResult:
        parsed = parse_id(role_id)
        role = self._roles.get_role(parsed) if parsed else None
        if role is None:
            return RoleResult(error=_role_not_found(role_id))
        return RoleResult(role=role)


class UpdateRoleUseCase:
    """Only the description is editable; the name is the role's identity."""

    def __init__(self, role_repository: RoleRepository) -> None:
        self._roles = role_repository

    def execute(self, role_id: UUID | str, *, description: str | None) -> RoleResult:
        description = (description or "").strip()
        if not description:
            return RoleResult(error=validation_error("The field description is mandatory!"))

        parsed = parse_id(role_id)
        role = (
            self._roles.update_role_description(parsed, description) if parsed else None
        )
        if role is None:
            return RoleResult(error=_role_not_found(role_id))
        return RoleResult(role=role)


class DeleteRoleUseCase:
    def __init__(self, role_repository: RoleRepository) -> None:
        self._roles = role_repository

    def execute(self, role_id: UUID | str) -> MessageResult:
        parsed = parse_id(role_id)
        if parsed is None or not self._roles.delete_role(parsed):
            return MessageResult(error=_role_not_found(role_id))

        logger.info("role deleted", extra={"role_id": str(parsed)})
        return MessageResult(message=f'Role with id "{role_id}" deleted!')
