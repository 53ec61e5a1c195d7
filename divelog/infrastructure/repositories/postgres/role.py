"""
===============================================================================
CRC CARD: infrastructure/repositories/postgres/role.py
===============================================================================

Class:
    PostgresRoleRepository

Responsibilities:
    - Persist role records (unique name, description).
    - Deleting a role relies on ON DELETE SET NULL for users.role_id.

Collaborators:
    - domain.repositories.RoleRepository (contract)
    - postgres.base.PostgresRepository (pool + error wrapping)
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID, uuid4

from ....identity.users import RoleRecord
from .base import PostgresRepository


def _row_to_role(row: tuple) -> RoleRecord:
    return RoleRecord(
        id=row[0],
        name=row[1],
        description=row[2],
        created_at=row[3],
        updated_at=row[4],
    )


class PostgresRoleRepository(PostgresRepository):
    _SELECT_COLUMNS = "id, name, description, created_at, updated_at"

    def get_role(self, role_id: UUID) -> Optional[RoleRecord]:
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} FROM roles WHERE id = %s",
            params=[role_id],
            context_msg="PostgresRoleRepository: Failed to get role",
            extra={"role_id": str(role_id)},
        )
        return _row_to_role(row) if row else None

    def get_role_by_name(self, name: str) -> Optional[RoleRecord]:
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} FROM roles WHERE name = %s",
            params=[name],
            context_msg="PostgresRoleRepository: Failed to get role by name",
            extra={"role_name": name},
        )
        return _row_to_role(row) if row else None

    def list_roles(self) -> List[RoleRecord]:
        rows = self._fetchall(
            query=(
                f"SELECT {self._SELECT_COLUMNS} FROM roles "
                "ORDER BY created_at DESC, id DESC"
            ),
            params=[],
            context_msg="PostgresRoleRepository: Failed to list roles",
            extra={},
        )
        return [_row_to_role(row) for row in rows]

    def create_role(self, *, name: str, description: str) -> RoleRecord:
        row = self._fetchone(
            query=f"""
                INSERT INTO roles (id, name, description, created_at, updated_at)
                VALUES (%s, %s, %s, NOW(), NOW())
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=[uuid4(), name, description],
            context_msg="PostgresRoleRepository: Failed to create role",
            extra={"role_name": name},
        )
        return _row_to_role(row)

    def update_role_description(
        self, role_id: UUID, description: str
    ) -> Optional[RoleRecord]:
        row = self._fetchone(
            query=f"""
                UPDATE roles SET description = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=[description, role_id],
            context_msg="PostgresRoleRepository: Failed to update role",
            extra={"role_id": str(role_id)},
        )
        return _row_to_role(row) if row else None

    def delete_role(self, role_id: UUID) -> bool:
        count = self._execute(
            query="DELETE FROM roles WHERE id = %s",
            params=[role_id],
            context_msg="PostgresRoleRepository: Failed to delete role",
            extra={"role_id": str(role_id)},
        )
        return count > 0
