"""
===============================================================================
CRC CARD: infrastructure/repositories/postgres/user.py
===============================================================================

Class:
    PostgresUserRepository

Responsibilities:
    - Persist user accounts (email unique, stored lowercase).
    - Resolve each user's role with a LEFT JOIN (role is None once deleted).
    - Deleting a user relies on ON DELETE SET NULL for dive_logs.user_id.

Collaborators:
    - domain.repositories.UserRepository (contract)
    - postgres.base.PostgresRepository (pool + error wrapping)
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID, uuid4

from psycopg import sql

from ....domain.entities import SortSpec
from ....identity.users import RoleRecord, User
from .base import PostgresRepository, order_by


def _row_to_user(row: tuple) -> User:
    role = None
    if row[8] is not None:
        role = RoleRecord(
            id=row[8],
            name=row[9],
            description=row[10],
            created_at=row[11],
            updated_at=row[12],
        )
    return User(
        id=row[0],
        email=row[1],
        full_name=row[2],
        password_hash=row[3],
        enabled=bool(row[4]),
        created_at=row[5],
        updated_at=row[6],
        role=role,
    )


class PostgresUserRepository(PostgresRepository):
    # R: Column 7 is the raw role_id kept for clarity; role data starts at 8.
    _SELECT_COLUMNS = """
        u.id, u.email, u.full_name, u.password_hash, u.enabled,
        u.created_at, u.updated_at, u.role_id,
        r.id, r.name, r.description, r.created_at, r.updated_at
    """
    _FROM = "FROM users u LEFT JOIN roles r ON r.id = u.role_id"

    def _select_one(self, where: str, params: list, context_msg: str, extra: dict):
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} {self._FROM} WHERE {where}",
            params=params,
            context_msg=context_msg,
            extra=extra,
        )
        return _row_to_user(row) if row else None

    def get_user(self, user_id: UUID) -> Optional[User]:
        return self._select_one(
            "u.id = %s",
            [user_id],
            "PostgresUserRepository: Failed to get user",
            {"user_id": str(user_id)},
        )

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._select_one(
            "u.email = %s",
            [email.strip().lower()],
            "PostgresUserRepository: Failed to get user by email",
            {},
        )

    def list_users(
        self, *, enabled_only: bool = False, sort: SortSpec = SortSpec()
    ) -> List[User]:
        where = sql.SQL("WHERE u.enabled = TRUE") if enabled_only else sql.SQL("")
        query = sql.SQL("SELECT {cols} {from_} {where} {order}").format(
            cols=sql.SQL(self._SELECT_COLUMNS),
            from_=sql.SQL(self._FROM),
            where=where,
            order=order_by(sort, table="u"),
        )
        rows = self._fetchall(
            query=query,
            params=[],
            context_msg="PostgresUserRepository: Failed to list users",
            extra={"sort_by": sort.field, "enabled_only": enabled_only},
        )
        return [_row_to_user(row) for row in rows]

    def create_user(
        self,
        *,
        email: str,
        full_name: str,
        password_hash: str,
        role_id: UUID,
        enabled: bool = True,
    ) -> User:
        user_id = uuid4()
        self._execute(
            query="""
                INSERT INTO users (
                    id, email, full_name, password_hash, role_id, enabled,
                    created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, NOW(), NOW())
            """,
            params=[
                user_id,
                email.strip().lower(),
                full_name,
                password_hash,
                role_id,
                enabled,
            ],
            context_msg="PostgresUserRepository: Failed to create user",
            extra={"user_id": str(user_id)},
        )
        return self.get_user(user_id)

    def update_user(
        self,
        user_id: UUID,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password_hash: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> Optional[User]:
        count = self._execute(
            query="""
                UPDATE users SET
                    email = COALESCE(%s, email),
                    full_name = COALESCE(%s, full_name),
                    password_hash = COALESCE(%s, password_hash),
                    enabled = COALESCE(%s, enabled),
                    updated_at = NOW()
                WHERE id = %s
            """,
            params=[
                email.strip().lower() if email is not None else None,
                full_name,
                password_hash,
                enabled,
                user_id,
            ],
            context_msg="PostgresUserRepository: Failed to update user",
            extra={"user_id": str(user_id)},
        )
        if count == 0:
            return None
        return self.get_user(user_id)

    def delete_user(self, user_id: UUID) -> bool:
        count = self._execute(
            query="DELETE FROM users WHERE id = %s",
            params=[user_id],
            context_msg="PostgresUserRepository: Failed to delete user",
            extra={"user_id": str(user_id)},
        )
        return count > 0

    def ping(self) -> bool:
        row = self._fetchone(
            query="SELECT 1",
            params=[],
            context_msg="PostgresUserRepository: Ping failed",
            extra={},
        )
        return row is not None
