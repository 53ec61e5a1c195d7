"""
============================================================
CRC CARD: infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Store user accounts in the shared InMemoryDatabase.
  - Populate each User with its RoleRecord (None once the role is deleted).
  - Orphan dive logs when their owner is deleted.

Collaborators:
  - domain.repositories.UserRepository (contract)
  - in_memory.store.InMemoryDatabase
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID, uuid4

from ....domain.entities import SortSpec
from ....identity.users import User
from .store import InMemoryDatabase, UserRow, sort_nulls_last


class InMemoryUserRepository:
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def _to_user(self, row: UserRow) -> User:
        role_row = self._db.roles.get(row.role_id) if row.role_id else None
        return User(
            id=row.id,
            email=row.email,
            full_name=row.full_name,
            password_hash=row.password_hash,
            role=role_row.record if role_row else None,
            enabled=row.enabled,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _email_taken(self, email: str, *, exclude: UUID | None = None) -> bool:
        return any(
            row.email == email and row.id != exclude for row in self._db.users.values()
        )

    def get_user(self, user_id: UUID) -> Optional[User]:
        with self._db.lock:
            row = self._db.users.get(user_id)
            return self._to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        normalized = email.strip().lower()
        with self._db.lock:
            for row in self._db.users.values():
                if row.email == normalized:
                    return self._to_user(row)
        return None

    def list_users(
        self, *, enabled_only: bool = False, sort: SortSpec = SortSpec()
    ) -> List[User]:
        with self._db.lock:
            rows = [
                r for r in self._db.users.values() if r.enabled or not enabled_only
            ]
            ordered = sort_nulls_last(
                rows,
                lambda r: getattr(r, sort.field),
                lambda r: r.seq,
                descending=sort.descending,
            )
            return [self._to_user(r) for r in ordered]

    def create_user(
        self,
        *,
        email: str,
        full_name: str,
        password_hash: str,
        role_id: UUID,
        enabled: bool = True,
    ) -> User:
        normalized = email.strip().lower()
        with self._db.lock:
            if self._email_taken(normalized):
                raise ValueError(f"email already exists: {normalized}")
            now = self._db.now()
            row = UserRow(
                id=uuid4(),
                email=normalized,
                full_name=full_name,
                password_hash=password_hash,
                role_id=role_id,
                enabled=enabled,
                created_at=now,
                updated_at=now,
                seq=self._db.next_seq(),
            )
            self._db.users[row.id] = row
            return self._to_user(row)

    def update_user(
        self,
        user_id: UUID,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password_hash: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> Optional[User]:
        with self._db.lock:
            row = self._db.users.get(user_id)
            if row is None:
                return None
            if email is not None:
                normalized = email.strip().lower()
                if self._email_taken(normalized, exclude=user_id):
                    raise ValueError(f"email already exists: {normalized}")
                row.email = normalized
            if full_name is not None:
                row.full_name = full_name
            if password_hash is not None:
                row.password_hash = password_hash
            if enabled is not None:
                row.enabled = enabled
            row.updated_at = self._db.now()
            return self._to_user(row)

    def delete_user(self, user_id: UUID) -> bool:
        with self._db.lock:
            if self._db.users.pop(user_id, None) is None:
                return False
            for log in self._db.dive_logs.values():
                if log.owner_user_id == user_id:
                    log.owner_user_id = None
            return True

    def ping(self) -> bool:
        return True
