"""
CRC: domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for users, roles and dive logs (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- identity.users: User, RoleRecord
- domain.entities: DiveLog, DiveLogData, SortSpec
- infrastructure.repositories: postgres and in_memory implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Reads populate references: users carry their RoleRecord, logs their owner.

Notes
- Sorting puts missing values last in both directions.
- Deleting a user keeps their logs (owner becomes null).
- Deleting a role keeps its users (role becomes null).
"""

from datetime import datetime
from typing import List, Optional, Protocol
from uuid import UUID

from ..identity.users import RoleRecord, User
from .entities import DiveLog, DiveLogData, SortSpec


class UserRepository(Protocol):
    """R: Interface for user account persistence."""

    def get_user(self, user_id: UUID) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Lookup by normalized (trimmed, lowercased) email."""
        ...

    def list_users(
        self, *, enabled_only: bool = False, sort: SortSpec = SortSpec()
    ) -> List[User]:
        ...

    def create_user(
        self,
        *,
        email: str,
        full_name: str,
        password_hash: str,
        role_id: UUID,
        enabled: bool = True,
    ) -> User:
        ...

    def update_user(
        self,
        user_id: UUID,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password_hash: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> Optional[User]:
        """
        R: Overwrite only the provided (non-None) fields.

        Returns:
            Updated user, or None if it does not exist.
        """
        ...

    def delete_user(self, user_id: UUID) -> bool:
        """R: Delete the user and orphan their dive logs."""
        ...

    def ping(self) -> bool:
        ...


class RoleRepository(Protocol):
    """R: Interface for role record persistence."""

    def get_role(self, role_id: UUID) -> Optional[RoleRecord]:
        ...

    def get_role_by_name(self, name: str) -> Optional[RoleRecord]:
        ...

    def list_roles(self) -> List[RoleRecord]:
        """R: All roles, newest first."""
        ...

    def create_role(self, *, name: str, description: str) -> RoleRecord:
        ...

    def update_role_description(
        self, role_id: UUID, description: str
    ) -> Optional[RoleRecord]:
        ...

    def delete_role(self, role_id: UUID) -> bool:
        """R: Delete the role; users holding it lose their role reference."""
        ...


class DiveLogRepository(Protocol):
    """R: Interface for dive log persistence."""

    def create_log(self, *, owner_user_id: UUID, data: DiveLogData) -> DiveLog:
        ...

    def get_log(self, log_id: UUID) -> Optional[DiveLog]:
        ...

    def list_logs(
        self,
        *,
        owner_user_id: Optional[UUID] = None,
        start_from: Optional[datetime] = None,
        start_to: Optional[datetime] = None,
        sort: SortSpec = SortSpec(),
    ) -> List[DiveLog]:
        """
        R: List logs with owner populated.

        Args:
            owner_user_id: Only logs owned by this user (query push-down)
            start_from / start_to: Inclusive bounds on start_time
            sort: Attribute and direction
        """
        ...

    def update_log(self, log_id: UUID, data: DiveLogData) -> Optional[DiveLog]:
        ...

    def delete_log(self, log_id: UUID) -> bool:
        ...
