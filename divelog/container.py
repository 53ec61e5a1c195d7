"""
===============================================================================
CRC CARD: divelog/container.py (Composition Root / manual DI)
===============================================================================

Responsibilities:
  - Compose repositories and use cases (use cases depend on ports only).
  - Expose factories for FastAPI (Depends), the bootstrap and the CLI.
  - Keep singletons cached (lru_cache) for repositories and the store.
  - Pick Postgres or the in-memory store from Settings.

Collaborators:
  - crosscutting.config.get_settings
  - domain.repositories (ports)
  - infrastructure.repositories (in_memory / postgres)
  - application.usecases

Notes:
  - No business logic here.
  - No FastAPI imports here (plain factories only).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateDiveLogUseCase,
    CreateRoleUseCase,
    CreateUserUseCase,
    DeleteDiveLogUseCase,
    DeleteRoleUseCase,
    DeleteUserUseCase,
    GetDiveLogUseCase,
    GetRoleUseCase,
    GetUserUseCase,
    ListDiveLogsUseCase,
    ListRolesUseCase,
    ListUsersUseCase,
    LoginUseCase,
    SetUserEnabledUseCase,
    UpdateDiveLogUseCase,
    UpdateMeUseCase,
    UpdateRoleUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import DiveLogRepository, RoleRepository, UserRepository
from .infrastructure.repositories import (
    InMemoryDatabase,
    InMemoryDiveLogRepository,
    InMemoryRoleRepository,
    InMemoryUserRepository,
    PostgresDiveLogRepository,
    PostgresRoleRepository,
    PostgresUserRepository,
)

# =============================================================================
# Repositories (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_in_memory_database() -> InMemoryDatabase:
    """Shared store behind the in-memory repositories."""
    return InMemoryDatabase()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """User repository (in-memory without DATABASE_URL or in test; Postgres otherwise)."""
    if get_settings().uses_postgres():
        return PostgresUserRepository()
    return InMemoryUserRepository(get_in_memory_database())


@lru_cache(maxsize=1)
def get_role_repository() -> RoleRepository:
    if get_settings().uses_postgres():
        return PostgresRoleRepository()
    return InMemoryRoleRepository(get_in_memory_database())


@lru_cache(maxsize=1)
def get_dive_log_repository() -> DiveLogRepository:
    if get_settings().uses_postgres():
        return PostgresDiveLogRepository()
    return InMemoryDiveLogRepository(get_in_memory_database())


def reset_repositories() -> None:
    """Drop cached repositories and the in-memory store (tests, settings reload)."""
    for factory in (
        get_user_repository,
        get_role_repository,
        get_dive_log_repository,
        get_in_memory_database,
    ):
        factory.cache_clear()


# =============================================================================
# Use cases (factory per request)
# =============================================================================


def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(get_user_repository())


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(get_user_repository(), get_role_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(get_user_repository())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(get_user_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(get_user_repository())


def get_set_user_enabled_use_case() -> SetUserEnabledUseCase:
    return SetUserEnabledUseCase(get_user_repository())


def get_update_me_use_case() -> UpdateMeUseCase:
    return UpdateMeUseCase(get_user_repository())


def get_create_role_use_case() -> CreateRoleUseCase:
    return CreateRoleUseCase(get_role_repository())


def get_list_roles_use_case() -> ListRolesUseCase:
    return ListRolesUseCase(get_role_repository())


def get_get_role_use_case() -> GetRoleUseCase:
    return GetRoleUseCase(get_role_repository())


def get_update_role_use_case() -> UpdateRoleUseCase:
    return UpdateRoleUseCase(get_role_repository())


def get_delete_role_use_case() -> DeleteRoleUseCase:
    return DeleteRoleUseCase(get_role_repository())


def get_create_dive_log_use_case() -> CreateDiveLogUseCase:
    return CreateDiveLogUseCase(get_dive_log_repository(), get_user_repository())


def get_list_dive_logs_use_case() -> ListDiveLogsUseCase:
    return ListDiveLogsUseCase(get_dive_log_repository())


def get_get_dive_log_use_case() -> GetDiveLogUseCase:
    return GetDiveLogUseCase(get_dive_log_repository())


def get_update_dive_log_use_case() -> UpdateDiveLogUseCase:
    return UpdateDiveLogUseCase(get_dive_log_repository())


def get_delete_dive_log_use_case() -> DeleteDiveLogUseCase:
    return DeleteDiveLogUseCase(get_dive_log_repository())
