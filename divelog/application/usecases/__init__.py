"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── auth/        # Login (credentials -> access token)
├── users/       # User management and self-service
├── roles/       # Role record catalog (super admin only)
└── dive_logs/   # Dive log CRUD and listings

Usage
-----
    from divelog.application.usecases import CreateDiveLogUseCase, ListingQuery
"""

from .auth import LoginUseCase
from .bootstrap import bootstrap, ensure_user, seed_builtin_roles
from .dive_logs import (
    CreateDiveLogUseCase,
    DeleteDiveLogUseCase,
    DiveLogInput,
    GetDiveLogUseCase,
    ListDiveLogsUseCase,
    UpdateDiveLogUseCase,
)
from .listing import ListingOptions, ListingQuery, parse_listing_query
from .results import (
    DiveLogListResult,
    DiveLogResult,
    MessageResult,
    RoleListResult,
    RoleResult,
    ServiceError,
    ServiceErrorCode,
    TokenResult,
    UserListResult,
    UserResult,
)
from .roles import (
    CreateRoleUseCase,
    DeleteRoleUseCase,
    GetRoleUseCase,
    ListRolesUseCase,
    UpdateRoleUseCase,
)
from .users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    SetUserEnabledUseCase,
    UpdateMeUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "LoginUseCase",
    "bootstrap",
    "ensure_user",
    "seed_builtin_roles",
    "CreateDiveLogUseCase",
    "DeleteDiveLogUseCase",
    "DiveLogInput",
    "GetDiveLogUseCase",
    "ListDiveLogsUseCase",
    "UpdateDiveLogUseCase",
    "ListingOptions",
    "ListingQuery",
    "parse_listing_query",
    "DiveLogListResult",
    "DiveLogResult",
    "MessageResult",
    "RoleListResult",
    "RoleResult",
    "ServiceError",
    "ServiceErrorCode",
    "TokenResult",
    "UserListResult",
    "UserResult",
    "CreateRoleUseCase",
    "DeleteRoleUseCase",
    "GetRoleUseCase",
    "ListRolesUseCase",
    "UpdateRoleUseCase",
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "SetUserEnabledUseCase",
    "UpdateMeUseCase",
    "UpdateUserUseCase",
]
