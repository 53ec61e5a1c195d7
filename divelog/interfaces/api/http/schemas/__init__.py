"""HTTP DTOs (pydantic), one module per resource."""

from .common import CamelModel, MessageRes, StatusRes, TokenRes
from .logbooks import DiveLogEnvelope, DiveLogListEnvelope, DiveLogReq, DiveLogRes
from .roles import CreateRoleReq, RoleEnvelope, RoleListEnvelope, RoleRes, UpdateRoleReq
from .users import (
    CreateUserReq,
    LoginReq,
    UpdateMeReq,
    UpdateUserReq,
    UserEnvelope,
    UserListEnvelope,
    UserRes,
)

__all__ = [
    "CamelModel",
    "MessageRes",
    "StatusRes",
    "TokenRes",
    "DiveLogEnvelope",
    "DiveLogListEnvelope",
    "DiveLogReq",
    "DiveLogRes",
    "CreateRoleReq",
    "RoleEnvelope",
    "RoleListEnvelope",
    "RoleRes",
    "UpdateRoleReq",
    "CreateUserReq",
    "LoginReq",
    "UpdateMeReq",
    "UpdateUserReq",
    "UserEnvelope",
    "UserListEnvelope",
    "UserRes",
]
