"""User management and self-service use cases."""

from .create_user import CreateUserUseCase
from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .set_user_enabled import SetUserEnabledUseCase
from .update_me import UpdateMeUseCase
from .update_user import UpdateUserUseCase

__all__ = [
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "SetUserEnabledUseCase",
    "UpdateMeUseCase",
    "UpdateUserUseCase",
]
