"""User use cases (public API of the package)."""

from .list_users import ListUsersUseCase
from .profile import GetUserUseCase, UpdateProfileUseCase
from .user_results import UserError, UserErrorCode, UserPageResult, UserResult

__all__ = [
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateProfileUseCase",
    "UserError",
    "UserErrorCode",
    "UserPageResult",
    "UserResult",
]
