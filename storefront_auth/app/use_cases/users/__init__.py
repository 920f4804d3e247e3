"""
User Management Use Cases

All user-related business logic.
"""

from .load_context_use_case import LoadContextUseCase
from .count_users_use_case import CountUsersUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase
from .delete_user_use_case import DeleteUserUseCase

__all__ = [
    "LoadContextUseCase",
    "CountUsersUseCase",
    "RevokeSessionsUseCase",
    "DeleteUserUseCase",
]
