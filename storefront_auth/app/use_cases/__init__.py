"""
Use Cases

Organized into domain folders:
- auth/: Authentication, session tokens and password reset
- users/: User context and session management
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    AuthorizeRequestUseCase,
    SilentRefreshUseCase,
    RefreshTokenUseCase,
)
from .users import (
    LoadContextUseCase,
    CountUsersUseCase,
    RevokeSessionsUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "AuthorizeRequestUseCase",
    "SilentRefreshUseCase",
    "RefreshTokenUseCase",
    # Users
    "LoadContextUseCase",
    "CountUsersUseCase",
    "RevokeSessionsUseCase",
]
