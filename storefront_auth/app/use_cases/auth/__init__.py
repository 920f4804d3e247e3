"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .authorize_request_use_case import AuthorizeRequestUseCase
from .silent_refresh_use_case import SilentRefreshUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .check_auth_status_use_case import CheckAuthStatusUseCase
from .verify_token_use_case import VerifyTokenUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_otp_use_case import VerifyOtpUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .token_issuer import IssuedSession, TokenIssuer
from .dtos import (
    RegisterCommand,
    UserInfo,
    AuthContext,
    AuthorizedRequest,
    LoginResponse,
    RefreshTokenResponse,
    LogoutResponse,
    AuthStatusResponse,
    RequestPasswordResetResponse,
    VerifyOtpResponse,
    ConfirmPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "AuthorizeRequestUseCase",
    "SilentRefreshUseCase",
    "RefreshTokenUseCase",
    "CheckAuthStatusUseCase",
    "VerifyTokenUseCase",
    "RequestPasswordResetUseCase",
    "VerifyOtpUseCase",
    "ConfirmPasswordResetUseCase",
    # Services
    "TokenIssuer",
    "IssuedSession",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "LoginResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
    "AuthStatusResponse",
    "RequestPasswordResetResponse",
    "VerifyOtpResponse",
    "ConfirmPasswordResetResponse",
    # DTOs - Nested Models
    "UserInfo",
    "AuthContext",
    "AuthorizedRequest",
]
