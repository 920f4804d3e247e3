"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """Register command - validated business intent"""

    name: str
    email: str
    password: str
    phone: Optional[str] = None


# ============================================================================
# Shared models
# ============================================================================


class UserInfo(BaseModel):
    """Public user information (never includes the password hash)"""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    is_admin: bool
    created_at: Optional[datetime] = None


class AuthContext(BaseModel):
    """Identity attached to a request once the revocation gate allows it"""

    user_id: UUID
    is_admin: bool
    session_id: Optional[UUID] = None


class AuthorizedRequest(BaseModel):
    """Outcome of a silent refresh: the replacement token and who it belongs to"""

    access_token: str
    context: AuthContext


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserInfo
    access_token: str
    refresh_token: str
    session_id: str


class RefreshTokenResponse(BaseModel):
    """Response for explicit refresh token exchange"""

    access_token: str
    session_id: str


class LogoutResponse(BaseModel):
    status: str
    message: str


class AuthStatusResponse(BaseModel):
    """Non-failing check of the caller's credentials"""

    is_logged_in: bool
    user_id: Optional[str] = None
    is_admin: Optional[bool] = None


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class VerifyOtpResponse(BaseModel):
    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str
