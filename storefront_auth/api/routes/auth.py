from typing import Optional

from fastapi import APIRouter, Body, Cookie, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from storefront_auth.api.error import ClientError, ServerError
from storefront_auth.app.services.email_sender import IEmailSender
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.app.use_cases.auth import (
    AuthStatusResponse,
    CheckAuthStatusUseCase,
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    UserInfo,
    VerifyOtpResponse,
    VerifyOtpUseCase,
    VerifyTokenUseCase,
    error_codes,
)
from storefront_auth.depends import get_bearer_token, get_email_sender, get_unit_of_work
from storefront_auth.libs.result import Error

router = APIRouter()


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=ApplicationConfig.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=ApplicationConfig.REFRESH_COOKIE_SECURE,
        samesite="lax",
    )


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Password complexity is a business rule and is checked by the use case.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    phone: Optional[str] = Field(None, max_length=32, description="Phone number")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserInfo)
async def register(request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Registration

    Raises:
        - 400 Bad Request: Password does not meet complexity requirements
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        name=request.name,
        email=request.email,
        password=request.password,
        phone=request.phone,
    )

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == error_codes.EMAIL_ALREADY_EXISTS:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == error_codes.INVALID_PASSWORD:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Opens a new session and returns both tokens. The refresh token is also
    set as an HttpOnly cookie.

    Raises:
        - 401 Unauthorized: Invalid credentials
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == error_codes.INVALID_CREDENTIALS:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_refresh_cookie(response, result.value.refresh_token)
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    access_token: Optional[str] = Depends(get_bearer_token),
    refresh_cookie: Optional[str] = Cookie(
        None, alias=ApplicationConfig.REFRESH_COOKIE_NAME
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout current device

    Deletes the caller's session (if any) and clears the refresh cookie.
    Always succeeds.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(access_token=access_token, refresh_token=refresh_cookie)

    if result.is_err():
        raise ServerError(result.error)

    response.delete_cookie(ApplicationConfig.REFRESH_COOKIE_NAME)
    return result.value


@router.get(
    "/check-auth-status", status_code=status.HTTP_200_OK, response_model=AuthStatusResponse
)
async def check_auth_status(
    access_token: Optional[str] = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = CheckAuthStatusUseCase(uow)
    result = await use_case.execute(access_token)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = Field(
        None, description="Refresh token (falls back to the refresh cookie)"
    )


@router.post(
    "/refresh-token", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse
)
async def refresh_token(
    request: Optional[RefreshRequest] = Body(None),
    refresh_cookie: Optional[str] = Cookie(
        None, alias=ApplicationConfig.REFRESH_COOKIE_NAME
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Explicit refresh token exchange

    Raises:
        - 401 Unauthorized: Missing, revoked, invalid or expired refresh token
    """
    token = (request.refresh_token if request else None) or refresh_cookie
    if not token:
        raise ClientError(
            Error(error_codes.MISSING_CREDENTIAL, "Refresh token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = RefreshTokenUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code in (
            error_codes.TOKEN_REVOKED,
            error_codes.REFRESH_TOKEN_EXPIRED,
            error_codes.INVALID_SIGNATURE,
        ):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.post("/verify-token", status_code=status.HTTP_200_OK, response_model=bool)
async def verify_token(
    access_token: Optional[str] = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """True iff the bearer token maps to a live session with a valid refresh token"""
    use_case = VerifyTokenUseCase(uow)
    result = await use_case.execute(access_token)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Email address of the account")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Issues a 4-digit OTP valid for OTP_TTL_MINUTES and emails it.
    A delivery failure is not reported to the caller.

    Raises:
        - 404 Not Found: Email not registered
    """
    use_case = RequestPasswordResetUseCase(uow, email_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == error_codes.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class VerifyOtpRequest(BaseModel):
    email: EmailStr = Field(..., description="Email address of the account")
    otp: int = Field(..., description="4-digit code from the reset email")


@router.post("/verify-otp", status_code=status.HTTP_200_OK, response_model=VerifyOtpResponse)
async def verify_otp(request: VerifyOtpRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Verify Password Reset OTP

    Raises:
        - 401 Unauthorized: OTP_MISMATCH or OTP_EXPIRED
        - 404 Not Found: Email not registered
    """
    use_case = VerifyOtpUseCase(uow)
    result = await use_case.execute(request.email, request.otp)

    if result.is_err():
        error = result.error
        if error.code == error_codes.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in (error_codes.OTP_MISMATCH, error_codes.OTP_EXPIRED):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Email address of the account")
    new_password: str = Field(..., description="New password")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Confirm Password Reset

    Sets the new password and revokes every session of the user.

    Raises:
        - 400 Bad Request: Weak or reused password
        - 401 Unauthorized: OTP not verified or reset window expired
        - 404 Not Found: Email not registered
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(request.email, request.new_password)

    if result.is_err():
        error = result.error
        if error.code == error_codes.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in (error_codes.OTP_NOT_VERIFIED, error_codes.RESET_WINDOW_EXPIRED):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in (error_codes.INVALID_PASSWORD, error_codes.DUPLICATE_PASSWORD):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
