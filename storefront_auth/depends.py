import logging
from typing import Optional

from fastapi import Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from storefront_auth.adapter.services.smtp_email_sender import SmtpEmailSender
from storefront_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from storefront_auth.api.error import ClientError
from storefront_auth.app.services.email_sender import IEmailSender
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.app.use_cases.auth import (
    AuthContext,
    AuthorizeRequestUseCase,
    SilentRefreshUseCase,
    error_codes,
)
from storefront_auth.libs.result import Error

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False: a missing header must produce our own 401 payload
security = HTTPBearer(auto_error=False)

REFRESHED_TOKEN_HEADER = "Authorization"

_email_sender = SmtpEmailSender(
    smtp_host=ApplicationConfig.SMTP_HOST,
    smtp_port=ApplicationConfig.SMTP_PORT,
    smtp_user=ApplicationConfig.SMTP_USER,
    smtp_password=ApplicationConfig.SMTP_PASSWORD,
    smtp_use_tls=ApplicationConfig.SMTP_USE_TLS,
    from_email=ApplicationConfig.MAIL_FROM,
    otp_ttl_minutes=ApplicationConfig.OTP_TTL_MINUTES,
)

_GATE_STATUS = {
    error_codes.FORBIDDEN_ROUTE: status.HTTP_403_FORBIDDEN,
}


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_email_sender() -> IEmailSender:
    return _email_sender


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Bearer token from the Authorization header, or None if absent/malformed"""
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


async def get_current_user(
    request: Request,
    response: Response,
    access_token: Optional[str] = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AuthContext:
    """
    Revocation gate dependency.

    Validates the bearer token against its signature, the token store and
    the route, and returns the caller's AuthContext. An expired access token
    is exchanged inline through the session's refresh token; the new token
    is returned in the Authorization response header and the request
    proceeds as if it had presented it.

    Raises:
        ClientError: 401 for authentication failures, 403 for admin routes
    """
    if access_token is None:
        raise ClientError(
            Error(error_codes.MISSING_CREDENTIAL, "Authorization bearer token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    path = request.url.path
    gate = AuthorizeRequestUseCase(uow)
    result = await gate.execute(access_token, path)

    refreshed_headers = None
    if result.is_err() and result.error.code == error_codes.ACCESS_TOKEN_EXPIRED:
        refreshed = await SilentRefreshUseCase(uow).execute(access_token)
        if refreshed.is_err():
            result = refreshed
        else:
            refreshed_headers = {
                REFRESHED_TOKEN_HEADER: f"Bearer {refreshed.value.access_token}"
            }
            response.headers.update(refreshed_headers)
            result = gate.authorize_route(refreshed.value.context, path)

    if result.is_err():
        error = result.error
        raise ClientError(
            error,
            status_code=_GATE_STATUS.get(error.code, status.HTTP_401_UNAUTHORIZED),
            headers=refreshed_headers,
        )

    request.state.auth = result.value
    return result.value
