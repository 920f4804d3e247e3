"""
Authorize Request Use Case

The revocation gate: decides whether a bearer access token may reach a route.
"""

import re
from typing import Optional

from config import ApplicationConfig
from storefront_auth.api.utils.jwt import (
    InvalidTokenError,
    TokenExpiredError,
    TokenSigner,
    access_token_signer,
    claims_session_id,
    claims_user_id,
)
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import AuthContext


class AuthorizeRequestUseCase:
    """
    Use case deciding allow/deny for one request.

    Decision order:
    1. Signature and expiry (expired is reported separately so the caller
       can attempt a silent refresh)
    2. Token store presence: exact access token, else same session via the
       `sid` claim, else (lenient mode only) any session of the user
    3. Admin-only routes require the is_admin claim

    The gate only reads from the stores.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        access_signer: Optional[TokenSigner] = None,
        lenient_fallback: Optional[bool] = None,
        admin_route_pattern: Optional[str] = None,
    ):
        self.uow = uow
        self.access_signer = access_signer or access_token_signer
        self.lenient_fallback = (
            ApplicationConfig.SESSION_FALLBACK_LENIENT
            if lenient_fallback is None
            else lenient_fallback
        )
        self.admin_route = re.compile(
            admin_route_pattern or ApplicationConfig.ADMIN_ROUTE_PATTERN,
            re.IGNORECASE,
        )

    async def execute(
        self, access_token: str, path: Optional[str] = None
    ) -> Result[AuthContext]:
        """
        Execute authorize request use case.

        Args:
            access_token: Bearer token from the Authorization header
            path: Request path, checked against admin-only routes. None skips
                route authorization (status checks).

        Returns:
            Result with the AuthContext to attach to the request, or Error
            (INVALID_SIGNATURE, ACCESS_TOKEN_EXPIRED, TOKEN_REVOKED, FORBIDDEN_ROUTE)
        """
        try:
            claims = self.access_signer.verify(access_token)
        except TokenExpiredError:
            return Return.err(
                Error(error_codes.ACCESS_TOKEN_EXPIRED, "Access token has expired")
            )
        except InvalidTokenError:
            return Return.err(
                Error(error_codes.INVALID_SIGNATURE, "Invalid access token")
            )

        user_id = claims_user_id(claims)
        session_id = claims_session_id(claims)

        async with self.uow:
            session = await self.uow.sessions.get_by_access_token(access_token)
            if session is not None and session.user_id != user_id:
                session = None

            if session is None and session_id is not None:
                # Same session, token string replaced by a concurrent refresh
                candidate = await self.uow.sessions.get_by_id(session_id)
                if candidate is not None and candidate.user_id == user_id:
                    session = candidate

            if session is None:
                if not (
                    self.lenient_fallback
                    and await self.uow.sessions.has_active_session(user_id)
                ):
                    return Return.err(
                        Error(error_codes.TOKEN_REVOKED, "Token has been revoked")
                    )

            context = AuthContext(
                user_id=user_id,
                is_admin=bool(claims.get("is_admin", False)),
                session_id=session.id if session is not None else session_id,
            )

        return self.authorize_route(context, path)

    def authorize_route(
        self, context: AuthContext, path: Optional[str]
    ) -> Result[AuthContext]:
        """Route-level authorization, independent of how the token was validated"""
        if path is not None and not context.is_admin and self.admin_route.search(path):
            return Return.err(
                Error(error_codes.FORBIDDEN_ROUTE, "Admin privileges required")
            )
        return Return.ok(context)
