"""
Refresh Token Use Case

Explicit exchange of a refresh token for a new access token.
"""

from typing import Optional

from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import RefreshTokenResponse
from .token_issuer import TokenIssuer


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens on client request.

    Business Rules:
    - The refresh token must belong to a stored session (otherwise revoked)
    - An invalid or expired refresh token deletes its session
    - The session's access token is replaced in place; no new row
    """

    def __init__(self, uow: UnitOfWork, token_issuer: Optional[TokenIssuer] = None):
        self.uow = uow
        self.token_issuer = token_issuer or TokenIssuer()

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        async with self.uow:
            session = await self.uow.sessions.get_by_refresh_token(refresh_token)

            if session is None:
                return Return.err(
                    Error(error_codes.TOKEN_REVOKED, "Session has been revoked")
                )

            result = await self.token_issuer.reissue_access_token(self.uow, session)
            if result.is_err():
                return Return.err(result.error)

            return Return.ok(
                RefreshTokenResponse(
                    access_token=result.value.access_token,
                    session_id=str(session.id),
                )
            )
