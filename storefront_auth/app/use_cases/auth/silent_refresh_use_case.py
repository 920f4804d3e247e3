"""
Silent Refresh Use Case

Recovers a request whose access token expired by exchanging the session's
stored refresh token, without a client round trip.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

from config import ApplicationConfig
from storefront_auth.api.utils.jwt import (
    InvalidTokenError,
    TokenSigner,
    access_token_signer,
    claims_session_id,
    claims_user_id,
)
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.domain.entities import Session
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import AuthorizedRequest
from .token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


class SilentRefreshUseCase:
    """
    Use case for transparent access token renewal.

    Business Rules:
    - Only runs for tokens that failed with ACCESS_TOKEN_EXPIRED
    - The expired token must still be signed by the access secret
    - Session located by exact access token, else by the token's `sid`
      when the stored token replaced it within the race grace window
      (a concurrent refresh of the same token got there first)
    - No session row, or a token superseded earlier: deny
    - Refresh token invalid or expired: session row deleted, deny
    - Otherwise the new access token is written over the old one in the
      same row; concurrent refreshes both succeed, last write is stored
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: Optional[TokenIssuer] = None,
        access_signer: Optional[TokenSigner] = None,
        race_grace: Optional[timedelta] = None,
    ):
        self.uow = uow
        self.token_issuer = token_issuer or TokenIssuer()
        self.access_signer = access_signer or access_token_signer
        self.race_grace = (
            timedelta(seconds=ApplicationConfig.REFRESH_RACE_GRACE_SECONDS)
            if race_grace is None
            else race_grace
        )

    async def execute(self, expired_access_token: str) -> Result[AuthorizedRequest]:
        """
        Execute silent refresh use case.

        Args:
            expired_access_token: Token from the original request header

        Returns:
            Result with the replacement access token and its AuthContext, or
            Error (TOKEN_REVOKED, REFRESH_TOKEN_EXPIRED, INVALID_SIGNATURE)
        """
        try:
            claims = self.access_signer.verify_ignoring_expiry(expired_access_token)
        except InvalidTokenError:
            return Return.err(
                Error(error_codes.INVALID_SIGNATURE, "Invalid access token")
            )

        user_id = claims_user_id(claims)
        session_id = claims_session_id(claims)

        async with self.uow:
            session = await self.uow.sessions.get_by_access_token(expired_access_token)

            if session is None and session_id is not None:
                candidate = await self.uow.sessions.get_by_id(session_id)
                if candidate is not None and self.lost_refresh_race(claims, candidate):
                    session = candidate

            if session is None or session.user_id != user_id:
                logger.info(f"Refresh denied for user {user_id}: session not found")
                return Return.err(
                    Error(error_codes.TOKEN_REVOKED, "Token has been revoked")
                )

            return await self.token_issuer.reissue_access_token(self.uow, session)

    def lost_refresh_race(self, claims: Dict[str, Any], session: Session) -> bool:
        """
        True if the session's stored access token superseded the presented
        one within the race grace window.

        Anything older is a replay of a token that was already exchanged.
        """
        if not session.access_token:
            return False
        try:
            stored = self.access_signer.verify_ignoring_expiry(session.access_token)
        except InvalidTokenError:
            return False

        stored_iat = stored.get("iat")
        presented_iat = claims.get("iat")
        if stored_iat is None or presented_iat is None or presented_iat > stored_iat:
            return False

        age = datetime.now(UTC).timestamp() - stored_iat
        return age <= self.race_grace.total_seconds()
