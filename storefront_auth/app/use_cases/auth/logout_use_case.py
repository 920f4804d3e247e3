"""
Logout Use Case

Ends the caller's session by deleting its token store row.
"""

import logging
from typing import Optional

from storefront_auth.api.utils.jwt import (
    InvalidTokenError,
    TokenSigner,
    access_token_signer,
    claims_session_id,
    claims_user_id,
)
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.libs.result import Result, Return
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out the current device.

    Business Rules:
    - The session is found by exact access token, by the `sid` of a
      correctly signed (possibly expired) access token, or by refresh token
    - Only that one session is deleted; other devices stay logged in
    - Idempotent: logging out twice, or without a session, still succeeds
    """

    def __init__(self, uow: UnitOfWork, access_signer: Optional[TokenSigner] = None):
        self.uow = uow
        self.access_signer = access_signer or access_token_signer

    async def execute(
        self,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> Result[LogoutResponse]:
        async with self.uow:
            session = None

            if access_token:
                session = await self.uow.sessions.get_by_access_token(access_token)
                if session is None:
                    session = await self._find_by_claims(access_token)

            if session is None and refresh_token:
                session = await self.uow.sessions.get_by_refresh_token(refresh_token)

            if session is not None:
                await self.uow.sessions.delete_by_id(session.id)
                await self.uow.commit()
                logger.info(f"User {session.user_id} logged out (session {session.id})")

            return Return.ok(
                LogoutResponse(status="logged_out", message="Logged out successfully")
            )

    async def _find_by_claims(self, access_token: str):
        try:
            claims = self.access_signer.verify_ignoring_expiry(access_token)
        except InvalidTokenError:
            return None

        session_id = claims_session_id(claims)
        if session_id is None:
            return None

        session = await self.uow.sessions.get_by_id(session_id)
        if session is None or session.user_id != claims_user_id(claims):
            return None
        return session
