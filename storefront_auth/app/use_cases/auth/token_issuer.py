"""
Token Issuer

Mints access/refresh token pairs and keeps the session table in step with
them. Used by login (new session) and by both refresh paths (in-place access
token rotation).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from storefront_auth.api.utils.jwt import (
    TokenError,
    TokenSigner,
    access_token_signer,
    claims_user_id,
    refresh_token_signer,
)
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.domain.entities import Session, User
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import AuthContext, AuthorizedRequest

logger = logging.getLogger(__name__)


@dataclass
class IssuedSession:
    session: Session
    access_token: str
    refresh_token: str


class TokenIssuer:
    def __init__(
        self,
        access_signer: Optional[TokenSigner] = None,
        refresh_signer: Optional[TokenSigner] = None,
    ):
        self.access_signer = access_signer or access_token_signer
        self.refresh_signer = refresh_signer or refresh_token_signer

    def mint_access_token(self, user: User, session: Session) -> str:
        return self.access_signer.sign(
            {
                "user_id": str(user.id),
                "is_admin": bool(user.is_admin),
                "sid": str(session.id),
            }
        )

    def mint_refresh_token(self, user: User, session: Session) -> str:
        return self.refresh_signer.sign(
            {"user_id": str(user.id), "sid": str(session.id)}
        )

    async def issue_session(self, uow: UnitOfWork, user: User) -> IssuedSession:
        """
        Create a brand-new session row holding a fresh token pair.

        The row is flushed but not committed; the caller commits before
        handing any token out.
        """
        session = Session(user_id=user.id, refresh_token="")
        session.refresh_token = self.mint_refresh_token(user, session)
        session.access_token = self.mint_access_token(user, session)
        session = await uow.sessions.create(session)

        return IssuedSession(
            session=session,
            access_token=session.access_token,
            refresh_token=session.refresh_token,
        )

    async def reissue_access_token(
        self, uow: UnitOfWork, session: Session
    ) -> Result[AuthorizedRequest]:
        """
        Exchange the session's refresh token for a new access token.

        A refresh token that fails verification kills the session: the row is
        deleted and committed so no half-valid pair survives.
        """
        try:
            claims = self.refresh_signer.verify(session.refresh_token)
        except TokenError as exc:
            logger.info(f"Refresh token rejected for session {session.id}: {exc}")
            await self._drop_session(uow, session)
            return Return.err(
                Error(
                    error_codes.REFRESH_TOKEN_EXPIRED,
                    "Session has expired, please log in again",
                )
            )

        if claims_user_id(claims) != session.user_id:
            logger.warning(f"Refresh token owner mismatch on session {session.id}")
            await self._drop_session(uow, session)
            return Return.err(
                Error(
                    error_codes.REFRESH_TOKEN_EXPIRED,
                    "Session has expired, please log in again",
                )
            )

        user = await uow.users.get_by_id(session.user_id)
        if user is None:
            await self._drop_session(uow, session)
            return Return.err(
                Error(error_codes.TOKEN_REVOKED, "Session is no longer valid")
            )

        access_token = self.mint_access_token(user, session)
        updated = await uow.sessions.update_access_token(session.id, access_token)
        if not updated:
            # Row deleted (logout / password reset) while we were refreshing
            return Return.err(
                Error(error_codes.TOKEN_REVOKED, "Session is no longer valid")
            )
        await uow.commit()

        logger.info(f"Access token refreshed for user {user.id} (session {session.id})")
        return Return.ok(
            AuthorizedRequest(
                access_token=access_token,
                context=AuthContext(
                    user_id=user.id, is_admin=user.is_admin, session_id=session.id
                ),
            )
        )

    async def _drop_session(self, uow: UnitOfWork, session: Session) -> None:
        await uow.sessions.delete_by_id(session.id)
        await uow.commit()
