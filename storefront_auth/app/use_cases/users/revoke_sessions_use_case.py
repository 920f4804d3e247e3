"""
Revoke Sessions Use Case

Handles session revocation for security and session management.
"""

import logging
from uuid import UUID

from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.app.use_cases.auth import error_codes
from storefront_auth.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for revoking user sessions.

    Business Rules:
    - Users can revoke their own sessions
    - Admins can revoke any user's sessions
    - Revoking deletes the session row, so its tokens fail the
      revocation gate immediately
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def revoke_all_sessions(
        self,
        target_user_id: UUID,
        requesting_user_id: UUID,
        requesting_is_admin: bool,
    ) -> Result[dict]:
        """
        Revoke all sessions for a user.

        Args:
            target_user_id: User whose sessions will be revoked
            requesting_user_id: User requesting the revocation
            requesting_is_admin: is_admin claim of the requesting user

        Returns:
            Result with count of revoked sessions, or Error
        """
        async with self.uow:
            is_self = target_user_id == requesting_user_id

            if not is_self and not requesting_is_admin:
                return Return.err(
                    Error(
                        error_codes.FORBIDDEN,
                        "Only admins can revoke other users' sessions",
                    )
                )

            target_user = await self.uow.users.get_by_id(target_user_id)
            if not target_user:
                return Return.err(Error(error_codes.USER_NOT_FOUND, "User not found"))

            count = await self.uow.sessions.delete_all_by_user_id(target_user_id)

            await self.uow.commit()

            logger.info(
                f"User {requesting_user_id} revoked {count} session(s) of user {target_user_id}"
            )
            return Return.ok({"revoked_count": count, "target_user_id": str(target_user_id)})

    async def revoke_specific_session(
        self,
        session_id: UUID,
        requesting_user_id: UUID,
        requesting_is_admin: bool,
    ) -> Result[dict]:
        """
        Revoke a specific session by ID.

        Returns:
            Result with success status, or Error
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if not session:
                return Return.err(Error(error_codes.SESSION_NOT_FOUND, "Session not found"))

            is_self = session.user_id == requesting_user_id
            if not is_self and not requesting_is_admin:
                return Return.err(
                    Error(error_codes.FORBIDDEN, "Only admins can revoke other users' sessions")
                )

            success = await self.uow.sessions.delete_by_id(session_id)

            await self.uow.commit()

            logger.info(f"User {requesting_user_id} revoked session {session_id}")
            return Return.ok({"session_id": str(session_id), "revoked": success})
