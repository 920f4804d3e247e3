"""
Delete User Use Case

Admin removal of an account. Every session of the user goes with it, so
tokens already handed out stop passing the revocation gate.
"""

import logging
from uuid import UUID

from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.app.use_cases.auth import error_codes
from storefront_auth.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for deleting a user account.

    Business Rules:
    - Admin only (enforced by the admin route pattern)
    - Sessions are deleted before the user row, in the same commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, requesting_user_id: UUID) -> Result[int]:
        """
        Returns:
            Result with the number of revoked sessions, or Error (USER_NOT_FOUND)
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(error_codes.USER_NOT_FOUND, "User not found"))

            revoked_count = await self.uow.sessions.delete_all_by_user_id(user_id)
            await self.uow.users.delete(user_id)

            await self.uow.commit()

            logger.info(
                f"User {requesting_user_id} deleted user {user_id}, "
                f"{revoked_count} session(s) revoked"
            )
            return Return.ok(revoked_count)
