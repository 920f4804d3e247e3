"""
Load Context Use Case

Loads the current user from the identity attached by the revocation gate.
"""

from typing import Any, Dict
from uuid import UUID

from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.app.use_cases.auth.register_use_case import to_user_info
from storefront_auth.app.use_cases.auth import error_codes
from storefront_auth.libs.result import Error, Result, Return


class LoadContextUseCase:
    """
    Use case for loading current user context.

    Business Rules:
    - user_id comes from verified token claims
    - User must still exist
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[Dict[str, Any]]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(error_codes.USER_NOT_FOUND, "User not found"))

            return Return.ok({"user": to_user_info(user)})
