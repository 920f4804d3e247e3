"""
Check Auth Status Use Case

Read-only check of the caller's credentials that never fails.
"""

from typing import Optional

from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.libs.result import Result, Return
from .authorize_request_use_case import AuthorizeRequestUseCase
from .dtos import AuthStatusResponse


class CheckAuthStatusUseCase:
    """
    Runs the revocation gate without route authorization and without a
    silent refresh: an expired access token reports is_logged_in=False.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, access_token: Optional[str]) -> Result[AuthStatusResponse]:
        if not access_token:
            return Return.ok(AuthStatusResponse(is_logged_in=False))

        result = await AuthorizeRequestUseCase(self.uow).execute(access_token)
        if result.is_err():
            return Return.ok(AuthStatusResponse(is_logged_in=False))

        context = result.value
        return Return.ok(
            AuthStatusResponse(
                is_logged_in=True,
                user_id=str(context.user_id),
                is_admin=context.is_admin,
            )
        )
