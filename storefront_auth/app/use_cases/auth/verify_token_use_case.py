from typing import Optional

from storefront_auth.api.utils.jwt import (
    TokenError,
    TokenSigner,
    claims_user_id,
    refresh_token_signer,
)
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.libs.result import Result, Return


class VerifyTokenUseCase:
    """
    Answers whether an access token still maps to a live session.

    The access token itself may be expired: what matters is that its row
    exists, its owner exists and the row's refresh token still verifies,
    i.e. the next request would succeed through a silent refresh.
    """

    def __init__(self, uow: UnitOfWork, refresh_signer: Optional[TokenSigner] = None):
        self.uow = uow
        self.refresh_signer = refresh_signer or refresh_token_signer

    async def execute(self, access_token: Optional[str]) -> Result[bool]:
        if not access_token:
            return Return.ok(False)

        async with self.uow:
            session = await self.uow.sessions.get_by_access_token(access_token)
            if session is None:
                return Return.ok(False)

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None:
                return Return.ok(False)

            try:
                claims = self.refresh_signer.verify(session.refresh_token)
            except TokenError:
                return Return.ok(False)

            return Return.ok(claims_user_id(claims) == user.id)
