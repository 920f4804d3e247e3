"""
Login Use Case

Verifies credentials and opens a new session with a fresh token pair.
"""

import logging
from typing import Optional

import bcrypt

from config import ApplicationConfig
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import LoginResponse
from .passwords import check_password
from .register_use_case import to_user_info
from .token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password produce the same error
    - Every successful login creates exactly one new session row
      (existing sessions on other devices are left untouched)
    - The session row is committed before any token is returned
    """

    def __init__(self, uow: UnitOfWork, token_issuer: Optional[TokenIssuer] = None):
        self.uow = uow
        self.token_issuer = token_issuer or TokenIssuer()

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email (any case)
            password: Plain text password

        Returns:
            Result with LoginResponse containing user info and tokens, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                # Hash dummy password to maintain constant time
                bcrypt.checkpw(
                    b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
                )
                return Return.err(
                    Error(error_codes.INVALID_CREDENTIALS, "Invalid email or password")
                )

            if not check_password(password, user.password_hash):
                return Return.err(
                    Error(error_codes.INVALID_CREDENTIALS, "Invalid email or password")
                )

            issued = await self.token_issuer.issue_session(self.uow, user)

            # A failed commit propagates: no token leaves without its row
            await self.uow.commit()

            logger.info(f"User {user.id} logged in (session {issued.session.id})")

            return Return.ok(
                LoginResponse(
                    user=to_user_info(user),
                    access_token=issued.access_token,
                    refresh_token=issued.refresh_token,
                    session_id=str(issued.session.id),
                )
            )
