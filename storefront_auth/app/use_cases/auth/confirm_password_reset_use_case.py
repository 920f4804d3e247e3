"""
Confirm Password Reset Use Case

Replaces the password once the OTP has been verified and logs the user out
everywhere.
"""

import logging
from datetime import datetime

from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.domain.entities import OTP_VERIFIED, ResetState
from storefront_auth.domain.reset_state import reset_state
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import ConfirmPasswordResetResponse
from .passwords import check_password, hash_password, validate_password

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset (OtpVerified -> PasswordReset).

    Business Rules:
    - User must be in the verified state and inside the reset window
    - New password must meet complexity requirements
    - New password must not match the current hash (bcrypt compare)
    - On success: new hash, OTP fields cleared, every session deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Errors:
            - USER_NOT_FOUND: Email not registered
            - OTP_NOT_VERIFIED: No verified OTP on record
            - RESET_WINDOW_EXPIRED: Verified, but the window has lapsed
            - INVALID_PASSWORD: Password does not meet complexity requirements
            - DUPLICATE_PASSWORD: Password equals the current one
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.err(Error(error_codes.USER_NOT_FOUND, "User not found"))

            if user.reset_otp != OTP_VERIFIED:
                return Return.err(
                    Error(
                        error_codes.OTP_NOT_VERIFIED,
                        "Please verify your OTP before resetting password",
                    )
                )

            if reset_state(user, datetime.utcnow()) == ResetState.expired:
                return Return.err(
                    Error(
                        error_codes.RESET_WINDOW_EXPIRED,
                        "Password reset time window expired. Please request a new OTP",
                    )
                )

            password_validation = validate_password(new_password)
            if password_validation.is_err():
                return Return.err(password_validation.error)

            if check_password(new_password, user.password_hash):
                return Return.err(
                    Error(
                        error_codes.DUPLICATE_PASSWORD,
                        "New password cannot be the same as your old password",
                    )
                )

            user.password_hash = hash_password(new_password)
            user.reset_otp = None
            user.reset_otp_expires_at = None
            await self.uow.users.update(user)

            revoked_count = await self.uow.sessions.delete_all_by_user_id(user.id)

            await self.uow.commit()

            logger.info(
                f"Password reset for user {user.id}, {revoked_count} session(s) revoked"
            )

            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Password reset successfully. Please log in with your new password.",
                )
            )
