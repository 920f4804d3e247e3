"""
Verify OTP Use Case

Confirms possession of the emailed code and opens the reset window.
"""

import logging
from datetime import datetime, timedelta

from config import ApplicationConfig
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.domain.entities import OTP_VERIFIED, ResetState
from storefront_auth.domain.reset_state import reset_state
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import VerifyOtpResponse

logger = logging.getLogger(__name__)


class VerifyOtpUseCase:
    """
    Use case for OTP verification (OtpIssued -> OtpVerified).

    Business Rules:
    - Succeeds iff the code equals the latest issued code and has not expired
    - On success the code is replaced by the OTP_VERIFIED marker and the
      expiry moved to now + RESET_WINDOW_MINUTES (30)
    - Failed attempts write nothing
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, otp: int) -> Result[VerifyOtpResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.err(Error(error_codes.USER_NOT_FOUND, "User not found"))

            now = datetime.utcnow()
            state = reset_state(user, now)

            # A verified marker is never a submittable code
            if user.reset_otp is None or user.reset_otp == OTP_VERIFIED:
                return Return.err(Error(error_codes.OTP_MISMATCH, "Invalid OTP"))

            if user.reset_otp != otp:
                return Return.err(Error(error_codes.OTP_MISMATCH, "Invalid OTP"))

            if state != ResetState.otp_issued:
                return Return.err(Error(error_codes.OTP_EXPIRED, "OTP has expired"))

            user.reset_otp = OTP_VERIFIED
            user.reset_otp_expires_at = now + timedelta(
                minutes=ApplicationConfig.RESET_WINDOW_MINUTES
            )
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Password reset OTP verified for user {user.id}")

            return Return.ok(
                VerifyOtpResponse(
                    status="verified",
                    message=(
                        "OTP confirmed successfully. Please reset your password "
                        f"within {ApplicationConfig.RESET_WINDOW_MINUTES} minutes."
                    ),
                )
            )
