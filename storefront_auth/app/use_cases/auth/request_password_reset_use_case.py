"""
Request Password Reset Use Case

Issues a one-time numeric code and emails it to the user.
"""

import logging
import secrets
from datetime import datetime, timedelta

from config import ApplicationConfig
from storefront_auth.app.services.email_sender import IEmailSender
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

OTP_MIN = 1000
OTP_MAX = 9999

RESET_REQUESTED_MESSAGE = (
    "If your email is registered with us, you will receive a password reset OTP"
)


def generate_otp() -> int:
    """Cryptographically random 4-digit code"""
    return OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset (NoReset -> OtpIssued).

    Business Rules:
    - Unknown email is the only distinguishable outcome (USER_NOT_FOUND)
    - A new code overwrites any previous code or verified marker
    - Code expires after OTP_TTL_MINUTES (10)
    - The code is committed before it is emailed; a delivery failure keeps
      the code valid and returns the same response as a successful send
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.err(Error(error_codes.USER_NOT_FOUND, "Incorrect email"))

            otp = generate_otp()
            user.reset_otp = otp
            user.reset_otp_expires_at = datetime.utcnow() + timedelta(
                minutes=ApplicationConfig.OTP_TTL_MINUTES
            )
            await self.uow.users.update(user)
            await self.uow.commit()

            recipient = user.email
            user_id = user.id

        logger.info(f"Password reset OTP issued for user {user_id}")

        sent = await self.email_sender.send_password_reset_otp(recipient, otp)
        if not sent:
            logger.warning(f"Password reset OTP email failed for user {user_id}")

        return Return.ok(
            RequestPasswordResetResponse(status="sent", message=RESET_REQUESTED_MESSAGE)
        )
