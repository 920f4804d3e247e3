from datetime import datetime
from typing import Optional

from storefront_auth.domain.entities import OTP_VERIFIED, ResetState, User


def reset_state(user: User, now: Optional[datetime] = None) -> ResetState:
    """
    Derive where a user stands in the password reset flow.

    A pending code and a verified marker both turn into `expired` once
    reset_otp_expires_at has passed.
    """
    now = now or datetime.utcnow()

    if user.reset_otp is None:
        return ResetState.no_reset

    if user.reset_otp_expires_at is None or now >= user.reset_otp_expires_at:
        return ResetState.expired

    if user.reset_otp == OTP_VERIFIED:
        return ResetState.otp_verified

    return ResetState.otp_issued
