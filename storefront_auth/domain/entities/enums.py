"""
Storefront Auth Domain Enums
"""

from enum import Enum


class ResetState(str, Enum):
    """Password reset progress of a user, derived from its OTP fields"""

    no_reset = "no_reset"
    otp_issued = "otp_issued"
    otp_verified = "otp_verified"
    expired = "expired"
