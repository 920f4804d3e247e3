"""
Storefront Auth Domain Entities

Credential store and token store records.
"""

from .enums import ResetState
from .user import OTP_VERIFIED, User
from .session import Session

__all__ = [
    # Enums
    "ResetState",
    # Entities
    "User",
    "Session",
    # Constants
    "OTP_VERIFIED",
]
