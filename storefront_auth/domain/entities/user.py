"""
User Entity

Identity and credential record of a storefront customer or administrator.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

# Stored in reset_otp once the emailed code has been confirmed. Issued codes
# are always four digits, so this value can never collide with one.
OTP_VERIFIED = 1


class User(SQLModel, table=True):
    """
    User entity - credential record consulted by login and password reset.

    Business Rules:
    - Email is unique and stored lower-cased (case-insensitive lookup)
    - Password stored as bcrypt hash
    - reset_otp is None, a pending 4-digit code, or OTP_VERIFIED
    - reset_otp_expires_at is always set when reset_otp is set
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    is_admin: bool = Field(default=False)

    # Password reset state machine (OTP issued -> verified -> reset)
    reset_otp: Optional[int] = Field(default=None)
    reset_otp_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
