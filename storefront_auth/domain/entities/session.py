"""
Session Entity

One persisted access/refresh token pair, i.e. one logged-in device.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class Session(SQLModel, table=True):
    """
    Session entity - the authoritative revocation list for issued tokens.

    Business Rules:
    - One row per successful login; rows are never reused across logins
    - access_token is rewritten in place on every refresh
    - Deleting the row revokes both of its tokens immediately
    - Access tokens stored here carry this row's id in their `sid` claim
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    refresh_token: str = Field(unique=True, max_length=1024)
    access_token: Optional[str] = Field(default=None, index=True, max_length=1024)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
