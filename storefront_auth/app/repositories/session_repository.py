from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from storefront_auth.domain.entities import Session


class ISessionRepository(ABC):
    """Session (token pair) repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_access_token(self, access_token: str) -> Optional[Session]:
        """Find the session currently holding this exact access token"""
        pass

    @abstractmethod
    async def get_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """Find the session owning this refresh token"""
        pass

    @abstractmethod
    async def has_active_session(self, user_id: UUID) -> bool:
        """True if the user has at least one session row"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def update_access_token(self, session_id: UUID, access_token: str) -> bool:
        """Replace the stored access token in place. Returns False if the row is gone."""
        pass

    @abstractmethod
    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a specific session. Returns True if a row was deleted."""
        pass

    @abstractmethod
    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete all sessions for a user. Returns count of deleted sessions."""
        pass
