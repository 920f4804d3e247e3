from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from storefront_auth.app.repositories.session_repository import ISessionRepository
from storefront_auth.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_access_token(self, access_token: str) -> Optional[Session]:
        stmt = select(Session).where(Session.access_token == access_token)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        stmt = select(Session).where(Session.refresh_token == refresh_token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def has_active_session(self, user_id: UUID) -> bool:
        stmt = select(Session.id).where(Session.user_id == user_id).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def update_access_token(self, session_id: UUID, access_token: str) -> bool:
        """
        Single-row UPDATE. Concurrent refreshes of one session keep
        whichever write lands last.
        """
        stmt = (
            update(Session)
            .where(Session.id == session_id)
            .values(access_token=access_token)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_id(self, session_id: UUID) -> bool:
        stmt = delete(Session).where(Session.id == session_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete every session of a user (forces re-login on all devices)"""
        stmt = delete(Session).where(Session.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
