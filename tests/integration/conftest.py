from typing import List, Tuple

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from storefront_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from storefront_auth.app.services.email_sender import IEmailSender
from storefront_auth.depends import get_email_sender, get_unit_of_work

# Fast hashing for tests
ApplicationConfig.BCRYPT_ROUNDS = 4

API = ApplicationConfig.API_PREFIX
PASSWORD = "SecurePass123!"


class RecordingEmailSender(IEmailSender):
    """Keeps every OTP it is asked to send"""

    def __init__(self):
        self.sent: List[Tuple[str, int]] = []
        self.fail = False

    async def send_password_reset_otp(self, to_email: str, otp: int) -> bool:
        self.sent.append((to_email, otp))
        return not self.fail

    def last_otp(self, to_email: str) -> int:
        return [otp for email, otp in self.sent if email == to_email][-1]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def client(db_session, email_sender):
    from storefront_auth.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def login(client):
    """Register (if needed) and log in; returns the login response body"""

    async def _login(email: str = "jane@shop.com", password: str = PASSWORD):
        await client.post(
            f"{API}/register",
            json={"name": "Jane Shopper", "email": email, "password": password},
        )
        response = await client.post(
            f"{API}/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200
        return response.json()

    return _login
