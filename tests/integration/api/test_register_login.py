import pytest
from httpx import AsyncClient
from sqlmodel import select

from config import ApplicationConfig
from storefront_auth.domain.entities import Session, User

API = ApplicationConfig.API_PREFIX


@pytest.mark.asyncio
async def test_register(client: AsyncClient, db_session):
    """Registration stores a lower-cased email and a bcrypt hash, no session"""
    response = await client.post(f"{API}/register", json={
        "name": "Jane Shopper",
        "email": "Jane@Shop.com",
        "password": "SecurePass123!",
        "phone": "+15550100",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "jane@shop.com"
    assert data["is_admin"] is False
    assert "password_hash" not in data

    user = (await db_session.exec(select(User))).one()
    assert user.password_hash.startswith("$2")
    sessions = (await db_session.exec(select(Session))).all()
    assert sessions == []


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient):
    payload = {"name": "Jane", "email": "jane@shop.com", "password": "SecurePass123!"}
    await client.post(f"{API}/register", json=payload)

    response = await client.post(
        f"{API}/register", json={**payload, "email": "JANE@shop.com"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_register_weak_password(client: AsyncClient):
    response = await client.post(f"{API}/register", json={
        "name": "Jane", "email": "jane@shop.com", "password": "password1"
    })

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PASSWORD"


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient, db_session, login):
    """Given a registered user
    When they log in
    Then both tokens are returned, the refresh token is set as an HttpOnly
    cookie and exactly one session row holds the pair
    """
    data = await login()

    assert data["user"]["email"] == "jane@shop.com"
    assert data["access_token"] and data["refresh_token"]
    assert client.cookies.get(ApplicationConfig.REFRESH_COOKIE_NAME) == data["refresh_token"]

    sessions = (await db_session.exec(select(Session))).all()
    assert len(sessions) == 1
    assert str(sessions[0].id) == data["session_id"]
    assert sessions[0].access_token == data["access_token"]
    assert sessions[0].refresh_token == data["refresh_token"]


@pytest.mark.asyncio
async def test_login_is_case_insensitive_and_adds_a_session(
    client: AsyncClient, db_session, login
):
    first = await login()
    response = await client.post(
        f"{API}/login", json={"email": "JANE@SHOP.COM", "password": "SecurePass123!"}
    )

    assert response.status_code == 200
    second = response.json()
    assert second["session_id"] != first["session_id"]

    sessions = (await db_session.exec(select(Session))).all()
    assert len(sessions) == 2


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, db_session, login):
    await login()

    wrong_password = await client.post(
        f"{API}/login", json={"email": "jane@shop.com", "password": "WrongPass123!"}
    )
    unknown_email = await client.post(
        f"{API}/login", json={"email": "nobody@shop.com", "password": "SecurePass123!"}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["code"] == "INVALID_CREDENTIALS"

    sessions = (await db_session.exec(select(Session))).all()
    assert len(sessions) == 1


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
