from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import bcrypt
import pytest

from storefront_auth.api.utils.jwt import TokenSigner
from storefront_auth.app.use_cases.auth import TokenIssuer
from storefront_auth.domain.entities import Session, User

PASSWORD = "SecurePass123!"
# Cheap hash shared by every unit test
PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.count = AsyncMock(return_value=0)
    uow.users.delete = AsyncMock(return_value=True)

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.get_by_access_token = AsyncMock(return_value=None)
    uow.sessions.get_by_refresh_token = AsyncMock(return_value=None)
    uow.sessions.has_active_session = AsyncMock(return_value=False)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.update_access_token = AsyncMock(return_value=True)
    uow.sessions.delete_by_id = AsyncMock(return_value=True)
    uow.sessions.delete_all_by_user_id = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def access_signer():
    return TokenSigner("unit-access-secret", timedelta(minutes=15), "access")


@pytest.fixture
def refresh_signer():
    return TokenSigner("unit-refresh-secret", timedelta(days=60), "refresh")


@pytest.fixture
def token_issuer(access_signer, refresh_signer):
    return TokenIssuer(access_signer=access_signer, refresh_signer=refresh_signer)


@pytest.fixture
def user():
    return User(
        name="Jane Shopper",
        email="jane@shop.com",
        password_hash=PASSWORD_HASH,
        is_admin=False,
    )


@pytest.fixture
def admin_user():
    return User(
        name="Store Admin",
        email="admin@shop.com",
        password_hash=PASSWORD_HASH,
        is_admin=True,
    )


@pytest.fixture
def make_session(token_issuer):
    """Build a stored session for a user, the way login would"""

    def _make(owner: User, refresh_ttl: timedelta = None) -> Session:
        session = Session(user_id=owner.id, refresh_token="")
        if refresh_ttl is None:
            session.refresh_token = token_issuer.mint_refresh_token(owner, session)
        else:
            session.refresh_token = token_issuer.refresh_signer.sign(
                {"user_id": str(owner.id), "sid": str(session.id)},
                expires_delta=refresh_ttl,
            )
        session.access_token = token_issuer.mint_access_token(owner, session)
        return session

    return _make


@pytest.fixture
def password():
    return PASSWORD
