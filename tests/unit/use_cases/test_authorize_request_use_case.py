from datetime import timedelta
from uuid import uuid4

import pytest

from storefront_auth.app.use_cases.auth import (
    AuthorizeRequestUseCase,
    CheckAuthStatusUseCase,
    TokenIssuer,
    error_codes,
)

ADMIN_PATTERN = r"^/api/v1/admin/"


def make_gate(mock_uow, access_signer, lenient=False):
    return AuthorizeRequestUseCase(
        mock_uow,
        access_signer=access_signer,
        lenient_fallback=lenient,
        admin_route_pattern=ADMIN_PATTERN,
    )


@pytest.mark.asyncio
async def test_stored_token_is_allowed(mock_uow, user, make_session, access_signer):
    session = make_session(user)
    mock_uow.sessions.get_by_access_token.return_value = session

    result = await make_gate(mock_uow, access_signer).execute(
        session.access_token, "/api/v1/me"
    )

    assert result.is_ok()
    assert result.value.user_id == user.id
    assert result.value.is_admin is False
    assert result.value.session_id == session.id
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_bad_signature(mock_uow, user, make_session, access_signer):
    session = make_session(user)

    # A refresh token is not an access token
    result = await make_gate(mock_uow, access_signer).execute(session.refresh_token)

    assert result.is_err()
    assert result.error.code == error_codes.INVALID_SIGNATURE
    mock_uow.sessions.get_by_access_token.assert_not_called()


@pytest.mark.asyncio
async def test_expired_token_is_reported_not_refreshed(mock_uow, user, access_signer):
    token = access_signer.sign(
        {"user_id": str(user.id), "is_admin": False, "sid": str(uuid4())},
        expires_delta=timedelta(seconds=-10),
    )

    result = await make_gate(mock_uow, access_signer).execute(token)

    assert result.is_err()
    assert result.error.code == error_codes.ACCESS_TOKEN_EXPIRED
    mock_uow.sessions.update_access_token.assert_not_called()


@pytest.mark.asyncio
async def test_deleted_session_is_revoked(mock_uow, user, make_session, access_signer):
    """Logout or password reset removed the row: the token never passes again"""
    session = make_session(user)

    result = await make_gate(mock_uow, access_signer).execute(session.access_token)

    assert result.is_err()
    assert result.error.code == error_codes.TOKEN_REVOKED


@pytest.mark.asyncio
async def test_superseded_token_of_live_session_is_allowed(
    mock_uow, user, make_session, token_issuer, access_signer
):
    """A concurrent refresh replaced the stored string; the same session still exists"""
    session = make_session(user)
    stale_token = session.access_token
    session.access_token = token_issuer.mint_access_token(user, session)
    mock_uow.sessions.get_by_id.return_value = session

    result = await make_gate(mock_uow, access_signer).execute(stale_token)

    assert result.is_ok()
    assert result.value.session_id == session.id
    mock_uow.sessions.get_by_id.assert_called_once_with(session.id)


@pytest.mark.asyncio
async def test_session_of_another_user_does_not_match(
    mock_uow, user, admin_user, make_session, access_signer
):
    session = make_session(user)
    foreign = make_session(admin_user)
    mock_uow.sessions.get_by_access_token.return_value = foreign

    result = await make_gate(mock_uow, access_signer).execute(session.access_token)

    assert result.is_err()
    assert result.error.code == error_codes.TOKEN_REVOKED


@pytest.mark.asyncio
async def test_lenient_mode_accepts_any_session_of_the_user(
    mock_uow, user, make_session, access_signer
):
    session = make_session(user)
    mock_uow.sessions.has_active_session.return_value = True

    strict = await make_gate(mock_uow, access_signer).execute(session.access_token)
    lenient = await make_gate(mock_uow, access_signer, lenient=True).execute(
        session.access_token
    )

    assert strict.is_err()
    assert strict.error.code == error_codes.TOKEN_REVOKED
    assert lenient.is_ok()
    assert lenient.value.user_id == user.id


@pytest.mark.asyncio
async def test_lenient_mode_without_any_session_is_revoked(
    mock_uow, user, make_session, access_signer
):
    session = make_session(user)

    result = await make_gate(mock_uow, access_signer, lenient=True).execute(
        session.access_token
    )

    assert result.is_err()
    assert result.error.code == error_codes.TOKEN_REVOKED


@pytest.mark.asyncio
async def test_admin_route_requires_admin(
    mock_uow, user, admin_user, make_session, access_signer
):
    user_session = make_session(user)
    admin_session = make_session(admin_user)
    gate = make_gate(mock_uow, access_signer)

    mock_uow.sessions.get_by_access_token.return_value = user_session
    denied = await gate.execute(user_session.access_token, "/api/v1/admin/users/count")

    mock_uow.sessions.get_by_access_token.return_value = admin_session
    allowed = await gate.execute(admin_session.access_token, "/api/v1/admin/users/count")

    assert denied.is_err()
    assert denied.error.code == error_codes.FORBIDDEN_ROUTE
    assert allowed.is_ok()
    assert allowed.value.is_admin is True


@pytest.mark.asyncio
async def test_route_check_is_skipped_without_path(
    mock_uow, user, make_session, access_signer
):
    session = make_session(user)
    mock_uow.sessions.get_by_access_token.return_value = session

    result = await make_gate(mock_uow, access_signer).execute(session.access_token, None)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_check_auth_status_reports_logged_in(mock_uow, user, make_session):
    session = make_session(user)
    session.access_token = TokenIssuer().mint_access_token(user, session)
    mock_uow.sessions.get_by_access_token.return_value = session

    result = await CheckAuthStatusUseCase(mock_uow).execute(session.access_token)

    assert result.is_ok()
    assert result.value.is_logged_in is True
    assert result.value.user_id == str(user.id)
    assert result.value.is_admin is False


@pytest.mark.asyncio
async def test_check_auth_status_never_fails(mock_uow):
    missing = await CheckAuthStatusUseCase(mock_uow).execute(None)
    garbage = await CheckAuthStatusUseCase(mock_uow).execute("not-a-jwt")

    assert missing.is_ok() and missing.value.is_logged_in is False
    assert garbage.is_ok() and garbage.value.is_logged_in is False
    assert garbage.value.user_id is None
