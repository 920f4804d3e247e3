from datetime import timedelta

import pytest

from storefront_auth.app.use_cases.auth import VerifyTokenUseCase


@pytest.mark.asyncio
async def test_live_session_verifies(mock_uow, user, make_session, refresh_signer):
    session = make_session(user)
    mock_uow.sessions.get_by_access_token.return_value = session
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyTokenUseCase(mock_uow, refresh_signer=refresh_signer).execute(
        session.access_token
    )

    assert result.is_ok()
    assert result.value is True


@pytest.mark.asyncio
async def test_unknown_token_does_not_verify(mock_uow, refresh_signer):
    use_case = VerifyTokenUseCase(mock_uow, refresh_signer=refresh_signer)

    assert (await use_case.execute("not-stored")).value is False
    assert (await use_case.execute(None)).value is False


@pytest.mark.asyncio
async def test_expired_refresh_token_does_not_verify(
    mock_uow, user, make_session, refresh_signer
):
    session = make_session(user, refresh_ttl=timedelta(seconds=-10))
    mock_uow.sessions.get_by_access_token.return_value = session
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyTokenUseCase(mock_uow, refresh_signer=refresh_signer).execute(
        session.access_token
    )

    assert result.value is False
    # Read-only check
    mock_uow.sessions.delete_by_id.assert_not_called()
    mock_uow.commit.assert_not_called()
