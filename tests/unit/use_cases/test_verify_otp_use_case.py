from datetime import datetime, timedelta

import pytest

from storefront_auth.app.use_cases.auth import VerifyOtpUseCase, error_codes
from storefront_auth.domain.entities import OTP_VERIFIED


def issue(user, otp=4821, minutes=10):
    user.reset_otp = otp
    user.reset_otp_expires_at = datetime.utcnow() + timedelta(minutes=minutes)


@pytest.mark.asyncio
async def test_matching_code_opens_reset_window(mock_uow, user):
    issue(user)
    mock_uow.users.get_by_email.return_value = user
    before = datetime.utcnow()

    result = await VerifyOtpUseCase(mock_uow).execute("jane@shop.com", 4821)

    assert result.is_ok()
    assert result.value.status == "verified"
    assert user.reset_otp == OTP_VERIFIED
    assert user.reset_otp_expires_at >= before + timedelta(minutes=30)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_wrong_code_changes_nothing(mock_uow, user):
    issue(user)
    expires_at = user.reset_otp_expires_at
    mock_uow.users.get_by_email.return_value = user

    result = await VerifyOtpUseCase(mock_uow).execute("jane@shop.com", 1234)

    assert result.is_err()
    assert result.error.code == error_codes.OTP_MISMATCH
    assert user.reset_otp == 4821
    assert user.reset_otp_expires_at == expires_at
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_expired_code_is_rejected(mock_uow, user):
    issue(user, minutes=-1)
    mock_uow.users.get_by_email.return_value = user

    result = await VerifyOtpUseCase(mock_uow).execute("jane@shop.com", 4821)

    assert result.is_err()
    assert result.error.code == error_codes.OTP_EXPIRED
    assert user.reset_otp == 4821
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_verified_marker_is_not_a_valid_code(mock_uow, user):
    issue(user, otp=OTP_VERIFIED, minutes=30)
    mock_uow.users.get_by_email.return_value = user

    result = await VerifyOtpUseCase(mock_uow).execute("jane@shop.com", OTP_VERIFIED)

    assert result.is_err()
    assert result.error.code == error_codes.OTP_MISMATCH


@pytest.mark.asyncio
async def test_no_code_issued(mock_uow, user):
    mock_uow.users.get_by_email.return_value = user

    result = await VerifyOtpUseCase(mock_uow).execute("jane@shop.com", 4821)

    assert result.is_err()
    assert result.error.code == error_codes.OTP_MISMATCH


@pytest.mark.asyncio
async def test_unknown_email(mock_uow):
    result = await VerifyOtpUseCase(mock_uow).execute("nobody@shop.com", 4821)

    assert result.is_err()
    assert result.error.code == error_codes.USER_NOT_FOUND
