import pytest

from storefront_auth.app.use_cases.auth import RegisterCommand, RegisterUseCase
from storefront_auth.app.use_cases.auth.passwords import check_password


@pytest.mark.asyncio
async def test_successful_register(mock_uow):
    command = RegisterCommand(
        name="  Jane Shopper ",
        email="Jane@Shop.com",
        password="SecurePass123!",
        phone="+15550100",
    )
    use_case = RegisterUseCase(mock_uow)

    result = await use_case.execute(command)

    assert result.is_ok()
    assert result.value.email == "jane@shop.com"
    assert result.value.name == "Jane Shopper"
    assert result.value.is_admin is False

    created = mock_uow.users.create.call_args.args[0]
    assert created.email == "jane@shop.com"
    assert check_password("SecurePass123!", created.password_hash)
    mock_uow.commit.assert_called_once()
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_register_duplicate_email(mock_uow, user):
    mock_uow.users.get_by_email.return_value = user
    use_case = RegisterUseCase(mock_uow)

    result = await use_case.execute(
        RegisterCommand(name="Jane", email="JANE@shop.com", password="SecurePass123!")
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_weak_password(mock_uow):
    use_case = RegisterUseCase(mock_uow)

    result = await use_case.execute(
        RegisterCommand(name="Jane", email="jane@shop.com", password="password")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.users.get_by_email.assert_not_called()
