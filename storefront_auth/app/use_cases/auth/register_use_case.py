import logging

from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.domain.entities import User
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes
from .dtos import RegisterCommand, UserInfo
from .passwords import hash_password, validate_password

logger = logging.getLogger(__name__)


def to_user_info(user: User) -> UserInfo:
    return UserInfo(
        id=str(user.id),
        name=user.name,
        email=user.email,
        phone=user.phone,
        is_admin=user.is_admin,
        created_at=user.created_at,
    )


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Validate password strength
    2. Reject an email that is already registered (case-insensitive)
    3. Hash password with bcrypt
    4. Create User (never an admin through this path)
    5. Commit and return public user info

    Registration does not log the user in; no session is created.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[UserInfo]:
        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        email = command.email.strip().lower()

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(
                    Error(error_codes.EMAIL_ALREADY_EXISTS, "Email already registered")
                )

            user = User(
                name=command.name.strip(),
                email=email,
                phone=command.phone,
                password_hash=hash_password(command.password),
                is_admin=False,
            )
            user = await self.uow.users.create(user)

            await self.uow.commit()

            logger.info(f"User registered: {user.id}")
            return Return.ok(to_user_info(user))
