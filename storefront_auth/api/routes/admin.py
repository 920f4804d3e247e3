"""
Admin API Routes

Every path under /admin/ is matched by ADMIN_ROUTE_PATTERN, so the
revocation gate rejects non-admin callers with 403 FORBIDDEN_ROUTE
before these handlers run.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from storefront_auth.api.error import ClientError, ServerError
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.app.use_cases.auth import AuthContext, error_codes
from storefront_auth.app.use_cases.users import (
    CountUsersUseCase,
    DeleteUserUseCase,
    RevokeSessionsUseCase,
)
from storefront_auth.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/admin")


class UserCountResponse(BaseModel):
    user_count: int


class RevokeSessionsResponse(BaseModel):
    message: str
    revoked_count: int


@router.get("/users/count", status_code=status.HTTP_200_OK, response_model=UserCountResponse)
async def count_users(
    current_user: AuthContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = CountUsersUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return {"user_count": result.value}


@router.post(
    "/users/{user_id}/revoke-sessions",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_user_sessions(
    user_id: UUID,
    current_user: AuthContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke All Sessions of a User

    Logs the user out of every device, e.g. after an account compromise.

    Raises:
        - 404 Not Found: User not found
    """
    use_case = RevokeSessionsUseCase(uow)
    result = await use_case.revoke_all_sessions(
        user_id,
        current_user.user_id,
        current_user.is_admin,
    )

    if result.is_err():
        error = result.error
        if error.code == error_codes.FORBIDDEN:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == error_codes.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    data = result.value
    return {
        "message": f"Successfully revoked {data['revoked_count']} session(s)",
        "revoked_count": data["revoked_count"],
    }


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    current_user: AuthContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete User

    Removes the account together with every session it holds.

    Raises:
        - 404 Not Found: User not found
    """
    use_case = DeleteUserUseCase(uow)
    result = await use_case.execute(user_id, current_user.user_id)

    if result.is_err():
        error = result.error
        if error.code == error_codes.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
