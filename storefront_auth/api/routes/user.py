from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from storefront_auth.api.error import ClientError, ServerError
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.app.use_cases.auth import AuthContext, UserInfo, error_codes
from storefront_auth.app.use_cases.users import LoadContextUseCase
from storefront_auth.depends import get_current_user, get_unit_of_work

router = APIRouter()


class MeResponse(BaseModel):
    """GET /me response payload"""
    user: UserInfo
    session_id: Optional[str] = None


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    current_user: AuthContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User

    Returns the user behind the bearer token. An expired access token is
    refreshed silently; the replacement arrives in the Authorization header.

    Raises:
        - 401 Unauthorized: Missing, invalid, revoked or unrefreshable token
        - 404 Not Found: User no longer exists
    """
    use_case = LoadContextUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        error = result.error
        if error.code == error_codes.USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    session_id = str(current_user.session_id) if current_user.session_id else None
    return {"user": result.value["user"], "session_id": session_id}
