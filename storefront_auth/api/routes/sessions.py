from uuid import UUID
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from storefront_auth.api.error import ClientError, ServerError
from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.app.use_cases.auth import AuthContext, error_codes
from storefront_auth.app.use_cases.users import RevokeSessionsUseCase
from storefront_auth.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/sessions")


class RevokeSpecificSessionResponse(BaseModel):
    """Response for specific session revocation"""

    message: str
    session_id: str
    revoked: bool


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSpecificSessionResponse,
)
async def revoke_specific_session(
    session_id: UUID,
    current_user: AuthContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Specific Session

    Logs out one device by deleting its session. Users can revoke their
    own sessions; admins can revoke any session.

    Raises:
        - 403 Forbidden: Session belongs to another user
        - 404 Not Found: Session not found
    """
    use_case = RevokeSessionsUseCase(uow)
    result = await use_case.revoke_specific_session(
        session_id,
        current_user.user_id,
        current_user.is_admin,
    )

    if result.is_err():
        error = result.error
        if error.code == error_codes.FORBIDDEN:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == error_codes.SESSION_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    data = result.value
    return {
        "message": "Session revoked successfully",
        "session_id": data["session_id"],
        "revoked": data["revoked"],
    }
