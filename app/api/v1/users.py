from fastapi import APIRouter

from app.api.deps import CurrentUserDep, UserServiceDep, AuthServiceDep
from app.schemas.auth import UserProfile
from app.schemas.user import UserResponse, UserUpdate, PasswordUpdate
from app.schemas.common import MessageResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfile)
async def get_current_user(
    current_user: CurrentUserDep,
    auth_service: AuthServiceDep,
):
    """
    Get current user's profile.

    **Requires JWT token in Authorization header.**

    Includes every active tenant membership.
    """
    memberships = await auth_service.get_user_memberships(current_user.id)
    return UserProfile(
        id=current_user.id,
        email=current_user.email,
        full_name=current_user.full_name,
        is_active=current_user.is_active,
        memberships=memberships,
    )


@router.patch("/me", response_model=UserResponse)
async def update_current_user(
    data: UserUpdate,
    current_user: CurrentUserDep,
    user_service: UserServiceDep,
):
    """
    Update current user's profile.

    Only full_name can be updated. Email changes are not allowed.
    """
    user = await user_service.update(current_user.id, data)
    return UserResponse.model_validate(user)


@router.put("/me/password", response_model=MessageResponse)
async def change_password(
    data: PasswordUpdate,
    current_user: CurrentUserDep,
    user_service: UserServiceDep,
):
    """Change the password; the current password must be provided."""
    await user_service.change_password(current_user.id, data)
    return MessageResponse(message="Password updated successfully")
