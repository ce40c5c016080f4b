from fastapi import APIRouter, Request

from app.api.deps import CurrentUserDep, InvitationServiceDep
from app.core.rate_limit import limiter, AUTH_RATE_LIMIT
from app.schemas.auth import LoginResponse
from app.schemas.membership import (
    MembershipResponse,
    InvitationAccept,
    InvitationAcceptWithSignup,
    InvitationInfo,
    InvitationPreview,
)

router = APIRouter(prefix="/invitations", tags=["invitations"])


@router.get("/preview/{token}", response_model=InvitationPreview)
async def preview_invitation(
    token: str,
    service: InvitationServiceDep,
):
    """
    Public view of an invitation.

    Tells the frontend whether to show a login or a signup form.
    """
    return await service.preview(token)


@router.post("/accept-with-signup", response_model=LoginResponse)
@limiter.limit(AUTH_RATE_LIMIT)
async def accept_with_signup(
    request: Request,
    data: InvitationAcceptWithSignup,
    service: InvitationServiceDep,
):
    """Create the invited account, join the tenant and log in."""
    return await service.accept_with_signup(data)


@router.post("/accept", response_model=MembershipResponse)
async def accept_invitation(
    data: InvitationAccept,
    current_user: CurrentUserDep,
    service: InvitationServiceDep,
):
    """
    Accept an invitation as the logged-in user.

    The invitation must have been sent to the user's email.
    """
    membership = await service.accept(current_user, data.token)
    return MembershipResponse.model_validate(membership)


@router.get("/{token}", response_model=InvitationInfo)
async def get_invitation_info(
    token: str,
    current_user: CurrentUserDep,
    service: InvitationServiceDep,
):
    """Details of an invitation addressed to the current user."""
    return await service.get_info(current_user, token)
