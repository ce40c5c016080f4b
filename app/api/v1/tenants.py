import uuid

from fastapi import APIRouter

from app.api.deps import CurrentUserDep, TenantServiceDep, InvitationServiceDep
from app.schemas.tenant import TenantCreate, TenantUpdate, TenantLogoUpdate, TenantWithRole
from app.schemas.membership import (
    MembershipResponse,
    MembershipUpdate,
    MembershipWithUser,
    InvitationCreate,
    BulkInvitationCreate,
    BulkInvitationResponse,
    InvitationResponse,
    InvitationSent,
    InvitationStats,
)

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post("", response_model=TenantWithRole, status_code=201)
async def create_tenant(
    data: TenantCreate,
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """
    Create a new tenant.

    The creator becomes its superadmin. Without a slug, one is derived from the name.
    """
    return await service.create(current_user.id, data)


@router.get("", response_model=list[TenantWithRole])
async def list_tenants(
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """List the tenants the current user belongs to."""
    return await service.list_for_user(current_user.id)


@router.get("/{tenant_id}", response_model=TenantWithRole)
async def get_tenant(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """Get a tenant by ID (members only)."""
    return await service.get_for_user(current_user.id, tenant_id)


@router.patch("/{tenant_id}", response_model=TenantWithRole)
async def update_tenant(
    tenant_id: uuid.UUID,
    data: TenantUpdate,
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """Update a tenant (admin or superadmin)."""
    return await service.update(current_user.id, tenant_id, data)


@router.put("/{tenant_id}/logo", response_model=TenantWithRole)
async def update_tenant_logo(
    tenant_id: uuid.UUID,
    data: TenantLogoUpdate,
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """Set the tenant logo URL (admin or superadmin)."""
    return await service.set_logo(current_user.id, tenant_id, data.logo_url)


@router.delete("/{tenant_id}/logo", response_model=TenantWithRole)
async def remove_tenant_logo(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """Remove the tenant logo (admin or superadmin)."""
    return await service.set_logo(current_user.id, tenant_id, None)


# === Member Management ===

@router.get("/{tenant_id}/members", response_model=list[MembershipWithUser])
async def list_tenant_members(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """List all members of a tenant with user details (admin or superadmin)."""
    return await service.get_members(current_user.id, tenant_id)


@router.patch("/{tenant_id}/members/{user_id}", response_model=MembershipResponse)
async def update_member_role(
    tenant_id: uuid.UUID,
    user_id: uuid.UUID,
    data: MembershipUpdate,
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """Change a member's role (superadmin only)."""
    membership = await service.update_member_role(current_user.id, tenant_id, user_id, data.role)
    return MembershipResponse.model_validate(membership)


@router.delete("/{tenant_id}/members/{user_id}", status_code=204)
async def remove_member(
    tenant_id: uuid.UUID,
    user_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: TenantServiceDep,
):
    """
    Remove a member from a tenant (superadmin only).

    Superadmins cannot remove themselves.
    """
    await service.remove_member(current_user.id, tenant_id, user_id)


# === Invitations ===

@router.get("/{tenant_id}/invitations", response_model=list[InvitationResponse])
async def list_invitations(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: InvitationServiceDep,
):
    """List every invitation of a tenant, newest first."""
    return await service.list_for_tenant(current_user.id, tenant_id)


@router.get("/{tenant_id}/invitations/stats", response_model=InvitationStats)
async def invitation_stats(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: InvitationServiceDep,
):
    """Counts, acceptance rate and the latest invitations."""
    return await service.stats(current_user.id, tenant_id)


@router.post("/{tenant_id}/invitations", response_model=InvitationSent, status_code=201)
async def send_invitation(
    tenant_id: uuid.UUID,
    data: InvitationCreate,
    current_user: CurrentUserDep,
    service: InvitationServiceDep,
):
    """
    Invite a user to the tenant.

    Returns the invitation and the URL to share with the invitee.
    """
    return await service.send(current_user.id, tenant_id, data)


@router.post("/{tenant_id}/invitations/bulk", response_model=BulkInvitationResponse)
async def send_bulk_invitations(
    tenant_id: uuid.UUID,
    data: BulkInvitationCreate,
    current_user: CurrentUserDep,
    service: InvitationServiceDep,
):
    """Invite several users; failures are reported per email."""
    return await service.send_bulk(current_user.id, tenant_id, data.invitations)


@router.post("/{tenant_id}/invitations/{invitation_id}/resend", response_model=InvitationSent)
async def resend_invitation(
    tenant_id: uuid.UUID,
    invitation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: InvitationServiceDep,
):
    """Issue a new token and expiry for a pending invitation."""
    return await service.resend(current_user.id, tenant_id, invitation_id)


@router.delete("/{tenant_id}/invitations/{invitation_id}", status_code=204)
async def cancel_invitation(
    tenant_id: uuid.UUID,
    invitation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: InvitationServiceDep,
):
    """Cancel (delete) an invitation."""
    await service.cancel(current_user.id, tenant_id, invitation_id)
