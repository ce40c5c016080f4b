import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, EmailStr

from app.schemas.user import UserBrief

TenantRoleLiteral = Literal["superadmin", "admin", "member"]
InvitableRole = Literal["admin", "member"]


class MembershipUpdate(BaseModel):
    role: TenantRoleLiteral


class MembershipResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    tenant_id: uuid.UUID
    role: str
    is_active: bool
    joined_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MembershipWithUser(MembershipResponse):
    """Membership with user details (for listing tenant members)."""
    user: UserBrief


class MembershipWithTenant(BaseModel):
    """Membership with tenant details (for listing user's memberships)."""
    id: uuid.UUID
    tenant_id: uuid.UUID
    tenant_name: str
    tenant_slug: str
    role: str
    is_active: bool

    model_config = {"from_attributes": True}


# Invitation schemas
class InvitationCreate(BaseModel):
    email: EmailStr
    role: InvitableRole = "member"


class BulkInvitationCreate(BaseModel):
    invitations: list[InvitationCreate] = Field(..., min_length=1, max_length=100)


class InvitationResponse(BaseModel):
    id: uuid.UUID
    email: str
    tenant_id: uuid.UUID
    invited_by: uuid.UUID | None
    role: str
    token: str
    expires_at: datetime
    accepted_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class InvitationSent(BaseModel):
    invitation: InvitationResponse
    invitation_url: str


class BulkInvitationResult(BaseModel):
    email: str
    role: str
    invitation_url: str
    token: str


class BulkInvitationError(BaseModel):
    email: str
    error: str


class BulkInvitationResponse(BaseModel):
    results: list[BulkInvitationResult]
    errors: list[BulkInvitationError]


class InvitationInfo(BaseModel):
    """Invitation details shown to the invited user."""
    email: str
    role: str
    tenant_id: uuid.UUID
    tenant_name: str
    tenant_slug: str
    invited_by_name: str | None
    expires_at: datetime
    is_expired: bool
    days_remaining: int


class InvitationPreview(BaseModel):
    """Public info about an invitation (without the token or inviter)."""
    email: str
    role: str
    tenant_name: str
    expires_at: datetime
    is_expired: bool
    user_exists: bool


class InvitationAccept(BaseModel):
    token: str


class InvitationAcceptWithSignup(BaseModel):
    token: str
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)


class InvitationStats(BaseModel):
    total: int
    pending: int
    accepted: int
    expired: int
    acceptance_rate: int
    recent_invitations: list[InvitationResponse]
