import math
import uuid
from datetime import datetime, timedelta

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import User
from app.models.tenant import Tenant
from app.models.membership import Membership, ADMIN_ROLES
from app.models.invitation import Invitation
from app.schemas.auth import LoginResponse
from app.schemas.membership import (
    InvitationCreate,
    InvitationResponse,
    InvitationSent,
    BulkInvitationResponse,
    BulkInvitationResult,
    BulkInvitationError,
    InvitationInfo,
    InvitationPreview,
    InvitationAcceptWithSignup,
    InvitationStats,
)
from app.services.access import ensure_tenant_access
from app.services.auth import AuthService
from app.core.security import generate_invitation_token, hash_password
from app.core.exceptions import (
    AppError,
    NotFoundError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
)


def invitation_url(token: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/invitations/accept?token={token}"


def _expiry() -> datetime:
    return datetime.utcnow() + timedelta(days=settings.INVITATION_EXPIRE_DAYS)


class InvitationService:
    """Service for tenant invitations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # === Admin operations ===

    async def send(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, data: InvitationCreate
    ) -> InvitationSent:
        """Invite an email address to the tenant."""
        await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=ADMIN_ROLES,
            message="Only superadmin or admin can send invitations",
        )
        invitation = await self._create(user_id, tenant_id, data)
        await self.db.commit()
        await self.db.refresh(invitation)

        return InvitationSent(
            invitation=InvitationResponse.model_validate(invitation),
            invitation_url=invitation_url(invitation.token),
        )

    async def send_bulk(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, items: list[InvitationCreate]
    ) -> BulkInvitationResponse:
        """Invite several addresses; a failing address does not stop the others."""
        await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=ADMIN_ROLES,
            message="Only superadmin or admin can send invitations",
        )
        results: list[BulkInvitationResult] = []
        errors: list[BulkInvitationError] = []

        for item in items:
            try:
                invitation = await self._create(user_id, tenant_id, item)
            except AppError as err:
                errors.append(BulkInvitationError(email=item.email, error=err.detail))
                continue
            results.append(
                BulkInvitationResult(
                    email=invitation.email,
                    role=invitation.role,
                    invitation_url=invitation_url(invitation.token),
                    token=invitation.token,
                )
            )

        await self.db.commit()
        return BulkInvitationResponse(results=results, errors=errors)

    async def list_for_tenant(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID
    ) -> list[Invitation]:
        """All invitations of a tenant, newest first."""
        await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=ADMIN_ROLES,
            message="Only superadmin or admin can view invitations",
        )
        result = await self.db.execute(
            select(Invitation)
            .where(Invitation.tenant_id == tenant_id)
            .order_by(Invitation.created_at.desc())
        )
        return list(result.scalars().all())

    async def cancel(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, invitation_id: uuid.UUID
    ) -> None:
        """Delete an invitation."""
        await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=ADMIN_ROLES,
            message="Only superadmin or admin can cancel invitations",
        )
        invitation = await self._get_in_tenant(tenant_id, invitation_id)
        await self.db.delete(invitation)
        await self.db.commit()
        logger.bind(tenant_id=str(tenant_id), invitation_id=str(invitation_id)).info(
            "Invitation cancelled"
        )

    async def resend(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, invitation_id: uuid.UUID
    ) -> InvitationSent:
        """Issue a fresh token and expiry for an unaccepted invitation."""
        await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=ADMIN_ROLES,
            message="Only superadmin or admin can resend invitations",
        )
        invitation = await self._get_in_tenant(tenant_id, invitation_id)
        if invitation.is_accepted:
            raise BadRequestError("Cannot resend an accepted invitation")

        invitation.token = generate_invitation_token()
        invitation.expires_at = _expiry()
        await self.db.commit()
        await self.db.refresh(invitation)

        logger.bind(tenant_id=str(tenant_id), invitation_id=str(invitation_id)).info(
            "Invitation resent"
        )
        return InvitationSent(
            invitation=InvitationResponse.model_validate(invitation),
            invitation_url=invitation_url(invitation.token),
        )

    async def stats(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> InvitationStats:
        invitations = await self.list_for_tenant(user_id, tenant_id)
        now = datetime.utcnow()

        accepted = [i for i in invitations if i.accepted_at is not None]
        pending = [i for i in invitations if i.accepted_at is None and i.expires_at > now]
        expired = [i for i in invitations if i.accepted_at is None and i.expires_at <= now]
        total = len(invitations)
        rate = math.floor(len(accepted) / total * 100 + 0.5) if total else 0

        return InvitationStats(
            total=total,
            pending=len(pending),
            accepted=len(accepted),
            expired=len(expired),
            acceptance_rate=rate,
            recent_invitations=[InvitationResponse.model_validate(i) for i in invitations[:5]],
        )

    # === Invitee operations ===

    async def get_info(self, user: User, token: str) -> InvitationInfo:
        """Details of an open invitation addressed to the caller."""
        invitation = await self._get_open_by_token(token)
        if invitation.is_expired:
            raise BadRequestError("Invitation has expired")
        if invitation.email != user.email:
            raise ForbiddenError("This invitation is not for your account")

        tenant = await self._get_tenant(invitation.tenant_id)
        inviter = await self._get_user(invitation.invited_by) if invitation.invited_by else None
        seconds_left = (invitation.expires_at - datetime.utcnow()).total_seconds()

        return InvitationInfo(
            email=invitation.email,
            role=invitation.role,
            tenant_id=tenant.id,
            tenant_name=tenant.name,
            tenant_slug=tenant.slug,
            invited_by_name=inviter.full_name if inviter else None,
            expires_at=invitation.expires_at,
            is_expired=invitation.is_expired,
            days_remaining=math.ceil(seconds_left / 86400),
        )

    async def preview(self, token: str) -> InvitationPreview:
        """Minimal public view of an open invitation."""
        invitation = await self._get_open_by_token(token)
        tenant = await self._get_tenant(invitation.tenant_id)
        existing_user = await self._get_user_by_email(invitation.email)

        return InvitationPreview(
            email=invitation.email,
            role=invitation.role,
            tenant_name=tenant.name,
            expires_at=invitation.expires_at,
            is_expired=invitation.is_expired,
            user_exists=existing_user is not None,
        )

    async def accept(self, user: User, token: str) -> Membership:
        """Join the tenant as the logged-in, invited user."""
        invitation = await self._get_open_by_token(token)
        if invitation.is_expired:
            raise BadRequestError("Invitation has expired")
        if invitation.email != user.email:
            raise ForbiddenError("Invitation is not for this user")

        if await self._get_membership(user.id, invitation.tenant_id):
            raise BadRequestError("User is already a member of this tenant")

        membership = self._join(user.id, invitation)
        await self.db.commit()
        await self.db.refresh(membership)
        return membership

    async def accept_with_signup(self, data: InvitationAcceptWithSignup) -> LoginResponse:
        """Create (or reuse) the invited account, join the tenant and log in."""
        invitation = await self._get_open_by_token(data.token)
        if invitation.is_expired:
            raise BadRequestError("Invitation has expired")
        if data.email.lower() != invitation.email:
            raise ForbiddenError("Email must match the invited email address")

        user = await self._get_user_by_email(invitation.email)
        if user:
            if await self._get_membership(user.id, invitation.tenant_id):
                raise ConflictError("User is already a member of this tenant")
        else:
            user = User(
                email=invitation.email,
                password_hash=hash_password(data.password),
                full_name=data.full_name,
            )
            self.db.add(user)
            await self.db.flush()

        self._join(user.id, invitation)
        await self.db.commit()
        await self.db.refresh(user)

        auth = AuthService(self.db)
        tokens = auth.generate_tokens(user)
        return LoginResponse(
            **tokens.model_dump(),
            user_id=user.id,
            email=user.email,
            full_name=user.full_name,
            memberships=await auth.get_user_memberships(user.id),
        )

    # === Helper Methods ===

    async def _create(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, data: InvitationCreate
    ) -> Invitation:
        email = data.email.lower()

        existing_user = await self._get_user_by_email(email)
        if existing_user and await self._get_membership(existing_user.id, tenant_id):
            raise BadRequestError("User is already a member of this tenant")

        result = await self.db.execute(
            select(Invitation).where(
                Invitation.tenant_id == tenant_id,
                Invitation.email == email,
                Invitation.accepted_at.is_(None),
            )
        )
        if result.scalars().first():
            raise ConflictError("Invitation already sent to this email")

        invitation = Invitation(
            email=email,
            tenant_id=tenant_id,
            invited_by=user_id,
            role=data.role,
            token=generate_invitation_token(),
            expires_at=_expiry(),
        )
        self.db.add(invitation)
        await self.db.flush()

        logger.bind(tenant_id=str(tenant_id), role=data.role).info(
            "Invitation created for {}", email
        )
        return invitation

    def _join(self, user_id: uuid.UUID, invitation: Invitation) -> Membership:
        membership = Membership(
            user_id=user_id,
            tenant_id=invitation.tenant_id,
            role=invitation.role,
        )
        self.db.add(membership)
        invitation.accepted_at = datetime.utcnow()

        logger.bind(tenant_id=str(invitation.tenant_id), user_id=str(user_id)).info(
            "Invitation accepted"
        )
        return membership

    async def _get_open_by_token(self, token: str) -> Invitation:
        result = await self.db.execute(
            select(Invitation).where(
                Invitation.token == token,
                Invitation.accepted_at.is_(None),
            )
        )
        invitation = result.scalar_one_or_none()
        if not invitation:
            raise NotFoundError("Invalid or expired invitation")
        return invitation

    async def _get_in_tenant(
        self, tenant_id: uuid.UUID, invitation_id: uuid.UUID
    ) -> Invitation:
        result = await self.db.execute(
            select(Invitation).where(
                Invitation.id == invitation_id,
                Invitation.tenant_id == tenant_id,
            )
        )
        invitation = result.scalar_one_or_none()
        if not invitation:
            raise NotFoundError("Invitation not found")
        return invitation

    async def _get_membership(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID
    ) -> Membership | None:
        result = await self.db.execute(
            select(Membership).where(
                Membership.user_id == user_id,
                Membership.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def _get_user(self, user_id: uuid.UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def _get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def _get_tenant(self, tenant_id: uuid.UUID) -> Tenant:
        result = await self.db.execute(select(Tenant).where(Tenant.id == tenant_id))
        tenant = result.scalar_one_or_none()
        if not tenant:
            raise NotFoundError("Tenant not found")
        return tenant
