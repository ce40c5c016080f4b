import uuid
from slugify import slugify

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.tenant import Tenant
from app.models.membership import Membership, TenantRole, ADMIN_ROLES
from app.schemas.tenant import TenantCreate, TenantUpdate, TenantWithRole
from app.services.access import ensure_tenant_access
from app.core.exceptions import NotFoundError, BadRequestError, ConflictError


class TenantService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_id: uuid.UUID, data: TenantCreate) -> TenantWithRole:
        """Create a tenant; the creator becomes its superadmin."""
        if data.slug:
            if await self.get_by_slug(data.slug):
                raise ConflictError("Tenant slug already exists")
            slug = data.slug
        else:
            slug = slugify(data.name)
            if await self.get_by_slug(slug):
                slug = f"{slug}-{uuid.uuid4().hex[:8]}"

        tenant = Tenant(name=data.name, slug=slug, domain=data.domain)
        self.db.add(tenant)
        await self.db.flush()

        self.db.add(
            Membership(
                user_id=user_id,
                tenant_id=tenant.id,
                role=TenantRole.SUPERADMIN.value,
            )
        )
        await self.db.commit()
        await self.db.refresh(tenant)

        logger.bind(tenant_id=str(tenant.id), user_id=str(user_id)).info(
            "Tenant created: {}", tenant.slug
        )
        return self._with_role(tenant, TenantRole.SUPERADMIN.value)

    async def get_by_id(self, tenant_id: uuid.UUID) -> Tenant | None:
        """Get a tenant by ID."""
        result = await self.db.execute(
            select(Tenant).where(Tenant.id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Get a tenant by slug."""
        result = await self.db.execute(
            select(Tenant).where(Tenant.slug == slug)
        )
        return result.scalar_one_or_none()

    async def get_for_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> TenantWithRole:
        """Get a tenant the user belongs to, with the user's role."""
        membership = await ensure_tenant_access(self.db, user_id, tenant_id)
        tenant = await self._get_or_404(tenant_id)
        return self._with_role(tenant, membership.role)

    async def list_for_user(self, user_id: uuid.UUID) -> list[TenantWithRole]:
        """Get the tenants the user is an active member of."""
        result = await self.db.execute(
            select(Membership)
            .options(selectinload(Membership.tenant))
            .where(Membership.user_id == user_id, Membership.is_active == True)  # noqa: E712
            .order_by(Membership.joined_at.desc())
        )
        return [self._with_role(m.tenant, m.role) for m in result.scalars().all()]

    async def update(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, data: TenantUpdate
    ) -> TenantWithRole:
        """Update a tenant (admin or superadmin)."""
        membership = await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=ADMIN_ROLES,
            message="Only superadmin or admin can update tenant",
        )
        tenant = await self._get_or_404(tenant_id)

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(tenant, field, value)

        await self.db.commit()
        await self.db.refresh(tenant)
        logger.bind(tenant_id=str(tenant_id)).info("Tenant updated: {}", sorted(update_data))
        return self._with_role(tenant, membership.role)

    async def set_logo(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, logo_url: str | None
    ) -> TenantWithRole:
        """Set or clear the tenant logo URL (admin or superadmin)."""
        membership = await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=ADMIN_ROLES,
            message="Only superadmin or admin can change the tenant logo",
        )
        tenant = await self._get_or_404(tenant_id)
        tenant.logo_url = logo_url

        await self.db.commit()
        await self.db.refresh(tenant)
        return self._with_role(tenant, membership.role)

    # === Members ===

    async def get_members(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID
    ) -> list[Membership]:
        """List members with user details (admin or superadmin)."""
        await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=ADMIN_ROLES,
            message="Only superadmin or admin can view members",
        )
        result = await self.db.execute(
            select(Membership)
            .options(selectinload(Membership.user))
            .where(Membership.tenant_id == tenant_id)
            .order_by(Membership.joined_at.asc())
        )
        return list(result.scalars().all())

    async def update_member_role(
        self,
        user_id: uuid.UUID,
        tenant_id: uuid.UUID,
        member_user_id: uuid.UUID,
        role: str,
    ) -> Membership:
        """Change a member's role (superadmin)."""
        await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=(TenantRole.SUPERADMIN.value,),
            message="Only superadmin can update member roles",
        )
        membership = await self._get_member_or_404(tenant_id, member_user_id)
        if membership.role == TenantRole.SUPERADMIN.value and role != TenantRole.SUPERADMIN.value:
            result = await self.db.execute(
                select(func.count()).select_from(Membership).where(
                    Membership.tenant_id == tenant_id,
                    Membership.role == TenantRole.SUPERADMIN.value,
                    Membership.is_active.is_(True),
                )
            )
            if result.scalar_one() <= 1:
                raise BadRequestError("Cannot demote the last superadmin of the tenant")
        membership.role = role

        await self.db.commit()
        await self.db.refresh(membership)
        logger.bind(tenant_id=str(tenant_id), member_id=str(member_user_id)).info(
            "Member role changed to {}", role
        )
        return membership

    async def remove_member(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, member_user_id: uuid.UUID
    ) -> None:
        """Remove a member from the tenant (superadmin, never oneself)."""
        await ensure_tenant_access(
            self.db, user_id, tenant_id, roles=(TenantRole.SUPERADMIN.value,),
            message="Only superadmin can remove members",
        )
        if member_user_id == user_id:
            raise BadRequestError("Cannot remove yourself from tenant")

        membership = await self._get_member_or_404(tenant_id, member_user_id)
        await self.db.delete(membership)
        await self.db.commit()
        logger.bind(tenant_id=str(tenant_id), member_id=str(member_user_id)).info(
            "Member removed"
        )

    # === Helper Methods ===

    async def _get_or_404(self, tenant_id: uuid.UUID) -> Tenant:
        tenant = await self.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundError("Tenant not found")
        return tenant

    async def _get_member_or_404(
        self, tenant_id: uuid.UUID, member_user_id: uuid.UUID
    ) -> Membership:
        result = await self.db.execute(
            select(Membership)
            .options(selectinload(Membership.user))
            .where(
                Membership.tenant_id == tenant_id,
                Membership.user_id == member_user_id,
            )
        )
        membership = result.scalar_one_or_none()
        if not membership:
            raise NotFoundError("Member not found")
        return membership

    @staticmethod
    def _with_role(tenant: Tenant, role: str) -> TenantWithRole:
        return TenantWithRole(
            id=tenant.id,
            name=tenant.name,
            slug=tenant.slug,
            domain=tenant.domain,
            logo_url=tenant.logo_url,
            is_active=tenant.is_active,
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
            user_role=role,
        )
