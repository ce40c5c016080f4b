"""Tenant membership checks shared by every tenant-scoped service."""
import uuid
from typing import Iterable

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.membership import Membership
from app.core.exceptions import ForbiddenError


async def get_active_membership(
    db: AsyncSession, user_id: uuid.UUID, tenant_id: uuid.UUID
) -> Membership | None:
    """Get the active membership of a user in a tenant."""
    result = await db.execute(
        select(Membership).where(
            Membership.user_id == user_id,
            Membership.tenant_id == tenant_id,
            Membership.is_active == True,  # noqa: E712
        )
    )
    return result.scalar_one_or_none()


async def ensure_tenant_access(
    db: AsyncSession,
    user_id: uuid.UUID,
    tenant_id: uuid.UUID,
    roles: Iterable[str] | None = None,
    message: str = "Access denied to this tenant",
) -> Membership:
    """
    Return the caller's membership or raise FORBIDDEN.

    When ``roles`` is given the membership role must be one of them.
    """
    membership = await get_active_membership(db, user_id, tenant_id)
    if membership is None or (roles is not None and membership.role not in roles):
        logger.bind(user_id=str(user_id), tenant_id=str(tenant_id)).warning(
            "Tenant access denied: {}", message
        )
        raise ForbiddenError(message)
    return membership
