from typing import Annotated
import uuid

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.services.auth import AuthService
from app.services.user import UserService
from app.services.tenant import TenantService
from app.services.invitation import InvitationService
from app.services.standard import StandardService, CertificationService
from app.services.defra import DefraService
from app.services.ghg_protocol import GhgProtocolService
from app.services.iso14064 import Iso14064Service
from app.services.ipcc import IpccService
from app.services.iscc import IsccService
from app.services.carbon_project import CarbonProjectService, WorksheetService
from app.models.user import User
from app.core.security import decode_token
from app.core.exceptions import UnauthorizedError

DbSession = Annotated[AsyncSession, Depends(get_db)]

bearer_scheme = HTTPBearer(auto_error=False)


async def get_auth_service(db: DbSession) -> AuthService:
    return AuthService(db)


async def get_user_service(db: DbSession) -> UserService:
    return UserService(db)


async def get_tenant_service(db: DbSession) -> TenantService:
    return TenantService(db)


async def get_invitation_service(db: DbSession) -> InvitationService:
    return InvitationService(db)


async def get_standard_service(db: DbSession) -> StandardService:
    return StandardService(db)


async def get_certification_service(db: DbSession) -> CertificationService:
    return CertificationService(db)


async def get_defra_service(db: DbSession) -> DefraService:
    return DefraService(db)


async def get_ghg_protocol_service(db: DbSession) -> GhgProtocolService:
    return GhgProtocolService(db)


async def get_iso14064_service(db: DbSession) -> Iso14064Service:
    return Iso14064Service(db)


async def get_ipcc_service(db: DbSession) -> IpccService:
    return IpccService(db)


async def get_iscc_service(db: DbSession) -> IsccService:
    return IsccService(db)


async def get_carbon_project_service(db: DbSession) -> CarbonProjectService:
    return CarbonProjectService(db)


async def get_worksheet_service(db: DbSession) -> WorksheetService:
    return WorksheetService(db)


async def get_current_user(
    db: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """
    Get current user from the Bearer access token.

    Refresh tokens are rejected here; they are only accepted by /auth/refresh.
    """
    if not credentials:
        raise UnauthorizedError("Authorization header is required")

    payload = decode_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid or expired token")

    if payload.get("type") != "access":
        raise UnauthorizedError("Cannot use refresh token for authentication")

    try:
        user_id = uuid.UUID(payload["sub"])
    except (KeyError, ValueError):
        raise UnauthorizedError("Invalid token payload")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise UnauthorizedError("User not found")

    if not user.is_active:
        raise UnauthorizedError("User is inactive")

    return user


# Type aliases for dependency injection
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]
StandardServiceDep = Annotated[StandardService, Depends(get_standard_service)]
CertificationServiceDep = Annotated[CertificationService, Depends(get_certification_service)]
DefraServiceDep = Annotated[DefraService, Depends(get_defra_service)]
GhgProtocolServiceDep = Annotated[GhgProtocolService, Depends(get_ghg_protocol_service)]
Iso14064ServiceDep = Annotated[Iso14064Service, Depends(get_iso14064_service)]
IpccServiceDep = Annotated[IpccService, Depends(get_ipcc_service)]
IsccServiceDep = Annotated[IsccService, Depends(get_iscc_service)]
CarbonProjectServiceDep = Annotated[CarbonProjectService, Depends(get_carbon_project_service)]
WorksheetServiceDep = Annotated[WorksheetService, Depends(get_worksheet_service)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
