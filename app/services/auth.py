import uuid
from datetime import timedelta

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.user import User
from app.models.membership import Membership
from app.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    TokenResponse,
)
from app.schemas.membership import MembershipWithTenant
from app.core.security import (
    verify_password,
    hash_password,
    decode_token,
    create_access_token,
    create_refresh_token,
)
from app.core.exceptions import UnauthorizedError, BadRequestError
from app.config import settings


class AuthService:
    """Registration, login and token refresh for global user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, data: RegisterRequest) -> RegisterResponse:
        """Register a new user."""
        existing = await self.get_user_by_email(data.email)
        if existing:
            raise BadRequestError("Email already registered")

        user = User(
            email=data.email.lower(),
            password_hash=hash_password(data.password),
            full_name=data.full_name,
        )

        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.bind(user_id=str(user.id)).info("User registered")
        return RegisterResponse(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
        )

    async def login(self, data: LoginRequest) -> LoginResponse:
        """Validate credentials and return tokens with the user's memberships."""
        user = await self._verify_credentials(data.email, data.password)
        if not user:
            logger.bind(email=data.email.lower()).warning("Failed login attempt")
            raise UnauthorizedError("Invalid email or password")

        tokens = self.generate_tokens(user)
        memberships = await self.get_user_memberships(user.id)

        return LoginResponse(
            **tokens.model_dump(),
            user_id=user.id,
            email=user.email,
            full_name=user.full_name,
            memberships=memberships,
        )

    async def refresh_token(self, refresh_token: str) -> TokenResponse:
        """Exchange a refresh token for a new token pair."""
        payload = decode_token(refresh_token)
        if not payload:
            raise UnauthorizedError("Invalid or expired refresh token")

        if payload.get("type") != "refresh":
            raise UnauthorizedError("Invalid token type")

        user = await self.get_user(uuid.UUID(payload["sub"]))
        if not user or not user.is_active:
            raise UnauthorizedError("User not found or inactive")

        return self.generate_tokens(user)

    def generate_tokens(self, user: User) -> TokenResponse:
        """Generate access and refresh tokens."""
        token_data = {"sub": str(user.id), "email": user.email}
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        return TokenResponse(
            access_token=create_access_token(token_data, expires_delta=expires_delta),
            refresh_token=create_refresh_token(token_data),
            expires_in=int(expires_delta.total_seconds()),
        )

    async def get_user(self, user_id: uuid.UUID) -> User | None:
        """Get a user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive)."""
        result = await self.db.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def _verify_credentials(self, email: str, password: str) -> User | None:
        """Verify user credentials."""
        user = await self.get_user_by_email(email)
        if not user:
            return None
        if not user.is_active:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def get_user_memberships(
        self, user_id: uuid.UUID
    ) -> list[MembershipWithTenant]:
        """Get all active memberships for a user."""
        result = await self.db.execute(
            select(Membership)
            .options(selectinload(Membership.tenant))
            .where(Membership.user_id == user_id, Membership.is_active == True)  # noqa: E712
            .order_by(Membership.joined_at.desc())
        )
        memberships = result.scalars().all()

        return [
            MembershipWithTenant(
                id=m.id,
                tenant_id=m.tenant_id,
                tenant_name=m.tenant.name,
                tenant_slug=m.tenant.slug,
                role=m.role,
                is_active=m.is_active,
            )
            for m in memberships
        ]
