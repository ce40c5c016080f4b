from fastapi import APIRouter, Request

from app.api.deps import AuthServiceDep
from app.core.rate_limit import limiter, AUTH_RATE_LIMIT
from app.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    TokenResponse,
    RefreshRequest,
)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(AUTH_RATE_LIMIT)
async def register(
    request: Request,
    data: RegisterRequest,
    service: AuthServiceDep,
):
    """
    Register a new user.

    **This creates an account without any tenant access.** Users join a
    tenant by creating one or by accepting an invitation.
    """
    return await service.register(data)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(AUTH_RATE_LIMIT)
async def login(
    request: Request,
    data: LoginRequest,
    service: AuthServiceDep,
):
    """
    Authenticate and get JWT tokens.

    Returns:
    - access_token: Short-lived token for API calls
    - refresh_token: Long-lived token to get new access tokens
    - memberships: tenants the user can access, with their role
    """
    return await service.login(data)


@router.post("/refresh", response_model=TokenResponse)
@limiter.limit(AUTH_RATE_LIMIT)
async def refresh_token(
    request: Request,
    data: RefreshRequest,
    service: AuthServiceDep,
):
    """Exchange a refresh token for a new token pair."""
    return await service.refresh_token(data.refresh_token)
