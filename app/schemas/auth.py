import uuid
from pydantic import BaseModel, Field, EmailStr

from app.schemas.membership import MembershipWithTenant


class RegisterRequest(BaseModel):
    """Request to register a new user."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)


class RegisterResponse(BaseModel):
    """Response after successful registration."""
    id: uuid.UUID
    email: str
    full_name: str
    message: str = "User registered successfully"

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class LoginResponse(TokenResponse):
    """Tokens plus the user's identity and tenant memberships."""
    user_id: uuid.UUID
    email: str
    full_name: str
    memberships: list[MembershipWithTenant]


class RefreshRequest(BaseModel):
    """Request to refresh access token."""
    refresh_token: str


class UserProfile(BaseModel):
    id: uuid.UUID
    email: str
    full_name: str
    is_active: bool
    memberships: list[MembershipWithTenant]
