import uuid
from datetime import datetime
from pydantic import BaseModel, Field


class TenantBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    domain: str | None = Field(None, max_length=255)


class TenantCreate(TenantBase):
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class TenantUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    domain: str | None = Field(None, max_length=255)
    is_active: bool | None = None


class TenantLogoUpdate(BaseModel):
    logo_url: str = Field(..., min_length=1, max_length=1024)


class TenantResponse(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    domain: str | None
    logo_url: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TenantWithRole(TenantResponse):
    """Tenant as seen by one of its members."""
    user_role: str
