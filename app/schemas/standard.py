import uuid
from datetime import datetime
from pydantic import BaseModel, Field


class StandardCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class StandardUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    code: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class StandardResponse(BaseModel):
    id: uuid.UUID
    name: str
    code: str
    description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CertificationCreate(BaseModel):
    standard_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class CertificationUpdate(BaseModel):
    standard_id: uuid.UUID | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class CertificationResponse(BaseModel):
    id: uuid.UUID
    standard_id: uuid.UUID
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
