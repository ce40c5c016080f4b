import uuid
from datetime import date, datetime
from pydantic import BaseModel, Field

from app.schemas.common import CalculationStatusLiteral, ProjectStatusLiteral
from app.schemas.ghg_protocol import BoundaryLiteral, GasCalculationResponse


class Iso14064ProjectCreate(BaseModel):
    tenant_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    organization_name: str = Field(..., min_length=1, max_length=255)
    location: str | None = None
    reporting_period_start: date
    reporting_period_end: date
    reporting_year: int = Field(..., ge=1990, le=2100)
    boundary_type: BoundaryLiteral = "operational"
    standard_version: str = "14064-1:2018"


class Iso14064ProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    organization_name: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = None
    reporting_period_start: date | None = None
    reporting_period_end: date | None = None
    reporting_year: int | None = Field(None, ge=1990, le=2100)
    boundary_type: BoundaryLiteral | None = None
    standard_version: str | None = None
    status: ProjectStatusLiteral | None = None


class Iso14064ProjectResponse(BaseModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    description: str | None
    organization_name: str
    location: str | None
    reporting_period_start: date
    reporting_period_end: date
    reporting_year: int
    status: str
    boundary_type: str
    standard_version: str
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class Iso14064SummaryResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    scope1_total: float
    scope2_total: float
    scope3_total: float
    total_emissions: float
    breakdown_by_gas: dict[str, float]
    breakdown_by_category: dict[str, float]
    calculation_count: int
    status: str
    notes: str | None
    last_calculated_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class Iso14064SummaryUpdate(BaseModel):
    status: CalculationStatusLiteral | None = None
    notes: str | None = None


class Iso14064ProjectDetail(Iso14064ProjectResponse):
    calculations: list[GasCalculationResponse]
    summary: Iso14064SummaryResponse | None


class ReferenceFactorResponse(BaseModel):
    activity_name: str
    scope: str
    category: str
    unit: str
    co2e_factor: float
    source: str
