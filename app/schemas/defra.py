import uuid
from datetime import date, datetime
from pydantic import BaseModel, Field

from app.schemas.common import ProjectStatusLiteral


class DefraProjectCreate(BaseModel):
    tenant_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    organization_name: str = Field(..., min_length=1, max_length=255)
    reporting_period_start: date
    reporting_period_end: date
    defra_year: str = Field(..., pattern=r"^\d{4}$")


class DefraProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    organization_name: str | None = Field(None, min_length=1, max_length=255)
    reporting_period_start: date | None = None
    reporting_period_end: date | None = None
    defra_year: str | None = Field(None, pattern=r"^\d{4}$")
    status: ProjectStatusLiteral | None = None


class DefraProjectResponse(BaseModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    description: str | None
    organization_name: str
    reporting_period_start: date
    reporting_period_end: date
    defra_year: str
    status: str
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DefraEmissionFactorBase(BaseModel):
    year: str = Field(..., pattern=r"^\d{4}$")
    level1_category: str = Field(..., min_length=1, max_length=255)
    level2_category: str | None = None
    level3_category: str | None = None
    level4_category: str | None = None
    activity_name: str = Field(..., min_length=1, max_length=255)
    unit: str = Field(..., min_length=1, max_length=100)
    unit_type: str | None = None
    co2_factor: float | None = None
    ch4_factor: float | None = None
    n2o_factor: float | None = None
    co2e_factor: float | None = None
    scope: str = Field(..., pattern=r"^Scope [123]$")
    source: str | None = None
    notes: str | None = None


class DefraEmissionFactorCreate(DefraEmissionFactorBase):
    pass


class DefraEmissionFactorBulkCreate(BaseModel):
    factors: list[DefraEmissionFactorCreate] = Field(..., min_length=1)


class DefraEmissionFactorResponse(DefraEmissionFactorBase):
    id: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class DefraCalculationCreate(BaseModel):
    project_id: uuid.UUID
    emission_factor_id: uuid.UUID | None = None
    activity_date: date
    quantity: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=100)
    # Used to pick a factor when emission_factor_id is not given
    activity_name: str | None = None
    description: str | None = None
    location: str | None = None
    evidence: str | None = None


class DefraCalculationUpdate(BaseModel):
    emission_factor_id: uuid.UUID | None = None
    activity_date: date | None = None
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    location: str | None = None
    evidence: str | None = None


class DefraCalculationResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    emission_factor_id: uuid.UUID
    activity_date: date
    quantity: float
    unit: str
    co2_emissions: float
    ch4_emissions: float
    n2o_emissions: float
    total_co2e: float
    description: str | None
    location: str | None
    evidence: str | None
    category: str
    scope: str
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DefraCalculationWithFactor(DefraCalculationResponse):
    emission_factor: DefraEmissionFactorResponse


class DefraProjectSummaryResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    scope1_total: float
    scope2_total: float
    scope3_total: float
    fuels_total: float
    business_travel_total: float
    material_use_total: float
    waste_total: float
    total_co2e: float
    calculation_count: int
    last_calculated_at: datetime

    model_config = {"from_attributes": True}


class DefraProjectDetail(DefraProjectResponse):
    calculations: list[DefraCalculationResponse]
    summary: DefraProjectSummaryResponse | None
