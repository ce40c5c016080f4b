import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from app.schemas.common import ProjectStatusLiteral

SectorLiteral = Literal["ENERGY", "IPPU", "AFOLU", "WASTE", "OTHER"]
TierLiteral = Literal["TIER_1", "TIER_2", "TIER_3"]


# === Projects ===

class IpccProjectCreate(BaseModel):
    tenant_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    year: int = Field(..., ge=1990, le=2100)
    organization_name: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)


class IpccProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    year: int | None = Field(None, ge=1990, le=2100)
    organization_name: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    status: ProjectStatusLiteral | None = None


class IpccProjectResponse(BaseModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    description: str | None
    year: int
    status: str
    organization_name: str | None
    location: str | None
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# === Categories ===

class EmissionCategoryResponse(BaseModel):
    id: uuid.UUID
    code: str
    name: str
    sector: str
    description: str | None

    model_config = {"from_attributes": True}


class ProjectCategoryCreate(BaseModel):
    category_id: uuid.UUID


class ProjectCategoryResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    category_id: uuid.UUID
    created_at: datetime
    category: EmissionCategoryResponse

    model_config = {"from_attributes": True}


# === GWP ===

class GwpValueUpsert(BaseModel):
    value: float = Field(..., gt=0)
    assessment_report: str = "AR5"


class GwpValueResponse(BaseModel):
    id: uuid.UUID
    gas_type: str
    value: float
    assessment_report: str
    updated_at: datetime

    model_config = {"from_attributes": True}


# === Emission factors ===

class IpccEmissionFactorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    gas_type: str = Field(..., min_length=1, max_length=10)
    tier: TierLiteral
    value: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=100)
    applicable_categories: list[str] = Field(default_factory=list)
    fuel_type: str | None = None
    activity_type: str | None = None
    heating_value: float | None = Field(None, gt=0)
    heating_value_unit: str | None = None
    source: str | None = None
    description: str | None = None


class IpccEmissionFactorUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    gas_type: str | None = Field(None, min_length=1, max_length=10)
    tier: TierLiteral | None = None
    value: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=100)
    applicable_categories: list[str] | None = None
    fuel_type: str | None = None
    activity_type: str | None = None
    heating_value: float | None = Field(None, gt=0)
    heating_value_unit: str | None = None
    source: str | None = None
    description: str | None = None


class IpccEmissionFactorResponse(IpccEmissionFactorCreate):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# === Activity data ===

class ActivityDataCreate(BaseModel):
    project_id: uuid.UUID
    category_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    value: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=50)
    source: str | None = None


class ActivityDataUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    value: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=50)
    source: str | None = None


class ActivityDataResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    category_id: uuid.UUID
    name: str
    description: str | None
    value: float
    unit: str
    source: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# === Calculations ===

class IpccCalculationCreate(BaseModel):
    activity_data_id: uuid.UUID
    emission_factor_id: uuid.UUID | None = None
    preferred_tier: TierLiteral | Literal["AUTO"] = "AUTO"
    gas_type: str | None = None
    notes: str | None = None


class IpccCalculationResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    activity_data_id: uuid.UUID
    emission_factor_id: uuid.UUID
    sector: str
    tier: str
    gas_type: str
    emission_value: float
    emission_unit: str
    gwp_value: float
    co2_equivalent: float
    method: str
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class IpccCalculationResult(IpccCalculationResponse):
    formula: str
    details: dict[str, Any]


# === Summaries ===

class IpccSummaryResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    sector: str
    total_co2: float
    total_ch4: float
    total_n2o: float
    total_other_gases: float
    total_co2_equivalent: float
    last_calculated_at: datetime

    model_config = {"from_attributes": True}


class IpccProjectSummaries(BaseModel):
    project_id: uuid.UUID
    sectors: list[IpccSummaryResponse]
    total_co2_equivalent: float


class IpccProjectDetail(IpccProjectResponse):
    categories: list[ProjectCategoryResponse]
    summaries: list[IpccSummaryResponse]


# === Helpers ===

class TierSuggestionRequest(BaseModel):
    category_code: str
    has_country_specific_data: bool = False
    has_plant_specific_data: bool = False
    is_key_category: bool = False


class TierSuggestionResponse(BaseModel):
    category_code: str
    suggested_tier: str
    uncertainty: dict[str, str]


# === Dashboard ===

class YearlyTrend(BaseModel):
    year: int
    emissions: float
    project_count: int


class SectorTotal(BaseModel):
    sector: str
    total_co2_equivalent: float
    total_co2: float
    total_ch4: float
    total_n2o: float
    total_other_gases: float
    project_count: int
    percentage: float


class DashboardOverview(BaseModel):
    total_projects: int
    projects_by_status: dict[str, int]
    total_emissions: float
    total_calculations: int
    yearly_trends: list[YearlyTrend]
    recent_projects: list[IpccProjectResponse]
    sector_breakdown: list[SectorTotal]


class TopEmittingProject(BaseModel):
    project_id: uuid.UUID
    name: str
    year: int
    status: str
    organization_name: str | None
    total_co2_equivalent: float
