import uuid
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from app.schemas.common import ProjectStatusLiteral

ScopeLiteral = Literal["Scope1", "Scope2", "Scope3"]
GasLiteral = Literal["CO2", "CH4", "N2O", "HFCs", "PFCs", "SF6", "NF3"]
BoundaryLiteral = Literal["operational", "financial", "other"]
MethodLiteral = Literal["tier1", "tier2", "tier3", "custom"]


# === Projects ===

class GhgProtocolProjectCreate(BaseModel):
    tenant_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    organization_name: str = Field(..., min_length=1, max_length=255)
    location: str | None = None
    reporting_period_start: date
    reporting_period_end: date
    reporting_year: int = Field(..., ge=1990, le=2100)
    boundary_type: BoundaryLiteral = "operational"
    standard_version: str = "GHG Protocol Corporate Standard"


class GhgProtocolProjectUpdate(BaseModel):
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


class GhgProtocolProjectResponse(BaseModel):
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


# === Emission factors ===

class GhgProtocolEmissionFactorCreate(BaseModel):
    year: int = Field(..., ge=1990, le=2100)
    scope: ScopeLiteral
    category: str = Field(..., min_length=1, max_length=100)
    activity_name: str = Field(..., min_length=1, max_length=255)
    unit: str = Field(..., min_length=1, max_length=100)
    unit_type: str | None = None
    co2_factor: float | None = None
    ch4_factor: float | None = None
    n2o_factor: float | None = None
    co2e_factor: float | None = None
    fuel_type: str | None = None
    activity_type: str | None = None
    heating_value: float | None = None
    heating_value_unit: str | None = None
    source: str | None = None
    notes: str | None = None


class GhgProtocolEmissionFactorBulkCreate(BaseModel):
    factors: list[GhgProtocolEmissionFactorCreate] = Field(..., min_length=1)


class GhgProtocolEmissionFactorResponse(GhgProtocolEmissionFactorCreate):
    id: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}


# === Calculations ===

class ProvidedFactor(BaseModel):
    """An emission factor typed in by the user instead of picked from the database."""
    value: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1)
    gas_type: GasLiteral | None = None
    source: str | None = None


class ActivityInput(BaseModel):
    quantity: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=100)
    activity_name: str | None = None
    description: str | None = None
    activity_date: date | None = None
    location: str | None = None


class GasCalculationCreate(BaseModel):
    project_id: uuid.UUID
    scope: ScopeLiteral
    category: str = Field(..., min_length=1, max_length=100)
    activity_data: ActivityInput
    emission_factor: ProvidedFactor | None = None
    emission_factor_id: uuid.UUID | None = None
    gas_type: GasLiteral | None = None
    calculation_method: MethodLiteral | None = None
    uncertainty: float | None = Field(None, ge=0)
    notes: str | None = None
    evidence: str | None = None


class GasCalculationUpdate(BaseModel):
    scope: ScopeLiteral | None = None
    category: str | None = Field(None, min_length=1, max_length=100)
    activity_data: ActivityInput | None = None
    emission_factor: ProvidedFactor | None = None
    emission_factor_id: uuid.UUID | None = None
    gas_type: GasLiteral | None = None
    calculation_method: MethodLiteral | None = None
    uncertainty: float | None = Field(None, ge=0)
    notes: str | None = None
    evidence: str | None = None


class GasCalculationResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    scope: str
    category: str
    activity_data: dict[str, Any]
    emission_factor: dict[str, Any]
    gas_type: str
    emission_value: float
    co2_equivalent: float
    gwp_value: float
    calculation_method: str
    uncertainty: float | None
    notes: str | None
    evidence: str | None
    status: str
    calculated_at: datetime
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GasCalculationResult(GasCalculationResponse):
    """Stored calculation plus how its number was obtained."""
    formula: str
    explanation: str


# === Summary ===

class GhgProtocolSummaryResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    scope1_total: float
    scope2_total: float
    scope3_total: float
    total_emissions: float
    breakdown_by_gas: dict[str, float]
    breakdown_by_category: dict[str, float]
    scope3_breakdown: dict[str, float]
    calculation_count: int
    last_calculated_at: datetime

    model_config = {"from_attributes": True}


class GhgProtocolProjectDetail(GhgProtocolProjectResponse):
    calculations: list[GasCalculationResponse]
    summary: GhgProtocolSummaryResponse | None
