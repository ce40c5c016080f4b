import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from app.schemas.common import CalculationStatusLiteral

ProductTypeLiteral = Literal[
    "biodiesel", "bioethanol", "biomass", "biomethane", "bio_jet_fuel", "other"
]
FeedstockTypeLiteral = Literal[
    "palm_oil",
    "corn",
    "sugarcane",
    "used_cooking_oil",
    "wheat",
    "rapeseed",
    "soybean",
    "waste",
    "other",
]
TransportModeLiteral = Literal["truck", "ship", "rail", "pipeline"]


# === Projects ===

class IsccProjectCreate(BaseModel):
    tenant_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    product_type: ProductTypeLiteral
    feedstock_type: FeedstockTypeLiteral
    production_volume: float | None = Field(None, gt=0)
    lhv: float | None = Field(None, gt=0)
    lhv_unit: str = "MJ/kg"


class IsccProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    product_type: ProductTypeLiteral | None = None
    feedstock_type: FeedstockTypeLiteral | None = None
    production_volume: float | None = Field(None, gt=0)
    lhv: float | None = Field(None, gt=0)
    lhv_unit: str | None = None
    status: CalculationStatusLiteral | None = None


class IsccProjectResponse(BaseModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    description: str | None
    product_type: str
    feedstock_type: str
    production_volume: float | None
    lhv: float | None
    lhv_unit: str
    status: str
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# === Inputs ===

class IsccCultivationData(BaseModel):
    land_area: float | None = Field(None, ge=0)
    yield_per_ha: float | None = Field(None, ge=0)
    nitrogen_fertilizer: float | None = Field(None, ge=0)
    phosphate_fertilizer: float | None = Field(None, ge=0)
    potassium_fertilizer: float | None = Field(None, ge=0)
    organic_fertilizer: float | None = Field(None, ge=0)
    diesel_consumption: float | None = Field(None, ge=0)
    electricity_use: float | None = Field(None, ge=0)
    pesticides: float | None = Field(None, ge=0)
    additional_data: dict[str, Any] | None = None


class IsccCultivationResponse(IsccCultivationData):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class IsccProcessingData(BaseModel):
    electricity_use: float | None = Field(None, ge=0)
    steam_use: float | None = Field(None, ge=0)
    natural_gas_use: float | None = Field(None, ge=0)
    diesel_use: float | None = Field(None, ge=0)
    methanol: float | None = Field(None, ge=0)
    catalyst: float | None = Field(None, ge=0)
    acid: float | None = Field(None, ge=0)
    water_consumption: float | None = Field(None, ge=0)
    additional_data: dict[str, Any] | None = None


class IsccProcessingResponse(IsccProcessingData):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransportLeg(BaseModel):
    distance: float = Field(..., ge=0)
    mode: TransportModeLiteral
    weight: float = Field(..., ge=0)
    description: str | None = None


class IsccTransportData(BaseModel):
    feedstock_distance: float | None = Field(None, ge=0)
    feedstock_mode: TransportModeLiteral | None = None
    feedstock_weight: float | None = Field(None, ge=0)
    product_distance: float | None = Field(None, ge=0)
    product_mode: TransportModeLiteral | None = None
    product_weight: float | None = Field(None, ge=0)
    additional_transport: list[TransportLeg] | None = None


class IsccTransportResponse(IsccTransportData):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# === Calculations ===

class IsccCalculationCreate(BaseModel):
    project_id: uuid.UUID
    el: float | None = None  # g CO2e/MJ, land-use change
    eccr: float | None = Field(None, ge=0)  # g CO2e/MJ, carbon capture
    notes: str | None = None


class IsccCalculationResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    input_snapshot: dict[str, Any]
    eec_kg: float
    ep_kg: float
    etd_kg: float
    el_kg: float | None
    eccr_kg: float | None
    total_kg: float
    eec: float
    ep: float
    etd: float
    el: float | None
    eccr: float | None
    total_emissions: float
    fossil_fuel_baseline: float
    ghg_savings: float
    breakdown: dict[str, Any]
    assumptions: list[str]
    calculator: str
    status: str
    notes: str | None
    created_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
