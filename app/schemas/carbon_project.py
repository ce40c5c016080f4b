import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

WorksheetSectionLiteral = Literal[
    "verification",
    "calculation",
    "calculation_process",
    "additional",
    "other_case",
    "audit",
]


# === Carbon projects ===

class CarbonProjectCreate(BaseModel):
    tenant_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)


class CarbonProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)


class CarbonProjectResponse(BaseModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# === Step records ===

class StepRecordMeta(BaseModel):
    id: uuid.UUID
    carbon_project_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductData(BaseModel):
    corn_wet: float | None = None
    moisture_content: float | None = None
    corn_dry: float | None = None
    cultivation_area: float | None = None


class RawData(BaseModel):
    corn_seeds_amount: float | None = None
    emission_factor_corn_seeds: float | None = None
    co2eq_emissions_raw_material_input_ha_yr: float | None = None
    co2eq_emissions_raw_material_input_t_ffb: float | None = None


class FertilizerNitrogenData(BaseModel):
    ammonium_nitrate: float | None = None
    urea: float | None = None
    applied_manure: float | None = None
    n_content_crop_residue: float | None = None
    total_n_synthetic_fertilizer: float | None = None
    emission_factor_ammonium_nitrate: float | None = None
    emission_factor_urea: float | None = None
    emission_factor_direct_n2o: float | None = None
    fraction_n_volatilized_synthetic: float | None = None
    fraction_n_volatilized_organic: float | None = None
    emission_factor_atmospheric_deposition: float | None = None
    fraction_n_lost_runoff: float | None = None
    emission_factor_leaching_runoff: float | None = None
    direct_n2o_emissions: float | None = None
    indirect_n2o_emissions_nh3_nox: float | None = None
    indirect_n2o_emissions_n_leaching_runoff: float | None = None
    co2eq_emissions_nitrogen_fertilizers_ha_yr: float | None = None
    co2eq_emissions_nitrogen_fertilizers_field_n2o_ha_yr: float | None = None
    co2eq_emissions_nitrogen_fertilizers_field_n2o_t_ffb: float | None = None


class HerbicideData(BaseModel):
    acetochlor: float | None = None
    emission_factor_pesticides: float | None = None
    co2eq_emissions_herbicides_pesticides_ha_yr: float | None = None
    co2eq_emissions_herbicides_pesticides_t_ffb: float | None = None


class EnergyElectricityData(BaseModel):
    electricity_consumption_soil_prep: float | None = None
    emission_factor_electricity: float | None = None
    co2e_emissions_electricity_yr: float | None = None
    co2e_emissions_electricity_t_ffb: float | None = None


class EnergyDieselData(BaseModel):
    diesel_consumed: float | None = None
    emission_factor_diesel: float | None = None
    co2e_emissions_diesel_yr: float | None = None
    co2e_emissions_diesel_t_ffb: float | None = None


class CultivationData(BaseModel):
    ghg_emissions_raw_material_input: float | None = None
    ghg_emissions_fertilizers: float | None = None
    ghg_emissions_herbicides_pesticides: float | None = None
    ghg_emissions_energy: float | None = None
    total_emissions_corn: float | None = None


class ActualCarbonData(BaseModel):
    actual_land_use: str | None = None
    climate_region_actual: str | None = None
    soil_type_actual: str | None = None
    current_soil_management_actual: str | None = None
    current_input_to_soil_actual: str | None = None
    socst_actual: float | None = None
    flu_actual: float | None = None
    fmg_actual: float | None = None
    fi_actual: float | None = None
    cveg_actual: float | None = None


class ReferenceCarbonData(BaseModel):
    reference_land_use: str | None = None
    climate_region_reference: str | None = None
    soil_type_reference: str | None = None
    current_soil_management_reference: str | None = None
    current_input_to_soil_reference: str | None = None
    socst_reference: float | None = None
    flu_reference: float | None = None
    fmg_reference: float | None = None
    fi_reference: float | None = None
    cveg_reference: float | None = None
    soil_organic_carbon_actual: float | None = None
    soil_organic_carbon_reference: float | None = None
    accumulated_soil_carbon: float | None = None
    luc_carbon_emissions_per_kg_corn: float | None = None
    total_luc_co2_emissions_ha_yr: float | None = None
    total_luc_co2_emissions_t_dry_corn: float | None = None


class ProductResponse(ProductData, StepRecordMeta):
    pass


class RawResponse(RawData, StepRecordMeta):
    pass


class FertilizerNitrogenResponse(FertilizerNitrogenData, StepRecordMeta):
    pass


class HerbicideResponse(HerbicideData, StepRecordMeta):
    pass


class EnergyElectricityResponse(EnergyElectricityData, StepRecordMeta):
    pass


class EnergyDieselResponse(EnergyDieselData, StepRecordMeta):
    pass


class CultivationResponse(CultivationData, StepRecordMeta):
    pass


class ActualCarbonResponse(ActualCarbonData, StepRecordMeta):
    pass


class ReferenceCarbonResponse(ReferenceCarbonData, StepRecordMeta):
    pass


# Step name (as used in URLs) -> (input schema, response schema)
CARBON_STEP_SCHEMAS: dict[str, tuple[type[BaseModel], type[BaseModel]]] = {
    "products": (ProductData, ProductResponse),
    "raws": (RawData, RawResponse),
    "fertilizer-nitrogen": (FertilizerNitrogenData, FertilizerNitrogenResponse),
    "herbicides": (HerbicideData, HerbicideResponse),
    "energy-electricity": (EnergyElectricityData, EnergyElectricityResponse),
    "energy-diesel": (EnergyDieselData, EnergyDieselResponse),
    "cultivation": (CultivationData, CultivationResponse),
    "actual-carbon": (ActualCarbonData, ActualCarbonResponse),
    "reference-carbon": (ReferenceCarbonData, ReferenceCarbonResponse),
}


# === GHG worksheet ===

class WorksheetItemData(BaseModel):
    description: str = Field(..., min_length=1)
    numeric_value: float | None = None
    text_value: str | None = None
    unit: str | None = Field(None, max_length=100)
    source: str | None = None


class WorksheetItemUpdate(BaseModel):
    description: str | None = Field(None, min_length=1)
    numeric_value: float | None = None
    text_value: str | None = None
    unit: str | None = Field(None, max_length=100)
    source: str | None = None


class WorksheetItemBulkCreate(BaseModel):
    items: list[WorksheetItemData]


class WorksheetItemResponse(WorksheetItemData):
    id: int
    carbon_project_id: uuid.UUID
    section: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CarbonProjectDetail(CarbonProjectResponse):
    products: list[ProductResponse]
    raws: list[RawResponse]
    fertilizer_nitrogen: list[FertilizerNitrogenResponse]
    herbicides: list[HerbicideResponse]
    energy_electricity: list[EnergyElectricityResponse]
    energy_diesel: list[EnergyDieselResponse]
    cultivation: list[CultivationResponse]
    actual_carbon: list[ActualCarbonResponse]
    reference_carbon: list[ReferenceCarbonResponse]
    ghg_worksheet: list[WorksheetItemResponse]
