import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime, Float, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, declared_attr

from app.database import Base


class CarbonProject(Base):
    __tablename__ = "carbon_projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<CarbonProject {self.name}>"


class CarbonStepMixin:
    """Columns shared by every data-entry step of a carbon project."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    @declared_attr
    def carbon_project_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(
            Uuid, ForeignKey("carbon_projects.id", ondelete="CASCADE"), nullable=False, index=True
        )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class Product(CarbonStepMixin, Base):
    __tablename__ = "carbon_products"

    corn_wet: Mapped[float | None] = mapped_column(Float, nullable=True)
    moisture_content: Mapped[float | None] = mapped_column(Float, nullable=True)
    corn_dry: Mapped[float | None] = mapped_column(Float, nullable=True)
    cultivation_area: Mapped[float | None] = mapped_column(Float, nullable=True)


class Raw(CarbonStepMixin, Base):
    __tablename__ = "carbon_raws"

    corn_seeds_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_corn_seeds: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2eq_emissions_raw_material_input_ha_yr: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2eq_emissions_raw_material_input_t_ffb: Mapped[float | None] = mapped_column(Float, nullable=True)


class FertilizerNitrogen(CarbonStepMixin, Base):
    __tablename__ = "carbon_fertilizer_nitrogen"

    ammonium_nitrate: Mapped[float | None] = mapped_column(Float, nullable=True)
    urea: Mapped[float | None] = mapped_column(Float, nullable=True)
    applied_manure: Mapped[float | None] = mapped_column(Float, nullable=True)
    n_content_crop_residue: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_n_synthetic_fertilizer: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_ammonium_nitrate: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_urea: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_direct_n2o: Mapped[float | None] = mapped_column(Float, nullable=True)
    fraction_n_volatilized_synthetic: Mapped[float | None] = mapped_column(Float, nullable=True)
    fraction_n_volatilized_organic: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_atmospheric_deposition: Mapped[float | None] = mapped_column(Float, nullable=True)
    fraction_n_lost_runoff: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_leaching_runoff: Mapped[float | None] = mapped_column(Float, nullable=True)
    direct_n2o_emissions: Mapped[float | None] = mapped_column(Float, nullable=True)
    indirect_n2o_emissions_nh3_nox: Mapped[float | None] = mapped_column(Float, nullable=True)
    indirect_n2o_emissions_n_leaching_runoff: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2eq_emissions_nitrogen_fertilizers_ha_yr: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2eq_emissions_nitrogen_fertilizers_field_n2o_ha_yr: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2eq_emissions_nitrogen_fertilizers_field_n2o_t_ffb: Mapped[float | None] = mapped_column(Float, nullable=True)


class Herbicide(CarbonStepMixin, Base):
    __tablename__ = "carbon_herbicides"

    acetochlor: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_pesticides: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2eq_emissions_herbicides_pesticides_ha_yr: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2eq_emissions_herbicides_pesticides_t_ffb: Mapped[float | None] = mapped_column(Float, nullable=True)


class EnergyElectricity(CarbonStepMixin, Base):
    __tablename__ = "carbon_energy_electricity"

    electricity_consumption_soil_prep: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_electricity: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2e_emissions_electricity_yr: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2e_emissions_electricity_t_ffb: Mapped[float | None] = mapped_column(Float, nullable=True)


class EnergyDiesel(CarbonStepMixin, Base):
    __tablename__ = "carbon_energy_diesel"

    diesel_consumed: Mapped[float | None] = mapped_column(Float, nullable=True)
    emission_factor_diesel: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2e_emissions_diesel_yr: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2e_emissions_diesel_t_ffb: Mapped[float | None] = mapped_column(Float, nullable=True)


class Cultivation(CarbonStepMixin, Base):
    __tablename__ = "carbon_cultivation"

    ghg_emissions_raw_material_input: Mapped[float | None] = mapped_column(Float, nullable=True)
    ghg_emissions_fertilizers: Mapped[float | None] = mapped_column(Float, nullable=True)
    ghg_emissions_herbicides_pesticides: Mapped[float | None] = mapped_column(Float, nullable=True)
    ghg_emissions_energy: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_emissions_corn: Mapped[float | None] = mapped_column(Float, nullable=True)


class ActualCarbon(CarbonStepMixin, Base):
    __tablename__ = "carbon_actual_carbon"

    actual_land_use: Mapped[str | None] = mapped_column(Text, nullable=True)
    climate_region_actual: Mapped[str | None] = mapped_column(Text, nullable=True)
    soil_type_actual: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_soil_management_actual: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_input_to_soil_actual: Mapped[str | None] = mapped_column(Text, nullable=True)
    socst_actual: Mapped[float | None] = mapped_column(Float, nullable=True)
    flu_actual: Mapped[float | None] = mapped_column(Float, nullable=True)
    fmg_actual: Mapped[float | None] = mapped_column(Float, nullable=True)
    fi_actual: Mapped[float | None] = mapped_column(Float, nullable=True)
    cveg_actual: Mapped[float | None] = mapped_column(Float, nullable=True)


class ReferenceCarbon(CarbonStepMixin, Base):
    __tablename__ = "carbon_reference_carbon"

    reference_land_use: Mapped[str | None] = mapped_column(Text, nullable=True)
    climate_region_reference: Mapped[str | None] = mapped_column(Text, nullable=True)
    soil_type_reference: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_soil_management_reference: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_input_to_soil_reference: Mapped[str | None] = mapped_column(Text, nullable=True)
    socst_reference: Mapped[float | None] = mapped_column(Float, nullable=True)
    flu_reference: Mapped[float | None] = mapped_column(Float, nullable=True)
    fmg_reference: Mapped[float | None] = mapped_column(Float, nullable=True)
    fi_reference: Mapped[float | None] = mapped_column(Float, nullable=True)
    cveg_reference: Mapped[float | None] = mapped_column(Float, nullable=True)
    soil_organic_carbon_actual: Mapped[float | None] = mapped_column(Float, nullable=True)
    soil_organic_carbon_reference: Mapped[float | None] = mapped_column(Float, nullable=True)
    accumulated_soil_carbon: Mapped[float | None] = mapped_column(Float, nullable=True)
    luc_carbon_emissions_per_kg_corn: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_luc_co2_emissions_ha_yr: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_luc_co2_emissions_t_dry_corn: Mapped[float | None] = mapped_column(Float, nullable=True)


class GhgWorksheetItem(Base):
    __tablename__ = "carbon_ghg_worksheet_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    carbon_project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("carbon_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    section: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)
    numeric_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    text_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    unit: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


# Step name (as used in URLs) -> model
CARBON_STEP_MODELS: dict[str, type[CarbonStepMixin]] = {
    "products": Product,
    "raws": Raw,
    "fertilizer-nitrogen": FertilizerNitrogen,
    "herbicides": Herbicide,
    "energy-electricity": EnergyElectricity,
    "energy-diesel": EnergyDiesel,
    "cultivation": Cultivation,
    "actual-carbon": ActualCarbon,
    "reference-carbon": ReferenceCarbon,
}
