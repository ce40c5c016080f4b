"""Initial schema: identity, tenants and the carbon accounting methodologies

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UUID = postgresql.UUID(as_uuid=True)


def _id() -> sa.Column:
    return sa.Column("id", UUID, primary_key=True)


def _fk(name: str, target: str, ondelete: str = "CASCADE", nullable: bool = False, **kw) -> sa.Column:
    return sa.Column(name, UUID, sa.ForeignKey(target, ondelete=ondelete), nullable=nullable, **kw)


def _created_by() -> sa.Column:
    return _fk("created_by", "users.id", ondelete="SET NULL", nullable=True)


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now())]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now())
        )
    return columns


def _floats(*names: str) -> list[sa.Column]:
    return [sa.Column(name, sa.Float, nullable=True) for name in names]


def _totals(*names: str) -> list[sa.Column]:
    return [sa.Column(name, sa.Float, nullable=False, server_default="0") for name in names]


def upgrade() -> None:
    # === Identity and tenants ===
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "tenants",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("domain", sa.String(255), nullable=True),
        sa.Column("logo_url", sa.String(1024), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "memberships",
        _id(),
        _fk("user_id", "users.id", index=True),
        _fk("tenant_id", "tenants.id", index=True),
        sa.Column("role", sa.String(50), nullable=False, server_default="member"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("joined_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "tenant_id", name="uq_membership_user_tenant"),
    )

    op.create_table(
        "invitations",
        _id(),
        sa.Column("email", sa.String(255), nullable=False, index=True),
        _fk("tenant_id", "tenants.id", index=True),
        _fk("invited_by", "users.id", ondelete="SET NULL", nullable=True),
        sa.Column("role", sa.String(50), nullable=False, server_default="member"),
        sa.Column("token", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("expires_at", sa.DateTime, nullable=False),
        sa.Column("accepted_at", sa.DateTime, nullable=True),
        *_timestamps(),
    )

    # === Standards ===
    op.create_table(
        "standards",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(100), nullable=False, unique=True, index=True),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "certifications",
        _id(),
        _fk("standard_id", "standards.id", index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
    )

    # === DEFRA ===
    op.create_table(
        "defra_projects",
        _id(),
        _fk("tenant_id", "tenants.id", index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("organization_name", sa.String(255), nullable=False),
        sa.Column("reporting_period_start", sa.Date, nullable=False),
        sa.Column("reporting_period_end", sa.Date, nullable=False),
        sa.Column("defra_year", sa.String(4), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="draft"),
        _created_by(),
        *_timestamps(),
    )

    op.create_table(
        "defra_emission_factors",
        _id(),
        sa.Column("year", sa.String(4), nullable=False, index=True),
        sa.Column("level1_category", sa.String(255), nullable=False),
        sa.Column("level2_category", sa.String(255), nullable=True),
        sa.Column("level3_category", sa.String(255), nullable=True),
        sa.Column("level4_category", sa.String(255), nullable=True),
        sa.Column("activity_name", sa.String(255), nullable=False),
        sa.Column("unit", sa.String(100), nullable=False),
        sa.Column("unit_type", sa.String(100), nullable=True),
        *_floats("co2_factor", "ch4_factor", "n2o_factor", "co2e_factor"),
        sa.Column("scope", sa.String(20), nullable=False),
        sa.Column("source", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "defra_calculations",
        _id(),
        _fk("project_id", "defra_projects.id", index=True),
        _fk("emission_factor_id", "defra_emission_factors.id", ondelete="RESTRICT"),
        sa.Column("activity_date", sa.Date, nullable=False),
        sa.Column("quantity", sa.Float, nullable=False),
        sa.Column("unit", sa.String(100), nullable=False),
        *_totals("co2_emissions", "ch4_emissions", "n2o_emissions", "total_co2e"),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("evidence", sa.Text, nullable=True),
        sa.Column("category", sa.String(255), nullable=False),
        sa.Column("scope", sa.String(20), nullable=False),
        _created_by(),
        *_timestamps(),
    )

    op.create_table(
        "defra_project_summaries",
        _id(),
        _fk("project_id", "defra_projects.id", unique=True),
        *_totals(
            "scope1_total",
            "scope2_total",
            "scope3_total",
            "fuels_total",
            "business_travel_total",
            "material_use_total",
            "waste_total",
            "total_co2e",
        ),
        sa.Column("calculation_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_calculated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    # === GHG Protocol and ISO 14064 ===
    for prefix, standard_version in (
        ("ghg_protocol", "GHG Protocol Corporate Standard"),
        ("iso14064", "14064-1:2018"),
    ):
        op.create_table(
            f"{prefix}_projects",
            _id(),
            _fk("tenant_id", "tenants.id", index=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("description", sa.Text, nullable=True),
            sa.Column("organization_name", sa.String(255), nullable=False),
            sa.Column("location", sa.String(255), nullable=True),
            sa.Column("reporting_period_start", sa.Date, nullable=False),
            sa.Column("reporting_period_end", sa.Date, nullable=False),
            sa.Column("reporting_year", sa.Integer, nullable=False),
            sa.Column("status", sa.String(50), nullable=False, server_default="draft"),
            sa.Column("boundary_type", sa.String(50), nullable=False, server_default="operational"),
            sa.Column(
                "standard_version", sa.String(100), nullable=False, server_default=standard_version
            ),
            _created_by(),
            *_timestamps(),
        )

        op.create_table(
            f"{prefix}_calculations",
            _id(),
            _fk("project_id", f"{prefix}_projects.id", index=True),
            sa.Column("scope", sa.String(20), nullable=False),
            sa.Column("category", sa.String(100), nullable=False),
            sa.Column("activity_data", sa.JSON, nullable=False),
            sa.Column("emission_factor", sa.JSON, nullable=False),
            sa.Column("gas_type", sa.String(10), nullable=False),
            sa.Column("emission_value", sa.Float, nullable=False),
            sa.Column("co2_equivalent", sa.Float, nullable=False),
            sa.Column("gwp_value", sa.Float, nullable=False),
            sa.Column("calculation_method", sa.String(20), nullable=False, server_default="custom"),
            sa.Column("uncertainty", sa.Float, nullable=True),
            sa.Column("notes", sa.Text, nullable=True),
            sa.Column("evidence", sa.Text, nullable=True),
            sa.Column("status", sa.String(20), nullable=False, server_default="calculated"),
            sa.Column("calculated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
            _created_by(),
            *_timestamps(),
        )

    op.create_table(
        "ghg_protocol_emission_factors",
        _id(),
        sa.Column("year", sa.Integer, nullable=False, index=True),
        sa.Column("scope", sa.String(20), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("activity_name", sa.String(255), nullable=False),
        sa.Column("unit", sa.String(100), nullable=False),
        sa.Column("unit_type", sa.String(100), nullable=True),
        *_floats("co2_factor", "ch4_factor", "n2o_factor", "co2e_factor"),
        sa.Column("fuel_type", sa.String(100), nullable=True),
        sa.Column("activity_type", sa.String(100), nullable=True),
        sa.Column("heating_value", sa.Float, nullable=True),
        sa.Column("heating_value_unit", sa.String(50), nullable=True),
        sa.Column("source", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "ghg_protocol_project_summaries",
        _id(),
        _fk("project_id", "ghg_protocol_projects.id", unique=True),
        *_totals("scope1_total", "scope2_total", "scope3_total", "total_emissions"),
        sa.Column("breakdown_by_gas", sa.JSON, nullable=False),
        sa.Column("breakdown_by_category", sa.JSON, nullable=False),
        sa.Column("scope3_breakdown", sa.JSON, nullable=False),
        sa.Column("calculation_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_calculated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "iso14064_project_summaries",
        _id(),
        _fk("project_id", "iso14064_projects.id", unique=True),
        *_totals("scope1_total", "scope2_total", "scope3_total", "total_emissions"),
        sa.Column("breakdown_by_gas", sa.JSON, nullable=False),
        sa.Column("breakdown_by_category", sa.JSON, nullable=False),
        sa.Column("calculation_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="calculated"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("last_calculated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    # === IPCC ===
    op.create_table(
        "ipcc_projects",
        _id(),
        _fk("tenant_id", "tenants.id", index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="draft"),
        sa.Column("organization_name", sa.String(255), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        _created_by(),
        *_timestamps(),
    )

    op.create_table(
        "ipcc_emission_categories",
        _id(),
        sa.Column("code", sa.String(20), nullable=False, unique=True, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sector", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "ipcc_emission_factors",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("gas_type", sa.String(10), nullable=False),
        sa.Column("tier", sa.String(10), nullable=False),
        sa.Column("value", sa.Float, nullable=False),
        sa.Column("unit", sa.String(100), nullable=False),
        sa.Column("applicable_categories", sa.JSON, nullable=False),
        sa.Column("fuel_type", sa.String(100), nullable=True),
        sa.Column("activity_type", sa.String(100), nullable=True),
        sa.Column("heating_value", sa.Float, nullable=True),
        sa.Column("heating_value_unit", sa.String(50), nullable=True),
        sa.Column("source", sa.String(255), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "ipcc_gwp_values",
        _id(),
        sa.Column("gas_type", sa.String(10), nullable=False, unique=True),
        sa.Column("value", sa.Float, nullable=False),
        sa.Column("assessment_report", sa.String(10), nullable=False, server_default="AR5"),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "ipcc_project_categories",
        _id(),
        _fk("project_id", "ipcc_projects.id", index=True),
        _fk("category_id", "ipcc_emission_categories.id"),
        *_timestamps(updated=False),
        sa.UniqueConstraint("project_id", "category_id", name="uq_ipcc_project_category"),
    )

    op.create_table(
        "ipcc_activity_data",
        _id(),
        _fk("project_id", "ipcc_projects.id", index=True),
        _fk("category_id", "ipcc_emission_categories.id"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("value", sa.Float, nullable=False),
        sa.Column("unit", sa.String(50), nullable=False),
        sa.Column("source", sa.String(255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "ipcc_emission_calculations",
        _id(),
        _fk("project_id", "ipcc_projects.id", index=True),
        _fk("activity_data_id", "ipcc_activity_data.id"),
        _fk("emission_factor_id", "ipcc_emission_factors.id", ondelete="RESTRICT"),
        sa.Column("sector", sa.String(20), nullable=False),
        sa.Column("tier", sa.String(10), nullable=False),
        sa.Column("gas_type", sa.String(10), nullable=False),
        sa.Column("emission_value", sa.Float, nullable=False),
        sa.Column("emission_unit", sa.String(20), nullable=False, server_default="kg"),
        sa.Column("gwp_value", sa.Float, nullable=False),
        sa.Column("co2_equivalent", sa.Float, nullable=False),
        sa.Column("method", sa.String(50), nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "ipcc_project_summaries",
        _id(),
        _fk("project_id", "ipcc_projects.id", index=True),
        sa.Column("sector", sa.String(20), nullable=False),
        *_totals(
            "total_co2", "total_ch4", "total_n2o", "total_other_gases", "total_co2_equivalent"
        ),
        sa.Column("last_calculated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("project_id", "sector", name="uq_ipcc_summary_project_sector"),
    )

    # === ISCC ===
    op.create_table(
        "iscc_projects",
        _id(),
        _fk("tenant_id", "tenants.id", index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("product_type", sa.String(50), nullable=False),
        sa.Column("feedstock_type", sa.String(50), nullable=False),
        sa.Column("production_volume", sa.Float, nullable=True),
        sa.Column("lhv", sa.Float, nullable=True),
        sa.Column("lhv_unit", sa.String(20), nullable=False, server_default="MJ/kg"),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        _created_by(),
        *_timestamps(),
    )

    op.create_table(
        "iscc_cultivation",
        _id(),
        _fk("project_id", "iscc_projects.id", unique=True),
        *_floats(
            "land_area",
            "yield_per_ha",
            "nitrogen_fertilizer",
            "phosphate_fertilizer",
            "potassium_fertilizer",
            "organic_fertilizer",
            "diesel_consumption",
            "electricity_use",
            "pesticides",
        ),
        sa.Column("additional_data", sa.JSON, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "iscc_processing",
        _id(),
        _fk("project_id", "iscc_projects.id", unique=True),
        *_floats(
            "electricity_use",
            "steam_use",
            "natural_gas_use",
            "diesel_use",
            "methanol",
            "catalyst",
            "acid",
            "water_consumption",
        ),
        sa.Column("additional_data", sa.JSON, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "iscc_transport",
        _id(),
        _fk("project_id", "iscc_projects.id", unique=True),
        sa.Column("feedstock_distance", sa.Float, nullable=True),
        sa.Column("feedstock_mode", sa.String(20), nullable=True),
        sa.Column("feedstock_weight", sa.Float, nullable=True),
        sa.Column("product_distance", sa.Float, nullable=True),
        sa.Column("product_mode", sa.String(20), nullable=True),
        sa.Column("product_weight", sa.Float, nullable=True),
        sa.Column("additional_transport", sa.JSON, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "iscc_calculations",
        _id(),
        _fk("project_id", "iscc_projects.id", index=True),
        sa.Column("input_snapshot", sa.JSON, nullable=False),
        *_totals("eec_kg", "ep_kg", "etd_kg", "total_kg"),
        *_floats("el_kg", "eccr_kg"),
        *_totals("eec", "ep", "etd", "total_emissions"),
        *_floats("el", "eccr"),
        sa.Column("fossil_fuel_baseline", sa.Float, nullable=False, server_default="83.8"),
        sa.Column("ghg_savings", sa.Float, nullable=False, server_default="0"),
        sa.Column("breakdown", sa.JSON, nullable=False),
        sa.Column("assumptions", sa.JSON, nullable=False),
        sa.Column("calculator", sa.String(50), nullable=False, server_default="local"),
        sa.Column("status", sa.String(20), nullable=False, server_default="calculated"),
        sa.Column("notes", sa.Text, nullable=True),
        _created_by(),
        *_timestamps(),
    )

    # === Carbon calculation workflow ===
    op.create_table(
        "carbon_projects",
        _id(),
        _fk("tenant_id", "tenants.id", index=True),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
    )

    step_columns: dict[str, list[sa.Column]] = {
        "carbon_products": _floats("corn_wet", "moisture_content", "corn_dry", "cultivation_area"),
        "carbon_raws": _floats(
            "corn_seeds_amount",
            "emission_factor_corn_seeds",
            "co2eq_emissions_raw_material_input_ha_yr",
            "co2eq_emissions_raw_material_input_t_ffb",
        ),
        "carbon_fertilizer_nitrogen": _floats(
            "ammonium_nitrate",
            "urea",
            "applied_manure",
            "n_content_crop_residue",
            "total_n_synthetic_fertilizer",
            "emission_factor_ammonium_nitrate",
            "emission_factor_urea",
            "emission_factor_direct_n2o",
            "fraction_n_volatilized_synthetic",
            "fraction_n_volatilized_organic",
            "emission_factor_atmospheric_deposition",
            "fraction_n_lost_runoff",
            "emission_factor_leaching_runoff",
            "direct_n2o_emissions",
            "indirect_n2o_emissions_nh3_nox",
            "indirect_n2o_emissions_n_leaching_runoff",
            "co2eq_emissions_nitrogen_fertilizers_ha_yr",
            "co2eq_emissions_nitrogen_fertilizers_field_n2o_ha_yr",
            "co2eq_emissions_nitrogen_fertilizers_field_n2o_t_ffb",
        ),
        "carbon_herbicides": _floats(
            "acetochlor",
            "emission_factor_pesticides",
            "co2eq_emissions_herbicides_pesticides_ha_yr",
            "co2eq_emissions_herbicides_pesticides_t_ffb",
        ),
        "carbon_energy_electricity": _floats(
            "electricity_consumption_soil_prep",
            "emission_factor_electricity",
            "co2e_emissions_electricity_yr",
            "co2e_emissions_electricity_t_ffb",
        ),
        "carbon_energy_diesel": _floats(
            "diesel_consumed",
            "emission_factor_diesel",
            "co2e_emissions_diesel_yr",
            "co2e_emissions_diesel_t_ffb",
        ),
        "carbon_cultivation": _floats(
            "ghg_emissions_raw_material_input",
            "ghg_emissions_fertilizers",
            "ghg_emissions_herbicides_pesticides",
            "ghg_emissions_energy",
            "total_emissions_corn",
        ),
        "carbon_actual_carbon": [
            sa.Column("actual_land_use", sa.Text, nullable=True),
            sa.Column("climate_region_actual", sa.Text, nullable=True),
            sa.Column("soil_type_actual", sa.Text, nullable=True),
            sa.Column("current_soil_management_actual", sa.Text, nullable=True),
            sa.Column("current_input_to_soil_actual", sa.Text, nullable=True),
            *_floats("socst_actual", "flu_actual", "fmg_actual", "fi_actual", "cveg_actual"),
        ],
        "carbon_reference_carbon": [
            sa.Column("reference_land_use", sa.Text, nullable=True),
            sa.Column("climate_region_reference", sa.Text, nullable=True),
            sa.Column("soil_type_reference", sa.Text, nullable=True),
            sa.Column("current_soil_management_reference", sa.Text, nullable=True),
            sa.Column("current_input_to_soil_reference", sa.Text, nullable=True),
            *_floats(
                "socst_reference",
                "flu_reference",
                "fmg_reference",
                "fi_reference",
                "cveg_reference",
                "soil_organic_carbon_actual",
                "soil_organic_carbon_reference",
                "accumulated_soil_carbon",
                "luc_carbon_emissions_per_kg_corn",
                "total_luc_co2_emissions_ha_yr",
                "total_luc_co2_emissions_t_dry_corn",
            ),
        ],
    }
    for table_name, columns in step_columns.items():
        op.create_table(
            table_name,
            _id(),
            _fk("carbon_project_id", "carbon_projects.id", index=True),
            *columns,
            *_timestamps(),
        )

    op.create_table(
        "carbon_ghg_worksheet_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _fk("carbon_project_id", "carbon_projects.id", index=True),
        sa.Column("section", sa.String(50), nullable=False, index=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("numeric_value", sa.Float, nullable=True),
        sa.Column("text_value", sa.Text, nullable=True),
        sa.Column("unit", sa.String(100), nullable=True),
        sa.Column("source", sa.Text, nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    for table_name in (
        "carbon_ghg_worksheet_items",
        "carbon_reference_carbon",
        "carbon_actual_carbon",
        "carbon_cultivation",
        "carbon_energy_diesel",
        "carbon_energy_electricity",
        "carbon_herbicides",
        "carbon_fertilizer_nitrogen",
        "carbon_raws",
        "carbon_products",
        "carbon_projects",
        "iscc_calculations",
        "iscc_transport",
        "iscc_processing",
        "iscc_cultivation",
        "iscc_projects",
        "ipcc_project_summaries",
        "ipcc_emission_calculations",
        "ipcc_activity_data",
        "ipcc_project_categories",
        "ipcc_gwp_values",
        "ipcc_emission_factors",
        "ipcc_emission_categories",
        "ipcc_projects",
        "iso14064_project_summaries",
        "iso14064_calculations",
        "iso14064_projects",
        "ghg_protocol_project_summaries",
        "ghg_protocol_emission_factors",
        "ghg_protocol_calculations",
        "ghg_protocol_projects",
        "defra_project_summaries",
        "defra_calculations",
        "defra_emission_factors",
        "defra_projects",
        "certifications",
        "standards",
        "invitations",
        "memberships",
        "tenants",
        "users",
    ):
        op.drop_table(table_name)
