import uuid
from datetime import date, datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    JSON,
    String,
    Text,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.workflow import ProjectStatus, CalculationStatus
from app.database import Base


class GhgScope(str, PyEnum):
    SCOPE1 = "Scope1"
    SCOPE2 = "Scope2"
    SCOPE3 = "Scope3"


class BoundaryType(str, PyEnum):
    OPERATIONAL = "operational"
    FINANCIAL = "financial"
    OTHER = "other"


class CalculationMethod(str, PyEnum):
    TIER1 = "tier1"
    TIER2 = "tier2"
    TIER3 = "tier3"
    CUSTOM = "custom"


SCOPE_CATEGORIES: dict[str, tuple[str, ...]] = {
    GhgScope.SCOPE1.value: (
        "stationary_combustion",
        "mobile_combustion",
        "fugitive_emissions",
        "process_emissions",
    ),
    GhgScope.SCOPE2.value: (
        "purchased_electricity",
        "purchased_steam",
        "purchased_heating",
        "purchased_cooling",
    ),
    GhgScope.SCOPE3.value: (
        "purchased_goods",
        "capital_goods",
        "fuel_energy_activities",
        "upstream_transportation",
        "waste_generated",
        "business_travel",
        "employee_commuting",
        "upstream_leased_assets",
        "downstream_transportation",
        "processing_of_sold_products",
        "use_of_sold_products",
        "end_of_life_treatment",
        "downstream_leased_assets",
        "franchises",
        "investments",
    ),
}


class GhgProtocolProject(Base):
    __tablename__ = "ghg_protocol_projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    organization_name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reporting_period_start: Mapped[date] = mapped_column(Date, nullable=False)
    reporting_period_end: Mapped[date] = mapped_column(Date, nullable=False)
    reporting_year: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), default=ProjectStatus.DRAFT.value, nullable=False
    )
    boundary_type: Mapped[str] = mapped_column(
        String(50), default=BoundaryType.OPERATIONAL.value, nullable=False
    )
    standard_version: Mapped[str] = mapped_column(
        String(100), default="GHG Protocol Corporate Standard", nullable=False
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<GhgProtocolProject {self.name} ({self.reporting_year})>"


class GhgProtocolEmissionFactor(Base):
    __tablename__ = "ghg_protocol_emission_factors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    scope: Mapped[str] = mapped_column(String(20), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    activity_name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit: Mapped[str] = mapped_column(String(100), nullable=False)
    unit_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    co2_factor: Mapped[float | None] = mapped_column(Float, nullable=True)
    ch4_factor: Mapped[float | None] = mapped_column(Float, nullable=True)
    n2o_factor: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2e_factor: Mapped[float | None] = mapped_column(Float, nullable=True)

    fuel_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    activity_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    heating_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    heating_value_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<GhgProtocolEmissionFactor {self.year} {self.activity_name}>"


class GhgProtocolCalculation(Base):
    __tablename__ = "ghg_protocol_calculations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("ghg_protocol_projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    scope: Mapped[str] = mapped_column(String(20), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    # quantity, unit, description, activity_name, activity_date, location
    activity_data: Mapped[dict] = mapped_column(JSON, nullable=False)
    # value, unit, source, gas_type of the factor actually used
    emission_factor: Mapped[dict] = mapped_column(JSON, nullable=False)
    gas_type: Mapped[str] = mapped_column(String(10), nullable=False)
    emission_value: Mapped[float] = mapped_column(Float, nullable=False)
    co2_equivalent: Mapped[float] = mapped_column(Float, nullable=False)
    gwp_value: Mapped[float] = mapped_column(Float, nullable=False)
    calculation_method: Mapped[str] = mapped_column(
        String(20), default=CalculationMethod.CUSTOM.value, nullable=False
    )
    uncertainty: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    evidence: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=CalculationStatus.CALCULATED.value, nullable=False
    )
    calculated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<GhgProtocolCalculation {self.scope}/{self.category} {self.co2_equivalent}>"


class GhgProtocolProjectSummary(Base):
    __tablename__ = "ghg_protocol_project_summaries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("ghg_protocol_projects.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    scope1_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    scope2_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    scope3_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_emissions: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    breakdown_by_gas: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    breakdown_by_category: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    scope3_breakdown: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    calculation_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    last_calculated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<GhgProtocolProjectSummary project={self.project_id}>"
