import uuid
from datetime import datetime

from sqlalchemy import JSON, String, Text, DateTime, Float, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.workflow import CalculationStatus
from app.database import Base


class IsccProject(Base):
    __tablename__ = "iscc_projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    product_type: Mapped[str] = mapped_column(String(50), nullable=False)
    feedstock_type: Mapped[str] = mapped_column(String(50), nullable=False)
    production_volume: Mapped[float | None] = mapped_column(Float, nullable=True)  # ton/year
    lhv: Mapped[float | None] = mapped_column(Float, nullable=True)
    lhv_unit: Mapped[str] = mapped_column(String(20), default="MJ/kg", nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=CalculationStatus.DRAFT.value, nullable=False
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
        return f"<IsccProject {self.name} ({self.product_type}/{self.feedstock_type})>"


class IsccCultivation(Base):
    __tablename__ = "iscc_cultivation"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("iscc_projects.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    land_area: Mapped[float | None] = mapped_column(Float, nullable=True)  # ha
    yield_per_ha: Mapped[float | None] = mapped_column(Float, nullable=True)  # ton/ha
    # kg/ha
    nitrogen_fertilizer: Mapped[float | None] = mapped_column(Float, nullable=True)
    phosphate_fertilizer: Mapped[float | None] = mapped_column(Float, nullable=True)
    potassium_fertilizer: Mapped[float | None] = mapped_column(Float, nullable=True)
    organic_fertilizer: Mapped[float | None] = mapped_column(Float, nullable=True)
    diesel_consumption: Mapped[float | None] = mapped_column(Float, nullable=True)  # L/ha
    electricity_use: Mapped[float | None] = mapped_column(Float, nullable=True)  # kWh/ha
    pesticides: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg/ha
    additional_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class IsccProcessing(Base):
    __tablename__ = "iscc_processing"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("iscc_projects.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    electricity_use: Mapped[float | None] = mapped_column(Float, nullable=True)  # kWh
    steam_use: Mapped[float | None] = mapped_column(Float, nullable=True)  # ton
    natural_gas_use: Mapped[float | None] = mapped_column(Float, nullable=True)  # m3
    diesel_use: Mapped[float | None] = mapped_column(Float, nullable=True)  # L
    methanol: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg
    catalyst: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg
    acid: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg
    water_consumption: Mapped[float | None] = mapped_column(Float, nullable=True)  # m3
    additional_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class IsccTransport(Base):
    __tablename__ = "iscc_transport"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("iscc_projects.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    feedstock_distance: Mapped[float | None] = mapped_column(Float, nullable=True)  # km
    feedstock_mode: Mapped[str | None] = mapped_column(String(20), nullable=True)
    feedstock_weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # ton
    product_distance: Mapped[float | None] = mapped_column(Float, nullable=True)
    product_mode: Mapped[str | None] = mapped_column(String(20), nullable=True)
    product_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    # list of {"distance", "mode", "weight", "description"}
    additional_transport: Mapped[list | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class IsccCalculation(Base):
    __tablename__ = "iscc_calculations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("iscc_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )

    input_snapshot: Mapped[dict] = mapped_column(JSON, nullable=False)

    # kg CO2e
    eec_kg: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    ep_kg: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    etd_kg: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    el_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    eccr_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_kg: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    # g CO2e / MJ
    eec: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    ep: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    etd: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    el: Mapped[float | None] = mapped_column(Float, nullable=True)
    eccr: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_emissions: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    fossil_fuel_baseline: Mapped[float] = mapped_column(Float, default=83.8, nullable=False)
    ghg_savings: Mapped[float] = mapped_column(Float, default=0, nullable=False)  # percent
    breakdown: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    assumptions: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    calculator: Mapped[str] = mapped_column(String(50), default="local", nullable=False)

    status: Mapped[str] = mapped_column(
        String(20), default=CalculationStatus.CALCULATED.value, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
