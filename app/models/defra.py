import uuid
from datetime import date, datetime

from sqlalchemy import (
    String,
    Text,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.workflow import ProjectStatus
from app.database import Base


class DefraProject(Base):
    __tablename__ = "defra_projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    organization_name: Mapped[str] = mapped_column(String(255), nullable=False)
    reporting_period_start: Mapped[date] = mapped_column(Date, nullable=False)
    reporting_period_end: Mapped[date] = mapped_column(Date, nullable=False)
    defra_year: Mapped[str] = mapped_column(String(4), nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), default=ProjectStatus.DRAFT.value, nullable=False
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
        return f"<DefraProject {self.name} ({self.defra_year})>"


class DefraEmissionFactor(Base):
    __tablename__ = "defra_emission_factors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    year: Mapped[str] = mapped_column(String(4), nullable=False, index=True)

    # DEFRA conversion factor hierarchy
    level1_category: Mapped[str] = mapped_column(String(255), nullable=False)
    level2_category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    level3_category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    level4_category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    activity_name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit: Mapped[str] = mapped_column(String(100), nullable=False)
    unit_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # kg per unit
    co2_factor: Mapped[float | None] = mapped_column(Float, nullable=True)
    ch4_factor: Mapped[float | None] = mapped_column(Float, nullable=True)
    n2o_factor: Mapped[float | None] = mapped_column(Float, nullable=True)
    co2e_factor: Mapped[float | None] = mapped_column(Float, nullable=True)

    scope: Mapped[str] = mapped_column(String(20), nullable=False)
    source: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<DefraEmissionFactor {self.year} {self.activity_name} ({self.unit})>"


class DefraCalculation(Base):
    __tablename__ = "defra_calculations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("defra_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    emission_factor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("defra_emission_factors.id", ondelete="RESTRICT"), nullable=False
    )

    activity_date: Mapped[date] = mapped_column(Date, nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(100), nullable=False)

    # Results (kg)
    co2_emissions: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    ch4_emissions: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    n2o_emissions: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_co2e: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    evidence: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    scope: Mapped[str] = mapped_column(String(20), nullable=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Relationships
    emission_factor: Mapped["DefraEmissionFactor"] = relationship("DefraEmissionFactor")

    def __repr__(self) -> str:
        return f"<DefraCalculation {self.total_co2e} kg CO2e>"


class DefraProjectSummary(Base):
    __tablename__ = "defra_project_summaries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("defra_projects.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    scope1_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    scope2_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    scope3_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    fuels_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    business_travel_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    material_use_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    waste_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_co2e: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    calculation_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    last_calculated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<DefraProjectSummary project={self.project_id} total={self.total_co2e}>"
