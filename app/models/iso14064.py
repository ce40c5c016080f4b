import uuid
from datetime import date, datetime

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
from app.models.ghg_protocol import BoundaryType, CalculationMethod


class Iso14064Project(Base):
    __tablename__ = "iso14064_projects"

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
        String(100), default="14064-1:2018", nullable=False
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
        return f"<Iso14064Project {self.name} ({self.reporting_year})>"


class Iso14064Calculation(Base):
    __tablename__ = "iso14064_calculations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("iso14064_projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    scope: Mapped[str] = mapped_column(String(20), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    activity_data: Mapped[dict] = mapped_column(JSON, nullable=False)
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


class Iso14064ProjectSummary(Base):
    __tablename__ = "iso14064_project_summaries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("iso14064_projects.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    scope1_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    scope2_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    scope3_total: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_emissions: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    breakdown_by_gas: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    breakdown_by_category: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    calculation_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Manually maintained review fields
    status: Mapped[str] = mapped_column(
        String(20), default=CalculationStatus.CALCULATED.value, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    last_calculated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
