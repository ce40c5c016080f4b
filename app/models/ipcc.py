import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    String,
    Text,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.workflow import ProjectStatus
from app.database import Base


class IpccProject(Base):
    __tablename__ = "ipcc_projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), default=ProjectStatus.DRAFT.value, nullable=False
    )
    organization_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
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
        return f"<IpccProject {self.name} ({self.year})>"


class EmissionCategory(Base):
    __tablename__ = "ipcc_emission_categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sector: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<EmissionCategory {self.code} {self.name}>"


class IpccEmissionFactor(Base):
    __tablename__ = "ipcc_emission_factors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    gas_type: Mapped[str] = mapped_column(String(10), nullable=False)
    tier: Mapped[str] = mapped_column(String(10), nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(100), nullable=False)
    # category codes this factor applies to, e.g. ["1.A.1", "1.A.2"]
    applicable_categories: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    fuel_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    activity_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    heating_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    heating_value_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<IpccEmissionFactor {self.name} {self.tier} {self.gas_type}>"


class GwpValue(Base):
    __tablename__ = "ipcc_gwp_values"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    gas_type: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    assessment_report: Mapped[str] = mapped_column(String(10), default="AR5", nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class ProjectCategory(Base):
    __tablename__ = "ipcc_project_categories"
    __table_args__ = (
        UniqueConstraint("project_id", "category_id", name="uq_ipcc_project_category"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ipcc_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ipcc_emission_categories.id", ondelete="CASCADE"), nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    # Relationships
    category: Mapped["EmissionCategory"] = relationship("EmissionCategory")


class ActivityData(Base):
    __tablename__ = "ipcc_activity_data"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ipcc_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ipcc_emission_categories.id", ondelete="CASCADE"), nullable=False
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    source: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Relationships
    category: Mapped["EmissionCategory"] = relationship("EmissionCategory")


class IpccCalculation(Base):
    __tablename__ = "ipcc_emission_calculations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ipcc_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    activity_data_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ipcc_activity_data.id", ondelete="CASCADE"), nullable=False
    )
    emission_factor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ipcc_emission_factors.id", ondelete="RESTRICT"), nullable=False
    )

    sector: Mapped[str] = mapped_column(String(20), nullable=False)
    tier: Mapped[str] = mapped_column(String(10), nullable=False)
    gas_type: Mapped[str] = mapped_column(String(10), nullable=False)
    emission_value: Mapped[float] = mapped_column(Float, nullable=False)
    emission_unit: Mapped[str] = mapped_column(String(20), default="kg", nullable=False)
    gwp_value: Mapped[float] = mapped_column(Float, nullable=False)
    co2_equivalent: Mapped[float] = mapped_column(Float, nullable=False)
    method: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class IpccProjectSummary(Base):
    __tablename__ = "ipcc_project_summaries"
    __table_args__ = (
        UniqueConstraint("project_id", "sector", name="uq_ipcc_summary_project_sector"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ipcc_projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sector: Mapped[str] = mapped_column(String(20), nullable=False)

    # kg of each gas
    total_co2: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_ch4: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_n2o: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    # kg CO2e for everything else
    total_other_gases: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_co2_equivalent: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    last_calculated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
