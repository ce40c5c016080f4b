import uuid
from typing import Any

from loguru import logger
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.calculators.iscc import IsccResult, calculate_iscc
from app.core.workflow import ensure_transition, CALCULATION_TRANSITIONS
from app.core.exceptions import NotFoundError
from app.models.iscc import (
    IsccProject,
    IsccCultivation,
    IsccProcessing,
    IsccTransport,
    IsccCalculation,
)
from app.schemas.iscc import (
    IsccProjectCreate,
    IsccProjectUpdate,
    IsccCultivationData,
    IsccProcessingData,
    IsccTransportData,
    IsccCalculationCreate,
)
from app.services.access import ensure_tenant_access

_INPUT_LABELS = {
    IsccCultivation: "Cultivation data",
    IsccProcessing: "Processing data",
    IsccTransport: "Transport data",
}

_PROJECT_SNAPSHOT_FIELDS = (
    "product_type",
    "feedstock_type",
    "production_volume",
    "lhv",
    "lhv_unit",
)


class IsccService:
    """ISCC EU / PLUS biofuel projects with a local GHG calculation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # === Projects ===

    async def create_project(self, user_id: uuid.UUID, data: IsccProjectCreate) -> IsccProject:
        await ensure_tenant_access(self.db, user_id, data.tenant_id)

        project = IsccProject(**data.model_dump(), created_by=user_id)
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.bind(tenant_id=str(project.tenant_id), project_id=str(project.id)).info(
            "ISCC project created"
        )
        return project

    async def get_project(self, user_id: uuid.UUID, project_id: uuid.UUID) -> IsccProject:
        result = await self.db.execute(select(IsccProject).where(IsccProject.id == project_id))
        project = result.scalar_one_or_none()
        if not project:
            raise NotFoundError("ISCC project not found")
        await ensure_tenant_access(self.db, user_id, project.tenant_id)
        return project

    async def list_projects(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> list[IsccProject]:
        await ensure_tenant_access(self.db, user_id, tenant_id)
        result = await self.db.execute(
            select(IsccProject)
            .where(IsccProject.tenant_id == tenant_id)
            .order_by(IsccProject.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_project(
        self, user_id: uuid.UUID, project_id: uuid.UUID, data: IsccProjectUpdate
    ) -> IsccProject:
        project = await self.get_project(user_id, project_id)
        update_data = data.model_dump(exclude_unset=True)
        if "status" in update_data:
            ensure_transition(project.status, update_data["status"], CALCULATION_TRANSITIONS)

        for field, value in update_data.items():
            setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def delete_project(self, user_id: uuid.UUID, project_id: uuid.UUID) -> None:
        project = await self.get_project(user_id, project_id)
        await self.db.delete(project)
        await self.db.commit()
        logger.bind(project_id=str(project_id)).info("ISCC project deleted")

    # === Inputs ===

    async def save_cultivation(
        self, user_id: uuid.UUID, project_id: uuid.UUID, data: IsccCultivationData
    ) -> IsccCultivation:
        await self.get_project(user_id, project_id)
        return await self._upsert_input(IsccCultivation, project_id, data)

    async def get_cultivation(self, user_id: uuid.UUID, project_id: uuid.UUID) -> IsccCultivation:
        await self.get_project(user_id, project_id)
        return await self._require_input(IsccCultivation, project_id)

    async def delete_cultivation(self, user_id: uuid.UUID, project_id: uuid.UUID) -> None:
        await self.get_project(user_id, project_id)
        await self._delete_input(IsccCultivation, project_id)

    async def save_processing(
        self, user_id: uuid.UUID, project_id: uuid.UUID, data: IsccProcessingData
    ) -> IsccProcessing:
        await self.get_project(user_id, project_id)
        return await self._upsert_input(IsccProcessing, project_id, data)

    async def get_processing(self, user_id: uuid.UUID, project_id: uuid.UUID) -> IsccProcessing:
        await self.get_project(user_id, project_id)
        return await self._require_input(IsccProcessing, project_id)

    async def delete_processing(self, user_id: uuid.UUID, project_id: uuid.UUID) -> None:
        await self.get_project(user_id, project_id)
        await self._delete_input(IsccProcessing, project_id)

    async def save_transport(
        self, user_id: uuid.UUID, project_id: uuid.UUID, data: IsccTransportData
    ) -> IsccTransport:
        await self.get_project(user_id, project_id)
        return await self._upsert_input(IsccTransport, project_id, data)

    async def get_transport(self, user_id: uuid.UUID, project_id: uuid.UUID) -> IsccTransport:
        await self.get_project(user_id, project_id)
        return await self._require_input(IsccTransport, project_id)

    async def delete_transport(self, user_id: uuid.UUID, project_id: uuid.UUID) -> None:
        await self.get_project(user_id, project_id)
        await self._delete_input(IsccTransport, project_id)

    # === Calculations ===

    async def calculate(self, user_id: uuid.UUID, data: IsccCalculationCreate) -> IsccCalculation:
        """Run the calculation on the project's current inputs and store it."""
        project = await self.get_project(user_id, data.project_id)
        snapshot = await self._snapshot(project, data.el, data.eccr)
        result = self._run(snapshot)

        calculation = IsccCalculation(
            project_id=project.id,
            notes=data.notes,
            created_by=user_id,
        )
        self._apply_result(calculation, snapshot, result)
        self.db.add(calculation)
        await self.db.commit()
        await self.db.refresh(calculation)

        logger.bind(project_id=str(project.id), calculation_id=str(calculation.id)).info(
            "ISCC calculation: {:.2f} g CO2e/MJ, savings {:.1f}%",
            result.total_emissions,
            result.ghg_savings,
        )
        return calculation

    async def recalculate(self, user_id: uuid.UUID, calculation_id: uuid.UUID) -> IsccCalculation:
        """Overwrite a calculation from the project's current inputs, keeping its el/eccr."""
        calculation = await self.get_calculation(user_id, calculation_id)
        project = await self.get_project(user_id, calculation.project_id)

        snapshot = await self._snapshot(project, calculation.el, calculation.eccr)
        result = self._run(snapshot)
        self._apply_result(calculation, snapshot, result)

        await self.db.commit()
        await self.db.refresh(calculation)
        return calculation

    async def get_calculation(self, user_id: uuid.UUID, calculation_id: uuid.UUID) -> IsccCalculation:
        result = await self.db.execute(
            select(IsccCalculation).where(IsccCalculation.id == calculation_id)
        )
        calculation = result.scalar_one_or_none()
        if not calculation:
            raise NotFoundError("Calculation not found")
        await self.get_project(user_id, calculation.project_id)
        return calculation

    async def list_calculations(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> list[IsccCalculation]:
        await self.get_project(user_id, project_id)
        result = await self.db.execute(
            select(IsccCalculation)
            .where(IsccCalculation.project_id == project_id)
            .order_by(IsccCalculation.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_calculation_status(
        self, user_id: uuid.UUID, calculation_id: uuid.UUID, status: str
    ) -> IsccCalculation:
        calculation = await self.get_calculation(user_id, calculation_id)
        calculation.status = ensure_transition(calculation.status, status, CALCULATION_TRANSITIONS)
        await self.db.commit()
        await self.db.refresh(calculation)
        return calculation

    async def delete_calculation(self, user_id: uuid.UUID, calculation_id: uuid.UUID) -> None:
        calculation = await self.get_calculation(user_id, calculation_id)
        await self.db.delete(calculation)
        await self.db.commit()

    # === Helper Methods ===

    async def _get_input(self, model: Any, project_id: uuid.UUID):
        result = await self.db.execute(select(model).where(model.project_id == project_id))
        return result.scalar_one_or_none()

    async def _require_input(self, model: Any, project_id: uuid.UUID):
        record = await self._get_input(model, project_id)
        if not record:
            raise NotFoundError(f"{_INPUT_LABELS[model]} not found")
        return record

    async def _upsert_input(self, model: Any, project_id: uuid.UUID, data: BaseModel):
        record = await self._get_input(model, project_id)
        if record is None:
            record = model(project_id=project_id)
            self.db.add(record)
        for field, value in data.model_dump(mode="json").items():
            setattr(record, field, value)

        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def _delete_input(self, model: Any, project_id: uuid.UUID) -> None:
        record = await self._require_input(model, project_id)
        await self.db.delete(record)
        await self.db.commit()

    async def _snapshot(
        self, project: IsccProject, el: float | None, eccr: float | None
    ) -> dict[str, Any]:
        """Plain-dict copy of every input the calculation reads."""
        cultivation = await self._get_input(IsccCultivation, project.id)
        processing = await self._get_input(IsccProcessing, project.id)
        transport = await self._get_input(IsccTransport, project.id)

        return {
            "project": {f: getattr(project, f) for f in _PROJECT_SNAPSHOT_FIELDS},
            "cultivation": _dump(IsccCultivationData, cultivation),
            "processing": _dump(IsccProcessingData, processing),
            "transport": _dump(IsccTransportData, transport),
            "el": el,
            "eccr": eccr,
        }

    @staticmethod
    def _run(snapshot: dict[str, Any]) -> IsccResult:
        return calculate_iscc(
            snapshot["project"],
            snapshot["cultivation"],
            snapshot["processing"],
            snapshot["transport"],
            el=snapshot["el"],
            eccr=snapshot["eccr"],
        )

    @staticmethod
    def _apply_result(
        calculation: IsccCalculation, snapshot: dict[str, Any], result: IsccResult
    ) -> None:
        calculation.input_snapshot = snapshot
        calculation.eec_kg = result.eec_kg
        calculation.ep_kg = result.ep_kg
        calculation.etd_kg = result.etd_kg
        calculation.el_kg = result.el_kg
        calculation.eccr_kg = result.eccr_kg
        calculation.total_kg = result.total_kg
        calculation.eec = result.eec
        calculation.ep = result.ep
        calculation.etd = result.etd
        calculation.el = result.el
        calculation.eccr = result.eccr
        calculation.total_emissions = result.total_emissions
        calculation.fossil_fuel_baseline = result.fossil_fuel_baseline
        calculation.ghg_savings = result.ghg_savings
        calculation.breakdown = result.breakdown
        calculation.assumptions = result.assumptions
        calculation.calculator = "local"


def _dump(schema: type[BaseModel], record: Any) -> dict[str, Any] | None:
    if record is None:
        return None
    return schema.model_validate(record, from_attributes=True).model_dump(mode="json")
