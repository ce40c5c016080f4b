"""
Shared project/calculation/summary workflow for the scope-based standards
(GHG Protocol and ISO 14064).
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from loguru import logger
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.calculators.factor_selection import FactorQuery, FactorSelector, get_factor_selector
from app.calculators.gas_factor import (
    FactorInput,
    GasFactorResult,
    calculate_with_factor,
    factor_from_record,
    summarize_gas_calculations,
)
from app.core.workflow import ensure_transition, CALCULATION_TRANSITIONS
from app.core.exceptions import NotFoundError, BadRequestError
from app.models.ghg_protocol import SCOPE_CATEGORIES
from app.schemas.ghg_protocol import (
    GasCalculationCreate,
    GasCalculationUpdate,
    GasCalculationResponse,
    GasCalculationResult,
)
from app.services.access import ensure_tenant_access
from app.services.defra import check_reporting_period


def check_scope_category(scope: str, category: str) -> None:
    if category not in SCOPE_CATEGORIES.get(scope, ()):
        raise BadRequestError(f"Category '{category}' is not valid for {scope}")


class ScopedAccountingService(ABC):
    """
    Base service; subclasses set the models and schemas and decide where
    candidate factors come from.
    """

    label: str
    project_model: Any
    calculation_model: Any
    summary_model: Any
    project_schema: type[BaseModel]
    summary_schema: type[BaseModel]
    detail_schema: type[BaseModel]

    def __init__(self, db: AsyncSession, selector: FactorSelector | None = None):
        self.db = db
        self.selector = selector or get_factor_selector()

    # === Projects ===

    async def create_project(self, user_id: uuid.UUID, data: BaseModel):
        await ensure_tenant_access(self.db, user_id, data.tenant_id)
        check_reporting_period(data.reporting_period_start, data.reporting_period_end)

        project = self.project_model(**data.model_dump(), created_by=user_id)
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.bind(tenant_id=str(project.tenant_id), project_id=str(project.id)).info(
            "{} project created", self.label
        )
        return project

    async def get_project(self, user_id: uuid.UUID, project_id: uuid.UUID):
        """Get a project the user can access."""
        result = await self.db.execute(
            select(self.project_model).where(self.project_model.id == project_id)
        )
        project = result.scalar_one_or_none()
        if not project:
            raise NotFoundError(f"{self.label} project not found")
        await ensure_tenant_access(self.db, user_id, project.tenant_id)
        return project

    async def get_project_detail(self, user_id: uuid.UUID, project_id: uuid.UUID):
        project = await self.get_project(user_id, project_id)
        calculations = await self._get_calculations(project_id)
        summary = await self._get_summary(project_id)

        return self.detail_schema(
            **self.project_schema.model_validate(project).model_dump(),
            calculations=[GasCalculationResponse.model_validate(c) for c in calculations],
            summary=self.summary_schema.model_validate(summary) if summary else None,
        )

    async def list_projects(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> list:
        await ensure_tenant_access(self.db, user_id, tenant_id)
        result = await self.db.execute(
            select(self.project_model)
            .where(self.project_model.tenant_id == tenant_id)
            .order_by(self.project_model.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_project(self, user_id: uuid.UUID, project_id: uuid.UUID, data: BaseModel):
        project = await self.get_project(user_id, project_id)
        update_data = data.model_dump(exclude_unset=True)

        check_reporting_period(
            update_data.get("reporting_period_start", project.reporting_period_start),
            update_data.get("reporting_period_end", project.reporting_period_end),
        )
        if "status" in update_data:
            ensure_transition(project.status, update_data["status"])

        for field, value in update_data.items():
            setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def update_project_status(
        self, user_id: uuid.UUID, project_id: uuid.UUID, status: str
    ):
        project = await self.get_project(user_id, project_id)
        project.status = ensure_transition(project.status, status)
        await self.db.commit()
        await self.db.refresh(project)
        logger.bind(project_id=str(project_id)).info("{} project status: {}", self.label, status)
        return project

    async def delete_project(self, user_id: uuid.UUID, project_id: uuid.UUID) -> None:
        """Delete a project with its calculations and summary."""
        project = await self.get_project(user_id, project_id)
        await self.db.delete(project)
        await self.db.commit()
        logger.bind(tenant_id=str(project.tenant_id), project_id=str(project_id)).info(
            "{} project deleted", self.label
        )

    # === Calculations ===

    async def create_calculation(
        self, user_id: uuid.UUID, data: GasCalculationCreate
    ) -> GasCalculationResult:
        project = await self.get_project(user_id, data.project_id)
        check_scope_category(data.scope, data.category)

        factor = await self._resolve_factor(
            project,
            scope=data.scope,
            category=data.category,
            activity=data.activity_data.model_dump(mode="json"),
            provided=data.emission_factor,
            factor_id=data.emission_factor_id,
            gas_type=data.gas_type,
        )
        activity = data.activity_data.model_dump(mode="json")
        result = calculate_with_factor(
            activity["quantity"],
            activity["unit"],
            factor,
            gas_type=data.gas_type,
            method=data.calculation_method,
        )

        calculation = self.calculation_model(
            project_id=project.id,
            scope=data.scope,
            category=data.category,
            activity_data=activity,
            uncertainty=data.uncertainty,
            notes=data.notes,
            evidence=data.evidence,
            created_by=user_id,
        )
        self._apply_result(calculation, result)
        self.db.add(calculation)
        await self.db.flush()
        await self._refresh_summary(project.id)
        await self.db.commit()
        await self.db.refresh(calculation)

        logger.bind(project_id=str(project.id), calculation_id=str(calculation.id)).info(
            "{} calculation created: {} kg CO2e", self.label, calculation.co2_equivalent
        )
        return self._result_response(calculation, result)

    async def get_calculation(self, user_id: uuid.UUID, calculation_id: uuid.UUID):
        result = await self.db.execute(
            select(self.calculation_model).where(self.calculation_model.id == calculation_id)
        )
        calculation = result.scalar_one_or_none()
        if not calculation:
            raise NotFoundError("Calculation not found")
        await self.get_project(user_id, calculation.project_id)
        return calculation

    async def list_calculations(self, user_id: uuid.UUID, project_id: uuid.UUID) -> list:
        await self.get_project(user_id, project_id)
        return await self._get_calculations(project_id)

    async def update_calculation(
        self, user_id: uuid.UUID, calculation_id: uuid.UUID, data: GasCalculationUpdate
    ) -> GasCalculationResult | GasCalculationResponse:
        calculation = await self.get_calculation(user_id, calculation_id)
        project = await self.get_project(user_id, calculation.project_id)
        update_data = data.model_dump(exclude_unset=True, mode="json")

        scope = update_data.get("scope") or calculation.scope
        category = update_data.get("category") or calculation.category
        check_scope_category(scope, category)
        calculation.scope = scope
        calculation.category = category
        for field in ("uncertainty", "notes", "evidence"):
            if field in update_data:
                setattr(calculation, field, update_data[field])

        result = None
        if {"activity_data", "emission_factor", "emission_factor_id", "gas_type", "calculation_method"} & update_data.keys():
            activity = update_data.get("activity_data") or calculation.activity_data
            gas_type = update_data.get("gas_type") or calculation.gas_type
            provided = data.emission_factor
            factor_id = data.emission_factor_id
            if provided is None and factor_id is None:
                snapshot = calculation.emission_factor or {}
                if gas_type != calculation.gas_type:
                    # The stored value is per unit of the old gas
                    if snapshot.get("id"):
                        factor_id = uuid.UUID(snapshot["id"])
                    else:
                        record = self._snapshot_record(snapshot)
                        if record is None:
                            raise BadRequestError(
                                "A new emission factor is required when changing the gas type"
                            )
                        provided = factor_from_record(record, gas_type)
                else:
                    provided = FactorInput(
                        value=snapshot["value"],
                        unit=snapshot["unit"],
                        gas_type=gas_type,
                        source=snapshot.get("source"),
                        activity_name=snapshot.get("activity_name"),
                        factor_id=snapshot.get("id"),
                    )

            factor = await self._resolve_factor(
                project,
                scope=scope,
                category=category,
                activity=activity,
                provided=provided,
                factor_id=factor_id,
                gas_type=gas_type,
            )
            result = calculate_with_factor(
                activity["quantity"],
                activity["unit"],
                factor,
                gas_type=gas_type,
                method=update_data.get("calculation_method") or calculation.calculation_method,
            )
            calculation.activity_data = activity
            self._apply_result(calculation, result)

        await self.db.flush()
        await self._refresh_summary(calculation.project_id)
        await self.db.commit()
        await self.db.refresh(calculation)

        if result is None:
            return GasCalculationResponse.model_validate(calculation)
        return self._result_response(calculation, result)

    async def update_calculation_status(
        self, user_id: uuid.UUID, calculation_id: uuid.UUID, status: str
    ):
        calculation = await self.get_calculation(user_id, calculation_id)
        calculation.status = ensure_transition(
            calculation.status, status, CALCULATION_TRANSITIONS
        )
        await self.db.flush()
        await self._refresh_summary(calculation.project_id)
        await self.db.commit()
        await self.db.refresh(calculation)
        return calculation

    async def delete_calculation(self, user_id: uuid.UUID, calculation_id: uuid.UUID) -> None:
        calculation = await self.get_calculation(user_id, calculation_id)
        project_id = calculation.project_id

        await self.db.delete(calculation)
        await self.db.flush()
        await self._refresh_summary(project_id)
        await self.db.commit()
        logger.bind(project_id=str(project_id), calculation_id=str(calculation_id)).info(
            "{} calculation deleted", self.label
        )

    # === Summary ===

    async def get_summary(self, user_id: uuid.UUID, project_id: uuid.UUID):
        """Get the project summary, computing it the first time."""
        await self.get_project(user_id, project_id)
        summary = await self._get_summary(project_id)
        if not summary:
            summary = await self._refresh_summary(project_id)
            await self.db.commit()
            await self.db.refresh(summary)
        return summary

    async def recalculate_summary(self, user_id: uuid.UUID, project_id: uuid.UUID):
        await self.get_project(user_id, project_id)
        summary = await self._refresh_summary(project_id)
        await self.db.commit()
        await self.db.refresh(summary)
        return summary

    # === Factor resolution ===

    async def _get_factor_record(self, factor_id: uuid.UUID) -> Any:
        raise BadRequestError(f"{self.label} calculations do not use stored emission factors")

    def _snapshot_record(self, snapshot: dict) -> Any:
        """Catalogue entry a factor snapshot without an id was taken from, if any."""
        return None

    @abstractmethod
    async def _candidate_factors(self, project: Any, scope: str, category: str) -> list:
        """Factors the selector may choose from for a calculation."""

    async def _resolve_factor(
        self,
        project: Any,
        scope: str,
        category: str,
        activity: dict,
        provided: Any = None,
        factor_id: uuid.UUID | None = None,
        gas_type: str | None = None,
    ) -> FactorInput:
        """Provided factor first, then a factor id, then a selected candidate."""
        if provided is not None:
            if isinstance(provided, FactorInput):
                return provided
            return FactorInput(
                value=provided.value,
                unit=provided.unit,
                gas_type=provided.gas_type,
                source=provided.source,
            )

        if factor_id is not None:
            record = await self._get_factor_record(factor_id)
            return factor_from_record(record, gas_type)

        candidates = await self._candidate_factors(project, scope, category)
        text = " ".join(
            str(part)
            for part in (activity.get("activity_name"), activity.get("description"), category.replace("_", " "))
            if part
        )
        record = await self.selector.select(
            FactorQuery(text=text, unit=activity.get("unit")), candidates
        )
        return factor_from_record(record, gas_type)

    # === Helper Methods ===

    @staticmethod
    def _apply_result(calculation: Any, result: GasFactorResult) -> None:
        calculation.emission_factor = result.emission_factor
        calculation.gas_type = result.gas_type
        calculation.emission_value = result.emission_value
        calculation.gwp_value = result.gwp_value
        calculation.co2_equivalent = result.co2_equivalent
        calculation.calculation_method = result.calculation_method
        calculation.calculated_at = datetime.utcnow()

    @staticmethod
    def _result_response(calculation: Any, result: GasFactorResult) -> GasCalculationResult:
        return GasCalculationResult(
            **GasCalculationResponse.model_validate(calculation).model_dump(),
            formula=result.formula,
            explanation=result.explanation,
        )

    async def _get_calculations(self, project_id: uuid.UUID) -> list:
        result = await self.db.execute(
            select(self.calculation_model)
            .where(self.calculation_model.project_id == project_id)
            .order_by(self.calculation_model.calculated_at.desc())
        )
        return list(result.scalars().all())

    async def _get_summary(self, project_id: uuid.UUID):
        result = await self.db.execute(
            select(self.summary_model).where(self.summary_model.project_id == project_id)
        )
        return result.scalar_one_or_none()

    async def _refresh_summary(self, project_id: uuid.UUID):
        """Recompute and upsert the summary inside the caller's transaction."""
        totals = summarize_gas_calculations(await self._get_calculations(project_id))

        summary = await self._get_summary(project_id)
        if summary is None:
            summary = self.summary_model(project_id=project_id)
            self.db.add(summary)
        for field, value in totals.items():
            if hasattr(self.summary_model, field):
                setattr(summary, field, value)
        summary.last_calculated_at = datetime.utcnow()

        await self.db.flush()
        return summary
