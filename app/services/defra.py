import uuid
from datetime import date, datetime

from loguru import logger
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.calculators.defra import calculate_defra, summarize_defra
from app.calculators.factor_selection import FactorQuery, FactorSelector, get_factor_selector
from app.core.workflow import ensure_transition
from app.core.exceptions import NotFoundError, BadRequestError
from app.models.defra import (
    DefraProject,
    DefraEmissionFactor,
    DefraCalculation,
    DefraProjectSummary,
)
from app.schemas.defra import (
    DefraProjectCreate,
    DefraProjectUpdate,
    DefraProjectDetail,
    DefraProjectResponse,
    DefraCalculationResponse,
    DefraProjectSummaryResponse,
    DefraEmissionFactorCreate,
    DefraCalculationCreate,
    DefraCalculationUpdate,
)
from app.services.access import ensure_tenant_access


def check_reporting_period(start: date, end: date) -> None:
    if end < start:
        raise BadRequestError("Reporting period end date must be after start date")


class DefraService:
    """DEFRA projects, conversion factors, calculations and summaries."""

    def __init__(self, db: AsyncSession, selector: FactorSelector | None = None):
        self.db = db
        self.selector = selector or get_factor_selector()

    # === Projects ===

    async def create_project(
        self, user_id: uuid.UUID, data: DefraProjectCreate
    ) -> DefraProject:
        await ensure_tenant_access(self.db, user_id, data.tenant_id)
        check_reporting_period(data.reporting_period_start, data.reporting_period_end)
        await self._ensure_factors_for_year(data.defra_year)

        project = DefraProject(**data.model_dump(), created_by=user_id)
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.bind(tenant_id=str(project.tenant_id), project_id=str(project.id)).info(
            "DEFRA project created"
        )
        return project

    async def get_project(self, user_id: uuid.UUID, project_id: uuid.UUID) -> DefraProject:
        """Get a project the user can access."""
        result = await self.db.execute(
            select(DefraProject).where(DefraProject.id == project_id)
        )
        project = result.scalar_one_or_none()
        if not project:
            raise NotFoundError("DEFRA project not found")
        await ensure_tenant_access(self.db, user_id, project.tenant_id)
        return project

    async def get_project_detail(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> DefraProjectDetail:
        project = await self.get_project(user_id, project_id)
        calculations = await self._get_calculations(project_id)
        summary = await self._get_summary(project_id)

        return DefraProjectDetail(
            **DefraProjectResponse.model_validate(project).model_dump(),
            calculations=[DefraCalculationResponse.model_validate(c) for c in calculations],
            summary=DefraProjectSummaryResponse.model_validate(summary) if summary else None,
        )

    async def list_projects(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID
    ) -> list[DefraProject]:
        await ensure_tenant_access(self.db, user_id, tenant_id)
        result = await self.db.execute(
            select(DefraProject)
            .where(DefraProject.tenant_id == tenant_id)
            .order_by(DefraProject.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_project(
        self, user_id: uuid.UUID, project_id: uuid.UUID, data: DefraProjectUpdate
    ) -> DefraProject:
        project = await self.get_project(user_id, project_id)
        update_data = data.model_dump(exclude_unset=True)

        check_reporting_period(
            update_data.get("reporting_period_start", project.reporting_period_start),
            update_data.get("reporting_period_end", project.reporting_period_end),
        )
        if "defra_year" in update_data and update_data["defra_year"] != project.defra_year:
            await self._ensure_factors_for_year(update_data["defra_year"])
        if "status" in update_data:
            ensure_transition(project.status, update_data["status"])

        for field, value in update_data.items():
            setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def update_project_status(
        self, user_id: uuid.UUID, project_id: uuid.UUID, status: str
    ) -> DefraProject:
        project = await self.get_project(user_id, project_id)
        project.status = ensure_transition(project.status, status)
        await self.db.commit()
        await self.db.refresh(project)
        logger.bind(project_id=str(project_id)).info("DEFRA project status: {}", status)
        return project

    async def delete_project(self, user_id: uuid.UUID, project_id: uuid.UUID) -> None:
        """Delete a project with its calculations and summary."""
        project = await self.get_project(user_id, project_id)
        await self.db.delete(project)
        await self.db.commit()
        logger.bind(tenant_id=str(project.tenant_id), project_id=str(project_id)).info(
            "DEFRA project deleted"
        )

    # === Emission factors ===

    async def search_factors(
        self,
        year: str | None = None,
        scope: str | None = None,
        category: str | None = None,
        unit: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[DefraEmissionFactor]:
        query = select(DefraEmissionFactor)
        if year:
            query = query.where(DefraEmissionFactor.year == year)
        if scope:
            query = query.where(DefraEmissionFactor.scope == scope)
        if category:
            pattern = f"%{category}%"
            query = query.where(
                or_(
                    DefraEmissionFactor.level1_category.ilike(pattern),
                    DefraEmissionFactor.level2_category.ilike(pattern),
                    DefraEmissionFactor.level3_category.ilike(pattern),
                    DefraEmissionFactor.activity_name.ilike(pattern),
                )
            )
        if unit:
            query = query.where(DefraEmissionFactor.unit == unit)

        result = await self.db.execute(
            query.order_by(
                DefraEmissionFactor.level1_category, DefraEmissionFactor.activity_name
            )
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_factor(self, factor_id: uuid.UUID) -> DefraEmissionFactor:
        result = await self.db.execute(
            select(DefraEmissionFactor).where(DefraEmissionFactor.id == factor_id)
        )
        factor = result.scalar_one_or_none()
        if not factor:
            raise NotFoundError("Emission factor not found")
        return factor

    async def get_available_years(self) -> list[str]:
        result = await self.db.execute(
            select(DefraEmissionFactor.year).distinct().order_by(DefraEmissionFactor.year.desc())
        )
        return list(result.scalars().all())

    async def import_factors(
        self, factors: list[DefraEmissionFactorCreate]
    ) -> list[DefraEmissionFactor]:
        rows = [DefraEmissionFactor(**f.model_dump()) for f in factors]
        self.db.add_all(rows)
        await self.db.commit()
        logger.info("Imported {} DEFRA emission factors", len(rows))
        return rows

    # === Calculations ===

    async def create_calculation(
        self, user_id: uuid.UUID, data: DefraCalculationCreate
    ) -> DefraCalculation:
        project = await self.get_project(user_id, data.project_id)

        if data.emission_factor_id:
            factor = await self.get_factor(data.emission_factor_id)
        else:
            factor = await self._select_factor(project, data)

        result = calculate_defra(data.quantity, factor)
        calculation = DefraCalculation(
            project_id=project.id,
            emission_factor_id=factor.id,
            activity_date=data.activity_date,
            quantity=data.quantity,
            unit=data.unit,
            description=data.description,
            location=data.location,
            evidence=data.evidence,
            created_by=user_id,
            co2_emissions=result.co2_emissions,
            ch4_emissions=result.ch4_emissions,
            n2o_emissions=result.n2o_emissions,
            total_co2e=result.total_co2e,
            category=result.category,
            scope=result.scope,
        )
        self.db.add(calculation)
        await self.db.flush()
        await self._refresh_summary(project.id)
        await self.db.commit()
        await self.db.refresh(calculation)

        logger.bind(project_id=str(project.id), calculation_id=str(calculation.id)).info(
            "DEFRA calculation created: {} kg CO2e", calculation.total_co2e
        )
        return calculation

    async def get_calculation(
        self, user_id: uuid.UUID, calculation_id: uuid.UUID
    ) -> DefraCalculation:
        """Get a calculation with its emission factor."""
        result = await self.db.execute(
            select(DefraCalculation)
            .options(selectinload(DefraCalculation.emission_factor))
            .where(DefraCalculation.id == calculation_id)
        )
        calculation = result.scalar_one_or_none()
        if not calculation:
            raise NotFoundError("Calculation not found")
        await self.get_project(user_id, calculation.project_id)
        return calculation

    async def list_calculations(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> list[DefraCalculation]:
        await self.get_project(user_id, project_id)
        return await self._get_calculations(project_id)

    async def update_calculation(
        self, user_id: uuid.UUID, calculation_id: uuid.UUID, data: DefraCalculationUpdate
    ) -> DefraCalculation:
        calculation = await self.get_calculation(user_id, calculation_id)
        update_data = data.model_dump(exclude_unset=True)

        recalculate = "quantity" in update_data or (
            update_data.get("emission_factor_id")
            and update_data["emission_factor_id"] != calculation.emission_factor_id
        )
        for field, value in update_data.items():
            if value is not None or field in ("description", "location", "evidence"):
                setattr(calculation, field, value)

        if recalculate:
            factor = await self.get_factor(calculation.emission_factor_id)
            result = calculate_defra(calculation.quantity, factor)
            calculation.co2_emissions = result.co2_emissions
            calculation.ch4_emissions = result.ch4_emissions
            calculation.n2o_emissions = result.n2o_emissions
            calculation.total_co2e = result.total_co2e
            calculation.category = result.category
            calculation.scope = result.scope

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
            "DEFRA calculation deleted"
        )

    # === Summary ===

    async def get_summary(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> DefraProjectSummary:
        await self.get_project(user_id, project_id)
        summary = await self._get_summary(project_id)
        if not summary:
            summary = await self._refresh_summary(project_id)
            await self.db.commit()
            await self.db.refresh(summary)
        return summary

    async def recalculate_summary(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> DefraProjectSummary:
        await self.get_project(user_id, project_id)
        summary = await self._refresh_summary(project_id)
        await self.db.commit()
        await self.db.refresh(summary)
        return summary

    # === Helper Methods ===

    async def _ensure_factors_for_year(self, year: str) -> None:
        result = await self.db.execute(
            select(DefraEmissionFactor.id).where(DefraEmissionFactor.year == year).limit(1)
        )
        if result.scalar_one_or_none() is None:
            raise BadRequestError(f"No emission factors found for DEFRA year {year}")

    async def _select_factor(
        self, project: DefraProject, data: DefraCalculationCreate
    ) -> DefraEmissionFactor:
        """Fetch candidates for the project's DEFRA year and let the selector choose."""
        text = " ".join(filter(None, [data.activity_name, data.description]))
        if not text:
            raise BadRequestError("Provide emission_factor_id or an activity name")

        pattern = f"%{data.activity_name or data.description}%"
        result = await self.db.execute(
            select(DefraEmissionFactor)
            .where(
                DefraEmissionFactor.year == project.defra_year,
                DefraEmissionFactor.unit == data.unit,
                or_(
                    DefraEmissionFactor.level1_category.ilike(pattern),
                    DefraEmissionFactor.level2_category.ilike(pattern),
                    DefraEmissionFactor.activity_name.ilike(pattern),
                ),
            )
            .limit(50)
        )
        candidates = list(result.scalars().all())
        if not candidates:
            # Widen to every factor of the year with the same unit
            result = await self.db.execute(
                select(DefraEmissionFactor)
                .where(
                    DefraEmissionFactor.year == project.defra_year,
                    DefraEmissionFactor.unit == data.unit,
                )
                .limit(50)
            )
            candidates = list(result.scalars().all())

        return await self.selector.select(FactorQuery(text=text, unit=data.unit), candidates)

    async def _get_calculations(self, project_id: uuid.UUID) -> list[DefraCalculation]:
        result = await self.db.execute(
            select(DefraCalculation)
            .where(DefraCalculation.project_id == project_id)
            .order_by(DefraCalculation.activity_date.desc())
        )
        return list(result.scalars().all())

    async def _get_summary(self, project_id: uuid.UUID) -> DefraProjectSummary | None:
        result = await self.db.execute(
            select(DefraProjectSummary).where(DefraProjectSummary.project_id == project_id)
        )
        return result.scalar_one_or_none()

    async def _refresh_summary(self, project_id: uuid.UUID) -> DefraProjectSummary:
        """Recompute and upsert the summary inside the caller's transaction."""
        totals = summarize_defra(await self._get_calculations(project_id))

        summary = await self._get_summary(project_id)
        if summary is None:
            summary = DefraProjectSummary(project_id=project_id)
            self.db.add(summary)
        for field, value in totals.items():
            setattr(summary, field, value)
        summary.last_calculated_at = datetime.utcnow()

        await self.db.flush()
        return summary
