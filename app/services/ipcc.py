import uuid
from collections import defaultdict
from datetime import datetime

from loguru import logger
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.calculators.gwp import IPCC_GWP_SEED
from app.calculators.ipcc import (
    CATEGORY_CATALOGUE,
    calculate_emission,
    select_best_factor,
    best_gas_type,
    summarize_sector,
)
from app.core.workflow import ensure_transition
from app.core.exceptions import NotFoundError, BadRequestError, ConflictError
from app.models.ipcc import (
    IpccProject,
    EmissionCategory,
    IpccEmissionFactor,
    GwpValue,
    ProjectCategory,
    ActivityData,
    IpccCalculation,
    IpccProjectSummary,
)
from app.schemas.ipcc import (
    IpccProjectCreate,
    IpccProjectUpdate,
    IpccProjectResponse,
    IpccProjectDetail,
    ProjectCategoryResponse,
    IpccSummaryResponse,
    IpccProjectSummaries,
    GwpValueUpsert,
    IpccEmissionFactorCreate,
    IpccEmissionFactorUpdate,
    ActivityDataCreate,
    ActivityDataUpdate,
    IpccCalculationCreate,
    IpccCalculationResponse,
    IpccCalculationResult,
    DashboardOverview,
    YearlyTrend,
    SectorTotal,
    TopEmittingProject,
)
from app.services.access import ensure_tenant_access


class IpccService:
    """IPCC 2006 inventories: categories, factors, activity data and sector summaries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # === Projects ===

    async def create_project(self, user_id: uuid.UUID, data: IpccProjectCreate) -> IpccProject:
        await ensure_tenant_access(self.db, user_id, data.tenant_id)

        project = IpccProject(**data.model_dump(), created_by=user_id)
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.bind(tenant_id=str(project.tenant_id), project_id=str(project.id)).info(
            "IPCC project created"
        )
        return project

    async def get_project(self, user_id: uuid.UUID, project_id: uuid.UUID) -> IpccProject:
        result = await self.db.execute(select(IpccProject).where(IpccProject.id == project_id))
        project = result.scalar_one_or_none()
        if not project:
            raise NotFoundError("IPCC project not found")
        await ensure_tenant_access(self.db, user_id, project.tenant_id)
        return project

    async def get_project_detail(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> IpccProjectDetail:
        project = await self.get_project(user_id, project_id)
        categories = await self._get_project_categories(project_id)
        summaries = await self._get_summaries(project_id)

        return IpccProjectDetail(
            **IpccProjectResponse.model_validate(project).model_dump(),
            categories=[ProjectCategoryResponse.model_validate(c) for c in categories],
            summaries=[IpccSummaryResponse.model_validate(s) for s in summaries],
        )

    async def list_projects(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> list[IpccProject]:
        await ensure_tenant_access(self.db, user_id, tenant_id)
        result = await self.db.execute(
            select(IpccProject)
            .where(IpccProject.tenant_id == tenant_id)
            .order_by(IpccProject.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_project(
        self, user_id: uuid.UUID, project_id: uuid.UUID, data: IpccProjectUpdate
    ) -> IpccProject:
        project = await self.get_project(user_id, project_id)
        update_data = data.model_dump(exclude_unset=True)
        if "status" in update_data:
            ensure_transition(project.status, update_data["status"])

        for field, value in update_data.items():
            setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def update_project_status(
        self, user_id: uuid.UUID, project_id: uuid.UUID, status: str
    ) -> IpccProject:
        project = await self.get_project(user_id, project_id)
        project.status = ensure_transition(project.status, status)
        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def delete_project(self, user_id: uuid.UUID, project_id: uuid.UUID) -> None:
        project = await self.get_project(user_id, project_id)
        await self.db.delete(project)
        await self.db.commit()
        logger.bind(project_id=str(project_id)).info("IPCC project deleted")

    # === Emission categories ===

    async def ensure_categories(self) -> None:
        """Insert catalogue categories that are not stored yet."""
        result = await self.db.execute(select(EmissionCategory.code))
        existing = set(result.scalars().all())
        missing = [
            EmissionCategory(code=code, name=name, sector=sector)
            for code, name, sector in CATEGORY_CATALOGUE
            if code not in existing
        ]
        if missing:
            self.db.add_all(missing)
            await self.db.commit()
            logger.info("Seeded {} IPCC emission categories", len(missing))

    async def list_categories(self, sector: str | None = None) -> list[EmissionCategory]:
        await self.ensure_categories()
        query = select(EmissionCategory)
        if sector:
            query = query.where(EmissionCategory.sector == sector)
        result = await self.db.execute(query.order_by(EmissionCategory.code))
        return list(result.scalars().all())

    async def get_category_by_code(self, code: str) -> EmissionCategory:
        await self.ensure_categories()
        result = await self.db.execute(
            select(EmissionCategory).where(EmissionCategory.code == code)
        )
        category = result.scalar_one_or_none()
        if not category:
            raise NotFoundError(f"Emission category {code} not found")
        return category

    async def get_category(self, category_id: uuid.UUID) -> EmissionCategory:
        result = await self.db.execute(
            select(EmissionCategory).where(EmissionCategory.id == category_id)
        )
        category = result.scalar_one_or_none()
        if not category:
            raise NotFoundError("Emission category not found")
        return category

    # === Project categories ===

    async def attach_category(
        self, user_id: uuid.UUID, project_id: uuid.UUID, category_id: uuid.UUID
    ) -> ProjectCategory:
        await self.get_project(user_id, project_id)
        await self.get_category(category_id)

        if await self._get_project_category(project_id, category_id):
            raise ConflictError("Category already added to this project")

        link = ProjectCategory(project_id=project_id, category_id=category_id)
        self.db.add(link)
        await self.db.commit()

        return await self._get_project_category(project_id, category_id)

    async def detach_category(
        self, user_id: uuid.UUID, project_id: uuid.UUID, category_id: uuid.UUID
    ) -> None:
        await self.get_project(user_id, project_id)
        link = await self._get_project_category(project_id, category_id)
        if not link:
            raise NotFoundError("Category is not part of this project")

        await self.db.delete(link)
        await self.db.commit()

    async def list_project_categories(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> list[ProjectCategory]:
        await self.get_project(user_id, project_id)
        return await self._get_project_categories(project_id)

    # === GWP values ===

    async def ensure_gwp_values(self) -> None:
        result = await self.db.execute(select(GwpValue.gas_type))
        existing = set(result.scalars().all())
        missing = [
            GwpValue(gas_type=gas, value=value, assessment_report="AR5")
            for gas, value in IPCC_GWP_SEED.items()
            if gas not in existing
        ]
        if missing:
            self.db.add_all(missing)
            await self.db.commit()

    async def list_gwp_values(self) -> list[GwpValue]:
        await self.ensure_gwp_values()
        result = await self.db.execute(select(GwpValue).order_by(GwpValue.gas_type))
        return list(result.scalars().all())

    async def upsert_gwp_value(self, gas_type: str, data: GwpValueUpsert) -> GwpValue:
        result = await self.db.execute(select(GwpValue).where(GwpValue.gas_type == gas_type))
        gwp = result.scalar_one_or_none()
        if gwp is None:
            gwp = GwpValue(gas_type=gas_type)
            self.db.add(gwp)
        gwp.value = data.value
        gwp.assessment_report = data.assessment_report

        await self.db.commit()
        await self.db.refresh(gwp)
        logger.info("GWP for {} set to {} ({})", gas_type, gwp.value, gwp.assessment_report)
        return gwp

    async def get_gwp_value(self, gas_type: str) -> float:
        await self.ensure_gwp_values()
        result = await self.db.execute(select(GwpValue).where(GwpValue.gas_type == gas_type))
        gwp = result.scalar_one_or_none()
        if not gwp:
            raise BadRequestError(f"No GWP value configured for {gas_type}")
        return gwp.value

    # === Emission factors ===

    async def create_factor(self, data: IpccEmissionFactorCreate) -> IpccEmissionFactor:
        factor = IpccEmissionFactor(**data.model_dump())
        self.db.add(factor)
        await self.db.commit()
        await self.db.refresh(factor)
        return factor

    async def get_factor(self, factor_id: uuid.UUID) -> IpccEmissionFactor:
        result = await self.db.execute(
            select(IpccEmissionFactor).where(IpccEmissionFactor.id == factor_id)
        )
        factor = result.scalar_one_or_none()
        if not factor:
            raise NotFoundError("Emission factor not found")
        return factor

    async def list_factors(
        self,
        category_code: str | None = None,
        gas_type: str | None = None,
        tier: str | None = None,
    ) -> list[IpccEmissionFactor]:
        query = select(IpccEmissionFactor)
        if gas_type:
            query = query.where(IpccEmissionFactor.gas_type == gas_type)
        if tier:
            query = query.where(IpccEmissionFactor.tier == tier)
        result = await self.db.execute(query.order_by(IpccEmissionFactor.name))
        factors = list(result.scalars().all())

        # JSON list membership is filtered here to stay portable across backends
        if category_code:
            factors = [f for f in factors if category_code in (f.applicable_categories or [])]
        return factors

    async def update_factor(
        self, factor_id: uuid.UUID, data: IpccEmissionFactorUpdate
    ) -> IpccEmissionFactor:
        factor = await self.get_factor(factor_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(factor, field, value)

        await self.db.commit()
        await self.db.refresh(factor)
        return factor

    async def delete_factor(self, factor_id: uuid.UUID) -> None:
        factor = await self.get_factor(factor_id)
        used = await self.db.scalar(
            select(func.count(IpccCalculation.id)).where(
                IpccCalculation.emission_factor_id == factor_id
            )
        )
        if used:
            raise BadRequestError("Emission factor is used by existing calculations")

        await self.db.delete(factor)
        await self.db.commit()

    # === Activity data ===

    async def create_activity(self, user_id: uuid.UUID, data: ActivityDataCreate) -> ActivityData:
        await self.get_project(user_id, data.project_id)
        if not await self._get_project_category(data.project_id, data.category_id):
            raise BadRequestError("Category must be added to the project before recording activity data")

        activity = ActivityData(**data.model_dump())
        self.db.add(activity)
        await self.db.commit()
        await self.db.refresh(activity)
        return activity

    async def get_activity(self, user_id: uuid.UUID, activity_id: uuid.UUID) -> ActivityData:
        result = await self.db.execute(
            select(ActivityData)
            .options(selectinload(ActivityData.category))
            .where(ActivityData.id == activity_id)
        )
        activity = result.scalar_one_or_none()
        if not activity:
            raise NotFoundError("Activity data not found")
        await self.get_project(user_id, activity.project_id)
        return activity

    async def list_activities(self, user_id: uuid.UUID, project_id: uuid.UUID) -> list[ActivityData]:
        await self.get_project(user_id, project_id)
        result = await self.db.execute(
            select(ActivityData)
            .where(ActivityData.project_id == project_id)
            .order_by(ActivityData.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_activity(
        self, user_id: uuid.UUID, activity_id: uuid.UUID, data: ActivityDataUpdate
    ) -> ActivityData:
        activity = await self.get_activity(user_id, activity_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(activity, field, value)

        await self.db.commit()
        await self.db.refresh(activity)
        return activity

    async def delete_activity(self, user_id: uuid.UUID, activity_id: uuid.UUID) -> None:
        """Delete activity data; its calculations go with it."""
        activity = await self.get_activity(user_id, activity_id)
        project_id = activity.project_id

        await self.db.delete(activity)
        await self.db.flush()
        for sector in await self._summary_sectors(project_id):
            await self._refresh_sector_summary(project_id, sector)
        await self.db.commit()

    # === Calculations ===

    async def calculate(
        self, user_id: uuid.UUID, data: IpccCalculationCreate
    ) -> IpccCalculationResult:
        activity = await self.get_activity(user_id, data.activity_data_id)
        category = activity.category

        if data.emission_factor_id:
            factor = await self.get_factor(data.emission_factor_id)
        else:
            gas = data.gas_type or best_gas_type(category.code)
            factors = await self.list_factors(gas_type=gas) or await self.list_factors()
            factor = select_best_factor(factors, category.code, data.preferred_tier)
            if factor is None:
                raise BadRequestError(f"No emission factors available for category {category.code}")

        gwp_value = await self.get_gwp_value(factor.gas_type)
        result = calculate_emission(
            activity.value, activity.unit, factor, category.sector, gwp_value
        )

        calculation = IpccCalculation(
            project_id=activity.project_id,
            activity_data_id=activity.id,
            emission_factor_id=factor.id,
            sector=category.sector,
            tier=factor.tier,
            gas_type=factor.gas_type,
            emission_value=result.emission_value,
            gwp_value=gwp_value,
            co2_equivalent=result.co2_equivalent,
            method=result.method,
            notes=data.notes,
        )
        self.db.add(calculation)
        await self.db.flush()
        await self._refresh_sector_summary(activity.project_id, category.sector)
        await self.db.commit()
        await self.db.refresh(calculation)

        logger.bind(project_id=str(activity.project_id), category=category.code).info(
            "IPCC calculation {}: {} kg CO2e", result.method, result.co2_equivalent
        )
        return IpccCalculationResult(
            **IpccCalculationResponse.model_validate(calculation).model_dump(),
            formula=result.formula,
            details=result.details,
        )

    async def get_calculation(self, user_id: uuid.UUID, calculation_id: uuid.UUID) -> IpccCalculation:
        result = await self.db.execute(
            select(IpccCalculation).where(IpccCalculation.id == calculation_id)
        )
        calculation = result.scalar_one_or_none()
        if not calculation:
            raise NotFoundError("Calculation not found")
        await self.get_project(user_id, calculation.project_id)
        return calculation

    async def list_calculations(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> list[IpccCalculation]:
        await self.get_project(user_id, project_id)
        result = await self.db.execute(
            select(IpccCalculation)
            .where(IpccCalculation.project_id == project_id)
            .order_by(IpccCalculation.created_at.desc())
        )
        return list(result.scalars().all())

    async def delete_calculation(self, user_id: uuid.UUID, calculation_id: uuid.UUID) -> None:
        calculation = await self.get_calculation(user_id, calculation_id)
        project_id, sector = calculation.project_id, calculation.sector

        await self.db.delete(calculation)
        await self.db.flush()
        await self._refresh_sector_summary(project_id, sector)
        await self.db.commit()

    # === Summaries ===

    async def get_project_summaries(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> IpccProjectSummaries:
        await self.get_project(user_id, project_id)
        summaries = await self._get_summaries(project_id)
        return IpccProjectSummaries(
            project_id=project_id,
            sectors=[IpccSummaryResponse.model_validate(s) for s in summaries],
            total_co2_equivalent=sum(s.total_co2_equivalent for s in summaries),
        )

    async def get_sector_summary(
        self, user_id: uuid.UUID, project_id: uuid.UUID, sector: str
    ) -> IpccProjectSummary:
        await self.get_project(user_id, project_id)
        result = await self.db.execute(
            select(IpccProjectSummary).where(
                IpccProjectSummary.project_id == project_id,
                IpccProjectSummary.sector == sector,
            )
        )
        summary = result.scalar_one_or_none()
        if not summary:
            raise NotFoundError(f"No summary for sector {sector}")
        return summary

    async def recalculate_summaries(
        self, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> IpccProjectSummaries:
        await self.get_project(user_id, project_id)
        for sector in await self._summary_sectors(project_id):
            await self._refresh_sector_summary(project_id, sector)
        await self.db.commit()
        return await self.get_project_summaries(user_id, project_id)

    # === Dashboard ===

    async def dashboard_overview(
        self,
        user_id: uuid.UUID,
        tenant_id: uuid.UUID,
        year_from: int | None = None,
        year_to: int | None = None,
        organization_name: str | None = None,
    ) -> DashboardOverview:
        projects = await self._dashboard_projects(
            user_id, tenant_id, year_from, year_to, organization_name
        )
        project_ids = [p.id for p in projects]
        summaries = await self._summaries_for(project_ids)

        by_status: dict[str, int] = defaultdict(int)
        for project in projects:
            by_status[project.status] += 1

        totals_by_project: dict[uuid.UUID, float] = defaultdict(float)
        for summary in summaries:
            totals_by_project[summary.project_id] += summary.total_co2_equivalent

        trends: dict[int, dict] = {}
        for project in projects:
            trend = trends.setdefault(project.year, {"emissions": 0.0, "project_count": 0})
            trend["emissions"] += totals_by_project.get(project.id, 0.0)
            trend["project_count"] += 1

        total_calculations = 0
        if project_ids:
            total_calculations = await self.db.scalar(
                select(func.count(IpccCalculation.id)).where(
                    IpccCalculation.project_id.in_(project_ids)
                )
            )

        recent = sorted(projects, key=lambda p: p.created_at, reverse=True)[:5]

        return DashboardOverview(
            total_projects=len(projects),
            projects_by_status=dict(by_status),
            total_emissions=sum(totals_by_project.values()),
            total_calculations=total_calculations or 0,
            yearly_trends=[
                YearlyTrend(year=year, **values) for year, values in sorted(trends.items())
            ],
            recent_projects=[IpccProjectResponse.model_validate(p) for p in recent],
            sector_breakdown=self._sector_totals(summaries),
        )

    async def sector_analysis(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, year: int | None = None
    ) -> list[SectorTotal]:
        projects = await self._dashboard_projects(user_id, tenant_id, year, year)
        summaries = await self._summaries_for([p.id for p in projects])
        return self._sector_totals(summaries)

    async def top_emitting_projects(
        self, user_id: uuid.UUID, tenant_id: uuid.UUID, limit: int = 10
    ) -> list[TopEmittingProject]:
        projects = await self._dashboard_projects(user_id, tenant_id)
        summaries = await self._summaries_for([p.id for p in projects])

        totals: dict[uuid.UUID, float] = defaultdict(float)
        for summary in summaries:
            totals[summary.project_id] += summary.total_co2_equivalent

        ranked = sorted(projects, key=lambda p: totals.get(p.id, 0.0), reverse=True)
        return [
            TopEmittingProject(
                project_id=p.id,
                name=p.name,
                year=p.year,
                status=p.status,
                organization_name=p.organization_name,
                total_co2_equivalent=totals.get(p.id, 0.0),
            )
            for p in ranked[:limit]
        ]

    # === Helper Methods ===

    async def _get_project_category(
        self, project_id: uuid.UUID, category_id: uuid.UUID
    ) -> ProjectCategory | None:
        result = await self.db.execute(
            select(ProjectCategory)
            .options(selectinload(ProjectCategory.category))
            .where(
                ProjectCategory.project_id == project_id,
                ProjectCategory.category_id == category_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _get_project_categories(self, project_id: uuid.UUID) -> list[ProjectCategory]:
        result = await self.db.execute(
            select(ProjectCategory)
            .options(selectinload(ProjectCategory.category))
            .where(ProjectCategory.project_id == project_id)
            .order_by(ProjectCategory.created_at)
        )
        return list(result.scalars().all())

    async def _get_summaries(self, project_id: uuid.UUID) -> list[IpccProjectSummary]:
        result = await self.db.execute(
            select(IpccProjectSummary)
            .where(IpccProjectSummary.project_id == project_id)
            .order_by(IpccProjectSummary.sector)
        )
        return list(result.scalars().all())

    async def _summaries_for(self, project_ids: list[uuid.UUID]) -> list[IpccProjectSummary]:
        if not project_ids:
            return []
        result = await self.db.execute(
            select(IpccProjectSummary).where(IpccProjectSummary.project_id.in_(project_ids))
        )
        return list(result.scalars().all())

    async def _summary_sectors(self, project_id: uuid.UUID) -> set[str]:
        """Sectors that have a summary row or at least one calculation."""
        calc_sectors = await self.db.execute(
            select(IpccCalculation.sector).where(IpccCalculation.project_id == project_id).distinct()
        )
        summary_sectors = await self.db.execute(
            select(IpccProjectSummary.sector).where(IpccProjectSummary.project_id == project_id)
        )
        return set(calc_sectors.scalars().all()) | set(summary_sectors.scalars().all())

    async def _refresh_sector_summary(
        self, project_id: uuid.UUID, sector: str
    ) -> IpccProjectSummary:
        result = await self.db.execute(
            select(IpccCalculation).where(
                IpccCalculation.project_id == project_id,
                IpccCalculation.sector == sector,
            )
        )
        totals = summarize_sector(list(result.scalars().all()))

        result = await self.db.execute(
            select(IpccProjectSummary).where(
                IpccProjectSummary.project_id == project_id,
                IpccProjectSummary.sector == sector,
            )
        )
        summary = result.scalar_one_or_none()
        if summary is None:
            summary = IpccProjectSummary(project_id=project_id, sector=sector)
            self.db.add(summary)
        for field, value in totals.items():
            setattr(summary, field, value)
        summary.last_calculated_at = datetime.utcnow()

        await self.db.flush()
        return summary

    async def _dashboard_projects(
        self,
        user_id: uuid.UUID,
        tenant_id: uuid.UUID,
        year_from: int | None = None,
        year_to: int | None = None,
        organization_name: str | None = None,
    ) -> list[IpccProject]:
        await ensure_tenant_access(self.db, user_id, tenant_id)
        query = select(IpccProject).where(IpccProject.tenant_id == tenant_id)
        if year_from is not None:
            query = query.where(IpccProject.year >= year_from)
        if year_to is not None:
            query = query.where(IpccProject.year <= year_to)
        if organization_name:
            query = query.where(IpccProject.organization_name.ilike(f"%{organization_name}%"))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    def _sector_totals(summaries: list[IpccProjectSummary]) -> list[SectorTotal]:
        grouped: dict[str, dict] = {}
        for summary in summaries:
            entry = grouped.setdefault(
                summary.sector,
                {
                    "total_co2_equivalent": 0.0,
                    "total_co2": 0.0,
                    "total_ch4": 0.0,
                    "total_n2o": 0.0,
                    "total_other_gases": 0.0,
                    "projects": set(),
                },
            )
            entry["total_co2_equivalent"] += summary.total_co2_equivalent
            entry["total_co2"] += summary.total_co2
            entry["total_ch4"] += summary.total_ch4
            entry["total_n2o"] += summary.total_n2o
            entry["total_other_gases"] += summary.total_other_gases
            entry["projects"].add(summary.project_id)

        grand_total = sum(e["total_co2_equivalent"] for e in grouped.values())
        totals = []
        for sector, entry in grouped.items():
            projects = entry.pop("projects")
            percentage = entry["total_co2_equivalent"] / grand_total * 100 if grand_total else 0.0
            totals.append(
                SectorTotal(
                    sector=sector,
                    project_count=len(projects),
                    percentage=round(percentage, 2),
                    **entry,
                )
            )
        return sorted(totals, key=lambda t: t.total_co2_equivalent, reverse=True)
