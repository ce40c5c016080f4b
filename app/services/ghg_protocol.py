import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.ghg_protocol import (
    GhgProtocolProject,
    GhgProtocolEmissionFactor,
    GhgProtocolCalculation,
    GhgProtocolProjectSummary,
)
from app.schemas.ghg_protocol import (
    GhgProtocolProjectResponse,
    GhgProtocolSummaryResponse,
    GhgProtocolProjectDetail,
    GhgProtocolEmissionFactorCreate,
)
from app.services.scoped_accounting import ScopedAccountingService


class GhgProtocolService(ScopedAccountingService):
    """GHG Protocol projects, factor catalogue, calculations and summaries."""

    label = "GHG Protocol"
    project_model = GhgProtocolProject
    calculation_model = GhgProtocolCalculation
    summary_model = GhgProtocolProjectSummary
    project_schema = GhgProtocolProjectResponse
    summary_schema = GhgProtocolSummaryResponse
    detail_schema = GhgProtocolProjectDetail

    # === Emission factors ===

    async def list_factors(
        self,
        year: int | None = None,
        scope: str | None = None,
        category: str | None = None,
        limit: int = 100,
    ) -> list[GhgProtocolEmissionFactor]:
        query = select(GhgProtocolEmissionFactor)
        if year is not None:
            query = query.where(GhgProtocolEmissionFactor.year == year)
        if scope:
            query = query.where(GhgProtocolEmissionFactor.scope == scope)
        if category:
            query = query.where(GhgProtocolEmissionFactor.category == category)

        result = await self.db.execute(
            query.order_by(GhgProtocolEmissionFactor.activity_name).limit(limit)
        )
        return list(result.scalars().all())

    async def get_factor(self, factor_id: uuid.UUID) -> GhgProtocolEmissionFactor:
        result = await self.db.execute(
            select(GhgProtocolEmissionFactor).where(GhgProtocolEmissionFactor.id == factor_id)
        )
        factor = result.scalar_one_or_none()
        if not factor:
            raise NotFoundError("Emission factor not found")
        return factor

    async def import_factors(
        self, factors: list[GhgProtocolEmissionFactorCreate]
    ) -> list[GhgProtocolEmissionFactor]:
        rows = [GhgProtocolEmissionFactor(**f.model_dump()) for f in factors]
        self.db.add_all(rows)
        await self.db.commit()
        for row in rows:
            await self.db.refresh(row)

        logger.info("Imported {} GHG Protocol emission factors", len(rows))
        return rows

    # === Factor resolution ===

    async def _get_factor_record(self, factor_id: uuid.UUID) -> GhgProtocolEmissionFactor:
        return await self.get_factor(factor_id)

    async def _candidate_factors(
        self, project: GhgProtocolProject, scope: str, category: str
    ) -> list[GhgProtocolEmissionFactor]:
        """Factors for the project's year in the same scope and category, then the scope alone."""
        candidates = await self.list_factors(
            year=project.reporting_year, scope=scope, category=category, limit=50
        )
        if not candidates:
            candidates = await self.list_factors(
                year=project.reporting_year, scope=scope, limit=50
            )
        return candidates
