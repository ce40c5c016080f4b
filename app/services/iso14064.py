import uuid

from app.calculators.gas_factor import ISO_REFERENCE_FACTORS, ReferenceFactor, reference_candidates
from app.models.iso14064 import (
    Iso14064Project,
    Iso14064Calculation,
    Iso14064ProjectSummary,
)
from app.schemas.iso14064 import (
    Iso14064ProjectResponse,
    Iso14064SummaryResponse,
    Iso14064ProjectDetail,
    Iso14064SummaryUpdate,
)
from app.services.scoped_accounting import ScopedAccountingService


class Iso14064Service(ScopedAccountingService):
    """
    ISO 14064-1 inventories.

    Calculations take a provided factor or pick one from the built-in
    reference catalogue; there is no stored factor table.
    """

    label = "ISO 14064"
    project_model = Iso14064Project
    calculation_model = Iso14064Calculation
    summary_model = Iso14064ProjectSummary
    project_schema = Iso14064ProjectResponse
    summary_schema = Iso14064SummaryResponse
    detail_schema = Iso14064ProjectDetail

    @staticmethod
    def list_reference_factors(
        scope: str | None = None, category: str | None = None
    ) -> list[ReferenceFactor]:
        return reference_candidates(scope, category)

    async def update_summary(
        self, user_id: uuid.UUID, project_id: uuid.UUID, data: Iso14064SummaryUpdate
    ) -> Iso14064ProjectSummary:
        """Set the review status and notes on the project summary."""
        summary = await self.get_summary(user_id, project_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(summary, field, value)

        await self.db.commit()
        await self.db.refresh(summary)
        return summary

    async def _candidate_factors(
        self, project: Iso14064Project, scope: str, category: str
    ) -> list[ReferenceFactor]:
        return reference_candidates(scope, category)

    def _snapshot_record(self, snapshot: dict) -> ReferenceFactor | None:
        for factor in ISO_REFERENCE_FACTORS:
            if (
                factor.activity_name == snapshot.get("activity_name")
                and factor.source == snapshot.get("source")
                and factor.unit == snapshot.get("unit")
            ):
                return factor
        return None
