import uuid

from loguru import logger
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, BadRequestError
from app.models.carbon_project import (
    CarbonProject,
    GhgWorksheetItem,
    CARBON_STEP_MODELS,
)
from app.schemas.carbon_project import (
    CarbonProjectCreate,
    CarbonProjectUpdate,
    CarbonProjectResponse,
    CarbonProjectDetail,
    WorksheetItemData,
    WorksheetItemUpdate,
    WorksheetItemResponse,
    CARBON_STEP_SCHEMAS,
)
from app.services.access import ensure_tenant_access


class CarbonProjectService:
    """Carbon-calculation workflow projects."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_id: uuid.UUID, data: CarbonProjectCreate) -> CarbonProject:
        await ensure_tenant_access(self.db, user_id, data.tenant_id)

        project = CarbonProject(**data.model_dump())
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.bind(tenant_id=str(project.tenant_id), project_id=str(project.id)).info(
            "Carbon project created"
        )
        return project

    async def get(self, user_id: uuid.UUID, project_id: uuid.UUID) -> CarbonProject:
        """Get a carbon project the user can access."""
        result = await self.db.execute(select(CarbonProject).where(CarbonProject.id == project_id))
        project = result.scalar_one_or_none()
        if not project:
            raise NotFoundError("Carbon project not found")
        await ensure_tenant_access(self.db, user_id, project.tenant_id)
        return project

    async def get_detail(self, user_id: uuid.UUID, project_id: uuid.UUID) -> CarbonProjectDetail:
        """Project with every step record and worksheet item."""
        project = await self.get(user_id, project_id)

        steps = {}
        for step_name, model in CARBON_STEP_MODELS.items():
            _, response_schema = CARBON_STEP_SCHEMAS[step_name]
            result = await self.db.execute(
                select(model)
                .where(model.carbon_project_id == project_id)
                .order_by(model.created_at)
            )
            steps[step_name.replace("-", "_")] = [
                response_schema.model_validate(record) for record in result.scalars().all()
            ]

        result = await self.db.execute(
            select(GhgWorksheetItem)
            .where(GhgWorksheetItem.carbon_project_id == project_id)
            .order_by(GhgWorksheetItem.id)
        )
        worksheet = [WorksheetItemResponse.model_validate(i) for i in result.scalars().all()]

        return CarbonProjectDetail(
            **CarbonProjectResponse.model_validate(project).model_dump(),
            **steps,
            ghg_worksheet=worksheet,
        )

    async def list_for_tenant(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> list[CarbonProject]:
        await ensure_tenant_access(self.db, user_id, tenant_id)
        result = await self.db.execute(
            select(CarbonProject)
            .where(CarbonProject.tenant_id == tenant_id)
            .order_by(CarbonProject.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(
        self, user_id: uuid.UUID, project_id: uuid.UUID, data: CarbonProjectUpdate
    ) -> CarbonProject:
        project = await self.get(user_id, project_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def delete(self, user_id: uuid.UUID, project_id: uuid.UUID) -> None:
        """Delete a project with all of its step records and worksheet items."""
        project = await self.get(user_id, project_id)
        await self.db.delete(project)
        await self.db.commit()
        logger.bind(project_id=str(project_id)).info("Carbon project deleted")


class CarbonStepService:
    """CRUD for one data-entry step (products, raws, ...) of carbon projects."""

    def __init__(self, db: AsyncSession, step_name: str):
        if step_name not in CARBON_STEP_MODELS:
            raise NotFoundError(f"Unknown carbon project step: {step_name}")
        self.db = db
        self.step_name = step_name
        self.model = CARBON_STEP_MODELS[step_name]
        self.projects = CarbonProjectService(db)

    async def create(self, user_id: uuid.UUID, project_id: uuid.UUID, data: BaseModel):
        await self.projects.get(user_id, project_id)

        record = self.model(carbon_project_id=project_id, **data.model_dump())
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def get(self, user_id: uuid.UUID, project_id: uuid.UUID, record_id: uuid.UUID):
        await self.projects.get(user_id, project_id)
        result = await self.db.execute(
            select(self.model).where(
                self.model.id == record_id,
                self.model.carbon_project_id == project_id,
            )
        )
        record = result.scalar_one_or_none()
        if not record:
            raise NotFoundError(f"{self.step_name} record not found")
        return record

    async def list_for_project(self, user_id: uuid.UUID, project_id: uuid.UUID) -> list:
        await self.projects.get(user_id, project_id)
        result = await self.db.execute(
            select(self.model)
            .where(self.model.carbon_project_id == project_id)
            .order_by(self.model.created_at)
        )
        return list(result.scalars().all())

    async def update(
        self, user_id: uuid.UUID, project_id: uuid.UUID, record_id: uuid.UUID, data: BaseModel
    ):
        record = await self.get(user_id, project_id, record_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(record, field, value)

        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def delete(self, user_id: uuid.UUID, project_id: uuid.UUID, record_id: uuid.UUID) -> None:
        record = await self.get(user_id, project_id, record_id)
        await self.db.delete(record)
        await self.db.commit()


class WorksheetService:
    """GHG worksheet line items, grouped by section."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.projects = CarbonProjectService(db)

    async def add(
        self, user_id: uuid.UUID, project_id: uuid.UUID, section: str, data: WorksheetItemData
    ) -> GhgWorksheetItem:
        await self.projects.get(user_id, project_id)

        item = GhgWorksheetItem(carbon_project_id=project_id, section=section, **data.model_dump())
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def bulk_add(
        self,
        user_id: uuid.UUID,
        project_id: uuid.UUID,
        section: str,
        items: list[WorksheetItemData],
    ) -> list[GhgWorksheetItem]:
        if not items:
            raise BadRequestError("At least one item is required")
        await self.projects.get(user_id, project_id)

        rows = [
            GhgWorksheetItem(carbon_project_id=project_id, section=section, **item.model_dump())
            for item in items
        ]
        self.db.add_all(rows)
        await self.db.commit()
        for row in rows:
            await self.db.refresh(row)

        logger.bind(project_id=str(project_id), section=section).info(
            "Added {} worksheet items", len(rows)
        )
        return rows

    async def get(self, user_id: uuid.UUID, project_id: uuid.UUID, item_id: int) -> GhgWorksheetItem:
        await self.projects.get(user_id, project_id)
        result = await self.db.execute(
            select(GhgWorksheetItem).where(
                GhgWorksheetItem.id == item_id,
                GhgWorksheetItem.carbon_project_id == project_id,
            )
        )
        item = result.scalar_one_or_none()
        if not item:
            raise NotFoundError("Worksheet item not found")
        return item

    async def list_for_project(
        self, user_id: uuid.UUID, project_id: uuid.UUID, section: str | None = None
    ) -> list[GhgWorksheetItem]:
        await self.projects.get(user_id, project_id)
        query = select(GhgWorksheetItem).where(GhgWorksheetItem.carbon_project_id == project_id)
        if section:
            query = query.where(GhgWorksheetItem.section == section)
        result = await self.db.execute(query.order_by(GhgWorksheetItem.id))
        return list(result.scalars().all())

    async def update(
        self, user_id: uuid.UUID, project_id: uuid.UUID, item_id: int, data: WorksheetItemUpdate
    ) -> GhgWorksheetItem:
        item = await self.get(user_id, project_id, item_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(item, field, value)

        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def delete(self, user_id: uuid.UUID, project_id: uuid.UUID, item_id: int) -> None:
        item = await self.get(user_id, project_id, item_id)
        await self.db.delete(item)
        await self.db.commit()
