import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import (
    DbSession,
    CurrentUserDep,
    CarbonProjectServiceDep,
    WorksheetServiceDep,
)
from app.schemas.carbon_project import (
    WorksheetSectionLiteral,
    CarbonProjectCreate,
    CarbonProjectUpdate,
    CarbonProjectResponse,
    CarbonProjectDetail,
    WorksheetItemData,
    WorksheetItemUpdate,
    WorksheetItemBulkCreate,
    WorksheetItemResponse,
    CARBON_STEP_SCHEMAS,
)
from app.services.carbon_project import CarbonStepService

router = APIRouter(prefix="/carbon-projects", tags=["carbon-projects"])


# === Projects ===

@router.post("", response_model=CarbonProjectResponse, status_code=201)
async def create_carbon_project(
    data: CarbonProjectCreate,
    current_user: CurrentUserDep,
    service: CarbonProjectServiceDep,
):
    return await service.create(current_user.id, data)


@router.get("", response_model=list[CarbonProjectResponse])
async def list_carbon_projects(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: CarbonProjectServiceDep,
):
    return await service.list_for_tenant(current_user.id, tenant_id)


@router.get("/{project_id}", response_model=CarbonProjectDetail)
async def get_carbon_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: CarbonProjectServiceDep,
):
    """Project with the records of every step and its GHG worksheet."""
    return await service.get_detail(current_user.id, project_id)


@router.patch("/{project_id}", response_model=CarbonProjectResponse)
async def update_carbon_project(
    project_id: uuid.UUID,
    data: CarbonProjectUpdate,
    current_user: CurrentUserDep,
    service: CarbonProjectServiceDep,
):
    return await service.update(current_user.id, project_id, data)


@router.delete("/{project_id}", status_code=204)
async def delete_carbon_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: CarbonProjectServiceDep,
):
    await service.delete(current_user.id, project_id)


# === GHG worksheet ===

@router.post(
    "/{project_id}/worksheet/{section}",
    response_model=WorksheetItemResponse,
    status_code=201,
)
async def add_worksheet_item(
    project_id: uuid.UUID,
    section: WorksheetSectionLiteral,
    data: WorksheetItemData,
    current_user: CurrentUserDep,
    service: WorksheetServiceDep,
):
    return await service.add(current_user.id, project_id, section, data)


@router.post(
    "/{project_id}/worksheet/{section}/bulk",
    response_model=list[WorksheetItemResponse],
    status_code=201,
)
async def bulk_add_worksheet_items(
    project_id: uuid.UUID,
    section: WorksheetSectionLiteral,
    data: WorksheetItemBulkCreate,
    current_user: CurrentUserDep,
    service: WorksheetServiceDep,
):
    """Add several items to one worksheet section in a single transaction."""
    return await service.bulk_add(current_user.id, project_id, section, data.items)


@router.get("/{project_id}/worksheet", response_model=list[WorksheetItemResponse])
async def list_worksheet_items(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: WorksheetServiceDep,
    section: WorksheetSectionLiteral | None = None,
):
    return await service.list_for_project(current_user.id, project_id, section)


@router.get("/{project_id}/worksheet/items/{item_id}", response_model=WorksheetItemResponse)
async def get_worksheet_item(
    project_id: uuid.UUID,
    item_id: int,
    current_user: CurrentUserDep,
    service: WorksheetServiceDep,
):
    return await service.get(current_user.id, project_id, item_id)


@router.patch("/{project_id}/worksheet/items/{item_id}", response_model=WorksheetItemResponse)
async def update_worksheet_item(
    project_id: uuid.UUID,
    item_id: int,
    data: WorksheetItemUpdate,
    current_user: CurrentUserDep,
    service: WorksheetServiceDep,
):
    return await service.update(current_user.id, project_id, item_id, data)


@router.delete("/{project_id}/worksheet/items/{item_id}", status_code=204)
async def delete_worksheet_item(
    project_id: uuid.UUID,
    item_id: int,
    current_user: CurrentUserDep,
    service: WorksheetServiceDep,
):
    await service.delete(current_user.id, project_id, item_id)


# === Data-entry steps ===

def _add_step_routes(
    step: str, create_schema: type[BaseModel], response_schema: type[BaseModel]
) -> None:
    """Register CRUD endpoints for one step under /{project_id}/{step}."""

    async def get_step_service(db: DbSession) -> CarbonStepService:
        return CarbonStepService(db, step)

    StepServiceDep = Annotated[CarbonStepService, Depends(get_step_service)]
    tag = f"carbon-projects:{step}"

    @router.post(
        f"/{{project_id}}/{step}",
        response_model=response_schema,
        status_code=201,
        tags=[tag],
        name=f"create_{step}",
    )
    async def create_record(
        project_id: uuid.UUID,
        data: create_schema,
        current_user: CurrentUserDep,
        service: StepServiceDep,
    ):
        return await service.create(current_user.id, project_id, data)

    @router.get(
        f"/{{project_id}}/{step}",
        response_model=list[response_schema],
        tags=[tag],
        name=f"list_{step}",
    )
    async def list_records(
        project_id: uuid.UUID,
        current_user: CurrentUserDep,
        service: StepServiceDep,
    ):
        return await service.list_for_project(current_user.id, project_id)

    @router.get(
        f"/{{project_id}}/{step}/{{record_id}}",
        response_model=response_schema,
        tags=[tag],
        name=f"get_{step}",
    )
    async def get_record(
        project_id: uuid.UUID,
        record_id: uuid.UUID,
        current_user: CurrentUserDep,
        service: StepServiceDep,
    ):
        return await service.get(current_user.id, project_id, record_id)

    @router.patch(
        f"/{{project_id}}/{step}/{{record_id}}",
        response_model=response_schema,
        tags=[tag],
        name=f"update_{step}",
    )
    async def update_record(
        project_id: uuid.UUID,
        record_id: uuid.UUID,
        data: create_schema,
        current_user: CurrentUserDep,
        service: StepServiceDep,
    ):
        return await service.update(current_user.id, project_id, record_id, data)

    @router.delete(
        f"/{{project_id}}/{step}/{{record_id}}",
        status_code=204,
        tags=[tag],
        name=f"delete_{step}",
    )
    async def delete_record(
        project_id: uuid.UUID,
        record_id: uuid.UUID,
        current_user: CurrentUserDep,
        service: StepServiceDep,
    ):
        await service.delete(current_user.id, project_id, record_id)


for _step, (_create_schema, _response_schema) in CARBON_STEP_SCHEMAS.items():
    _add_step_routes(_step, _create_schema, _response_schema)
