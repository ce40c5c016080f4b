import uuid
from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import CurrentUserDep, GhgProtocolServiceDep
from app.schemas.common import ProjectStatusUpdate, CalculationStatusUpdate
from app.schemas.ghg_protocol import (
    GhgProtocolProjectCreate,
    GhgProtocolProjectUpdate,
    GhgProtocolProjectResponse,
    GhgProtocolProjectDetail,
    GhgProtocolEmissionFactorBulkCreate,
    GhgProtocolEmissionFactorResponse,
    GasCalculationCreate,
    GasCalculationUpdate,
    GasCalculationResponse,
    GasCalculationResult,
    GhgProtocolSummaryResponse,
)

router = APIRouter(prefix="/ghg-protocol", tags=["ghg-protocol"])


# === Projects ===

@router.post("/projects", response_model=GhgProtocolProjectResponse, status_code=201)
async def create_project(
    data: GhgProtocolProjectCreate,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.create_project(current_user.id, data)


@router.get("/projects", response_model=list[GhgProtocolProjectResponse])
async def list_projects(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.list_projects(current_user.id, tenant_id)


@router.get("/projects/{project_id}", response_model=GhgProtocolProjectDetail)
async def get_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    """Project with its calculations and summary."""
    return await service.get_project_detail(current_user.id, project_id)


@router.patch("/projects/{project_id}", response_model=GhgProtocolProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    data: GhgProtocolProjectUpdate,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.update_project(current_user.id, project_id, data)


@router.put("/projects/{project_id}/status", response_model=GhgProtocolProjectResponse)
async def update_project_status(
    project_id: uuid.UUID,
    data: ProjectStatusUpdate,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.update_project_status(current_user.id, project_id, data.status)


@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    await service.delete_project(current_user.id, project_id)


# === Emission factors ===

@router.get("/emission-factors", response_model=list[GhgProtocolEmissionFactorResponse])
async def list_emission_factors(
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
    year: int | None = None,
    scope: str | None = None,
    category: str | None = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    return await service.list_factors(year, scope, category, limit=limit)


@router.get("/emission-factors/{factor_id}", response_model=GhgProtocolEmissionFactorResponse)
async def get_emission_factor(
    factor_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.get_factor(factor_id)


@router.post(
    "/emission-factors/import",
    response_model=list[GhgProtocolEmissionFactorResponse],
    status_code=201,
)
async def import_emission_factors(
    data: GhgProtocolEmissionFactorBulkCreate,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.import_factors(data.factors)


# === Calculations ===

@router.post("/calculations", response_model=GasCalculationResult, status_code=201)
async def create_calculation(
    data: GasCalculationCreate,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    """
    Calculate the emissions of one activity.

    The factor is taken from `emission_factor`, then `emission_factor_id`,
    otherwise selected from the catalogue for the project's reporting year.
    """
    return await service.create_calculation(current_user.id, data)


@router.get("/projects/{project_id}/calculations", response_model=list[GasCalculationResponse])
async def list_calculations(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.list_calculations(current_user.id, project_id)


@router.get("/calculations/{calculation_id}", response_model=GasCalculationResponse)
async def get_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.get_calculation(current_user.id, calculation_id)


@router.patch("/calculations/{calculation_id}", response_model=GasCalculationResponse)
async def update_calculation(
    calculation_id: uuid.UUID,
    data: GasCalculationUpdate,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.update_calculation(current_user.id, calculation_id, data)


@router.put("/calculations/{calculation_id}/status", response_model=GasCalculationResponse)
async def update_calculation_status(
    calculation_id: uuid.UUID,
    data: CalculationStatusUpdate,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.update_calculation_status(current_user.id, calculation_id, data.status)


@router.delete("/calculations/{calculation_id}", status_code=204)
async def delete_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    await service.delete_calculation(current_user.id, calculation_id)


# === Summary ===

@router.get("/projects/{project_id}/summary", response_model=GhgProtocolSummaryResponse)
async def get_summary(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.get_summary(current_user.id, project_id)


@router.post(
    "/projects/{project_id}/summary/recalculate",
    response_model=GhgProtocolSummaryResponse,
)
async def recalculate_summary(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: GhgProtocolServiceDep,
):
    return await service.recalculate_summary(current_user.id, project_id)
