import uuid

from fastapi import APIRouter

from app.api.deps import CurrentUserDep, Iso14064ServiceDep
from app.schemas.common import ProjectStatusUpdate, CalculationStatusUpdate
from app.schemas.ghg_protocol import (
    GasCalculationCreate,
    GasCalculationUpdate,
    GasCalculationResponse,
    GasCalculationResult,
)
from app.schemas.iso14064 import (
    Iso14064ProjectCreate,
    Iso14064ProjectUpdate,
    Iso14064ProjectResponse,
    Iso14064ProjectDetail,
    Iso14064SummaryResponse,
    Iso14064SummaryUpdate,
    ReferenceFactorResponse,
)

router = APIRouter(prefix="/iso14064", tags=["iso14064"])


# === Projects ===

@router.post("/projects", response_model=Iso14064ProjectResponse, status_code=201)
async def create_project(
    data: Iso14064ProjectCreate,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.create_project(current_user.id, data)


@router.get("/projects", response_model=list[Iso14064ProjectResponse])
async def list_projects(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.list_projects(current_user.id, tenant_id)


@router.get("/projects/{project_id}", response_model=Iso14064ProjectDetail)
async def get_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.get_project_detail(current_user.id, project_id)


@router.patch("/projects/{project_id}", response_model=Iso14064ProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    data: Iso14064ProjectUpdate,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.update_project(current_user.id, project_id, data)


@router.put("/projects/{project_id}/status", response_model=Iso14064ProjectResponse)
async def update_project_status(
    project_id: uuid.UUID,
    data: ProjectStatusUpdate,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.update_project_status(current_user.id, project_id, data.status)


@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    await service.delete_project(current_user.id, project_id)


# === Reference factors ===

@router.get("/reference-factors", response_model=list[ReferenceFactorResponse])
async def list_reference_factors(
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
    scope: str | None = None,
    category: str | None = None,
):
    """Built-in factors used when a calculation does not provide one."""
    return [f.to_dict() for f in service.list_reference_factors(scope, category)]


# === Calculations ===

@router.post("/calculations", response_model=GasCalculationResult, status_code=201)
async def create_calculation(
    data: GasCalculationCreate,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    """
    Calculate the emissions of one activity.

    Without `emission_factor` the closest reference factor is used.
    """
    return await service.create_calculation(current_user.id, data)


@router.get("/projects/{project_id}/calculations", response_model=list[GasCalculationResponse])
async def list_calculations(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.list_calculations(current_user.id, project_id)


@router.get("/calculations/{calculation_id}", response_model=GasCalculationResponse)
async def get_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.get_calculation(current_user.id, calculation_id)


@router.patch("/calculations/{calculation_id}", response_model=GasCalculationResponse)
async def update_calculation(
    calculation_id: uuid.UUID,
    data: GasCalculationUpdate,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.update_calculation(current_user.id, calculation_id, data)


@router.put("/calculations/{calculation_id}/status", response_model=GasCalculationResponse)
async def update_calculation_status(
    calculation_id: uuid.UUID,
    data: CalculationStatusUpdate,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.update_calculation_status(current_user.id, calculation_id, data.status)


@router.delete("/calculations/{calculation_id}", status_code=204)
async def delete_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    await service.delete_calculation(current_user.id, calculation_id)


# === Summary ===

@router.get("/projects/{project_id}/summary", response_model=Iso14064SummaryResponse)
async def get_summary(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.get_summary(current_user.id, project_id)


@router.patch("/projects/{project_id}/summary", response_model=Iso14064SummaryResponse)
async def update_summary(
    project_id: uuid.UUID,
    data: Iso14064SummaryUpdate,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    """Set the review status and notes of the summary."""
    return await service.update_summary(current_user.id, project_id, data)


@router.post("/projects/{project_id}/summary/recalculate", response_model=Iso14064SummaryResponse)
async def recalculate_summary(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: Iso14064ServiceDep,
):
    return await service.recalculate_summary(current_user.id, project_id)
