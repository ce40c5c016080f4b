import uuid

from fastapi import APIRouter

from app.api.deps import CurrentUserDep, IsccServiceDep
from app.schemas.common import CalculationStatusUpdate
from app.schemas.iscc import (
    IsccProjectCreate,
    IsccProjectUpdate,
    IsccProjectResponse,
    IsccCultivationData,
    IsccCultivationResponse,
    IsccProcessingData,
    IsccProcessingResponse,
    IsccTransportData,
    IsccTransportResponse,
    IsccCalculationCreate,
    IsccCalculationResponse,
)

router = APIRouter(prefix="/iscc", tags=["iscc"])


# === Projects ===

@router.post("/projects", response_model=IsccProjectResponse, status_code=201)
async def create_project(
    data: IsccProjectCreate,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.create_project(current_user.id, data)


@router.get("/projects", response_model=list[IsccProjectResponse])
async def list_projects(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.list_projects(current_user.id, tenant_id)


@router.get("/projects/{project_id}", response_model=IsccProjectResponse)
async def get_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.get_project(current_user.id, project_id)


@router.patch("/projects/{project_id}", response_model=IsccProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    data: IsccProjectUpdate,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.update_project(current_user.id, project_id, data)


@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    await service.delete_project(current_user.id, project_id)


# === Cultivation (eec) ===

@router.put("/projects/{project_id}/cultivation", response_model=IsccCultivationResponse)
async def save_cultivation(
    project_id: uuid.UUID,
    data: IsccCultivationData,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    """Create or replace the project's cultivation inputs."""
    return await service.save_cultivation(current_user.id, project_id, data)


@router.get("/projects/{project_id}/cultivation", response_model=IsccCultivationResponse)
async def get_cultivation(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.get_cultivation(current_user.id, project_id)


@router.delete("/projects/{project_id}/cultivation", status_code=204)
async def delete_cultivation(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    await service.delete_cultivation(current_user.id, project_id)


# === Processing (ep) ===

@router.put("/projects/{project_id}/processing", response_model=IsccProcessingResponse)
async def save_processing(
    project_id: uuid.UUID,
    data: IsccProcessingData,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    """Create or replace the project's processing inputs."""
    return await service.save_processing(current_user.id, project_id, data)


@router.get("/projects/{project_id}/processing", response_model=IsccProcessingResponse)
async def get_processing(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.get_processing(current_user.id, project_id)


@router.delete("/projects/{project_id}/processing", status_code=204)
async def delete_processing(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    await service.delete_processing(current_user.id, project_id)


# === Transport (etd) ===

@router.put("/projects/{project_id}/transport", response_model=IsccTransportResponse)
async def save_transport(
    project_id: uuid.UUID,
    data: IsccTransportData,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    """Create or replace the project's transport legs."""
    return await service.save_transport(current_user.id, project_id, data)


@router.get("/projects/{project_id}/transport", response_model=IsccTransportResponse)
async def get_transport(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.get_transport(current_user.id, project_id)


@router.delete("/projects/{project_id}/transport", status_code=204)
async def delete_transport(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    await service.delete_transport(current_user.id, project_id)


# === Calculations ===

@router.post("/calculations", response_model=IsccCalculationResponse, status_code=201)
async def calculate(
    data: IsccCalculationCreate,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    """
    Calculate E = eec + el + ep + etd - eccr for the project's current inputs.

    Values are returned both in kg CO2e per year and in g CO2e/MJ, together
    with the GHG savings against the fossil fuel comparator.
    """
    return await service.calculate(current_user.id, data)


@router.post(
    "/calculations/{calculation_id}/recalculate",
    response_model=IsccCalculationResponse,
)
async def recalculate(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.recalculate(current_user.id, calculation_id)


@router.get("/projects/{project_id}/calculations", response_model=list[IsccCalculationResponse])
async def list_calculations(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.list_calculations(current_user.id, project_id)


@router.get("/calculations/{calculation_id}", response_model=IsccCalculationResponse)
async def get_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.get_calculation(current_user.id, calculation_id)


@router.put("/calculations/{calculation_id}/status", response_model=IsccCalculationResponse)
async def update_calculation_status(
    calculation_id: uuid.UUID,
    data: CalculationStatusUpdate,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    return await service.update_calculation_status(current_user.id, calculation_id, data.status)


@router.delete("/calculations/{calculation_id}", status_code=204)
async def delete_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IsccServiceDep,
):
    await service.delete_calculation(current_user.id, calculation_id)
