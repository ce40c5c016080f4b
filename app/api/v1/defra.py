import uuid
from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import CurrentUserDep, DefraServiceDep
from app.schemas.common import ProjectStatusUpdate
from app.schemas.defra import (
    DefraProjectCreate,
    DefraProjectUpdate,
    DefraProjectResponse,
    DefraProjectDetail,
    DefraEmissionFactorBulkCreate,
    DefraEmissionFactorResponse,
    DefraCalculationCreate,
    DefraCalculationUpdate,
    DefraCalculationResponse,
    DefraCalculationWithFactor,
    DefraProjectSummaryResponse,
)

router = APIRouter(prefix="/defra", tags=["defra"])


# === Projects ===

@router.post("/projects", response_model=DefraProjectResponse, status_code=201)
async def create_project(
    data: DefraProjectCreate,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    """
    Create a DEFRA project in a tenant.

    Conversion factors must already be loaded for the chosen DEFRA year.
    """
    return await service.create_project(current_user.id, data)


@router.get("/projects", response_model=list[DefraProjectResponse])
async def list_projects(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.list_projects(current_user.id, tenant_id)


@router.get("/projects/{project_id}", response_model=DefraProjectDetail)
async def get_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    """Project with its calculations (newest activity first) and summary."""
    return await service.get_project_detail(current_user.id, project_id)


@router.patch("/projects/{project_id}", response_model=DefraProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    data: DefraProjectUpdate,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.update_project(current_user.id, project_id, data)


@router.put("/projects/{project_id}/status", response_model=DefraProjectResponse)
async def update_project_status(
    project_id: uuid.UUID,
    data: ProjectStatusUpdate,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.update_project_status(current_user.id, project_id, data.status)


@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    await service.delete_project(current_user.id, project_id)


# === Emission factors ===

@router.get("/emission-factors", response_model=list[DefraEmissionFactorResponse])
async def search_emission_factors(
    current_user: CurrentUserDep,
    service: DefraServiceDep,
    year: str | None = None,
    scope: str | None = None,
    category: str | None = None,
    unit: str | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """Search conversion factors by year, scope, category text and unit."""
    return await service.search_factors(year, scope, category, unit, skip=skip, limit=limit)


@router.get("/emission-factors/years", response_model=list[str])
async def list_factor_years(
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.get_available_years()


@router.get("/emission-factors/{factor_id}", response_model=DefraEmissionFactorResponse)
async def get_emission_factor(
    factor_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.get_factor(factor_id)


@router.post(
    "/emission-factors/import",
    response_model=list[DefraEmissionFactorResponse],
    status_code=201,
)
async def import_emission_factors(
    data: DefraEmissionFactorBulkCreate,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    """Bulk import conversion factors."""
    return await service.import_factors(data.factors)


# === Calculations ===

@router.post("/calculations", response_model=DefraCalculationResponse, status_code=201)
async def create_calculation(
    data: DefraCalculationCreate,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    """
    Record an activity and calculate its emissions.

    Without `emission_factor_id` a factor is selected from the project's DEFRA year.
    """
    return await service.create_calculation(current_user.id, data)


@router.get("/projects/{project_id}/calculations", response_model=list[DefraCalculationResponse])
async def list_calculations(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.list_calculations(current_user.id, project_id)


@router.get("/calculations/{calculation_id}", response_model=DefraCalculationWithFactor)
async def get_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.get_calculation(current_user.id, calculation_id)


@router.patch("/calculations/{calculation_id}", response_model=DefraCalculationResponse)
async def update_calculation(
    calculation_id: uuid.UUID,
    data: DefraCalculationUpdate,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.update_calculation(current_user.id, calculation_id, data)


@router.delete("/calculations/{calculation_id}", status_code=204)
async def delete_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    await service.delete_calculation(current_user.id, calculation_id)


# === Summary ===

@router.get("/projects/{project_id}/summary", response_model=DefraProjectSummaryResponse)
async def get_summary(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.get_summary(current_user.id, project_id)


@router.post(
    "/projects/{project_id}/summary/recalculate",
    response_model=DefraProjectSummaryResponse,
)
async def recalculate_summary(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: DefraServiceDep,
):
    return await service.recalculate_summary(current_user.id, project_id)
