import uuid
from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import CurrentUserDep, IpccServiceDep
from app.calculators.ipcc import suggest_tier, uncertainty_for_tier, default_factors
from app.schemas.common import ProjectStatusUpdate
from app.schemas.ipcc import (
    SectorLiteral,
    TierLiteral,
    IpccProjectCreate,
    IpccProjectUpdate,
    IpccProjectResponse,
    IpccProjectDetail,
    EmissionCategoryResponse,
    ProjectCategoryCreate,
    ProjectCategoryResponse,
    GwpValueUpsert,
    GwpValueResponse,
    IpccEmissionFactorCreate,
    IpccEmissionFactorUpdate,
    IpccEmissionFactorResponse,
    ActivityDataCreate,
    ActivityDataUpdate,
    ActivityDataResponse,
    IpccCalculationCreate,
    IpccCalculationResponse,
    IpccCalculationResult,
    IpccSummaryResponse,
    IpccProjectSummaries,
    TierSuggestionRequest,
    TierSuggestionResponse,
    DashboardOverview,
    SectorTotal,
    TopEmittingProject,
)

router = APIRouter(prefix="/ipcc", tags=["ipcc"])


# === Projects ===

@router.post("/projects", response_model=IpccProjectResponse, status_code=201)
async def create_project(
    data: IpccProjectCreate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.create_project(current_user.id, data)


@router.get("/projects", response_model=list[IpccProjectResponse])
async def list_projects(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.list_projects(current_user.id, tenant_id)


@router.get("/projects/{project_id}", response_model=IpccProjectDetail)
async def get_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    """Project with its categories and sector summaries."""
    return await service.get_project_detail(current_user.id, project_id)


@router.patch("/projects/{project_id}", response_model=IpccProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    data: IpccProjectUpdate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.update_project(current_user.id, project_id, data)


@router.put("/projects/{project_id}/status", response_model=IpccProjectResponse)
async def update_project_status(
    project_id: uuid.UUID,
    data: ProjectStatusUpdate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.update_project_status(current_user.id, project_id, data.status)


@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    await service.delete_project(current_user.id, project_id)


# === Emission categories ===

@router.get("/categories", response_model=list[EmissionCategoryResponse])
async def list_categories(
    current_user: CurrentUserDep,
    service: IpccServiceDep,
    sector: SectorLiteral | None = None,
):
    """IPCC 2006 source categories, optionally for one sector."""
    return await service.list_categories(sector)


@router.get("/categories/{code}", response_model=EmissionCategoryResponse)
async def get_category(
    code: str,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.get_category_by_code(code)


@router.get("/projects/{project_id}/categories", response_model=list[ProjectCategoryResponse])
async def list_project_categories(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.list_project_categories(current_user.id, project_id)


@router.post(
    "/projects/{project_id}/categories",
    response_model=ProjectCategoryResponse,
    status_code=201,
)
async def attach_category(
    project_id: uuid.UUID,
    data: ProjectCategoryCreate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    """Add a source category to the project's inventory."""
    return await service.attach_category(current_user.id, project_id, data.category_id)


@router.delete("/projects/{project_id}/categories/{category_id}", status_code=204)
async def detach_category(
    project_id: uuid.UUID,
    category_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    await service.detach_category(current_user.id, project_id, category_id)


# === GWP values ===

@router.get("/gwp", response_model=list[GwpValueResponse])
async def list_gwp_values(
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.list_gwp_values()


@router.put("/gwp/{gas_type}", response_model=GwpValueResponse)
async def upsert_gwp_value(
    gas_type: str,
    data: GwpValueUpsert,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    """Set the GWP of a gas, creating the row if needed."""
    return await service.upsert_gwp_value(gas_type, data)


# === Emission factors ===

@router.post("/emission-factors", response_model=IpccEmissionFactorResponse, status_code=201)
async def create_emission_factor(
    data: IpccEmissionFactorCreate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.create_factor(data)


@router.get("/emission-factors", response_model=list[IpccEmissionFactorResponse])
async def list_emission_factors(
    current_user: CurrentUserDep,
    service: IpccServiceDep,
    category_code: str | None = None,
    gas_type: str | None = None,
    tier: TierLiteral | None = None,
):
    return await service.list_factors(category_code, gas_type, tier)


@router.get("/emission-factors/{factor_id}", response_model=IpccEmissionFactorResponse)
async def get_emission_factor(
    factor_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.get_factor(factor_id)


@router.patch("/emission-factors/{factor_id}", response_model=IpccEmissionFactorResponse)
async def update_emission_factor(
    factor_id: uuid.UUID,
    data: IpccEmissionFactorUpdate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.update_factor(factor_id, data)


@router.delete("/emission-factors/{factor_id}", status_code=204)
async def delete_emission_factor(
    factor_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    await service.delete_factor(factor_id)


# === Activity data ===

@router.post("/activity-data", response_model=ActivityDataResponse, status_code=201)
async def create_activity_data(
    data: ActivityDataCreate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    """Record activity data for a category already added to the project."""
    return await service.create_activity(current_user.id, data)


@router.get("/projects/{project_id}/activity-data", response_model=list[ActivityDataResponse])
async def list_activity_data(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.list_activities(current_user.id, project_id)


@router.get("/activity-data/{activity_id}", response_model=ActivityDataResponse)
async def get_activity_data(
    activity_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.get_activity(current_user.id, activity_id)


@router.patch("/activity-data/{activity_id}", response_model=ActivityDataResponse)
async def update_activity_data(
    activity_id: uuid.UUID,
    data: ActivityDataUpdate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.update_activity(current_user.id, activity_id, data)


@router.delete("/activity-data/{activity_id}", status_code=204)
async def delete_activity_data(
    activity_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    await service.delete_activity(current_user.id, activity_id)


# === Calculations ===

@router.post("/calculations", response_model=IpccCalculationResult, status_code=201)
async def calculate(
    data: IpccCalculationCreate,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    """
    Calculate the emissions of one activity.

    Without `emission_factor_id` the best factor for the category is chosen,
    honouring `preferred_tier` when such a factor exists.
    """
    return await service.calculate(current_user.id, data)


@router.get("/projects/{project_id}/calculations", response_model=list[IpccCalculationResponse])
async def list_calculations(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.list_calculations(current_user.id, project_id)


@router.get("/calculations/{calculation_id}", response_model=IpccCalculationResponse)
async def get_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.get_calculation(current_user.id, calculation_id)


@router.delete("/calculations/{calculation_id}", status_code=204)
async def delete_calculation(
    calculation_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    await service.delete_calculation(current_user.id, calculation_id)


# === Summaries ===

@router.get("/projects/{project_id}/summaries", response_model=IpccProjectSummaries)
async def get_project_summaries(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.get_project_summaries(current_user.id, project_id)


@router.get("/projects/{project_id}/summaries/{sector}", response_model=IpccSummaryResponse)
async def get_sector_summary(
    project_id: uuid.UUID,
    sector: SectorLiteral,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.get_sector_summary(current_user.id, project_id, sector)


@router.post("/projects/{project_id}/summaries/recalculate", response_model=IpccProjectSummaries)
async def recalculate_summaries(
    project_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
):
    return await service.recalculate_summaries(current_user.id, project_id)


# === Helpers ===

@router.post("/helpers/suggest-tier", response_model=TierSuggestionResponse)
async def suggest_tier_for_category(
    data: TierSuggestionRequest,
    current_user: CurrentUserDep,
):
    """Recommend a methodological tier from the data available."""
    tier = suggest_tier(
        data.category_code,
        has_country_specific_data=data.has_country_specific_data,
        has_plant_specific_data=data.has_plant_specific_data,
        is_key_category=data.is_key_category,
    )
    return TierSuggestionResponse(
        category_code=data.category_code,
        suggested_tier=tier,
        uncertainty=uncertainty_for_tier(tier),
    )


@router.get("/helpers/uncertainty/{tier}")
async def get_uncertainty(
    tier: TierLiteral,
    current_user: CurrentUserDep,
) -> dict[str, str]:
    return uncertainty_for_tier(tier)


@router.get("/helpers/default-factors")
async def get_default_factors(
    current_user: CurrentUserDep,
) -> dict[str, dict[str, float]]:
    """IPCC default heating values (GJ/ton) and CO2 factors (kg/GJ)."""
    return default_factors()


# === Dashboard ===

@router.get("/dashboard/overview", response_model=DashboardOverview)
async def dashboard_overview(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
    year_from: int | None = None,
    year_to: int | None = None,
    organization_name: str | None = None,
):
    return await service.dashboard_overview(
        current_user.id, tenant_id, year_from, year_to, organization_name
    )


@router.get("/dashboard/sectors", response_model=list[SectorTotal])
async def dashboard_sectors(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
    year: int | None = None,
):
    return await service.sector_analysis(current_user.id, tenant_id, year)


@router.get("/dashboard/top-projects", response_model=list[TopEmittingProject])
async def dashboard_top_projects(
    tenant_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: IpccServiceDep,
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
):
    return await service.top_emitting_projects(current_user.id, tenant_id, limit)
