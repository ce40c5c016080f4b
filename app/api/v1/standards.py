import uuid

from fastapi import APIRouter

from app.api.deps import CurrentUserDep, StandardServiceDep, CertificationServiceDep
from app.schemas.standard import (
    StandardCreate,
    StandardUpdate,
    StandardResponse,
    CertificationCreate,
    CertificationUpdate,
    CertificationResponse,
)

router = APIRouter(tags=["standards"])


@router.post("/standards", response_model=StandardResponse, status_code=201)
async def create_standard(
    data: StandardCreate,
    current_user: CurrentUserDep,
    service: StandardServiceDep,
):
    """Add a standard. Codes are unique."""
    return await service.create(data)


@router.get("/standards", response_model=list[StandardResponse])
async def list_standards(
    current_user: CurrentUserDep,
    service: StandardServiceDep,
):
    return await service.get_all()


@router.get("/standards/{standard_id}", response_model=StandardResponse)
async def get_standard(
    standard_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: StandardServiceDep,
):
    return await service.get_by_id(standard_id)


@router.patch("/standards/{standard_id}", response_model=StandardResponse)
async def update_standard(
    standard_id: uuid.UUID,
    data: StandardUpdate,
    current_user: CurrentUserDep,
    service: StandardServiceDep,
):
    return await service.update(standard_id, data)


@router.delete("/standards/{standard_id}", status_code=204)
async def delete_standard(
    standard_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: StandardServiceDep,
):
    """Delete a standard together with its certifications."""
    await service.delete(standard_id)


# === Certifications ===

@router.post("/certifications", response_model=CertificationResponse, status_code=201)
async def create_certification(
    data: CertificationCreate,
    current_user: CurrentUserDep,
    service: CertificationServiceDep,
):
    return await service.create(data)


@router.get("/certifications", response_model=list[CertificationResponse])
async def list_certifications(
    current_user: CurrentUserDep,
    service: CertificationServiceDep,
    standard_id: uuid.UUID | None = None,
):
    """List certifications, optionally only those of one standard."""
    return await service.get_all(standard_id)


@router.get("/certifications/{certification_id}", response_model=CertificationResponse)
async def get_certification(
    certification_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: CertificationServiceDep,
):
    return await service.get_by_id(certification_id)


@router.patch("/certifications/{certification_id}", response_model=CertificationResponse)
async def update_certification(
    certification_id: uuid.UUID,
    data: CertificationUpdate,
    current_user: CurrentUserDep,
    service: CertificationServiceDep,
):
    return await service.update(certification_id, data)


@router.delete("/certifications/{certification_id}", status_code=204)
async def delete_certification(
    certification_id: uuid.UUID,
    current_user: CurrentUserDep,
    service: CertificationServiceDep,
):
    await service.delete(certification_id)
