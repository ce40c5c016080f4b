from fastapi import APIRouter

from app.api.v1 import (
    auth,
    users,
    tenants,
    invitations,
    standards,
    defra,
    ghg_protocol,
    iso14064,
    ipcc,
    iscc,
    carbon_projects,
)

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(tenants.router)
api_router.include_router(invitations.router)
api_router.include_router(standards.router)
api_router.include_router(defra.router)
api_router.include_router(ghg_protocol.router)
api_router.include_router(iso14064.router)
api_router.include_router(ipcc.router)
api_router.include_router(iscc.router)
api_router.include_router(carbon_projects.router)
