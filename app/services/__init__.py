from app.services.auth import AuthService
from app.services.user import UserService
from app.services.tenant import TenantService
from app.services.invitation import InvitationService
from app.services.standard import StandardService, CertificationService
from app.services.defra import DefraService
from app.services.ghg_protocol import GhgProtocolService
from app.services.iso14064 import Iso14064Service
from app.services.ipcc import IpccService
from app.services.iscc import IsccService
from app.services.carbon_project import (
    CarbonProjectService,
    CarbonStepService,
    WorksheetService,
)

__all__ = [
    "AuthService",
    "UserService",
    "TenantService",
    "InvitationService",
    "StandardService",
    "CertificationService",
    "DefraService",
    "GhgProtocolService",
    "Iso14064Service",
    "IpccService",
    "IsccService",
    "CarbonProjectService",
    "CarbonStepService",
    "WorksheetService",
]
