from app.models.user import User
from app.models.tenant import Tenant
from app.models.membership import Membership
from app.models.invitation import Invitation
from app.models.standard import Standard, Certification
from app.models.defra import (
    DefraProject,
    DefraEmissionFactor,
    DefraCalculation,
    DefraProjectSummary,
)
from app.models.ghg_protocol import (
    GhgProtocolProject,
    GhgProtocolEmissionFactor,
    GhgProtocolCalculation,
    GhgProtocolProjectSummary,
)
from app.models.iso14064 import (
    Iso14064Project,
    Iso14064Calculation,
    Iso14064ProjectSummary,
)
from app.models.ipcc import (
    IpccProject,
    EmissionCategory,
    IpccEmissionFactor,
    GwpValue,
    ProjectCategory,
    ActivityData,
    IpccCalculation,
    IpccProjectSummary,
)
from app.models.iscc import (
    IsccProject,
    IsccCultivation,
    IsccProcessing,
    IsccTransport,
    IsccCalculation,
)
from app.models.carbon_project import (
    CarbonProject,
    Product,
    Raw,
    FertilizerNitrogen,
    Herbicide,
    EnergyElectricity,
    EnergyDiesel,
    Cultivation,
    ActualCarbon,
    ReferenceCarbon,
    GhgWorksheetItem,
)

__all__ = [
    "User",
    "Tenant",
    "Membership",
    "Invitation",
    "Standard",
    "Certification",
    # DEFRA
    "DefraProject",
    "DefraEmissionFactor",
    "DefraCalculation",
    "DefraProjectSummary",
    # GHG Protocol
    "GhgProtocolProject",
    "GhgProtocolEmissionFactor",
    "GhgProtocolCalculation",
    "GhgProtocolProjectSummary",
    # ISO 14064
    "Iso14064Project",
    "Iso14064Calculation",
    "Iso14064ProjectSummary",
    # IPCC
    "IpccProject",
    "EmissionCategory",
    "IpccEmissionFactor",
    "GwpValue",
    "ProjectCategory",
    "ActivityData",
    "IpccCalculation",
    "IpccProjectSummary",
    # ISCC
    "IsccProject",
    "IsccCultivation",
    "IsccProcessing",
    "IsccTransport",
    "IsccCalculation",
    # Carbon calculation workflow
    "CarbonProject",
    "Product",
    "Raw",
    "FertilizerNitrogen",
    "Herbicide",
    "EnergyElectricity",
    "EnergyDiesel",
    "Cultivation",
    "ActualCarbon",
    "ReferenceCarbon",
    "GhgWorksheetItem",
]
