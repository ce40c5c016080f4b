from app.schemas.common import (
    MessageResponse,
    ProjectStatusUpdate,
    CalculationStatusUpdate,
)
from app.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    TokenResponse,
    RefreshRequest,
    UserProfile,
)
from app.schemas.user import (
    UserUpdate,
    UserResponse,
    UserBrief,
    PasswordUpdate,
)
from app.schemas.tenant import (
    TenantCreate,
    TenantUpdate,
    TenantLogoUpdate,
    TenantResponse,
    TenantWithRole,
)
from app.schemas.membership import (
    MembershipUpdate,
    MembershipResponse,
    MembershipWithUser,
    MembershipWithTenant,
    InvitationCreate,
    BulkInvitationCreate,
    InvitationResponse,
    InvitationSent,
    BulkInvitationResponse,
    InvitationInfo,
    InvitationPreview,
    InvitationAccept,
    InvitationAcceptWithSignup,
    InvitationStats,
)
from app.schemas.standard import (
    StandardCreate,
    StandardUpdate,
    StandardResponse,
    CertificationCreate,
    CertificationUpdate,
    CertificationResponse,
)

__all__ = [
    # Common
    "MessageResponse",
    "ProjectStatusUpdate",
    "CalculationStatusUpdate",
    # Auth
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "TokenResponse",
    "RefreshRequest",
    "UserProfile",
    # User
    "UserUpdate",
    "UserResponse",
    "UserBrief",
    "PasswordUpdate",
    # Tenant
    "TenantCreate",
    "TenantUpdate",
    "TenantLogoUpdate",
    "TenantResponse",
    "TenantWithRole",
    # Membership
    "MembershipUpdate",
    "MembershipResponse",
    "MembershipWithUser",
    "MembershipWithTenant",
    # Invitation
    "InvitationCreate",
    "BulkInvitationCreate",
    "InvitationResponse",
    "InvitationSent",
    "BulkInvitationResponse",
    "InvitationInfo",
    "InvitationPreview",
    "InvitationAccept",
    "InvitationAcceptWithSignup",
    "InvitationStats",
    # Standards
    "StandardCreate",
    "StandardUpdate",
    "StandardResponse",
    "CertificationCreate",
    "CertificationUpdate",
    "CertificationResponse",
]
