import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.security import generate_invitation_token
from app.database import Base


class Invitation(Base):
    __tablename__ = "invitations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Invitation target
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Foreign Keys
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    invited_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Role to assign when accepted
    role: Mapped[str] = mapped_column(String(50), default="member", nullable=False)

    # Token for accepting the invitation
    token: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True, default=generate_invitation_token
    )

    # Expiration
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Usage tracking
    accepted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    @property
    def is_expired(self) -> bool:
        """Check if the invitation has expired."""
        return datetime.utcnow() > self.expires_at

    @property
    def is_accepted(self) -> bool:
        """Check if the invitation has been accepted."""
        return self.accepted_at is not None

    @property
    def is_pending(self) -> bool:
        """Check if the invitation can still be accepted."""
        return not self.is_expired and not self.is_accepted

    def __repr__(self) -> str:
        return f"<Invitation {self.email} -> tenant={self.tenant_id}>"
