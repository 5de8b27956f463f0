"""Teacher invite domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from uuid import UUID, uuid4


class InviteStatus(StrEnum):
    """Stored status of a teacher invite.

    ``EXPIRED`` is never written to the database; it is reported by
    ``TeacherInvite.display_status`` for pending invites past their expiry.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


# Statuses that end the lifecycle; nothing transitions out of them
TERMINAL_STATUSES: frozenset[InviteStatus] = frozenset(
    {InviteStatus.ACCEPTED, InviteStatus.CANCELLED}
)

# Default invite expiry: 7 days
INVITE_EXPIRY_DAYS = 7


@dataclass
class TeacherInvite:
    """Domain entity for an invitation to join a school as a teacher."""

    school_id: UUID
    code: str
    email: str
    first_name: str
    last_name: str
    subject: str | None = None
    id: UUID = field(default_factory=uuid4)
    status: InviteStatus = InviteStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)
    expires_at: datetime = field(
        default_factory=lambda: datetime.utcnow() + timedelta(days=INVITE_EXPIRY_DAYS)
    )
    used_at: datetime | None = None
    used_by_user_id: UUID | None = None

    @property
    def is_expired(self) -> bool:
        """Check if the invite has expired."""
        return datetime.utcnow() > self.expires_at

    @property
    def display_status(self) -> InviteStatus:
        """Status as seen by callers, with lazy expiry applied."""
        if self.status == InviteStatus.PENDING and self.is_expired:
            return InviteStatus.EXPIRED
        return self.status

    @property
    def full_name(self) -> str:
        """Invitee's first and last name."""
        return f"{self.first_name} {self.last_name}".strip()

    def can_transition_to(self, target: InviteStatus) -> bool:
        """Only pending invites may move, and only to a terminal status."""
        return self.status == InviteStatus.PENDING and target in TERMINAL_STATUSES
