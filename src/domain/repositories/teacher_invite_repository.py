"""Teacher invite repository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.teacher_invite import TeacherInvite


class ITeacherInviteRepository(Protocol):
    """Repository interface for TeacherInvite entities."""

    async def create(self, invite: TeacherInvite) -> TeacherInvite:
        """Create a new invite. Raises DuplicateInviteError on a unique clash."""
        ...

    async def get_by_id(self, id: UUID) -> TeacherInvite | None:
        """Get an invite by its primary key."""
        ...

    async def get_by_code(self, code: str) -> TeacherInvite | None:
        """Get an invite by its redemption code."""
        ...

    async def get_pending_for_school_email(
        self, school_id: UUID, email: str
    ) -> TeacherInvite | None:
        """Get the stored-pending invite for a school and email, expired or not."""
        ...

    async def list_pending_for_school(self, school_id: UUID) -> list[TeacherInvite]:
        """List stored-pending invites of a school, newest first."""
        ...

    async def mark_accepted(self, id: UUID, used_at: datetime) -> bool:
        """Atomically move a pending invite to accepted.

        Returns False if the invite was no longer pending.
        """
        ...

    async def set_used_by(self, id: UUID, user_id: UUID) -> None:
        """Record the account created by redeeming the invite."""
        ...

    async def mark_cancelled(self, id: UUID) -> bool:
        """Atomically move a pending invite to cancelled.

        Returns False if the invite was no longer pending.
        """
        ...
