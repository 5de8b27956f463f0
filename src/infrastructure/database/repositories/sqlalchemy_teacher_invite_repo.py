"""SQLAlchemy implementation of TeacherInvite repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateInviteError
from domain.entities.teacher_invite import InviteStatus, TeacherInvite
from infrastructure.database.models import TeacherInviteModel


class SQLAlchemyTeacherInviteRepository:
    """SQLAlchemy implementation of ITeacherInviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, invite: TeacherInvite) -> TeacherInvite:
        """Create a new invite.

        The partial unique index on (school_id, email) for pending rows
        backs up the service's pre-create check when two admins race.
        """
        model = self._to_model(invite)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise DuplicateInviteError(invite.email) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_by_id(self, id: UUID) -> TeacherInvite | None:
        """Get an invite by its primary key."""
        stmt = select(TeacherInviteModel).where(TeacherInviteModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_code(self, code: str) -> TeacherInvite | None:
        """Get an invite by its redemption code."""
        stmt = select(TeacherInviteModel).where(TeacherInviteModel.code == code)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_pending_for_school_email(
        self, school_id: UUID, email: str
    ) -> TeacherInvite | None:
        """Get the stored-pending invite for a school and email, expired or not."""
        stmt = select(TeacherInviteModel).where(
            TeacherInviteModel.school_id == school_id,
            TeacherInviteModel.email == email,
            TeacherInviteModel.status == InviteStatus.PENDING.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_pending_for_school(self, school_id: UUID) -> list[TeacherInvite]:
        """List stored-pending invites of a school, newest first."""
        stmt = (
            select(TeacherInviteModel)
            .where(
                TeacherInviteModel.school_id == school_id,
                TeacherInviteModel.status == InviteStatus.PENDING.value,
            )
            .order_by(TeacherInviteModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def mark_accepted(self, id: UUID, used_at: datetime) -> bool:
        """Conditionally move a pending invite to accepted.

        The WHERE clause on status makes the database the arbiter between
        concurrent redemptions: only one UPDATE can match the pending row.
        """
        stmt = (
            update(TeacherInviteModel)
            .where(
                TeacherInviteModel.id == id,
                TeacherInviteModel.status == InviteStatus.PENDING.value,
            )
            .values(status=InviteStatus.ACCEPTED.value, used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined, no-any-return]

    async def set_used_by(self, id: UUID, user_id: UUID) -> None:
        """Record the account created by redeeming the invite."""
        stmt = (
            update(TeacherInviteModel)
            .where(TeacherInviteModel.id == id)
            .values(used_by_user_id=user_id)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def mark_cancelled(self, id: UUID) -> bool:
        """Conditionally move a pending invite to cancelled."""
        stmt = (
            update(TeacherInviteModel)
            .where(
                TeacherInviteModel.id == id,
                TeacherInviteModel.status == InviteStatus.PENDING.value,
            )
            .values(status=InviteStatus.CANCELLED.value)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined, no-any-return]

    def _to_entity(self, model: TeacherInviteModel) -> TeacherInvite:
        """Convert ORM model to domain entity."""
        return TeacherInvite(
            id=model.id,
            school_id=model.school_id,
            code=model.code,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            subject=model.subject,
            status=InviteStatus(model.status),
            created_at=model.created_at,
            expires_at=model.expires_at,
            used_at=model.used_at,
            used_by_user_id=model.used_by_user_id,
        )

    def _to_model(self, entity: TeacherInvite) -> TeacherInviteModel:
        """Convert domain entity to ORM model."""
        return TeacherInviteModel(
            id=entity.id,
            school_id=entity.school_id,
            code=entity.code,
            email=entity.email,
            first_name=entity.first_name,
            last_name=entity.last_name,
            subject=entity.subject,
            status=entity.status.value,
            created_at=entity.created_at,
            expires_at=entity.expires_at,
            used_at=entity.used_at,
            used_by_user_id=entity.used_by_user_id,
        )
