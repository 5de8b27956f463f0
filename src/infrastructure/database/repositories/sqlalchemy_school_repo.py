"""SQLAlchemy implementation of School repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.school import School
from infrastructure.database.models import SchoolModel


class SQLAlchemySchoolRepository:
    """SQLAlchemy implementation of ISchoolRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, school: School) -> School:
        model = SchoolModel(id=school.id, name=school.name, created_at=school.created_at)
        self._session.add(model)
        await self._session.flush()
        return school

    async def get(self, id: UUID) -> School | None:
        stmt = select(SchoolModel).where(SchoolModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None
        return School(id=model.id, name=model.name, created_at=model.created_at)
