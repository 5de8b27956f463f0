"""School repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.school import School


class ISchoolRepository(Protocol):
    """Repository interface for School entities."""

    async def create(self, school: School) -> School:
        """Create a school."""
        ...

    async def get(self, id: UUID) -> School | None:
        """Get a school by primary key."""
        ...
