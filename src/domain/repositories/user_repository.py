"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import User


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def create(self, user: User) -> User:
        """Create a user. Raises UserAlreadyExistsError if the email is taken."""
        ...

    async def get_by_id(self, id: UUID) -> User | None:
        """Get a user by primary key."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by (lower-cased) email."""
        ...
