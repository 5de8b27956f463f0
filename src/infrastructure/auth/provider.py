"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID

from domain.entities.user import UserRole, parse_role


@dataclass
class TokenUser:
    """Represents a caller identity extracted from a session token."""

    id: UUID
    email: str
    role: Optional[str] = None
    school_id: Optional[UUID] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def user_role(self) -> UserRole | None:
        """The role claim as a UserRole, or None if unknown."""
        return parse_role(self.role)


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a session token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create a session token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...
