"""User domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class UserRole(StrEnum):
    """Fixed privilege levels of a KlassMata account."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"


# Roles allowed to manage a school's staff
ADMIN_ROLES: frozenset[UserRole] = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})


def parse_role(value: str | None) -> UserRole | None:
    """Map a raw role claim to a UserRole, or None if it is not one."""
    if not value:
        return None
    try:
        return UserRole(value)
    except ValueError:
        return None


@dataclass
class User:
    """Domain entity for a user account."""

    email: str
    first_name: str
    last_name: str
    role: UserRole
    password_hash: str
    school_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)
    is_active: bool = True
    email_verified: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def full_name(self) -> str:
        """First and last name joined, without trailing blanks."""
        return f"{self.first_name} {self.last_name}".strip()
