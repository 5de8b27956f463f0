"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.school import School
from infrastructure.auth.provider import TokenUser


class FakeUnitOfWork:
    """Fake Unit of Work with the 3 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.schools = AsyncMock()
        self.users = AsyncMock()
        self.teacher_invites = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


class FakeMailer:
    """Mailer double; ``result`` may be a bool or an exception to raise."""

    def __init__(self, result: Any = True) -> None:
        self.result = result
        self.sent: list[Any] = []

    async def send(self, message: Any) -> bool:
        self.sent.append(message)
        if isinstance(self.result, BaseException):
            raise self.result
        return bool(self.result)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def school_id() -> UUID:
    """A random school ID."""
    return uuid4()


@pytest.fixture
def school(school_id: UUID) -> School:
    return School(id=school_id, name="Greenfield Academy")


@pytest.fixture
def admin(school_id: UUID) -> TokenUser:
    """An admin session for the test school."""
    return TokenUser(
        id=uuid4(),
        email="admin@greenfield.edu",
        role="admin",
        school_id=school_id,
        first_name="Grace",
        last_name="Okafor",
    )
