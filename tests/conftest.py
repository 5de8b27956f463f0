"""Pytest configuration and fixtures."""

import asyncio
import os
import sys
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from uuid import UUID, uuid4

# Disable rate limiting and pin the session secret in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["RESEND_API_KEY"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, SchoolModel, UserModel
from infrastructure.mail.provider import MailMessage

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingMailer:
    """Mailer double that keeps every message it is asked to send."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.sent: list[MailMessage] = []

    async def send(self, message: MailMessage) -> bool:
        self.sent.append(message)
        return self.result


@pytest.fixture(scope="session")
def event_loop() -> Generator[asyncio.AbstractEventLoop, None, None]:
    """Create event loop for session-scoped async fixtures."""
    policy = asyncio.get_event_loop_policy()
    loop = policy.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture(scope="session")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
    )
    yield engine
    await engine.dispose()


@pytest.fixture(scope="session")
async def setup_database(engine: AsyncEngine) -> AsyncGenerator[None, None]:
    """Create all tables once per session."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="session")
async def session_factory(
    engine: AsyncEngine, setup_database: None
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def school_id(session_factory: async_sessionmaker[AsyncSession]) -> UUID:
    """Insert a fresh school and return its id."""
    school = SchoolModel(id=uuid4(), name="Greenfield Academy")
    async with session_factory() as session:
        session.add(school)
        await session.commit()
    return school.id


@pytest.fixture
async def admin_user(
    session_factory: async_sessionmaker[AsyncSession], school_id: UUID
) -> TokenUser:
    """Insert an admin account for the test school and return its identity."""
    admin = UserModel(
        id=uuid4(),
        email=f"admin-{uuid4().hex[:8]}@greenfield.edu",
        password_hash="not-a-real-hash",
        first_name="Grace",
        last_name="Okafor",
        role="admin",
        school_id=school_id,
    )
    async with session_factory() as session:
        session.add(admin)
        await session.commit()

    return TokenUser(
        id=admin.id,
        email=admin.email,
        role="admin",
        school_id=school_id,
        first_name="Grace",
        last_name="Okafor",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, admin_user: TokenUser) -> str:
    """Create auth token for the admin user."""
    return str(auth_provider.create_token(admin_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def app_client(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    mailer: RecordingMailer,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Uses an in-memory SQLite database
    - Overrides the UoW factory of every service to use the test sessions
    - Records outgoing invite emails instead of calling Resend
    - Leaves authentication to the request (send auth_headers)
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import get_auth_service, get_teacher_invite_service
    from domain.services.auth_service import AuthService
    from domain.services.teacher_invite_service import TeacherInviteService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    invite_service = TeacherInviteService(
        test_uow_factory,
        mailer=mailer,
        public_app_url="https://app.klassmata.test",
        password_hasher=lambda password: f"hashed::{password}",
    )
    auth_service = AuthService(
        test_uow_factory,
        password_verifier=lambda password, hashed: hashed == f"hashed::{password}",
    )

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_teacher_invite_service] = lambda: invite_service
    app.dependency_overrides[get_auth_service] = lambda: auth_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
