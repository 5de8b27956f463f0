"""Unit tests for authentication dependencies."""

from uuid import uuid4

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from api.dependencies.auth import extract_session_token, get_current_user, get_optional_user
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser


def _request(headers: dict[str, str] | None = None) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


@pytest.fixture
def mock_auth_provider() -> JWTAuthProvider:
    provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)
    return provider


@pytest.fixture
def test_token_user() -> TokenUser:
    return TokenUser(
        id=uuid4(),
        email="test@example.com",
        role="admin",
        school_id=uuid4(),
        first_name="Test",
        last_name="User",
    )


# --- extract_session_token ---


class TestExtractSessionToken:
    def test_reads_bearer_header(self):
        request = _request({"Authorization": "Bearer abc.def.ghi"})
        assert extract_session_token(request, "session_token") == "abc.def.ghi"

    def test_falls_back_to_cookie(self):
        request = _request({"Cookie": "session_token=from-cookie"})
        assert extract_session_token(request, "session_token") == "from-cookie"

    def test_header_wins_over_cookie(self):
        request = _request(
            {"Authorization": "Bearer from-header", "Cookie": "session_token=from-cookie"}
        )
        assert extract_session_token(request, "session_token") == "from-header"

    def test_ignores_non_bearer_scheme(self):
        request = _request({"Authorization": "Basic dXNlcjpwYXNz"})
        assert extract_session_token(request, "session_token") is None


# --- get_current_user ---


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_returns_user_with_valid_token(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        token = mock_auth_provider.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        result = await get_current_user(_request(), credentials, mock_auth_provider)

        assert result.email == test_token_user.email
        assert result.id == test_token_user.id
        assert result.role == "admin"
        assert result.school_id == test_token_user.school_id

    @pytest.mark.asyncio
    async def test_reads_session_cookie(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        token = mock_auth_provider.create_token(test_token_user)

        result = await get_current_user(
            _request({"Cookie": f"session_token={token}"}), None, mock_auth_provider
        )

        assert result.id == test_token_user.id

    @pytest.mark.asyncio
    async def test_raises_when_no_credentials(self, mock_auth_provider: JWTAuthProvider):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_request(), None, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_raises_when_invalid_token(self, mock_auth_provider: JWTAuthProvider):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="invalid.jwt.token")

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_request(), credentials, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_raises_when_expired_token(self, test_token_user: TokenUser):
        # Create provider with negative expiry to generate expired tokens
        provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=-1)
        token = provider.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        # Use normal provider for validation
        normal_provider = JWTAuthProvider(
            secret_key="test-secret", algorithm="HS256", expire_minutes=30
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_request(), credentials, normal_provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN


# --- get_optional_user ---


class TestGetOptionalUser:
    @pytest.mark.asyncio
    async def test_returns_user_with_valid_token(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        token = mock_auth_provider.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        result = await get_optional_user(_request(), credentials, mock_auth_provider)

        assert result is not None
        assert result.email == test_token_user.email

    @pytest.mark.asyncio
    async def test_returns_none_when_no_credentials(self, mock_auth_provider: JWTAuthProvider):
        result = await get_optional_user(_request(), None, mock_auth_provider)
        assert result is None

    @pytest.mark.asyncio
    async def test_returns_none_for_invalid_token(self, mock_auth_provider: JWTAuthProvider):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="invalid.jwt.token")

        result = await get_optional_user(_request(), credentials, mock_auth_provider)
        assert result is None
