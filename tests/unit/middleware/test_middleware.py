"""Unit tests for middleware."""

from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.middleware.request_id import RequestIDMiddleware
from api.middleware.role_access import RoleAccessMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

PROVIDER = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


def _create_app_with_middleware() -> FastAPI:
    """Create a minimal FastAPI app with security and request ID middleware."""
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    return app


def _create_gated_app() -> FastAPI:
    """Create a minimal app behind RoleAccessMiddleware with a catch-all route."""
    app = FastAPI()
    app.add_middleware(RoleAccessMiddleware, auth_provider=PROVIDER)

    @app.api_route("/{path:path}", methods=["GET", "POST", "OPTIONS"])
    async def _(path: str):
        return {"path": path}

    return app


def _token(role: str | None) -> str:
    return PROVIDER.create_token(
        TokenUser(id=uuid4(), email="someone@school.com", role=role, school_id=uuid4())
    )


async def _get(path: str, role: str | None = None, **kwargs):
    headers = {"Authorization": f"Bearer {_token(role)}"} if role else {}
    transport = ASGITransport(app=_create_gated_app())
    async with AsyncClient(transport=transport, base_url="http://test", **kwargs) as c:
        return await c.get(path, headers=headers)


class TestRoleAccessMiddleware:
    """Tests for RoleAccessMiddleware."""

    async def test_public_path_passes_without_session(self):
        response = await _get("/about")
        assert response.status_code == 200

    async def test_anonymous_page_redirects_to_login_with_callback(self):
        response = await _get("/admin/teachers")

        assert response.status_code == 307
        assert response.headers["location"] == "/auth/signin?callbackUrl=/admin/teachers"

    async def test_anonymous_api_gets_401_json(self):
        response = await _get("/api/teachers/invite")

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    async def test_invalid_token_counts_as_anonymous(self):
        transport = ASGITransport(app=_create_gated_app())
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get(
                "/api/teachers/invite", headers={"Authorization": "Bearer not.a.token"}
            )

        assert response.status_code == 401

    async def test_teacher_on_admin_page_redirects_to_unauthorized(self):
        response = await _get("/admin/teachers", role="teacher")

        assert response.status_code == 307
        assert response.headers["location"] == "/unauthorized"

    async def test_teacher_on_admin_api_gets_403_json(self):
        response = await _get("/api/admin/teachers", role="teacher")

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    async def test_admin_passes_admin_prefix(self):
        response = await _get("/admin/teachers", role="admin")

        assert response.status_code == 200
        assert response.json() == {"path": "admin/teachers"}

    async def test_dashboard_redirects_to_role_home(self):
        response = await _get("/dashboard", role="parent")

        assert response.status_code == 307
        assert response.headers["location"] == "/parent/dashboard"

    async def test_session_cookie_is_accepted(self):
        transport = ASGITransport(app=_create_gated_app())
        async with AsyncClient(
            transport=transport,
            base_url="http://test",
            cookies={"session_token": _token("super_admin")},
        ) as c:
            response = await c.get("/super/schools")

        assert response.status_code == 200

    async def test_preflight_is_not_gated(self):
        transport = ASGITransport(app=_create_gated_app())
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.options("/api/admin/teachers")

        assert response.status_code == 200

class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    @pytest.mark.asyncio
    async def test_adds_x_content_type_options(self):
        """Response includes X-Content-Type-Options: nosniff."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test")

        assert response.headers["x-content-type-options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_adds_x_frame_options(self):
        """Response includes X-Frame-Options: DENY."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test")

        assert response.headers["x-frame-options"] == "DENY"

    @pytest.mark.asyncio
    async def test_adds_referrer_policy(self):
        """Response includes Referrer-Policy header."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test")

        assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self):
        """Response includes a generated X-Request-ID header."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test")

        assert "x-request-id" in response.headers
        assert len(response.headers["x-request-id"]) > 0

    @pytest.mark.asyncio
    async def test_propagates_existing_request_id(self):
        """Provided X-Request-ID is propagated to response."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test", headers={"X-Request-ID": "custom-req-123"})

        assert response.headers["x-request-id"] == "custom-req-123"

    @pytest.mark.asyncio
    async def test_request_id_in_response_header(self):
        """X-Request-ID is always present in the response."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            r1 = await c.get("/test")
            r2 = await c.get("/test")

        # Both responses have request IDs
        assert "x-request-id" in r1.headers
        assert "x-request-id" in r2.headers
        # Auto-generated IDs should differ
        assert r1.headers["x-request-id"] != r2.headers["x-request-id"]

    async def test_rejects_malformed_request_id(self):
        """Header values outside the token charset are replaced."""
        app = _create_app_with_middleware()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/test", headers={"X-Request-ID": "bad id with spaces"})

        assert response.headers["x-request-id"] != "bad id with spaces"
