"""Role-based access middleware.

Runs before routing on every request. The decision itself comes from
``domain.services.access_policy.authorize``; this module only decodes the
session and renders the decision as a redirect or a JSON error.
"""

from typing import Awaitable, Callable
from urllib.parse import quote

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.types import ASGIApp

from api.dependencies.auth import extract_session_token, get_auth_provider
from core.config import settings
from core.exceptions import ErrorCode
from domain.services.access_policy import AccessOutcome, authorize, is_public_path
from infrastructure.auth.provider import IAuthProvider, TokenUser

logger = structlog.get_logger()


class RoleAccessMiddleware(BaseHTTPMiddleware):
    """Gate page and API paths by the caller's role."""

    def __init__(
        self,
        app: ASGIApp,
        auth_provider: IAuthProvider | None = None,
        login_path: str = settings.login_path,
        unauthorized_path: str = settings.unauthorized_path,
        cookie_name: str = settings.session_cookie_name,
    ) -> None:
        super().__init__(app)
        self._auth_provider = auth_provider
        self._login_path = login_path
        self._unauthorized_path = unauthorized_path
        self._cookie_name = cookie_name

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        path = request.url.path

        # CORS preflight and allow-listed paths never reach the policy
        if request.method == "OPTIONS" or is_public_path(path):
            return await call_next(request)

        user = await self._resolve_user(request)
        decision = authorize(
            user.user_role if user else None,
            path,
            authenticated=user is not None,
            login_path=self._login_path,
            unauthorized_path=self._unauthorized_path,
        )

        if decision.allowed:
            return await call_next(request)

        logger.info(
            "access_denied",
            path=path,
            outcome=decision.outcome.value,
            role=user.role if user else None,
            user_id=str(user.id) if user else None,
        )

        if decision.outcome == AccessOutcome.UNAUTHENTICATED:
            return JSONResponse(
                status_code=401,
                content={
                    "error_code": ErrorCode.UNAUTHORIZED.value,
                    "message": "Authentication required",
                    "details": None,
                },
            )

        if decision.outcome == AccessOutcome.FORBIDDEN:
            return JSONResponse(
                status_code=403,
                content={
                    "error_code": ErrorCode.FORBIDDEN.value,
                    "message": "Forbidden",
                    "details": None,
                },
            )

        location = decision.location or self._unauthorized_path
        if decision.outcome == AccessOutcome.REDIRECT_LOGIN:
            location = f"{location}?callbackUrl={quote(path, safe='/')}"
        return RedirectResponse(location, status_code=307)

    async def _resolve_user(self, request: Request) -> TokenUser | None:
        token = extract_session_token(request, self._cookie_name)
        if not token:
            return None
        provider = self._auth_provider or get_auth_provider()
        return await provider.validate_token(token)
