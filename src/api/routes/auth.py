"""Session login route."""

from fastapi import APIRouter, Depends, Request, Response

from api.dependencies.auth import get_auth_provider
from api.dependencies.services import get_auth_service
from api.schemas.common import ErrorResponse
from api.schemas.auth import LoginRequest, TokenResponse
from core.config import settings
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.access_policy import dashboard_path_for
from domain.services.auth_service import AuthService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Log in with email and password",
    responses={
        200: {"description": "Session token issued"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenResponse:
    """Issue a session token as JSON and as an HTTP-only cookie."""
    user = await service.authenticate(body.email, body.password)

    token = auth_provider.create_token(
        TokenUser(
            id=user.id,
            email=user.email,
            role=user.role.value,
            school_id=user.school_id,
            first_name=user.first_name,
            last_name=user.last_name,
        )
    )
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.jwt_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )

    return TokenResponse(
        access_token=token,
        role=user.role.value,
        redirect_to=dashboard_path_for(user.role),
    )
