"""Public teacher onboarding routes: check a code, redeem it."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.services import get_teacher_invite_service
from api.schemas.common import ErrorResponse
from api.schemas.teacher_invite import (
    InvitePreviewResponse,
    OnboardedTeacher,
    RedeemInviteRequest,
    RedeemInviteResponse,
    ValidateInviteResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.teacher_invite_service import TeacherInviteService

router = APIRouter(
    prefix="/teachers/onboard",
    tags=["onboarding"],
)


@router.get(
    "",
    response_model=ValidateInviteResponse,
    summary="Validate invite code",
    responses={
        200: {"description": "Code is redeemable"},
        404: {"model": ErrorResponse, "description": "Unknown code"},
        409: {"model": ErrorResponse, "description": "Invite already used or cancelled"},
        410: {"model": ErrorResponse, "description": "Invite expired"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def validate_invite(
    request: Request,
    code: str = Query("", max_length=64),
    service: TeacherInviteService = Depends(get_teacher_invite_service),
) -> ValidateInviteResponse:
    """Show who an invite is for, without consuming it."""
    preview = await service.validate_invite(code)
    return ValidateInviteResponse(
        invite=InvitePreviewResponse(
            email=preview.email,
            first_name=preview.first_name,
            last_name=preview.last_name,
            school_name=preview.school_name,
            expires_at=preview.expires_at,
        )
    )


@router.post(
    "",
    response_model=RedeemInviteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Redeem invite code",
    responses={
        201: {"description": "Teacher account created"},
        400: {"model": ErrorResponse, "description": "Missing code or weak password"},
        404: {"model": ErrorResponse, "description": "Unknown code"},
        409: {
            "model": ErrorResponse,
            "description": "Invite already used, or email already registered",
        },
        410: {"model": ErrorResponse, "description": "Invite expired"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def redeem_invite(
    request: Request,
    body: RedeemInviteRequest,
    service: TeacherInviteService = Depends(get_teacher_invite_service),
) -> RedeemInviteResponse:
    """Create the teacher account and consume the invite."""
    user = await service.redeem_invite(body.invite_code, body.password)
    return RedeemInviteResponse(
        teacher=OnboardedTeacher(id=user.id, email=user.email, name=user.full_name),
    )
