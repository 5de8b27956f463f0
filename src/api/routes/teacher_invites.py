"""Teacher invite API routes (school admins)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_teacher_invite_service
from api.schemas.common import ErrorResponse, MessageResponse
from api.schemas.teacher_invite import (
    CreateTeacherInviteRequest,
    InvitedTeacher,
    TeacherInviteCreatedResponse,
    TeacherInviteListResponse,
    TeacherInviteResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.teacher_invite_service import TeacherInviteService, split_full_name

router = APIRouter(
    prefix="/teachers/invite",
    tags=["teacher-invites"],
)


@router.post(
    "",
    response_model=TeacherInviteCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Invite a teacher",
    responses={
        201: {"description": "Invite created; check email_sent for delivery"},
        400: {"model": ErrorResponse, "description": "Missing name/email or no school on account"},
        403: {"model": ErrorResponse, "description": "Insufficient permissions (admin only)"},
        409: {
            "model": ErrorResponse,
            "description": "User exists or pending invite already exists",
        },
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_teacher_invite(
    request: Request,
    body: CreateTeacherInviteRequest,
    user: CurrentUser,
    service: TeacherInviteService = Depends(get_teacher_invite_service),
) -> TeacherInviteCreatedResponse:
    """Create a teacher invite for the admin's school and email the code."""
    first_name, last_name = split_full_name(body.name)
    result = await service.create_invite(
        requester=user,
        email=body.email,
        first_name=first_name,
        last_name=last_name,
        subject=body.subject,
    )
    invite = result.invite

    message = (
        "Teacher invite sent via email successfully!"
        if result.email_sent
        else "Teacher invite created, but email failed to send. Share the invite code manually."
    )

    return TeacherInviteCreatedResponse(
        invite_code=invite.code,
        email_sent=result.email_sent,
        expires_at=invite.expires_at,
        teacher=InvitedTeacher(
            id=invite.id,
            name=invite.full_name,
            email=invite.email,
            subject=invite.subject or "Not assigned",
        ),
        message=message,
    )


@router.get(
    "",
    response_model=TeacherInviteListResponse,
    summary="List pending teacher invites",
    responses={
        200: {"description": "Pending invites of the admin's school"},
        403: {"model": ErrorResponse, "description": "Insufficient permissions (admin only)"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_teacher_invites(
    request: Request,
    user: CurrentUser,
    service: TeacherInviteService = Depends(get_teacher_invite_service),
) -> TeacherInviteListResponse:
    """List pending invites; lapsed ones are reported with status ``expired``."""
    invites = await service.list_pending_invites(user)
    data = [
        TeacherInviteResponse(
            id=inv.id,
            code=inv.code,
            email=inv.email,
            first_name=inv.first_name,
            last_name=inv.last_name,
            subject=inv.subject,
            status=inv.display_status.value,
            created_at=inv.created_at,
            expires_at=inv.expires_at,
        )
        for inv in invites
    ]
    return TeacherInviteListResponse(data=data, meta={"total": len(data)})


@router.delete(
    "/{invite_id}",
    response_model=MessageResponse,
    summary="Cancel teacher invite",
    responses={
        200: {"description": "Invite cancelled (or already cancelled)"},
        403: {
            "model": ErrorResponse,
            "description": "Not an admin, or invite belongs to another school",
        },
        404: {"model": ErrorResponse, "description": "Invite not found"},
        409: {"model": ErrorResponse, "description": "Invite was already accepted"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def cancel_teacher_invite(
    request: Request,
    invite_id: UUID,
    user: CurrentUser,
    service: TeacherInviteService = Depends(get_teacher_invite_service),
) -> MessageResponse:
    """Cancel a pending invite of the admin's school."""
    await service.cancel_invite(user, invite_id)
    return MessageResponse(message="Invite cancelled successfully")
