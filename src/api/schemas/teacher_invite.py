"""Pydantic schemas for teacher invite and onboarding API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateTeacherInviteRequest(BaseModel):
    """Schema for inviting a teacher.

    Blank or malformed values are rejected by the service with a 400 so the
    error shape matches the other business rules.
    """

    name: str = Field(..., max_length=200, description="Full name; first word is the first name")
    email: str = Field(..., max_length=255)
    subject: str | None = Field(None, max_length=200)


class InvitedTeacher(BaseModel):
    """Summary of the invitee echoed back to the admin."""

    id: UUID
    name: str
    email: str
    subject: str


class TeacherInviteCreatedResponse(BaseModel):
    """Schema for invite creation response (includes the code)."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "invite_code": "ABCDE12345",
                "email_sent": True,
                "expires_at": "2026-10-25T10:00:00",
                "teacher": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "name": "Ada Obi",
                    "email": "ada@school.com",
                    "subject": "Mathematics",
                },
                "message": "Teacher invite sent via email successfully!",
            }
        },
    )

    invite_code: str
    email_sent: bool
    expires_at: datetime
    teacher: InvitedTeacher
    message: str


class TeacherInviteResponse(BaseModel):
    """Schema for an invite as listed to school admins."""

    id: UUID
    code: str
    email: str
    first_name: str
    last_name: str
    subject: str | None = None
    status: str
    created_at: datetime
    expires_at: datetime


class TeacherInviteListResponse(BaseModel):
    """Schema for list of invites response."""

    data: list[TeacherInviteResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class InvitePreviewResponse(BaseModel):
    """Invitee details shown on the onboarding page."""

    email: str
    first_name: str
    last_name: str
    school_name: str
    expires_at: datetime


class ValidateInviteResponse(BaseModel):
    """Schema for a successful code check."""

    valid: bool = True
    invite: InvitePreviewResponse


class RedeemInviteRequest(BaseModel):
    """Schema for completing onboarding."""

    invite_code: str = Field(..., max_length=64)
    password: str = Field(..., max_length=256)


class OnboardedTeacher(BaseModel):
    id: UUID
    email: str
    name: str


class RedeemInviteResponse(BaseModel):
    """Schema for the account created by redemption."""

    message: str = "Account created successfully! You can now log in."
    teacher: OnboardedTeacher
