"""Pydantic schemas for session login."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=256)


class TokenResponse(BaseModel):
    """Issued session token and the caller's landing page."""

    access_token: str
    token_type: str = "bearer"
    role: str
    redirect_to: str | None = None
