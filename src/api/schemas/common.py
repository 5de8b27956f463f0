"""Response shapes shared by every router."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response produced by the exception handlers."""

    error_code: str = Field(..., description="Stable machine-readable code")
    message: str
    details: Any | None = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "error_code": "INVITE_EXPIRED",
                "message": "This invite has expired",
                "details": None,
            }
        }
    }


class MessageResponse(BaseModel):
    message: str
