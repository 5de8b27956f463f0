"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SCHOOL_REQUIRED = "SCHOOL_REQUIRED"
    WEAK_PASSWORD = "WEAK_PASSWORD"

    # Not found errors (404)
    INVITE_NOT_FOUND = "INVITE_NOT_FOUND"

    # Conflict errors (409)
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    DUPLICATE_INVITE = "DUPLICATE_INVITE"
    INVITE_ALREADY_USED = "INVITE_ALREADY_USED"

    # Gone (410)
    INVITE_EXPIRED = "INVITE_EXPIRED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class InsufficientPermissionsError(AppException):
    """User role does not allow the operation."""

    def __init__(self, required_roles: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.INSUFFICIENT_PERMISSIONS,
            message=f"Insufficient permissions. Required role: {' or '.join(required_roles)}",
            status_code=403,
            details={"required_roles": required_roles},
        )


class InvalidInputError(AppException):
    """Request payload failed a business-level validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


class SchoolRequiredError(AppException):
    """The caller has no school associated with their account."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.SCHOOL_REQUIRED,
            message="No school associated with your account",
            status_code=400,
        )


class WeakPasswordError(AppException):
    """Chosen password does not meet the minimum length."""

    def __init__(self, min_length: int) -> None:
        super().__init__(
            error_code=ErrorCode.WEAK_PASSWORD,
            message=f"Password must be at least {min_length} characters",
            status_code=400,
            details={"min_length": min_length},
        )


class InvalidCredentialsError(AppException):
    """Email/password pair did not match an active account."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid email or password",
            status_code=401,
        )


class InviteNotFoundError(AppException):
    """Teacher invite not found."""

    def __init__(self, invite_id: str = "") -> None:
        super().__init__(
            error_code=ErrorCode.INVITE_NOT_FOUND,
            message="Invalid invite code" if not invite_id else "Invite not found",
            status_code=404,
            details={"invite_id": invite_id} if invite_id else None,
        )


class UserAlreadyExistsError(AppException):
    """A user account already exists for this email."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_ALREADY_EXISTS,
            message="A user with this email already exists",
            status_code=409,
            details={"email": email},
        )


class DuplicateInviteError(AppException):
    """A pending invite already exists for this email and school."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_INVITE,
            message="A pending invite already exists for this email",
            status_code=409,
            details={"email": email},
        )


class InviteAlreadyUsedError(AppException):
    """Invite is no longer pending (accepted or cancelled)."""

    def __init__(self, status: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.INVITE_ALREADY_USED,
            message="This invite has already been used",
            status_code=409,
            details={"status": status} if status else None,
        )


class InviteExpiredError(AppException):
    """Invite is past its expiry time."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVITE_EXPIRED,
            message="This invite has expired",
            status_code=410,
        )
