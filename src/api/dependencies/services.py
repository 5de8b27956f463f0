"""Dependency injection factories for domain services."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.auth_service import AuthService
from domain.services.teacher_invite_service import TeacherInviteService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.mail.resend_mailer import ResendMailer


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_mailer() -> ResendMailer:
    """Get the mail delivery client."""
    return ResendMailer()


@lru_cache
def get_teacher_invite_service() -> TeacherInviteService:
    """Get TeacherInvite service instance."""
    return TeacherInviteService(
        get_uow_factory(),
        mailer=get_mailer(),
        public_app_url=settings.public_app_url,
        expiry_days=settings.invite_expiry_days,
        code_length=settings.invite_code_length,
        min_password_length=settings.min_password_length,
        mail_timeout=settings.mail_timeout_seconds,
    )


@lru_cache
def get_auth_service() -> AuthService:
    """Get Auth service instance."""
    return AuthService(get_uow_factory())
