"""Credential login for KlassMata accounts."""

import asyncio
from collections.abc import Callable

from core.exceptions import InvalidCredentialsError
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.passwords import verify_password


class AuthService:
    """Verify email/password pairs against stored accounts."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        password_verifier: Callable[[str, str], bool] = verify_password,
    ) -> None:
        self._uow_factory = uow_factory
        self._verify_password = password_verifier

    async def authenticate(self, email: str, password: str) -> User:
        """Return the active account matching the credentials.

        Raises:
            InvalidCredentialsError: On unknown email, inactive account or
                wrong password. The three cases are indistinguishable.
        """
        if not email or not password:
            raise InvalidCredentialsError()

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not user.is_active:
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(self._verify_password, password, user.password_hash):
            raise InvalidCredentialsError()

        return user
