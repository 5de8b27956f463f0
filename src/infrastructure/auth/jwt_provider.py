"""JWT session token provider.

Tokens are HS256-signed and carry the claims the access middleware and the
invite endpoints need:

    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "admin",
        "school_id": "school-uuid",
        "first_name": "Ada",
        "last_name": "Obi",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based session provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and extract the caller identity.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")

        if not user_id or not email:
            return None

        try:
            school_claim = payload.get("school_id")
            return TokenUser(
                id=UUID(user_id),
                email=email,
                role=payload.get("role"),
                school_id=UUID(school_claim) if school_claim else None,
                first_name=payload.get("first_name"),
                last_name=payload.get("last_name"),
            )
        except ValueError:
            logger.warning("Rejected token with malformed identifier claims")
            return None

    def create_token(self, user: TokenUser) -> str:
        """
        Create a JWT session token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
            "school_id": str(user.school_id) if user.school_id else None,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
