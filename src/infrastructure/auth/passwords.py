"""Password hashing with bcrypt."""

import bcrypt

from core.config import settings

# bcrypt only considers the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = settings.bcrypt_rounds) -> str:
    """Hash a plaintext password with a fresh salt.

    Args:
        password: Plaintext password.
        rounds: bcrypt cost factor.

    Returns:
        The bcrypt hash as a str.
    """
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
