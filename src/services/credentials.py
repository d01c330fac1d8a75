"""Credential store: salted one-way password hashing.

bcrypt embeds the salt and work factor in its output, so a stored hash is
self-describing and ``verify_password`` needs nothing else.
"""

import logging
import os
import secrets
from functools import lru_cache

import bcrypt

from domain.model.errors import ValidationError

logger = logging.getLogger(__name__)

# 2^12 iterations by default; tests lower it through the environment
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# bcrypt only looks at the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72

TEMPORARY_PASSWORD_DIGITS = 6


def hash_password(password: str) -> str:
    """Hash password using bcrypt with a fresh random salt."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes", field="password"
        )
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify password against hash.

    A missing or corrupt stored hash is a failed verification, not an error.
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning("Password verification failed on unreadable hash", extra={"error": str(e)})
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Verified in place of a stored hash when no account matches the username."""
    return hash_password(secrets.token_urlsafe(16))


def generate_temporary_password() -> str:
    """Random numeric code handed to a user by an admin, e.g. ``'048213'``."""
    return "".join(secrets.choice("0123456789") for _ in range(TEMPORARY_PASSWORD_DIGITS))
