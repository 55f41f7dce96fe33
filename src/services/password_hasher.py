"""Password hashing with bcrypt."""

import os
import logging

import bcrypt

from domain.model.errors import ValidationError

logger = logging.getLogger(__name__)

# 2^12 iterations by default; tests lower this through the environment
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# bcrypt only reads this many bytes and recent releases reject longer input
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Hash password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hashed password as string

    Raises:
        ValidationError: password is longer than MAX_PASSWORD_BYTES in UTF-8
    """
    if password_too_long(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str | None) -> bool:
    """Verify password against hash.

    A missing or malformed stored hash never matches, nor does a password
    too long to have been hashed.
    """
    if not hashed or password_too_long(plain):
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as e:
        logger.warning("Stored password hash is malformed", extra={"error": str(e)})
        return False
