"""JWT access token issuing and verification.

Tokens are stateless: the subject claim carries the user's email and nothing
is stored server-side, so a token stays decodable until it expires.
"""

import os
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import AuthenticationError

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY environment variable is required. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "2"))


def create_access_token(email: str, expires_delta: timedelta | None = None) -> str:
    """Create JWT access token for the user identified by email."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=JWT_EXPIRATION_HOURS))
    payload = {
        "sub": email,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> str:
    """Verify JWT token and extract the subject email.

    Raises:
        AuthenticationError: token is expired, malformed, badly signed
            or has no subject
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        raise AuthenticationError("Invalid authentication credentials") from e

    email = payload.get("sub")
    if not email:
        logger.debug("JWT verification failed: missing subject")
        raise AuthenticationError("Invalid authentication credentials")
    return email
