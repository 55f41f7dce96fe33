"""User service — account registration, login and profile management.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from datetime import datetime, timezone

from domain.model.errors import AuthenticationError, DuplicateError
from domain.model.user import User
from port.user_repository import UserRepository
from services.password_hasher import hash_password, verify_password
from services.token_service import create_access_token, verify_token

logger = logging.getLogger(__name__)


def check_email_exists(repo: UserRepository, email: str) -> bool:
    """Return True if a user with this email is registered."""
    return repo.get_by_email(email) is not None


def register(repo: UserRepository, email: str, name: str, password: str) -> User:
    """Register a new user. No token is issued; login is a separate step.

    Raises:
        DuplicateError: email already registered
    """
    if repo.get_by_email(email):
        raise DuplicateError("Email already registered")

    # the store's unique index still rejects a concurrent registration
    user = repo.create(email=email, password_hash=hash_password(password), name=name)
    logger.info("User registered", extra={"userId": user.id, "email": email})
    return user


def authenticate(repo: UserRepository, email: str, password: str) -> str:
    """Check credentials and return a fresh access token.

    Doesn't reveal whether the email exists.

    Raises:
        AuthenticationError: invalid credentials (deliberately vague)
    """
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login rejected", extra={"email": email})
        raise AuthenticationError("Invalid email or password")

    logger.info("User logged in", extra={"userId": user.id, "email": email})
    return create_access_token(user.email)


def _resolve_user(repo: UserRepository, token: str) -> User:
    email = verify_token(token)
    user = repo.get_by_email(email)
    if not user:
        # token still decodes after the account is gone
        raise AuthenticationError("User not found")
    return user


def get_profile(repo: UserRepository, token: str) -> User:
    """Return the user the token was issued to."""
    return _resolve_user(repo, token)


def update_name(repo: UserRepository, token: str, name: str) -> User:
    user = _resolve_user(repo, token)
    user.name = name
    user.updated_at = datetime.now(timezone.utc)
    repo.save(user)
    logger.info("User name updated", extra={"userId": user.id})
    return user


def update_password(repo: UserRepository, token: str, password: str) -> User:
    """Replace the password hash. The current password is not re-checked."""
    user = _resolve_user(repo, token)
    user.password_hash = hash_password(password)
    user.updated_at = datetime.now(timezone.utc)
    repo.save(user)
    logger.info("User password updated", extra={"userId": user.id})
    return user


def delete_user(repo: UserRepository, token: str) -> None:
    """Delete the token's user. Issued tokens are not revoked."""
    user = _resolve_user(repo, token)
    repo.delete(user)
    logger.info("User deleted", extra={"userId": user.id, "email": user.email})
