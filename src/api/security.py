"""Bearer token extraction for protected routes."""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

security = HTTPBearer(auto_error=False)

# Same detail for missing, invalid or expired tokens and for deleted users
UNAUTHENTICATED_DETAIL = "Not authenticated"


def unauthorized(detail: str = UNAUTHENTICATED_DETAIL) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Return the raw token from `Authorization: Bearer <token>`. Raises 401 if absent."""
    if not credentials or not credentials.credentials:
        raise unauthorized()
    return credentials.credentials
