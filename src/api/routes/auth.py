"""Authentication route (login)."""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_user_repo
from api.models import LoginRequest, TokenResponse
from api.security import unauthorized
from domain.model.errors import AuthenticationError
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("", response_model=TokenResponse)
async def login(request: LoginRequest, repo: UserRepository = Depends(get_user_repo)):
    """Login user and return a JWT access token.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    try:
        token = user_service.authenticate(repo, request.email, request.password)
    except AuthenticationError:
        raise unauthorized("Invalid email or password")

    return TokenResponse(access_token=token)
