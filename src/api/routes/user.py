"""User account routes.

Endpoints:
- GET /user/email: Check whether an email is already registered
- POST /user: Register a new user
- GET /user: Profile of the authenticated user
- PUT /user/name: Change display name
- PUT /user/password: Change password
- DELETE /user: Delete the authenticated user
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import EmailStr

from api.dependencies import get_user_repo
from api.models import (
    JoinRequest,
    MessageResponse,
    ProfileResponse,
    UpdateNameRequest,
    UpdatePasswordRequest,
)
from api.security import get_bearer_token, unauthorized
from domain.model.errors import AuthenticationError, DuplicateError
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/email", response_model=bool)
async def check_email(
    email: EmailStr = Query(...),
    repo: UserRepository = Depends(get_user_repo),
):
    """Return true if the email is already registered.

    The email is normalized the same way as on registration.
    """
    return user_service.check_email_exists(repo, email)


@router.post("", response_model=MessageResponse)
async def join(request: JoinRequest, repo: UserRepository = Depends(get_user_repo)):
    """Register a new user.

    Raises:
        HTTPException: 409 Conflict if email already exists
    """
    try:
        user_service.register(repo, request.email, request.name, request.password)
    except DuplicateError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    return MessageResponse(message="User registered successfully")


@router.get("", response_model=ProfileResponse)
async def profile(
    token: str = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user = user_service.get_profile(repo, token)
    except AuthenticationError:
        raise unauthorized()

    return ProfileResponse(email=user.email, name=user.name)


@router.put("/name", response_model=MessageResponse)
async def update_name(
    request: UpdateNameRequest,
    token: str = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user_service.update_name(repo, token, request.name)
    except AuthenticationError:
        raise unauthorized()

    return MessageResponse(message="Name updated successfully")


@router.put("/password", response_model=MessageResponse)
async def update_password(
    request: UpdatePasswordRequest,
    token: str = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user_service.update_password(repo, token, request.password)
    except AuthenticationError:
        raise unauthorized()

    return MessageResponse(message="Password updated successfully")


@router.delete("", response_model=MessageResponse)
async def delete_user(
    token: str = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user_service.delete_user(repo, token)
    except AuthenticationError:
        raise unauthorized()

    return MessageResponse(message="User deleted successfully")
