"""Pydantic models for API request/response."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from services.password_hasher import MAX_PASSWORD_BYTES, password_too_long


def _check_password_length(value: str) -> str:
    if password_too_long(value):
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class JoinRequest(BaseModel):
    """Request model for user registration."""
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return _check_password_length(v)


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Response model for a successful login."""
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")


class ProfileResponse(BaseModel):
    email: str
    name: str


class UpdateNameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class UpdatePasswordRequest(BaseModel):
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return _check_password_length(v)


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    message: str
    rows: int = Field(..., description="Number of location rows stored")
