"""
Pydantic schemas for the Todo List API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from auth.password import MAX_PASSWORD_BYTES
from database.models import TodoStatus

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

_http_url = TypeAdapter(HttpUrl)


def _check_image_url(value: Optional[str]) -> Optional[str]:
    """Accept ``None``, ``""`` or an absolute http(s) URL, returned verbatim."""
    if value:
        try:
            _http_url.validate_python(value)
        except PydanticValidationError:
            raise ValueError("image_url must be an absolute http(s) URL") from None
    return value


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=1024)


class UserOut(BaseModel):
    """Public view of a user.  There is deliberately no password field."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class AuthResponse(BaseModel):
    token: str
    user: UserOut


# ═══════════════════════════════════════════════════════════════════════════════
# Todos
# ═══════════════════════════════════════════════════════════════════════════════


class TodoCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    image_url: Optional[str] = None

    validate_image_url = field_validator("image_url")(_check_image_url)


class TodoUpdateRequest(BaseModel):
    """
    Partial update.  A field left out of the body is untouched; a field sent
    as ``null`` clears it (``description`` and ``image_url`` only).
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    image_url: Optional[str] = None

    validate_image_url = field_validator("image_url")(_check_image_url)

    @field_validator("title")
    @classmethod
    def _title_not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("title cannot be null")
        return value


class TodoStatusRequest(BaseModel):
    status: TodoStatus


class TodoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    status: TodoStatus
    user_id: int
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


# ═══════════════════════════════════════════════════════════════════════════════
# Misc
# ═══════════════════════════════════════════════════════════════════════════════


class UploadResponse(BaseModel):
    image_url: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    status: str = "ok"

