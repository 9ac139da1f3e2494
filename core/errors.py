"""
Application error taxonomy.

Services raise these; ``api.middleware`` turns them into JSON responses of
the form ``{"error": ..., "details": ...}``.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional


class AppError(Exception):
    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, details: Any = None) -> None:
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = HTTPStatus.BAD_REQUEST
    message = "Validation failed"


class NoFieldsProvidedError(ValidationError):
    message = "no update fields provided"


class ConflictError(AppError):
    status_code = HTTPStatus.CONFLICT
    message = "user with this email already exists"


class InvalidCredentialsError(AppError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "invalid email or password"


class UnauthenticatedError(AppError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "Invalid or expired token"


class ForbiddenError(AppError):
    status_code = HTTPStatus.FORBIDDEN
    message = "user does not have permission to access this resource"


class NotFoundError(AppError):
    status_code = HTTPStatus.NOT_FOUND
    message = "todo not found"


class InternalError(AppError):
    pass


class UploadNotConfiguredError(InternalError):
    message = "Image upload feature not configured"
