"""
Auth API routes: register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service
from auth.service import AuthService
from utils.schemas import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> UserOut:
    """Register a new user."""
    return await service.register(req.email, req.password)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Login with email + password."""
    return await service.login(req.email, req.password)
