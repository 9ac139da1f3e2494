"""
Image upload route.

Route prefix: /api/uploads
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from api.dependencies import get_upload_service
from auth.dependencies import get_current_user_id
from core.upload_service import UploadService
from utils.schemas import ErrorResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.post(
    "/images",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def upload_image(
    image: UploadFile = File(...),
    user_id: int = Depends(get_current_user_id),
    service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Upload a JPEG/PNG/GIF/WebP image (max 5MB) and return its URL."""
    if image.size is not None:
        service.validate(image.content_type, image.size)
    data = await image.read()
    url = await service.upload_image(user_id, image.filename, image.content_type, data)
    return UploadResponse(image_url=url)
