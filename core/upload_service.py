"""
Image upload for todo attachments.
"""

from __future__ import annotations

import asyncio
import logging
import pathlib
import uuid
from typing import Optional

from core.errors import InternalError, UploadNotConfiguredError, ValidationError
from utils.storage import ObjectStorage

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
DEFAULT_MAX_BYTES = 5 * 1024 * 1024


class UploadService:
    def __init__(self, storage: Optional[ObjectStorage], max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self._storage = storage
        self.max_bytes = max_bytes

    def validate(self, content_type: Optional[str], size: int) -> None:
        if size > self.max_bytes:
            logger.warning("Upload rejected: %d bytes exceeds limit of %d", size, self.max_bytes)
            raise ValidationError(
                f"File size exceeds the limit of {self.max_bytes // (1024 * 1024)}MB"
            )
        if size == 0:
            raise ValidationError("Uploaded file is empty")
        if content_type not in ALLOWED_IMAGE_TYPES:
            logger.warning("Upload rejected: content type %s", content_type)
            raise ValidationError("Invalid file type. Only JPEG, PNG, GIF, WebP allowed.")

    async def upload_image(
        self,
        user_id: int,
        filename: Optional[str],
        content_type: Optional[str],
        data: bytes,
    ) -> str:
        """Validate and store an image, returning the URL to save as ``image_url``."""
        self.validate(content_type, len(data))
        if self._storage is None:
            raise UploadNotConfiguredError()

        extension = pathlib.PurePosixPath(filename or "").suffix.lower()
        object_name = f"uploads/{user_id}/{uuid.uuid4()}{extension}"

        try:
            url = await asyncio.to_thread(self._storage.upload_bytes, object_name, data, content_type)
        except Exception as exc:
            logger.error("Failed to upload %s: %s", object_name, exc, exc_info=True)
            raise InternalError("Failed to upload image") from exc
        logger.info("User %s uploaded %s (%d bytes)", user_id, object_name, len(data))
        return url
