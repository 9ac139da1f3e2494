"""
Object storage for uploaded images.

``GCSObjectStorage`` talks to Google Cloud Storage and returns V4 signed
URLs; ``InMemoryObjectStorage`` is the test double.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Protocol, Tuple

from google.cloud import storage
from google.oauth2 import service_account

logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """What the upload service needs from a bucket."""

    def upload_bytes(self, object_name: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``object_name`` and return a URL to read it."""
        ...


class GCSObjectStorage:
    """A thin wrapper around ``google-cloud-storage`` uploads + signed URLs."""

    def __init__(
        self,
        bucket_name: str,
        credentials_path: str,
        *,
        signed_url_ttl: timedelta = timedelta(hours=168),
        cache_control: str = "public, max-age=31536000",
    ) -> None:
        if not bucket_name:
            raise ValueError("GCS bucket name is required")
        if not credentials_path:
            raise ValueError("GCS service account key path is required")
        if not os.path.exists(credentials_path):
            raise FileNotFoundError(credentials_path)

        creds = service_account.Credentials.from_service_account_file(credentials_path)
        self.client: storage.Client = storage.Client(project=creds.project_id, credentials=creds)
        self.bucket_name = bucket_name
        self.signed_url_ttl = signed_url_ttl
        self.cache_control = cache_control
        logger.info("Google Cloud Storage client initialised for bucket %s", bucket_name)

    def upload_bytes(self, object_name: str, data: bytes, content_type: str) -> str:
        blob = self.client.bucket(self.bucket_name).blob(object_name)
        blob.cache_control = self.cache_control
        blob.upload_from_string(data, content_type=content_type, timeout=60)
        return blob.generate_signed_url(
            version="v4",
            expiration=self.signed_url_ttl,
            method="GET",
        )

    def close(self) -> None:
        logger.info("Closing GCS client.")
        self.client.close()


@dataclass
class InMemoryObjectStorage:
    """Test double for storage interactions."""

    base_url: str = "https://storage.example.test"
    objects: Dict[str, Tuple[bytes, str]] = field(default_factory=dict)

    def upload_bytes(self, object_name: str, data: bytes, content_type: str) -> str:
        self.objects[object_name] = (data, content_type)
        return f"{self.base_url}/{object_name}"
