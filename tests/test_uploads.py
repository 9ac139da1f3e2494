"""
Tests for the image upload route and service.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from conftest import make_settings, register_and_login
from core.errors import InternalError, UploadNotConfiguredError, ValidationError
from core.upload_service import UploadService
from main import create_app
from utils.storage import InMemoryObjectStorage

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class _ExplodingStorage:
    def upload_bytes(self, object_name, data, content_type):
        raise ConnectionError("bucket unreachable")


class TestUploadService:
    @pytest.mark.asyncio
    async def test_stores_under_user_prefix(self):
        storage = InMemoryObjectStorage()
        url = await UploadService(storage).upload_image(3, "Cat.PNG", "image/png", PNG)

        (object_name,) = storage.objects
        assert object_name.startswith("uploads/3/")
        assert object_name.endswith(".png")
        assert storage.objects[object_name] == (PNG, "image/png")
        assert url == f"{storage.base_url}/{object_name}"

    @pytest.mark.asyncio
    async def test_rejects_large_files(self):
        service = UploadService(InMemoryObjectStorage(), max_bytes=8)
        with pytest.raises(ValidationError):
            await service.upload_image(1, "a.png", "image/png", PNG)

    @pytest.mark.asyncio
    async def test_rejects_non_images(self):
        with pytest.raises(ValidationError):
            await UploadService(InMemoryObjectStorage()).upload_image(1, "a.txt", "text/plain", b"hi")

    @pytest.mark.asyncio
    async def test_not_configured(self):
        with pytest.raises(UploadNotConfiguredError):
            await UploadService(None).upload_image(1, "a.png", "image/png", PNG)

    @pytest.mark.asyncio
    async def test_storage_failure_is_internal(self):
        with pytest.raises(InternalError) as exc_info:
            await UploadService(_ExplodingStorage()).upload_image(1, "a.png", "image/png", PNG)
        assert exc_info.value.message == "Failed to upload image"


class TestUploadRoute:
    @pytest.mark.asyncio
    async def test_upload_returns_url(self, client, object_storage):
        headers = await register_and_login(client, "a@x.com")
        resp = await client.post(
            "/api/uploads/images",
            files={"image": ("cat.png", PNG, "image/png")},
            headers=headers,
        )
        assert resp.status_code == 200
        url = resp.json()["image_url"]
        assert url.startswith(f"{object_storage.base_url}/uploads/1/")

        todo = await client.post("/api/todos", json={"title": "cat", "image_url": url}, headers=headers)
        assert todo.status_code == 201
        assert todo.json()["image_url"] == url

    @pytest.mark.asyncio
    async def test_wrong_type(self, client):
        headers = await register_and_login(client, "a@x.com")
        resp = await client.post(
            "/api/uploads/images",
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=headers,
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid file type. Only JPEG, PNG, GIF, WebP allowed."}

    @pytest.mark.asyncio
    async def test_requires_auth(self, client):
        resp = await client.post(
            "/api/uploads/images", files={"image": ("cat.png", PNG, "image/png")}
        )
        assert resp.status_code == 401


class TestUploadsDisabled:
    @pytest_asyncio.fixture
    async def disabled_client(self, engine):
        app = create_app(make_settings(), engine=engine)
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c

    @pytest.mark.asyncio
    async def test_reports_not_configured(self, disabled_client):
        headers = await register_and_login(disabled_client, "a@x.com")
        resp = await disabled_client.post(
            "/api/uploads/images",
            files={"image": ("cat.png", PNG, "image/png")},
            headers=headers,
        )
        assert resp.status_code == 500
        assert resp.json() == {"error": "Image upload feature not configured"}
