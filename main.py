"""
Todo List API: application entry point.
"""

from __future__ import annotations

import logging
import sys
from datetime import timedelta
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from api.middleware import register_exception_handlers, register_middleware
from api.todos import router as todos_router
from api.uploads import router as uploads_router
from auth.jwt import TokenSigner
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from config.settings import Settings, load_settings
from database.session import build_engine, build_session_factory, create_tables
from utils.schemas import HealthResponse
from utils.storage import GCSObjectStorage, ObjectStorage

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "urllib3", "google", "multipart"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def _build_object_storage(settings: Settings) -> Optional[ObjectStorage]:
    if not settings.uploads_enabled:
        return None
    try:
        return GCSObjectStorage(
            settings.gcs_bucket_name,
            settings.gcs_service_account_key_path,
            signed_url_ttl=timedelta(hours=settings.gcs_signed_url_hours),
        )
    except (OSError, ValueError) as exc:
        logger.warning("Failed to initialise GCS uploader: %s. Image uploads disabled.", exc)
        return None


def create_app(
    settings: Optional[Settings] = None,
    *,
    engine: Optional[AsyncEngine] = None,
    object_storage: Optional[ObjectStorage] = None,
) -> FastAPI:
    settings = settings or load_settings()
    settings.warn_if_insecure()

    app = FastAPI(
        title="Todo List API",
        version="1.0.0",
        description="Personal todo list with bearer-token authentication.",
    )

    engine = engine or build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_signer = TokenSigner(
        secret=settings.jwt_secret,
        ttl=timedelta(seconds=settings.jwt_ttl_seconds),
        algorithm=settings.jwt_algorithm,
        leeway=settings.jwt_leeway_seconds,
    )
    app.state.object_storage = (
        object_storage if object_storage is not None else _build_object_storage(settings)
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(todos_router, prefix="/api/todos")
    app.include_router(uploads_router, prefix="/api/uploads")

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse()

    @app.on_event("startup")
    async def on_startup():
        if settings.auto_migrate:
            logger.info("Running database migrations…")
            await create_tables(app.state.engine)
            logger.info("Database migrated successfully")
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        storage = app.state.object_storage
        if isinstance(storage, GCSObjectStorage):
            storage.close()
        await app.state.engine.dispose()

    return app


if __name__ == "__main__":
    _settings = load_settings()
    configure_logging(_settings)
    uvicorn.run(
        create_app(_settings),
        host=_settings.host,
        port=_settings.port,
        log_level="debug" if _settings.debug else "info",
    )
