"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from contactbook import __version__
from contactbook.api import auth, contacts
from contactbook.api.errors import register_exception_handlers
from contactbook.config import Settings, get_settings
from contactbook.services.passwords import PasswordHasher
from contactbook.services.tokens import TokenService
from contactbook.services.uploads import PhotoStorage

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and wire its long-lived services."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    photo_storage = PhotoStorage(settings.upload_dir, settings.max_upload_bytes)
    photo_storage.ensure_directory()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        logger.info(f"Starting contactbook in {settings.environment} mode")
        yield

    app = FastAPI(
        title="Contactbook API",
        description="Contact management with role-based access control",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.token_service = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_delta=timedelta(minutes=settings.jwt_expiration_minutes),
    )
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.photo_storage = photo_storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router)
    app.include_router(contacts.router)

    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app()
