"""FastAPI application entry point.

Run with ``uvicorn src.main:create_app --factory``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from src.api.errors import http_exception_handler, request_validation_handler
from src.api.health import router as health_router
from src.config import Settings, get_settings
from src.infrastructure.database import Database
from src.infrastructure.observability import (
    configure_logging,
    init_tracing,
    shutdown_tracing,
)
from src.modules.auth.dependencies import (
    credentials_validation_handler,
    duplicate_username_handler,
    invalid_credentials_handler,
    invalid_token_handler,
    missing_token_handler,
)
from src.modules.auth.exceptions import (
    CredentialsValidationError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)
from src.modules.auth.gate import AuthGate
from src.modules.auth.password import PasswordHasher
from src.modules.auth.repository import UserRepository
from src.modules.auth.routes import router as auth_router
from src.modules.auth.routes import users_router
from src.modules.auth.service import AuthService
from src.modules.auth.tokens import TokenCodec
from src.modules.items.exceptions import ItemNotFoundError
from src.modules.items.repository import ItemRepository
from src.modules.items.routes import item_not_found_handler
from src.modules.items.routes import router as items_router

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its services.

    Settings are resolved here, so a missing signing secret stops the
    process before it serves anything.

    Args:
        settings: Explicit settings; defaults to the environment.

    Returns:
        The configured FastAPI application.
    """
    settings = settings or get_settings()

    configure_logging(json_logs=settings.log_json, level=settings.log_level)

    database = Database(settings.database_path)
    codec = TokenCodec(
        settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        expire_seconds=settings.jwt_expire_seconds,
    )
    auth_service = AuthService(
        UserRepository(database),
        PasswordHasher(rounds=settings.bcrypt_rounds),
        codec,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        await database.connect()
        logger.info("app_started", app_name=settings.app_name)

        yield

        await database.disconnect()
        if settings.tracing_enabled:
            shutdown_tracing()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.database = database
    app.state.auth_service = auth_service
    app.state.auth_gate = AuthGate(codec)
    app.state.item_repository = ItemRepository(database)

    # Error responses
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        HTTPException,
        http_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        CredentialsValidationError,
        credentials_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        DuplicateUsernameError,
        duplicate_username_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        InvalidCredentialsError,
        invalid_credentials_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        MissingTokenError,
        missing_token_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        InvalidTokenError,
        invalid_token_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        ItemNotFoundError,
        item_not_found_handler,  # type: ignore[arg-type]
    )

    # Public routes
    app.include_router(health_router, prefix="/health", tags=["health"])
    app.include_router(auth_router)

    # Gated by AuthenticatedRoute
    app.include_router(items_router)
    app.include_router(users_router)

    if settings.tracing_enabled:
        init_tracing(
            settings.app_name,
            settings.app_version,
            otlp_endpoint=settings.otlp_endpoint,
            console_export=settings.tracing_console_export,
            sample_rate=settings.tracing_sample_rate,
            app=app,
        )

    return app
