"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

import meeting_feedback.models  # noqa: F401
from meeting_feedback.admin.router import api_router as admin_api_router
from meeting_feedback.admin.router import legacy_router as admin_router
from meeting_feedback.config import Settings, get_settings
from meeting_feedback.meetings.router import router as webhook_router
from meeting_feedback.notifications.factory import create_email_provider
from meeting_feedback.notifications.interfaces import EmailProvider
from meeting_feedback.shared.database import DatabaseManager
from meeting_feedback.shared.exceptions import AppException, StorageError
from meeting_feedback.shared.logging import get_logger, setup_logging
from meeting_feedback.shared.middleware import CorrelationIdMiddleware
from meeting_feedback.surveys.router import router as survey_router

logger = get_logger(__name__)

GENERIC_STORAGE_MESSAGE = "Internal server error"


def _error_body(message: str, code: str, **extra: object) -> dict[str, object]:
    return {"success": False, "error": message, "code": code, **extra}


def create_app(
    settings: Settings | None = None,
    db: DatabaseManager | None = None,
    email_provider: EmailProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``db`` and ``email_provider`` may be injected (tests); the lifespan then
    uses them as given instead of building its own.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        setup_logging(settings)
        logger.info("Application starting", extra={"env": settings.app_env})

        if app.state.db is None:
            app.state.db = DatabaseManager.from_settings(settings)
        # Unreachable storage at startup aborts the process.
        await app.state.db.verify_connection()

        if not settings.admin_auth_enabled:
            logger.warning("ADMIN_TOKEN is not set; the admin API is open to anyone")

        if app.state.email_provider is None:
            app.state.email_provider = create_email_provider(settings)

        yield

        logger.info("Shutting down application")
        await app.state.email_provider.close()
        await app.state.db.close()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="Meeting Feedback API",
        description="Post-meeting feedback surveys delivered by email",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.db = db
    app.state.email_provider = email_provider

    # Map domain exceptions to HTTP responses
    @app.exception_handler(AppException)
    async def _app_exception(request: Request, exc: AppException) -> JSONResponse:
        if isinstance(exc, StorageError):
            logger.error(
                "Storage failure",
                extra={
                    "path": request.url.path,
                    "code": exc.code,
                    "error": exc.message,
                    "details": exc.details,
                },
            )
            return JSONResponse(
                status_code=exc.status_code,
                content=_error_body(GENERIC_STORAGE_MESSAGE, exc.code),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code),
        )

    @app.exception_handler(SQLAlchemyError)
    async def _sqlalchemy_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            "Unhandled database error",
            extra={"path": request.url.path, "error_type": type(exc).__name__, "error": str(exc)},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(GENERIC_STORAGE_MESSAGE, "STORAGE_ERROR"),
        )

    # Request validation (FastAPI/Pydantic) -> consistent 422 payload
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            errors.append(
                {
                    "field": field,
                    "message": error["msg"],
                    "type": error["type"],
                }
            )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body("Request validation failed", "VALIDATION_ERROR", errors=errors),
        )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    # Include routers
    app.include_router(webhook_router)
    app.include_router(survey_router)
    app.include_router(admin_api_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()
