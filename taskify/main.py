"""Taskify API application.

Builds the FastAPI app: middleware, the error envelope, the auth/task/project
routers and the informational endpoints. ``main()`` serves it with uvicorn.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from models import Base
from taskify.core.config import ConfigValidator, get_config_summary, settings
from taskify.core.logging_setup import request_id_var, setup_logging
from taskify.database import AsyncSessionLocal, engine
from taskify.schemas.base import ErrorResponseSchema

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging(settings)
    logger.info("Starting %s (%s)", settings.app_name, settings.environment.value)
    logger.debug("Configuration: %s", get_config_summary())

    if settings.is_production:
        ConfigValidator.validate_required_settings()

    # Staging and production run "alembic upgrade head" instead
    if settings.is_development or settings.is_testing:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified")

    if settings.uses_default_secret:
        logger.warning("SECRET_KEY is not set; tokens are signed with the default key")

    yield

    logger.info("Shutting down %s", settings.app_name)
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Personal task and project tracker",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    setup_middleware(app)
    setup_exception_handlers(app)
    setup_routers(app)

    return app


def setup_middleware(app: FastAPI):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: str,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the error envelope shared by every failing request."""
    body = ErrorResponseSchema(
        message=message,
        error_code=error_code,
        details=details,
        timestamp=datetime.now(timezone.utc),
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json"), headers=headers
    )


def validation_details(exc: RequestValidationError) -> list[dict]:
    """One ``{field, message, type}`` entry per failed constraint."""
    details = []
    for error in exc.errors():
        # First loc element is body/query/path, not part of the field name
        loc = [str(part) for part in error.get("loc", ())]
        details.append(
            {
                "field": ".".join(loc[1:] or loc),
                "message": str(error.get("msg", "Validation error")),
                "type": error.get("type", "value_error"),
            }
        )
    return details


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # BaseAppException carries a structured detail; plain HTTP errors carry a string
        if isinstance(exc.detail, dict) and "message" in exc.detail:
            message = exc.detail["message"]
            error_code = exc.detail.get("error_code", "HTTP_ERROR")
            details = exc.detail.get("details")
        else:
            message = str(exc.detail) if exc.detail else "An error occurred"
            error_code = "HTTP_ERROR"
            details = None

        return error_response(
            request,
            exc.status_code,
            message,
            error_code,
            details,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            request, 400, "Validation error", "VALIDATION_ERROR", validation_details(exc)
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return error_response(request, 500, "Server error", "INTERNAL_ERROR")


def setup_routers(app: FastAPI):
    from taskify.domains.auth.controller import router as auth_router
    from taskify.domains.project.controller import router as project_router
    from taskify.domains.task.controller import router as task_router

    @app.get("/health")
    async def health_check():
        """Liveness plus a ``SELECT 1`` database probe; 503 when the probe fails."""
        db_status = "healthy"
        try:
            async with AsyncSessionLocal() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Health check database probe failed: %s", e)
            db_status = "unhealthy"

        body = {
            "status": db_status,
            "version": settings.version,
            "environment": settings.environment.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {"database": db_status},
        }
        if db_status != "healthy":
            return JSONResponse(status_code=503, content=body)
        return body

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.version,
            "description": "Taskify API is running",
            "docs_url": "/docs" if settings.is_development else None,
        }

    app.include_router(auth_router)
    app.include_router(task_router)
    app.include_router(project_router)


app = create_app()


def main():
    """Entry point for the ``taskify-api`` script."""
    import uvicorn

    uvicorn.run(
        "taskify.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
