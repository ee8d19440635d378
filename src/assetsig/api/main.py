"""API service entry point.

FastAPI application factory with routers and middleware.
"""

import sys
import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import NoReturn

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from assetsig.api.routers import admin, assets
from assetsig.api.routers.assets import TOTAL_COUNT_HEADER
from assetsig.common.config import Settings, get_settings
from assetsig.common.database import Database
from assetsig.common.exceptions import AssetSigError
from assetsig.common.health import HealthChecker
from assetsig.common.logging import bind_context, clear_context, get_logger, setup_logging
from assetsig.common.metrics import API_REQUEST_DURATION, API_REQUESTS, set_app_info
from assetsig.core.signature import ensure_digest_available

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Initializes and cleans up resources. A database handle passed to
    ``create_app`` is used as-is and left open on shutdown.
    """
    settings: Settings = app.state.settings

    setup_logging(
        settings.logging,
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )
    ensure_digest_available()

    set_app_info(
        version=settings.app_version,
        environment=settings.environment,
    )

    logger.info(
        "Starting AssetSig API",
        version=settings.app_version,
        environment=settings.environment,
    )

    owns_database = app.state.database is None
    if owns_database:
        app.state.database = Database.from_settings(settings.database)
        app.state.health_checker = HealthChecker(
            service_name="assetsig-api",
            version=settings.app_version,
            database=app.state.database,
        )
        logger.info("Database initialized", dialect=app.state.database.dialect)

    yield

    logger.info("Shutting down AssetSig API")

    if owns_database:
        await app.state.database.close()
        app.state.database = None
        logger.info("Database closed")


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
) -> FastAPI:
    """Create FastAPI application instance.

    Args:
        settings: Application settings. Uses global settings if not provided.
        database: Pre-built data-access handle. Built at startup if not provided.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="AssetSig API",
        description="Read-only asset inventory with content signatures",
        version=settings.app_version,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.health_checker = (
        HealthChecker(
            service_name="assetsig-api",
            version=settings.app_version,
            database=database,
        )
        if database is not None
        else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept"],
        expose_headers=[TOTAL_COUNT_HEADER],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        bind_context(request_id=request_id)

        start = time.perf_counter()

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start

            API_REQUESTS.labels(
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code,
            ).inc()
            API_REQUEST_DURATION.labels(
                method=request.method,
                endpoint=request.url.path,
            ).observe(duration)

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )

            return response

        except Exception as e:
            duration = time.perf_counter() - start
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_ms=round(duration * 1000, 2),
            )
            raise
        finally:
            clear_context()

    # Exception handlers
    @app.exception_handler(AssetSigError)
    async def assetsig_exception_handler(
        request: Request,
        exc: AssetSigError,
    ) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details,
            cause=str(exc.cause) if exc.cause else None,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        logger.warning(
            "Validation error",
            errors=exc.errors(),
        )
        return JSONResponse(
            status_code=422,
            content={
                "error": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(
            "Unhandled error",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An internal error occurred",
            },
        )

    app.include_router(admin.router)
    app.include_router(assets.router, prefix=settings.api.prefix)

    @app.get("/")
    async def root() -> dict:
        return {
            "name": "AssetSig API",
            "version": settings.app_version,
            "docs": "/docs" if not settings.is_production else None,
        }

    return app


# Create app instance for uvicorn
app = create_app()


def run() -> NoReturn:
    """Run the API server."""
    import uvicorn

    settings = get_settings()

    try:
        uvicorn.run(
            "assetsig.api.main:app",
            host=settings.api.host,
            port=settings.api.port,
            workers=settings.api.workers if not settings.api.reload else 1,
            reload=settings.api.reload,
            log_level="info",
            access_log=False,  # We use our own logging
        )
        sys.exit(0)
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        logger.error("API failed to start", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    run()
