from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.middleware import logging_middleware, setup_exception_handlers
from .api.routes import api_router
from .config import settings
from .utils.logging import setup_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs or settings.is_production,
        enable_file_logging=settings.logging_enabled,
        log_dir=settings.log_dir,
        max_log_size_mb=settings.max_log_size_mb,
        backup_count=settings.log_backup_count,
    )
    logger.info(
        "Starting API",
        app_name=settings.app_name,
        env=settings.env,
        port=settings.api_port,
    )

    yield

    # Shutdown
    logger.info("Shutting down API", app_name=settings.app_name)


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware and routes wired up."""
    application = FastAPI(
        title=f"{settings.app_name} API",
        description="Image conversion, favicon, Open Graph and theme tools for developers",
        version=__version__,
        openapi_url=f"{settings.api_prefix}/openapi.json",
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Configure CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Correlation-ID"],
    )

    application.middleware("http")(logging_middleware)
    setup_exception_handlers(application)

    application.include_router(api_router, prefix=settings.api_prefix)
    return application


app = create_app()
