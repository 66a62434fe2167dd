"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alignviz.api.exceptions import register_exception_handlers
from alignviz.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from alignviz.api.routers import alignment, health
from alignviz.config import get_settings, validate_config
from alignviz.logging_config import configure_logging, get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    configure_logging()
    logger.info("Starting Alignment Visualization Server", environment=settings.environment)

    # Validate configuration (strict mode in production)
    validate_config(settings, strict=settings.is_production)
    logger.info("Configuration validated")

    yield

    logger.info("Shutting down Alignment Visualization Server")


API_DESCRIPTION = """
# Alignment Visualization API

Exports the semantic alignment of a worksheet (the mapping of its columns
onto an ontology) as an indexed document for drawing the schema-mapping diagram.

## Core Concepts

- **Anchor**: a slot per visible header column, present whether or not the column is mapped
- **Holder link**: a link into a leaf column node
- **Specialization link**: a link that refines another link, referenced by id
"""

OPENAPI_TAGS = [
    {
        "name": "health",
        "description": "Health check endpoints for monitoring"
    },
    {
        "name": "alignment",
        "description": "Alignment visualization export"
    },
]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=API_DESCRIPTION,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # Configure middleware (order matters - first added = last executed)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
    app.include_router(alignment.router, prefix=settings.api_prefix, tags=["alignment"])

    register_exception_handlers(app)

    return app


# Create the app instance
app = create_app()
