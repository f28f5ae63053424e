# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the That's Whatsupp backend API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload        (development)
#   thats-whatsupp-backend               (production, see app/server.py)
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.cors import OriginRegistry
from app.exceptions import (
    BackendException,
    backend_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.middleware import OriginGateMiddleware, RequestContextMiddleware
from app.routers import chat, health, supplements
from core.services.supplement_service import SupplementService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: report listen port and allow-list
    - Shutdown: log once uvicorn has drained connections
    """
    settings: Settings = app.state.settings
    registry: OriginRegistry = app.state.origin_registry

    logger.info(f"Server running on port {settings.PORT} ({settings.ENVIRONMENT})")
    logger.info(f"Allowed origins: {registry.describe()}")

    yield

    logger.info("HTTP server closed.")


def create_app(
    settings: Settings | None = None,
    supplement_service: SupplementService | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; loaded from the environment if omitted
        supplement_service: Supplement service; built from settings if omitted

    Raises:
        pydantic.ValidationError: If required configuration is missing
        SupabaseClientError: If the datastore client cannot be created
    """
    settings = settings or get_settings()
    registry = OriginRegistry.from_string(settings.ALLOWED_ORIGINS)

    if supplement_service is None:
        client = SupabaseClient.from_settings(settings)
        # Bad datastore credentials must stop the process before it serves
        client.get_client()
        supplement_service = SupplementService(
            client,
            search_limit=settings.SEARCH_RESULT_LIMIT,
        )

    app = FastAPI(
        title="That's Whatsupp API",
        description="Backend for the supplement search and recommendation frontend.",
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Health", "description": "Health and version checks"},
            {"name": "Supplements", "description": "Filters and supplement search"},
            {"name": "Chat", "description": "Placeholder chat interface"},
        ],
    )

    app.state.settings = settings
    app.state.origin_registry = registry
    app.state.supplements = supplement_service

    # =========================================================================
    # Middleware
    # =========================================================================
    # Last added runs first: request context wraps the CORS gate.

    app.add_middleware(OriginGateMiddleware, registry=registry)
    app.add_middleware(RequestContextMiddleware)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(BackendException, backend_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(health.router, tags=["Health"])
    app.include_router(supplements.router, prefix="/api", tags=["Supplements"])
    app.include_router(chat.router, prefix="/api", tags=["Chat"])

    @app.get("/", tags=["Root"], response_class=PlainTextResponse)
    async def root():
        return "Backend is running"

    allow_head_on_get_routes(app)

    return app


def allow_head_on_get_routes(app: FastAPI) -> None:
    """Answer HEAD wherever GET is served."""
    for route in app.routes:
        if isinstance(route, APIRoute) and "GET" in route.methods:
            route.methods.add("HEAD")


def build_app() -> FastAPI:
    """Load settings, configure logging and build the process-wide app."""
    settings = get_settings()
    configure_logging(settings)
    return create_app(settings)


app = build_app()
