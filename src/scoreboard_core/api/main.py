"""
FastAPI application for the scoreboard core.

Thin HTTP surface over the plugin registry for display clients:
- Plugin discovery and activation
- Scoreboard and game details of the active sport
- Live league table (league sports only)
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

import msgspec
from fastapi import FastAPI, Request, Response
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from ..core.config import Settings, get_settings
from ..core.errors import PluginError
from ..core.http import FetchError
from ..plugins import PluginRegistry, build_registry
from .errors import APIError, api_error_handler, fetch_error_handler, plugin_error_handler
from .routers import games, plugins

logger = logging.getLogger(__name__)


class MSGSpecResponse(Response):
    """Response class using msgspec for JSON serialization."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        if content is None:
            return b""
        return msgspec.json.encode(content)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[PluginRegistry] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        registry: Pre-built registry, mainly for tests; built from the
            plugin definitions at startup otherwise

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: build the registry and activate the default plugin.
        Shutdown: deactivate and unload every loaded plugin.
        """
        logger.info(f"Starting {settings.app_name} v{settings.app_version}...")
        app.state.settings = settings
        app.state.registry = registry if registry is not None else build_registry(settings)

        if settings.default_plugin:
            try:
                await app.state.registry.activate(settings.default_plugin)
            except PluginError as e:
                # Serve anyway; clients can activate another sport
                logger.error(f"Default plugin {settings.default_plugin} unavailable: {e}")

        yield

        logger.info(f"Shutting down {settings.app_name}...")
        await app.state.registry.unload_all()

    app = FastAPI(
        title=settings.app_name,
        description="Live scores, clocks and tables for pluggable sports",
        version=settings.app_version,
        default_response_class=MSGSpecResponse,
        lifespan=lifespan,
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def add_performance_headers(request: Request, call_next):
        """Add timing header; live data is never cached downstream."""
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"
        if request.url.path.startswith(settings.api_prefix):
            response.headers.setdefault("Cache-Control", "no-cache, no-store, must-revalidate")
        return response

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(PluginError, plugin_error_handler)
    app.add_exception_handler(FetchError, fetch_error_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with consistent format."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        show_detail = settings.debug and settings.environment != "production"
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "detail": str(exc) if show_detail else None,
                }
            },
        )

    @app.get("/health", tags=["health"])
    async def health_check(request: Request):
        """Basic health check with the active sport."""
        return {
            "status": "healthy",
            "active_plugin": request.app.state.registry.active_id,
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    app.include_router(plugins.router, prefix=f"{settings.api_prefix}/plugins", tags=["plugins"])
    app.include_router(games.router, prefix=settings.api_prefix, tags=["games"])

    return app
