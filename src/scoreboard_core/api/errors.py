"""
Unified error handling for consistent API error responses.

Every error leaves the service in the same envelope:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable message",
        "detail": "Optional additional context"
    }
}

Core exceptions (plugin and provider failures) are translated here, so
routes can let them propagate.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from ..core.errors import (
    ActivationError,
    DuplicatePluginError,
    PluginError,
    PluginLoadError,
    UnknownPluginError,
)
from ..core.http import FetchError, RateLimitError

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    code: str,
    message: str,
    detail: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, "detail": detail}},
        headers=headers,
    )


class APIError(HTTPException):
    """Base API error carrying the envelope fields."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        detail: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.code = code
        self.message = message
        self.error_detail = detail
        super().__init__(
            status_code=status_code,
            detail={"code": code, "message": message, "detail": detail},
            headers=headers,
        )


class NoActivePluginError(APIError):
    """A sport-specific endpoint was called before any sport was activated (409)."""

    def __init__(self):
        super().__init__(
            status_code=409,
            code="NO_ACTIVE_PLUGIN",
            message="No sport is active",
            detail="Activate a plugin via POST /api/v1/plugins/{id}/activate",
        )


class ValidationError(APIError):
    """Invalid input (400)."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            status_code=400,
            code="VALIDATION_ERROR",
            message=message,
            detail=detail,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(exc.status_code, exc.code, exc.message, exc.error_detail, exc.headers)


async def plugin_error_handler(request: Request, exc: PluginError) -> JSONResponse:
    if isinstance(exc, UnknownPluginError):
        return error_response(404, "UNKNOWN_PLUGIN", str(exc), f"plugin_id={exc.plugin_id}")
    if isinstance(exc, DuplicatePluginError):
        return error_response(409, "DUPLICATE_PLUGIN", str(exc), f"plugin_id={exc.plugin_id}")

    if isinstance(exc, ActivationError):
        code = "ACTIVATION_FAILED"
    elif isinstance(exc, PluginLoadError):
        code = "PLUGIN_LOAD_FAILED"
    else:
        code = "PLUGIN_ERROR"
    logger.error(f"Plugin error for {exc.plugin_id}: {exc}")
    return error_response(503, code, str(exc), f"plugin_id={exc.plugin_id}")


async def fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitError):
        headers = {"Retry-After": str(exc.retry_after)}
    # Upstream 5xx are our 502; upstream 404/429 pass through
    status_code = exc.status_code if exc.status_code in (404, 429) else 502
    logger.warning(f"Provider error ({exc.code}): {exc.message}")
    return error_response(status_code, exc.code, exc.message, "Error from sports data provider", headers)
