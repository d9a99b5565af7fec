"""
Shared HTTP client infrastructure for all provider integrations.

Provides BaseApiClient with rate limiting, retries, and error handling.
Used by the ESPN and OpenLigaDB clients behind the sport adapters.

Usage:
    class MyClient(BaseApiClient):
        BASE_URL = "https://api.example.com"

        def __init__(self):
            super().__init__(requests_per_minute=60)

        async def get_data(self) -> dict:
            return await self._get("/data")
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

from .errors import ScoreboardError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class FetchError(ScoreboardError):
    """A provider request failed or returned a non-success status."""

    def __init__(
        self,
        message: str,
        code: str = "FETCH_ERROR",
        status_code: int = 502,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class RateLimitError(FetchError):
    """Exception raised when the provider rate limit is exceeded."""

    def __init__(self, message: str, retry_after: int = 60):
        super().__init__(message, code="RATE_LIMITED", status_code=429)
        self.retry_after = retry_after


def parse_retry_after(value: str | None, now: datetime | None = None, default: int = 60) -> int:
    """
    Seconds to wait from a Retry-After header.

    Accepts delta-seconds ("120") or an HTTP-date
    ("Wed, 21 Oct 2026 07:28:00 GMT"); anything else yields ``default``.
    """
    if not value:
        return default
    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return default
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0, int((retry_at - now).total_seconds()))


# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------

class RateLimiter:
    """Simple token bucket rate limiter for async API calls."""

    def __init__(self, requests_per_minute: int = 600):
        self.delay = 60.0 / requests_per_minute
        self._last_request = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until we can make a request."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request
            if elapsed < self.delay:
                await asyncio.sleep(self.delay - elapsed)
            self._last_request = time.monotonic()


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------

class BaseApiClient:
    """
    Async HTTP client base with rate limiting and retries.

    Subclasses set BASE_URL and add provider-specific methods.
    Use as an async context manager:

        async with MyClient() as client:
            data = await client._get("/endpoint")

    Or with lazy initialisation (for long-lived adapters):

        client = MyClient()
        data = await client._get("/endpoint")  # client auto-creates on first use
        await client.close()

    Tests pass an ``httpx.MockTransport`` through ``transport``.
    """

    BASE_URL: str = ""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        requests_per_minute: int = 600,
        timeout: float = 10.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._default_headers = headers or {}
        self._default_params = params or {}
        self._rate_limiter = RateLimiter(requests_per_minute)
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # -- Lifecycle -----------------------------------------------------------

    async def __aenter__(self) -> "BaseApiClient":
        _ = self.client
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the HTTP client, lazily creating it if needed."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._default_headers,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # -- HTTP methods --------------------------------------------------------

    async def _get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make a GET request with retries and rate limiting."""
        return await self._request("GET", path, params=params, headers=headers)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Make an HTTP request with retry logic and rate limiting.

        Raises:
            RateLimitError: If the provider returns 429 and retries are exhausted
            FetchError: If the request fails after retries
        """
        merged_params = {**self._default_params, **(params or {})}
        request_headers = {**self._default_headers, **(headers or {})}
        last_error: FetchError | None = None

        for attempt in range(self._max_retries):
            try:
                await self._rate_limiter.acquire()
                response = await self.client.request(
                    method=method,
                    url=path,
                    params=merged_params,
                    headers=request_headers,
                )

                if response.status_code == 429:
                    retry_after = parse_retry_after(response.headers.get("retry-after"))
                    if attempt < self._max_retries - 1:
                        wait = min(retry_after, 30)
                        logger.warning(
                            f"Rate limited by {self._base_url}, waiting {wait}s (attempt {attempt + 1})"
                        )
                        await asyncio.sleep(wait)
                        continue
                    raise RateLimitError(
                        f"Provider rate limit exceeded. Try again in {retry_after} seconds.",
                        retry_after=retry_after,
                    )

                response.raise_for_status()
                try:
                    return response.json()
                except ValueError as e:
                    raise FetchError(f"Invalid JSON from {path}: {e}") from e

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                last_error = FetchError(
                    f"HTTP {status} from {path}: {e.response.text[:200]}",
                    code="NOT_FOUND" if status == 404 else "FETCH_ERROR",
                    status_code=status,
                )
                # Client errors (except 429) are not retryable
                if 400 <= status < 500:
                    raise last_error from e
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning(f"Request to {path} failed, retrying in {wait}s: {e}")
                    await asyncio.sleep(wait)

            except httpx.RequestError as e:
                last_error = FetchError(f"Request to {path} failed: {e!s}")
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning(f"Request error, retrying in {wait}s: {e}")
                    await asyncio.sleep(wait)

        raise last_error or FetchError("Request failed after retries")
