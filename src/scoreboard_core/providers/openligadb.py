"""
OpenLigaDB client - raw match, matchday and table data for German football.

Extends BaseApiClient for HTTP infrastructure. Responses are cached in memory
with per-endpoint TTLs, since OpenLigaDB allows roughly 1000 requests/hour:

- current matchday group: 5 minutes
- matchday / single match: 15 seconds (live polling cadence)
- league table: 5 minutes

Transforming matches into canonical games is the soccer adapter's job.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.cache import SimpleCache
from ..core.config import Settings
from ..core.http import BaseApiClient, FetchError

logger = logging.getLogger(__name__)


class OpenLigaDBClient(BaseApiClient):
    """Fetches OpenLigaDB JSON for one or more leagues."""

    BASE_URL = "https://api.openligadb.de"

    def __init__(
        self,
        *,
        base_url: str | None = None,
        ttl_current_group: int = 300,
        ttl_matchday: int = 15,
        ttl_table: int = 300,
        **kwargs: Any,
    ):
        super().__init__(
            base_url=base_url,
            headers={"Accept": "application/json"},
            **kwargs,
        )
        self._cache = SimpleCache(default_ttl=ttl_matchday)
        self._ttl_current_group = ttl_current_group
        self._ttl_matchday = ttl_matchday
        self._ttl_table = ttl_table

    async def _cached_get(self, path: str, ttl: int) -> Any:
        cached = self._cache.get(path)
        if cached is not None:
            logger.debug(f"[Cache HIT] {path}")
            return cached

        logger.debug(f"[Cache MISS] Fetching {path} from OpenLigaDB")
        data = await self._get(path)
        if data is not None:
            self._cache.set(data, path, ttl=ttl)
        return data

    async def get_current_group(self, league: str) -> dict[str, Any]:
        """Current matchday group, e.g. {"groupName": "8. Spieltag", "groupOrderID": 8}."""
        data = await self._cached_get(f"/getcurrentgroup/{league}", self._ttl_current_group)
        if not isinstance(data, dict) or "groupOrderID" not in data:
            raise FetchError(f"OpenLigaDB returned no current group for {league}")
        return data

    async def get_matchday(self, league: str, season: int, matchday: int) -> list[dict[str, Any]]:
        """All matches of one matchday."""
        data = await self._cached_get(
            f"/getmatchdata/{league}/{season}/{matchday}", self._ttl_matchday
        )
        return data if isinstance(data, list) else []

    async def get_match(self, match_id: str) -> dict[str, Any]:
        """A single match; unknown ids raise FetchError."""
        data = await self._cached_get(f"/getmatchdata/{match_id}", self._ttl_matchday)
        if not isinstance(data, dict) or not data.get("matchID"):
            raise FetchError(
                f"OpenLigaDB has no match {match_id}",
                code="NOT_FOUND",
                status_code=404,
            )
        return data

    async def get_table(self, league: str, season: int) -> list[dict[str, Any]]:
        """Official table rows, addressed as /getbltable/{league}/{season}."""
        data = await self._cached_get(f"/getbltable/{league}/{season}", self._ttl_table)
        return data if isinstance(data, list) else []

    def get_cache_stats(self) -> dict[str, int]:
        return self._cache.get_stats()

    def clear_cache(self) -> None:
        self._cache.clear()


def client_from_settings(settings: Settings) -> OpenLigaDBClient:
    """OpenLigaDB client configured from application settings."""
    return OpenLigaDBClient(
        base_url=settings.openligadb_base_url,
        ttl_current_group=settings.cache_ttl_current_group,
        ttl_matchday=settings.cache_ttl_matchday,
        ttl_table=settings.cache_ttl_table,
        timeout=settings.http_timeout,
        max_retries=settings.http_max_retries,
        requests_per_minute=settings.requests_per_minute,
    )
