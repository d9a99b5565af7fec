"""
ESPN site API client - NFL scoreboard, schedule weeks and game summaries.

Returns the raw ESPN JSON; parsing lives in the NFL adapter.
"""

from __future__ import annotations

from typing import Any

from ..core.http import BaseApiClient


class ESPNClient(BaseApiClient):
    """Fetches NFL data from ESPN's public site API."""

    BASE_URL = "https://site.api.espn.com/apis/site/v2/sports/football/nfl"

    def __init__(self, *, base_url: str | None = None, **kwargs: Any):
        super().__init__(
            base_url=base_url,
            headers={"Accept": "application/json"},
            **kwargs,
        )

    async def get_scoreboard(self) -> dict[str, Any]:
        """Current week's scoreboard."""
        return await self._get("/scoreboard")

    async def get_week(self, year: int, season_type: int, week: int) -> dict[str, Any]:
        """Scoreboard for a specific week (season_type 1=pre, 2=regular, 3=post)."""
        return await self._get(
            "/scoreboard",
            params={"dates": year, "seasontype": season_type, "week": week},
        )

    async def get_summary(self, event_id: str) -> dict[str, Any]:
        """Game summary with header, boxscore and situation."""
        return await self._get("/summary", params={"event": event_id})
