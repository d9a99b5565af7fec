"""
Bundesliga adapter - current matchday of the Bundesliga and the DFB-Pokal.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ...adapters.soccer import SoccerAdapter, current_season
from ...core.models import Game, GameDetails, LiveTableEntry, SoccerGame, TableEntry
from ...providers.openligadb import OpenLigaDBClient
from ...standings import calculate_live_table

logger = logging.getLogger(__name__)

BUNDESLIGA = "bundesliga"
DFB_POKAL = "dfb-pokal"

# OpenLigaDB team id -> primary colour
TEAM_COLORS: dict[int, str] = {
    40: "DC143C",  # FC Bayern München
    7: "FDE100",  # Borussia Dortmund
    9: "1B75BB",  # FC Schalke 04
    16: "DC0028",  # VfB Stuttgart
    6: "E32221",  # Bayer 04 Leverkusen
    91: "000000",  # Eintracht Frankfurt
    54: "005CA9",  # Hertha BSC
    1635: "DD0741",  # RB Leipzig
    175: "1961B5",  # TSG 1899 Hoffenheim
    112: "000000",  # SC Freiburg
}


class BundesligaAdapter(SoccerAdapter):
    """German football via OpenLigaDB."""

    sport = BUNDESLIGA
    default_color = "D20515"
    team_colors = TEAM_COLORS

    def __init__(
        self,
        client: OpenLigaDBClient | None = None,
        *,
        league: str = "bl1",
        cup_league: str = "dfb",
        season: Optional[int] = None,
        now: Callable[[], datetime] | None = None,
    ):
        super().__init__(now=now)
        self.client = client or OpenLigaDBClient()
        self.league = league
        self.cup_league = cup_league
        self._season = season

    @property
    def season(self) -> int:
        return self._season if self._season is not None else current_season(self._now())

    # ==========================================================================
    # Provider Operations
    # ==========================================================================

    async def _fetch_current_matchday(self, league: str) -> list[SoccerGame]:
        group = await self.client.get_current_group(league)
        matches = await self.client.get_matchday(league, self.season, group["groupOrderID"])
        return [self.transform_match(m) for m in matches]

    async def fetch_scoreboard(self) -> list[Game]:
        """Current Bundesliga matchday followed by the current DFB-Pokal round."""
        games: list[Game] = []
        for league in (self.league, self.cup_league):
            games.extend(await self._fetch_current_matchday(league))
        logger.debug(f"Fetched {len(games)} matches for season {self.season}")
        return games

    async def fetch_game_details(self, game_id: str) -> GameDetails:
        match = await self.client.get_match(game_id)
        return GameDetails(game=self.transform_match(match), stats=None)

    async def fetch_table(self, season: Optional[int] = None) -> list[TableEntry]:
        """Official Bundesliga table, in official order."""
        rows = await self.client.get_table(self.league, season or self.season)
        return [TableEntry.model_validate(row) for row in rows]

    async def fetch_live_table(self, season: Optional[int] = None) -> list[LiveTableEntry]:
        """
        Official table projected forward with the current matchday's scores.

        The current matchday belongs to the running season, so a past
        season's table is returned in official order with nothing projected.
        """
        table = await self.fetch_table(season)
        if season is not None and season != self.season:
            return calculate_live_table(table, [])
        games = await self._fetch_current_matchday(self.league)
        return calculate_live_table(table, games)

    async def close(self) -> None:
        await self.client.close()

    # ==========================================================================
    # Competition
    # ==========================================================================

    def can_have_extra_time(self, match: dict[str, Any]) -> bool:
        return match.get("leagueShortcut") == self.cup_league

    def competition_for(self, match: dict[str, Any]) -> str:
        return DFB_POKAL if match.get("leagueShortcut") == self.cup_league else BUNDESLIGA

    def get_competition_name(self, game: Game) -> str:
        return "Bundesliga" if game.competition == BUNDESLIGA else "DFB-Pokal"
