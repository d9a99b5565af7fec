"""
Base adapter for cup tournaments served by OpenLigaDB.

Champions League, World Cup and Euro each live under a single league
shortcut whose current group is the running round. The round is read from
the German group name:

    "Gruppe A", "Gruppenphase 2", "Ligaphase"    group (90 minutes)
    "Achtelfinale", "Halbfinale", "Finale", ...  knockout (extra time)

Subclasses provide the league shortcut, season, competition and colours.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Callable, Optional

from ..core.models import Game, GameDetails, RoundType, TournamentGame
from ..providers.openligadb import OpenLigaDBClient
from .soccer import SoccerAdapter

logger = logging.getLogger(__name__)

# Checked in order; "finale" is contained in every other knockout name
KNOCKOUT_ROUNDS: list[tuple[str, RoundType]] = [
    ("spiel um platz 3", "third_place"),
    ("sechzehntelfinale", "round_of_32"),
    ("achtelfinale", "round_of_16"),
    ("viertelfinale", "quarter_finals"),
    ("halbfinale", "semi_finals"),
    ("finale", "final"),
    ("playoff", "playoff"),
    ("zwischenrunde", "playoff"),
]

_GROUP_LETTER = re.compile(r"gruppe ([a-z])\b", re.IGNORECASE)


def parse_round(group_name: str) -> tuple[RoundType, Optional[str]]:
    """
    Round type and group label from an OpenLigaDB group name.

    Unknown names count as group matches, so they never get extra time.

    Returns:
        (round_type, group) where group is e.g. "Gruppe A" or None
    """
    name = (group_name or "").lower()
    if "gruppe" in name or "ligaphase" in name:
        letter = _GROUP_LETTER.search(name)
        return "group", f"Gruppe {letter.group(1).upper()}" if letter else None
    for keyword, round_type in KNOCKOUT_ROUNDS:
        if keyword in name:
            return round_type, None
    return "group", None


class TournamentAdapter(SoccerAdapter):
    """
    One OpenLigaDB tournament: current round only, no table, no stats.

    Subclasses set ``sport``, ``competition``, ``competition_name`` and
    either ``league_shortcut``/``tournament_season`` or override
    ``default_league``/``default_season``.
    """

    competition: str = ""
    competition_name: str = ""
    default_color = "0066CC"
    league_shortcut: str = ""
    tournament_season: int = 0
    # Lower-case group name keyword -> display label; unmatched rounds keep the German name
    round_names: dict[str, str] = {}

    def __init__(
        self,
        client: OpenLigaDBClient | None = None,
        *,
        league: Optional[str] = None,
        season: Optional[int] = None,
        now: Callable[[], datetime] | None = None,
    ):
        super().__init__(now=now)
        self.client = client or OpenLigaDBClient()
        self._league = league
        self._season = season

    def default_season(self) -> int:
        return self.tournament_season

    def default_league(self) -> str:
        return self.league_shortcut

    @property
    def season(self) -> int:
        return self._season if self._season is not None else self.default_season()

    @property
    def league(self) -> str:
        return self._league or self.default_league()

    # ==========================================================================
    # Provider Operations
    # ==========================================================================

    async def fetch_scoreboard(self) -> list[Game]:
        """Every match of the tournament's current round."""
        group = await self.client.get_current_group(self.league)
        matches = await self.client.get_matchday(self.league, self.season, group["groupOrderID"])
        games: list[Game] = [self.transform_match(m) for m in matches]
        logger.debug(f"Fetched {len(games)} {self.league} matches for round {group.get('groupName')}")
        return games

    async def fetch_game_details(self, game_id: str) -> GameDetails:
        match = await self.client.get_match(game_id)
        return GameDetails(game=self.transform_match(match), stats=None)

    async def close(self) -> None:
        await self.client.close()

    # ==========================================================================
    # Competition
    # ==========================================================================

    def transform_match(self, match: dict[str, Any]) -> TournamentGame:
        game = super().transform_match(match)
        group_name = (match.get("group") or {}).get("groupName") or ""
        round_type, group = parse_round(group_name)
        return TournamentGame(
            **dict(game),
            round=self.round_label(group_name),
            round_type=round_type,
            group=group,
        )

    def round_label(self, group_name: str) -> Optional[str]:
        name = group_name.lower()
        for keyword, label in self.round_names.items():
            if keyword in name:
                return label
        return group_name or None

    def can_have_extra_time(self, match: dict[str, Any]) -> bool:
        round_type, _ = parse_round((match.get("group") or {}).get("groupName") or "")
        return round_type != "group"

    def competition_for(self, match: dict[str, Any]) -> str:
        return self.competition

    def get_competition_name(self, game: Game) -> str:
        return getattr(game, "round", None) or self.competition_name
