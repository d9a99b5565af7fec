"""
NFL adapter - ESPN site API scoreboard, summaries and box-score stats.

ESPN payloads are nested and loosely typed (scores arrive as strings, most
keys are optional), so every lookup below tolerates missing fields and
falls back to a neutral value.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

from ...adapters.base import SportAdapter
from ...core.http import FetchError
from ...core.models import (
    Game,
    GameClock,
    GameDetails,
    GameSituation,
    GameStats,
    NFLGame,
    PlayerStats,
    ScoreChangeResult,
    Team,
    TeamStats,
)
from ...core.types import CelebrationType, GameStatus
from ...providers.espn import ESPNClient
from ...scoring import detect_american_football_score

logger = logging.getLogger(__name__)

SEASON_PRESEASON = 1
SEASON_REGULAR = 2
SEASON_POSTSEASON = 3

# Regular season weeks; week 18 is the last before the Wild Card round
LAST_REGULAR_WEEK = 18
LAST_PLAYOFF_WEEK = 5

_PLAYOFF_ROUNDS = {
    1: "WILD CARD",
    2: "DIVISIONAL ROUND",
    3: "CONFERENCE CHAMPIONSHIP",
    4: "PRO BOWL",
    5: "SUPER BOWL",
}

_SLUG_ROUNDS = (
    ("super-bowl", "SUPER BOWL"),
    ("conference", "CONFERENCE CHAMPIONSHIP"),
    ("divisional", "DIVISIONAL ROUND"),
    ("wild-card", "WILD CARD"),
)

_PERIOD_NAMES = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th", 5: "OT"}

_INT_PREFIX = re.compile(r"\s*(-?\d+)")
_EFFICIENCY = re.compile(r"(\d+)[-/](\d+)")


# =============================================================================
# Parsing helpers
# =============================================================================


def _to_int(value: Any, default: int = 0) -> int:
    """Leading integer of an ESPN value ("7", "2-14", 31), else ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if match:
            return int(match.group(1))
    return default


def get_period_name(period: int) -> str:
    if period > 5:
        return f"OT{period - 4}"
    return _PERIOD_NAMES.get(period, "")


def get_season_name(season_type: int, week: int, slug: Optional[str] = None) -> str:
    """Headline for the round: GAME DAY, WILD CARD, SUPER BOWL, ..."""
    if slug:
        slug = slug.lower()
        for marker, name in _SLUG_ROUNDS:
            if marker in slug:
                return name

    if season_type == SEASON_PRESEASON:
        return "PRESEASON"
    if season_type == SEASON_POSTSEASON:
        return _PLAYOFF_ROUNDS.get(week, "PLAYOFFS")
    return "GAME DAY"


def parse_status(status: Optional[dict[str, Any]]) -> GameStatus:
    """
    Map an ESPN status block onto the canonical status.

    End-of-quarter breaks and weather delays stay ``in_progress``; postponed
    games have not been played and are ``scheduled``.
    """
    status_type = (status or {}).get("type") or {}
    state = status_type.get("state")
    description = (status_type.get("description") or "").lower()

    if "postponed" in description:
        return GameStatus.scheduled
    if state == "pre":
        return GameStatus.scheduled
    if state == "post":
        return GameStatus.final
    if "halftime" in description:
        return GameStatus.halftime
    if state == "in":
        return GameStatus.in_progress
    return GameStatus.scheduled


def parse_team(competitor: dict[str, Any]) -> Team:
    team = competitor.get("team") or {}
    return Team(
        id=str(team.get("id") or ""),
        name=team.get("name") or "Unknown",
        abbreviation=team.get("abbreviation") or "???",
        display_name=team.get("displayName") or "Unknown Team",
        short_display_name=team.get("shortDisplayName") or "Unknown",
        logo=team.get("logo") or "",
        color=team.get("color") or "333333",
        alternate_color=team.get("alternateColor") or "666666",
        score=max(0, _to_int(competitor.get("score"))),
    )


def parse_situation(situation: Optional[dict[str, Any]]) -> Optional[GameSituation]:
    if not situation:
        return None
    last_play = situation.get("lastPlay") or {}
    return GameSituation(
        down=_to_int(situation.get("down")),
        distance=_to_int(situation.get("distance")),
        yard_line=_to_int(situation.get("yardLine")),
        possession=str(situation.get("possession") or ""),
        possession_text=situation.get("possessionText") or "",
        is_red_zone=bool(situation.get("isRedZone")),
        short_down_distance_text=(
            situation.get("shortDownDistanceText") or situation.get("downDistanceText") or ""
        ),
        last_play_type=(last_play.get("type") or {}).get("text") or "",
    )


def parse_clock(status: Optional[dict[str, Any]]) -> GameClock:
    status = status or {}
    period = _to_int(status.get("period"))
    return GameClock(
        display_value=status.get("displayClock") or "0:00",
        period=period,
        period_name=get_period_name(period),
    )


def _home_and_away(competition: dict[str, Any]) -> tuple[Optional[dict], Optional[dict]]:
    competitors = competition.get("competitors") or []
    home = next((c for c in competitors if c.get("homeAway") == "home"), None)
    away = next((c for c in competitors if c.get("homeAway") == "away"), None)
    return home, away


def parse_event(event: dict[str, Any], season_type: int, week: int) -> Optional[NFLGame]:
    """One scoreboard event; None if it lacks a competition or either side."""
    competitions = event.get("competitions") or []
    if not competitions:
        return None
    competition = competitions[0]
    home, away = _home_and_away(competition)
    if home is None or away is None:
        return None

    event_season = event.get("season") or {}
    event_week = (event.get("week") or {}).get("number") or week
    event_season_type = event_season.get("type") or season_type
    broadcasts = competition.get("broadcasts") or [{}]
    broadcast_names = broadcasts[0].get("names") or []

    return NFLGame(
        id=str(event.get("id")),
        status=parse_status(event.get("status")),
        home_team=parse_team(home),
        away_team=parse_team(away),
        clock=parse_clock(event.get("status")),
        situation=parse_situation(competition.get("situation")),
        venue=(competition.get("venue") or {}).get("fullName"),
        broadcast=broadcast_names[0] if broadcast_names else None,
        start_time=event.get("date"),
        season_type=event_season_type,
        week=event_week,
        season_name=get_season_name(event_season_type, event_week, event_season.get("slug")),
    )


def _season_info(data: dict[str, Any]) -> tuple[int, int, Optional[int]]:
    """(season type, week, year) from the top of a scoreboard payload."""
    leagues = data.get("leagues") or [{}]
    season = data.get("season") or leagues[0].get("season") or {}
    season_type = _to_int(season.get("type"), SEASON_REGULAR) or SEASON_REGULAR
    week = _to_int((data.get("week") or {}).get("number"), 1) or 1
    year = season.get("year")
    return season_type, week, _to_int(year) if year is not None else None


def parse_scoreboard(data: dict[str, Any]) -> list[NFLGame]:
    season_type, week, _ = _season_info(data)
    games = []
    for event in data.get("events") or []:
        game = parse_event(event, season_type, week)
        if game is not None:
            games.append(game)
    return games


# =============================================================================
# Stats
# =============================================================================


def parse_efficiency_percentage(efficiency: str) -> int:
    """'3-5' or '3/5' -> 60; unparseable or zero attempts -> 0."""
    match = _EFFICIENCY.search(efficiency or "")
    if not match:
        return 0
    made, attempts = int(match.group(1)), int(match.group(2))
    if attempts == 0:
        return 0
    return round(made / attempts * 100)


def _team_stats(
    player_stats: Optional[dict[str, Any]],
    team_stats: Optional[dict[str, Any]],
    team_id: str,
) -> TeamStats:
    statistics = (team_stats or {}).get("statistics") or []

    def find_stat(name: str) -> str:
        stat = next(
            (s for s in statistics if (s.get("name") or "").lower() == name.lower()),
            None,
        )
        return (stat or {}).get("displayValue") or "0"

    def leader(category: str) -> Optional[PlayerStats]:
        categories = (player_stats or {}).get("statistics") or []
        found = next(
            (c for c in categories if (c.get("name") or "").lower() == category),
            None,
        )
        leaders = (found or {}).get("leaders") or []
        if not leaders:
            return None
        athlete = leaders[0].get("athlete") or {}
        return PlayerStats(
            name=athlete.get("shortName") or athlete.get("displayName") or "Unknown",
            stats=leaders[0].get("displayValue") or "",
        )

    third_down = find_stat("thirdDownEff")
    red_zone = find_stat("redZoneEff")

    return TeamStats(
        team_id=team_id,
        passing=leader("passing"),
        rushing=leader("rushing"),
        receiving=leader("receiving"),
        total_yards=_to_int(find_stat("totalYards")),
        turnovers=_to_int(find_stat("turnovers")),
        time_of_possession=find_stat("possessionTime"),
        third_down_efficiency=third_down,
        third_down_percentage=parse_efficiency_percentage(third_down),
        red_zone_efficiency=red_zone,
        red_zone_percentage=parse_efficiency_percentage(red_zone),
        sacks=_to_int(find_stat("sacks")),
        penalties=_to_int(find_stat("penalties")),
        penalty_yards=_to_int(find_stat("penaltyYards")),
    )


def parse_game_stats(boxscore: dict[str, Any], home_id: str, away_id: str) -> GameStats:
    players = boxscore.get("players") or []
    teams = boxscore.get("teams") or []

    def by_team(rows: list[dict[str, Any]], team_id: str) -> Optional[dict[str, Any]]:
        return next((r for r in rows if str((r.get("team") or {}).get("id")) == team_id), None)

    # Box-score team rows are usually [away, home]; match on id where possible
    home_row = by_team(teams, home_id) or (teams[0] if teams else None)
    away_row = by_team(teams, away_id) or (teams[1] if len(teams) > 1 else None)

    return GameStats(
        home_stats=_team_stats(by_team(players, home_id), home_row, home_id),
        away_stats=_team_stats(by_team(players, away_id), away_row, away_id),
    )


# =============================================================================
# Adapter
# =============================================================================


class NFLAdapter(SportAdapter):
    """American football via ESPN."""

    sport = "nfl"

    def __init__(self, client: ESPNClient | None = None):
        self.client = client or ESPNClient()

    async def fetch_scoreboard(self) -> list[Game]:
        data = await self.client.get_scoreboard()
        games: list[Game] = list(parse_scoreboard(data))

        has_upcoming = any(g.status == GameStatus.scheduled for g in games)
        has_live = any(g.is_live for g in games)
        if not has_upcoming and not has_live:
            games.extend(await self._fetch_upcoming_playoffs(data))

        return games

    async def _fetch_upcoming_playoffs(self, data: dict[str, Any]) -> list[NFLGame]:
        """
        When the current week is over, look ahead to the next playoff rounds.

        Best-effort: future weeks that ESPN has not published yet are skipped.
        """
        season_type, week, year = _season_info(data)
        if season_type == SEASON_POSTSEASON:
            weeks = range(week + 1, LAST_PLAYOFF_WEEK + 1)
        elif season_type == SEASON_REGULAR and week >= LAST_REGULAR_WEEK:
            weeks = range(1, 2)
        else:
            return []

        year = year or datetime.now(timezone.utc).year
        games: list[NFLGame] = []
        for playoff_week in weeks:
            try:
                week_data = await self.client.get_week(year, SEASON_POSTSEASON, playoff_week)
            except FetchError as e:
                logger.debug(f"Playoff week {playoff_week} not available: {e}")
                continue
            games.extend(parse_scoreboard(week_data))
        return games

    async def fetch_game_details(self, game_id: str) -> GameDetails:
        data = await self.client.get_summary(game_id)

        header = data.get("header") or {}
        competitions = header.get("competitions") or []
        competition = competitions[0] if competitions else {}
        home, away = _home_and_away(competition)
        if not header or home is None or away is None:
            raise FetchError(
                f"ESPN summary for game {game_id} has no header or competitors",
                code="NOT_FOUND",
                status_code=404,
            )

        season = header.get("season") or {}
        season_type = _to_int(season.get("type"), SEASON_REGULAR) or SEASON_REGULAR
        week = _to_int(header.get("week"), 1) or 1
        status = competition.get("status") or header.get("status")

        game = NFLGame(
            id=str(header.get("id") or game_id),
            status=parse_status(status),
            home_team=parse_team(home),
            away_team=parse_team(away),
            clock=parse_clock(status),
            situation=parse_situation(data.get("situation")),
            venue=(competition.get("venue") or (data.get("gameInfo") or {}).get("venue") or {}).get(
                "fullName"
            ),
            start_time=competition.get("date"),
            season_type=season_type,
            week=week,
            season_name=get_season_name(season_type, week),
        )

        boxscore = data.get("boxscore")
        stats = parse_game_stats(boxscore, game.home_team.id, game.away_team.id) if boxscore else None
        return GameDetails(game=game, stats=stats)

    def detect_score_change(
        self,
        prev_home: int,
        prev_away: int,
        new_home: int,
        new_away: int,
        game: Game,
    ) -> Optional[ScoreChangeResult]:
        return detect_american_football_score(prev_home, prev_away, new_home, new_away)

    def get_period_name(self, period: int | str) -> str:
        return get_period_name(_to_int(period))

    def get_competition_name(self, game: Game) -> str:
        season_name = game.season_name if isinstance(game, NFLGame) else None
        return season_name or "NFL"

    def get_celebration_types(self) -> list[CelebrationType]:
        return ["touchdown", "fieldgoal", "interception", "sack", "fumble", "safety"]

    async def close(self) -> None:
        await self.client.close()
