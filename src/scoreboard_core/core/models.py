"""
Pydantic models for games, stats, score events and standings.

These models are used for:
- The canonical Game shape every sport adapter produces
- Score-change results handed to the display layer
- Official and live league tables
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny
from pydantic.alias_generators import to_camel

from .types import CelebrationType, GameStatus, ScoreType, Side


# =============================================================================
# Teams and Games
# =============================================================================


class Team(BaseModel):
    """One side of a game, with its current score."""

    id: str
    name: str
    abbreviation: str = ""
    display_name: str = ""
    short_display_name: str = ""
    logo: str = ""
    color: str = "333333"
    alternate_color: str = "FFFFFF"
    score: int = Field(default=0, ge=0)


class Game(BaseModel):
    """Sport-agnostic game; adapters return one of the subclasses."""

    id: str
    sport: str
    competition: str
    home_team: Team
    away_team: Team
    status: GameStatus
    start_time: Optional[str] = None
    venue: Optional[str] = None
    broadcast: Optional[str] = None
    last_update: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.status in (GameStatus.in_progress, GameStatus.halftime)


# -----------------------------------------------------------------------------
# American football
# -----------------------------------------------------------------------------


class GameClock(BaseModel):
    display_value: str = "0:00"
    period: int = 0
    period_name: str = ""


class GameSituation(BaseModel):
    down: int = 0
    distance: int = 0
    yard_line: int = 0
    possession: str = ""
    possession_text: str = ""
    is_red_zone: bool = False
    short_down_distance_text: str = ""
    last_play_type: str = ""


class NFLGame(Game):
    sport: Literal["nfl"] = "nfl"
    competition: str = "nfl"
    clock: GameClock = Field(default_factory=GameClock)
    situation: Optional[GameSituation] = None
    season_type: Optional[int] = None  # 1=pre, 2=regular, 3=post
    week: Optional[int] = None
    season_name: Optional[str] = None


# -----------------------------------------------------------------------------
# Association football
# -----------------------------------------------------------------------------


SoccerPeriod = Literal["first_half", "second_half", "halftime", "extra_time"]


class SoccerClock(BaseModel):
    match_minute: int = 0
    period: SoccerPeriod = "first_half"
    period_name: str = ""
    display_value: str = "0'"


class ScorePair(BaseModel):
    home: int = 0
    away: int = 0


class Goal(BaseModel):
    goal_id: int
    minute: Optional[int] = None
    scorer_name: str = ""
    scorer_team: Side
    is_penalty: bool = False
    is_own_goal: bool = False
    score_after: ScorePair


class Card(BaseModel):
    minute: int
    player_name: str
    team: Side
    type: Literal["yellow", "yellow-red", "red"]


class SoccerGame(Game):
    clock: SoccerClock = Field(default_factory=SoccerClock)
    matchday: int = 0
    goals: list[Goal] = Field(default_factory=list)
    halftime_score: Optional[ScorePair] = None
    cards: list[Card] = Field(default_factory=list)


RoundType = Literal[
    "group", "playoff", "round_of_32", "round_of_16", "quarter_finals", "semi_finals", "third_place", "final"
]


class TournamentGame(SoccerGame):
    """Match of a cup tournament; every round except ``group`` is a knockout tie."""

    round: Optional[str] = None
    round_type: RoundType = "group"
    group: Optional[str] = None  # e.g. "Gruppe A"

    @property
    def is_knockout(self) -> bool:
        return self.round_type != "group"


# =============================================================================
# Stats
# =============================================================================


class PlayerStats(BaseModel):
    name: str
    stats: str  # e.g. "18/24, 245 yds, 2 TD"


class TeamStats(BaseModel):
    team_id: str
    passing: Optional[PlayerStats] = None
    rushing: Optional[PlayerStats] = None
    receiving: Optional[PlayerStats] = None
    total_yards: int = 0
    turnovers: int = 0
    time_of_possession: str = "0"
    third_down_efficiency: str = "0"
    third_down_percentage: int = 0
    red_zone_efficiency: str = "0"
    red_zone_percentage: int = 0
    sacks: int = 0
    penalties: int = 0
    penalty_yards: int = 0


class GameStats(BaseModel):
    home_stats: TeamStats
    away_stats: TeamStats


class GameDetails(BaseModel):
    """Result of SportAdapter.fetch_game_details."""

    game: SerializeAsAny[Game]
    stats: Optional[GameStats] = None


# =============================================================================
# Score events
# =============================================================================


class ScoreChangeResult(BaseModel):
    """
    One inferred scoring event between two polls.

    ``ambiguous`` is set when both scores moved in the same poll and the
    detector had to guess which side scored.
    """

    model_config = ConfigDict(frozen=True)

    type: ScoreType
    team: Side
    points: int = Field(gt=0)
    video: Optional[CelebrationType] = None
    ambiguous: bool = False


# =============================================================================
# Standings
# =============================================================================


class TableEntry(BaseModel):
    """Official table row as served by OpenLigaDB (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    team_info_id: int
    team_name: str = ""
    short_name: str = ""
    team_icon_url: str = ""
    points: int = 0
    goals: int = 0
    opponent_goals: int = 0
    goal_diff: int = 0
    matches: int = 0
    won: int = 0
    draw: int = 0
    lost: int = 0


class LiveTableEntry(BaseModel):
    """Projected table row; recomputed on every call, never mutated across calls."""

    position: int
    previous_position: int
    team_id: int
    team_name: str
    short_name: str
    team_icon_url: str
    points: int
    live_points: int
    played: int
    won: int
    draw: int
    lost: int
    goals_for: int
    goals_against: int
    goal_difference: int
    live_goal_difference: int
    live_goals_for: int

    @property
    def movement(self) -> Literal["up", "down", "same"]:
        if self.position < self.previous_position:
            return "up"
        if self.position > self.previous_position:
            return "down"
        return "same"
