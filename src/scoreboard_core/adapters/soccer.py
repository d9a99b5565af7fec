"""
Base adapter for association football leagues served by OpenLigaDB.

OpenLigaDB has no live clock and no status field beyond ``matchIsFinished``,
so status and match minute are inferred from the kickoff time, the goal feed
and a fixed match timeline:

    real minutes   0-45    first half
                  45-62    first-half stoppage + 15 min break
                  62-107   second half (match minute = real - 17)
                 107-140   extra time (cup competitions only)

Subclasses provide the leagues, team colours and competition names.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo

from ..core.models import Game, Goal, ScoreChangeResult, ScorePair, SoccerClock, SoccerGame, Team
from ..core.types import CelebrationType, GameStatus
from ..scoring import detect_soccer_score
from .base import SportAdapter

logger = logging.getLogger(__name__)

# OpenLigaDB's matchDateTime is German local time
_LOCAL_TZ = ZoneInfo("Europe/Berlin")

RESULT_HALFTIME = 1
RESULT_FINAL = 2

PERIOD_NAMES: dict[str, str] = {
    "first_half": "1. Halbzeit",
    "second_half": "2. Halbzeit",
    "halftime": "Halbzeit",
    "extra_time": "Verlängerung",
}


def parse_kickoff(match: dict[str, Any]) -> Optional[datetime]:
    """Kickoff as an aware datetime, preferring matchDateTimeUTC."""
    raw = match.get("matchDateTimeUTC")
    if raw:
        value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    raw = match.get("matchDateTime")
    if raw:
        value = datetime.fromisoformat(raw)
        return value if value.tzinfo else value.replace(tzinfo=_LOCAL_TZ)
    return None


def current_season(today: datetime) -> int:
    """German football seasons start in August and are named after that year."""
    return today.year if today.month >= 8 else today.year - 1


class SoccerAdapter(SportAdapter):
    """
    Shared OpenLigaDB transformation for all soccer plugins.

    Subclasses set ``sport``, ``default_color`` and ``team_colors`` and
    implement the provider calls plus ``get_competition_name``.
    """

    default_color: str = "333333"
    team_colors: dict[int, str] = {}

    def __init__(self, now: Callable[[], datetime] | None = None):
        self._now = now or (lambda: datetime.now(timezone.utc))

    # ==========================================================================
    # Contract
    # ==========================================================================

    def detect_score_change(
        self,
        prev_home: int,
        prev_away: int,
        new_home: int,
        new_away: int,
        game: Game,
    ) -> Optional[ScoreChangeResult]:
        goals = game.goals if isinstance(game, SoccerGame) else []
        return detect_soccer_score(prev_home, prev_away, new_home, new_away, goals)

    def get_period_name(self, period: int | str) -> str:
        return PERIOD_NAMES.get(str(period), "")

    def get_celebration_types(self) -> list[CelebrationType]:
        return ["goal", "penalty", "own_goal", "red_card", "yellow_red_card"]

    @abstractmethod
    def can_have_extra_time(self, match: dict[str, Any]) -> bool:
        """Whether this match can go to extra time (cup ties)."""
        ...

    @abstractmethod
    def competition_for(self, match: dict[str, Any]) -> str:
        ...

    # ==========================================================================
    # Transformation
    # ==========================================================================

    def transform_match(self, match: dict[str, Any]) -> SoccerGame:
        """Transform one OpenLigaDB match into a SoccerGame."""
        results = match.get("matchResults") or []
        final = next((r for r in results if r.get("resultTypeID") == RESULT_FINAL), None)
        halftime = next((r for r in results if r.get("resultTypeID") == RESULT_HALFTIME), None)

        goals = [self._transform_goal(g) for g in (match.get("goals") or [])]
        # Live matches often have no final result yet; the last goal carries the score
        if final is not None:
            home_score, away_score = final.get("pointsTeam1") or 0, final.get("pointsTeam2") or 0
        elif goals:
            home_score, away_score = goals[-1].score_after.home, goals[-1].score_after.away
        else:
            home_score = away_score = 0

        location = match.get("location") or {}
        group = match.get("group") or {}

        return SoccerGame(
            id=str(match["matchID"]),
            sport=self.sport,
            competition=self.competition_for(match),
            home_team=self.transform_team(match.get("team1") or {}, home_score),
            away_team=self.transform_team(match.get("team2") or {}, away_score),
            status=self.determine_status(match),
            start_time=match.get("matchDateTimeUTC"),
            venue=location.get("locationStadium") or location.get("locationCity") or None,
            last_update=match.get("lastUpdateDateTime"),
            clock=self.build_clock(match, goals),
            matchday=group.get("groupOrderID") or 0,
            goals=goals,
            halftime_score=(
                ScorePair(home=halftime.get("pointsTeam1") or 0, away=halftime.get("pointsTeam2") or 0)
                if halftime
                else None
            ),
        )

    @staticmethod
    def _transform_goal(goal: dict[str, Any]) -> Goal:
        home = goal.get("scoreTeam1") or 0
        away = goal.get("scoreTeam2") or 0
        return Goal(
            goal_id=goal.get("goalID") or 0,
            minute=goal.get("matchMinute"),
            scorer_name=goal.get("goalGetterName") or "",
            scorer_team="home" if home > away else "away",
            is_penalty=bool(goal.get("isPenalty")),
            is_own_goal=bool(goal.get("isOwnGoal")),
            score_after=ScorePair(home=home, away=away),
        )

    def transform_team(self, team: dict[str, Any], score: int) -> Team:
        team_id = team.get("teamId") or 0
        return Team(
            id=str(team_id),
            name=team.get("teamName") or "",
            abbreviation=team.get("shortName") or "",
            display_name=team.get("teamName") or "",
            short_display_name=team.get("shortName") or "",
            logo=team.get("teamIconUrl") or "",
            color=self.team_colors.get(team_id, self.default_color),
            alternate_color="FFFFFF",
            score=score,
        )

    def _elapsed_minutes(self, match: dict[str, Any]) -> Optional[float]:
        kickoff = parse_kickoff(match)
        if kickoff is None:
            return None
        return (self._now() - kickoff).total_seconds() / 60

    def determine_status(self, match: dict[str, Any]) -> GameStatus:
        """
        Infer the canonical status from kickoff time and result data.

        A match that should have ended two hours after kickoff but has no
        results, no goals and is not finished is treated as not played yet
        (postponed) and reported as scheduled.
        """
        if match.get("matchIsFinished"):
            return GameStatus.final

        elapsed = self._elapsed_minutes(match)
        if elapsed is None or elapsed < 0:
            return GameStatus.scheduled

        if elapsed >= 120 and not match.get("matchResults") and not match.get("goals"):
            logger.debug(f"Match {match.get('matchID')} has no data 2h after kickoff, treating as postponed")
            return GameStatus.scheduled

        if 45 <= elapsed < 60:
            return GameStatus.halftime

        return GameStatus.in_progress

    # ==========================================================================
    # Clock
    # ==========================================================================

    def build_clock(self, match: dict[str, Any], goals: list[Goal]) -> SoccerClock:
        """Estimate match minute and period; goal minutes are a lower bound."""
        extra_time = self.can_have_extra_time(match)
        elapsed = self._elapsed_minutes(match)
        elapsed_minutes = int(elapsed // 1) if elapsed is not None else -1

        goal_minutes = [g.minute for g in goals if g.minute is not None]
        latest_goal = max(goal_minutes) if goal_minutes else None

        if match.get("matchIsFinished"):
            if latest_goal is not None and latest_goal > 90 and extra_time:
                period, minute = "extra_time", latest_goal
            else:
                period = "second_half"
                minute = latest_goal if latest_goal is not None and latest_goal > 90 else 90
        elif elapsed_minutes < 0:
            period, minute = "first_half", 0
        else:
            minute = self.estimate_minute(elapsed_minutes, latest_goal or 0, extra_time)
            if minute <= 45:
                if 47 <= elapsed_minutes < 62:
                    period, minute = "halftime", 45
                else:
                    period = "first_half"
            elif minute <= 90:
                period = "second_half"
            elif extra_time:
                period = "extra_time"
            else:
                period = "second_half"

        return SoccerClock(
            match_minute=minute,
            period=period,
            period_name=self.get_period_name(period),
            display_value=self.display_value(minute, period, extra_time),
        )

    @staticmethod
    def estimate_minute(elapsed_minutes: int, min_minute: int, extra_time: bool) -> int:
        """Map real elapsed minutes onto a match minute, never below ``min_minute``."""
        if elapsed_minutes <= 45:
            estimate = elapsed_minutes
        elif elapsed_minutes <= 62:
            estimate = 45
        elif elapsed_minutes <= 107:
            estimate = 45 + (elapsed_minutes - 62)
        elif extra_time and elapsed_minutes <= 140:
            estimate = 90 + (elapsed_minutes - 107)
        else:
            estimate = min(elapsed_minutes - 20, 120) if extra_time else 90
        return max(min_minute, max(0, estimate))

    @staticmethod
    def display_value(minute: int, period: str, extra_time: bool) -> str:
        """Clock text with stoppage-time notation: 45+2', 90+4', 120+1'."""
        if period == "halftime":
            return "45'"
        if period == "first_half":
            if minute > 45:
                return f"45+{minute - 45}'"
            return f"{minute}'"
        if period == "second_half":
            if minute > 90:
                return f"90+{minute - 90}'"
            return f"{max(45, minute)}'"
        if period == "extra_time" and extra_time and minute > 120:
            return f"120+{minute - 120}'"
        return f"{minute}'"
