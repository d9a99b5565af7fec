"""
Live standings: project the official league table forward with the results
of games that are running or finished but not yet folded into it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from ..core.models import Game, LiveTableEntry, TableEntry
from ..core.types import GameStatus


@dataclass
class _Adjustment:
    points: int = 0
    goals_for: int = 0
    goals_against: int = 0


def _team_key(team_id: str) -> int | None:
    try:
        return int(team_id)
    except (TypeError, ValueError):
        return None


def _collect_adjustments(games: Iterable[Game]) -> dict[int, _Adjustment]:
    """3-1-0 points and goal deltas per team id from the current scorelines."""
    adjustments: dict[int, _Adjustment] = {}

    for game in games:
        if game.status == GameStatus.scheduled:
            continue

        home_id = _team_key(game.home_team.id)
        away_id = _team_key(game.away_team.id)
        if home_id is None or away_id is None:
            continue

        home_score = game.home_team.score
        away_score = game.away_team.score
        home = adjustments.setdefault(home_id, _Adjustment())
        away = adjustments.setdefault(away_id, _Adjustment())

        if home_score > away_score:
            home.points += 3
        elif home_score < away_score:
            away.points += 3
        else:
            home.points += 1
            away.points += 1

        home.goals_for += home_score
        home.goals_against += away_score
        away.goals_for += away_score
        away.goals_against += home_score

    return adjustments


def calculate_live_table(
    official_table: Sequence[TableEntry],
    games: Iterable[Game],
) -> list[LiveTableEntry]:
    """
    Re-rank the official table using in-progress and finished games.

    Rows are ordered by live points, then live goal difference, then live
    goals scored (Python's sort is stable, so full ties keep official order).
    Teams that appear in a game but not in the table are skipped; scheduled
    games contribute nothing. The official table is not modified.

    Args:
        official_table: Official rows in their official order
        games: Known games of the current matchday(s)

    Returns:
        New LiveTableEntry list with 1-based ``position`` and the official
        ``previous_position``
    """
    adjustments = _collect_adjustments(games)

    rows: list[dict] = []
    for index, entry in enumerate(official_table):
        adj = adjustments.get(entry.team_info_id, _Adjustment())
        live_goals_for = entry.goals + adj.goals_for
        live_goals_against = entry.opponent_goals + adj.goals_against
        rows.append(
            {
                "previous_position": index + 1,
                "team_id": entry.team_info_id,
                "team_name": entry.team_name,
                "short_name": entry.short_name,
                "team_icon_url": entry.team_icon_url,
                "points": entry.points,
                "live_points": entry.points + adj.points,
                "played": entry.matches,
                "won": entry.won,
                "draw": entry.draw,
                "lost": entry.lost,
                "goals_for": entry.goals,
                "goals_against": entry.opponent_goals,
                "goal_difference": entry.goal_diff,
                "live_goal_difference": live_goals_for - live_goals_against,
                "live_goals_for": live_goals_for,
            }
        )

    rows.sort(
        key=lambda r: (r["live_points"], r["live_goal_difference"], r["live_goals_for"]),
        reverse=True,
    )

    return [LiveTableEntry(position=i + 1, **row) for i, row in enumerate(rows)]


# =============================================================================
# Table zones
# =============================================================================


@dataclass(frozen=True)
class PositionZone:
    zone: Literal["ucl", "uel", "uecl", "relegation_playoff", "relegation", "safe"]
    color: str
    label: str


def get_position_zone(position: int) -> PositionZone:
    """European / relegation zone of a Bundesliga table position."""
    if position <= 4:
        return PositionZone("ucl", "#0066CC", "Champions League")
    if position == 5:
        return PositionZone("uel", "#FF6600", "Europa League")
    if position == 6:
        return PositionZone("uecl", "#00CC66", "Europa Conference League")
    if position == 16:
        return PositionZone("relegation_playoff", "#FFAA00", "Relegation")
    if position >= 17:
        return PositionZone("relegation", "#CC0000", "Abstieg")
    return PositionZone("safe", "transparent", "")
