"""
Pytest configuration for scoreboard-core tests.

Provider HTTP is never hit: clients get an ``httpx.MockTransport`` that
serves canned JSON keyed by request path.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import httpx
import pytest

from scoreboard_core.adapters.base import SportAdapter
from scoreboard_core.core.config import Settings
from scoreboard_core.core.models import Game, GameDetails, Team
from scoreboard_core.core.types import GameStatus
from scoreboard_core.plugins.types import PluginManifest, SportPlugin
from scoreboard_core.scoring import detect_american_football_score


# =========================================================================
# HTTP
# =========================================================================


def json_transport(
    routes: dict[str, Any],
    calls: Optional[list[httpx.Request]] = None,
) -> httpx.MockTransport:
    """
    MockTransport answering ``routes[path]`` as JSON, 404 for unknown paths.

    A route value may be an ``httpx.Response`` to control the status code.
    Every request is appended to ``calls`` when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        payload = routes.get(request.url.path)
        if payload is None:
            return httpx.Response(404, json={"message": "not found"})
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, json=payload)

    return httpx.MockTransport(handler)


# Fast, single-attempt client settings for tests
CLIENT_KWARGS = {"requests_per_minute": 60000, "max_retries": 1}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        season_override=2025,
        enabled_plugins=[],
        default_plugin=None,
        requests_per_minute=60000,
        http_max_retries=1,
    )


# =========================================================================
# Time
# =========================================================================


KICKOFF = datetime(2025, 10, 18, 13, 30, tzinfo=timezone.utc)


def minutes_after_kickoff(minutes: float) -> Callable[[], datetime]:
    """A ``now`` callable frozen ``minutes`` after KICKOFF."""
    moment = KICKOFF + timedelta(minutes=minutes)
    return lambda: moment


# =========================================================================
# OpenLigaDB payloads
# =========================================================================


def openligadb_team(team_id: int, name: str, short: str) -> dict[str, Any]:
    return {
        "teamId": team_id,
        "teamName": name,
        "shortName": short,
        "teamIconUrl": f"https://img.example/{team_id}.png",
    }


def openligadb_goal(
    goal_id: int,
    minute: Optional[int],
    home: int,
    away: int,
    scorer: str = "Kane",
    penalty: bool = False,
    own_goal: bool = False,
) -> dict[str, Any]:
    return {
        "goalID": goal_id,
        "scoreTeam1": home,
        "scoreTeam2": away,
        "matchMinute": minute,
        "goalGetterName": scorer,
        "isPenalty": penalty,
        "isOwnGoal": own_goal,
    }


def openligadb_match(
    match_id: int = 70001,
    *,
    league: str = "bl1",
    home: tuple[int, str, str] = (40, "FC Bayern München", "Bayern"),
    away: tuple[int, str, str] = (7, "Borussia Dortmund", "BVB"),
    goals: Optional[list[dict[str, Any]]] = None,
    results: Optional[list[dict[str, Any]]] = None,
    finished: bool = False,
    kickoff: datetime = KICKOFF,
    matchday: int = 7,
    group_name: Optional[str] = None,
) -> dict[str, Any]:
    return {
        "matchID": match_id,
        "matchDateTimeUTC": kickoff.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "matchDateTime": kickoff.strftime("%Y-%m-%dT%H:%M:%S"),
        "leagueShortcut": league,
        "team1": openligadb_team(*home),
        "team2": openligadb_team(*away),
        "matchIsFinished": finished,
        "matchResults": results or [],
        "goals": goals or [],
        "location": {"locationCity": "München", "locationStadium": "Allianz Arena"},
        "group": {
            "groupName": f"{matchday}. Spieltag" if group_name is None else group_name,
            "groupOrderID": matchday,
        },
        "lastUpdateDateTime": "2025-10-18T15:20:00",
    }


def final_result(home: int, away: int) -> dict[str, Any]:
    return {"resultTypeID": 2, "pointsTeam1": home, "pointsTeam2": away}


def halftime_result(home: int, away: int) -> dict[str, Any]:
    return {"resultTypeID": 1, "pointsTeam1": home, "pointsTeam2": away}


# =========================================================================
# Fake plugins
# =========================================================================


class FakeAdapter(SportAdapter):
    """Minimal adapter for registry tests."""

    def __init__(self, sport: str, celebration_types: tuple[str, ...] = ("touchdown",)):
        self.sport = sport
        self._celebration_types = list(celebration_types)
        self.closed = False

    async def fetch_scoreboard(self) -> list[Game]:
        return [
            Game(
                id="1",
                sport=self.sport,
                competition=self.sport,
                home_team=Team(id="1", name="Home", score=7),
                away_team=Team(id="2", name="Away", score=3),
                status=GameStatus.in_progress,
            )
        ]

    async def fetch_game_details(self, game_id: str) -> GameDetails:
        games = await self.fetch_scoreboard()
        return GameDetails(game=games[0])

    def detect_score_change(self, prev_home, prev_away, new_home, new_away, game):
        return detect_american_football_score(prev_home, prev_away, new_home, new_away)

    def get_period_name(self, period):
        return str(period)

    def get_competition_name(self, game):
        return self.sport.upper()

    def get_celebration_types(self):
        return list(self._celebration_types)

    async def close(self) -> None:
        self.closed = True


def make_manifest(plugin_id: str, **overrides: Any) -> PluginManifest:
    fields = {
        "id": plugin_id,
        "version": "1.0.0",
        "name": f"{plugin_id.upper()} Plugin",
        "display_name": plugin_id.upper(),
        "celebration_types": ("touchdown",),
        "competitions": (plugin_id,),
        "core_version": "^3.0.0",
    }
    fields.update(overrides)
    return PluginManifest(**fields)


class PluginFactory:
    """
    Builds fake plugins and records every lifecycle event as
    ``(plugin_id, hook)`` tuples in ``events``.
    """

    def __init__(self):
        self.events: list[tuple[str, str]] = []
        self.loader_calls: dict[str, int] = {}

    def hooks(self, plugin_id: str) -> dict[str, Callable]:
        def record(name: str) -> Callable:
            async def hook() -> None:
                self.events.append((plugin_id, name))

            return hook

        return {
            "on_load": record("load"),
            "on_activate": record("activate"),
            "on_deactivate": record("deactivate"),
            "on_unload": record("unload"),
        }

    def loader(self, manifest: PluginManifest, **hook_overrides: Callable):
        async def load() -> SportPlugin:
            self.loader_calls[manifest.id] = self.loader_calls.get(manifest.id, 0) + 1
            hooks = {**self.hooks(manifest.id), **hook_overrides}
            return SportPlugin(manifest=manifest, adapter=FakeAdapter(manifest.id), **hooks)

        return load

    def hook_names(self, plugin_id: str) -> list[str]:
        return [name for pid, name in self.events if pid == plugin_id]


@pytest.fixture
def factory() -> PluginFactory:
    return PluginFactory()
