"""
Tests for the OpenLigaDB soccer transformation and the Bundesliga adapter.

Time is frozen relative to KICKOFF so status and clock inference are
deterministic.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import (
    CLIENT_KWARGS,
    KICKOFF,
    final_result,
    halftime_result,
    json_transport,
    minutes_after_kickoff,
    openligadb_goal,
    openligadb_match,
)
from scoreboard_core.adapters.soccer import SoccerAdapter, current_season, parse_kickoff
from scoreboard_core.core.http import FetchError
from scoreboard_core.core.models import SoccerGame
from scoreboard_core.core.types import GameStatus, ScoreType
from scoreboard_core.providers import OpenLigaDBClient
from scoreboard_core.sports.bundesliga import BundesligaAdapter


def adapter_at(minutes: float, routes: dict | None = None, season: int | None = 2025) -> BundesligaAdapter:
    client = OpenLigaDBClient(transport=json_transport(routes or {}), **CLIENT_KWARGS)
    return BundesligaAdapter(client, season=season, now=minutes_after_kickoff(minutes))


CUP_MATCH = openligadb_match(
    80001,
    league="dfb",
    home=(1635, "RB Leipzig", "Leipzig"),
    away=(9, "FC Schalke 04", "Schalke"),
    matchday=2,
)


class TestHelpers:
    def test_parse_kickoff_prefers_utc(self):
        assert parse_kickoff(openligadb_match()) == KICKOFF

    def test_parse_kickoff_local_time_fallback(self):
        match = {"matchDateTime": "2025-10-18T15:30:00"}
        # 15:30 CEST is 13:30 UTC
        assert parse_kickoff(match) == KICKOFF

    def test_parse_kickoff_missing(self):
        assert parse_kickoff({}) is None

    @pytest.mark.parametrize(
        "today, season",
        [
            (datetime(2025, 8, 1, tzinfo=timezone.utc), 2025),
            (datetime(2025, 10, 18, tzinfo=timezone.utc), 2025),
            (datetime(2026, 3, 14, tzinfo=timezone.utc), 2025),
            (datetime(2026, 7, 31, tzinfo=timezone.utc), 2025),
        ],
    )
    def test_current_season(self, today, season):
        assert current_season(today) == season


class TestStatus:
    @pytest.mark.parametrize(
        "minutes, status",
        [
            (-30, GameStatus.scheduled),
            (20, GameStatus.in_progress),
            (50, GameStatus.halftime),
            (75, GameStatus.in_progress),
        ],
    )
    def test_inferred_from_kickoff(self, minutes, status):
        match = openligadb_match(goals=[openligadb_goal(1, 10, 1, 0)])
        assert adapter_at(minutes).determine_status(match) == status

    def test_finished(self):
        match = openligadb_match(finished=True, results=[final_result(2, 1)])
        assert adapter_at(200).determine_status(match) == GameStatus.final

    def test_no_data_long_after_kickoff_is_scheduled(self):
        """Postponed matches never get results; they are reported as scheduled."""
        assert adapter_at(130).determine_status(openligadb_match()) == GameStatus.scheduled


class TestClock:
    def test_first_half(self):
        game = adapter_at(30).transform_match(openligadb_match(goals=[openligadb_goal(1, 12, 1, 0)]))
        assert game.clock.period == "first_half"
        assert game.clock.match_minute == 30
        assert game.clock.display_value == "30'"
        assert game.clock.period_name == "1. Halbzeit"

    def test_halftime_break(self):
        game = adapter_at(52).transform_match(openligadb_match())
        assert game.status == GameStatus.halftime
        assert game.clock.period == "halftime"
        assert game.clock.display_value == "45'"
        assert game.clock.period_name == "Halbzeit"

    def test_second_half(self):
        game = adapter_at(80).transform_match(openligadb_match(goals=[openligadb_goal(1, 12, 1, 0)]))
        assert game.clock.period == "second_half"
        assert game.clock.match_minute == 63
        assert game.clock.display_value == "63'"

    def test_second_half_stoppage_from_goal_minute(self):
        goals = [openligadb_goal(1, 12, 1, 0), openligadb_goal(2, 93, 1, 1)]
        game = adapter_at(112).transform_match(openligadb_match(goals=goals))
        assert game.clock.period == "second_half"
        assert game.clock.match_minute == 93
        assert game.clock.display_value == "90+3'"

    def test_cup_extra_time(self):
        game = adapter_at(120).transform_match(CUP_MATCH)
        assert game.competition == "dfb-pokal"
        assert game.clock.period == "extra_time"
        assert game.clock.match_minute == 103
        assert game.clock.period_name == "Verlängerung"

    def test_finished_league_match(self):
        goals = [openligadb_goal(1, 94, 0, 1)]
        match = openligadb_match(finished=True, goals=goals, results=[final_result(0, 1)])
        game = adapter_at(200).transform_match(match)
        assert game.clock.display_value == "90+4'"

    def test_finished_without_stoppage_goal(self):
        match = openligadb_match(finished=True, results=[final_result(0, 0)])
        assert adapter_at(200).transform_match(match).clock.display_value == "90'"

    def test_before_kickoff(self):
        clock = adapter_at(-5).transform_match(openligadb_match()).clock
        assert (clock.period, clock.match_minute, clock.display_value) == ("first_half", 0, "0'")

    @pytest.mark.parametrize(
        "elapsed, min_minute, extra_time, minute",
        [
            (0, 0, False, 0),
            (45, 0, False, 45),
            (55, 0, False, 45),
            (62, 0, False, 45),
            (100, 0, False, 83),
            (130, 0, False, 90),
            (130, 0, True, 113),
            (40, 44, False, 44),
        ],
    )
    def test_estimate_minute(self, elapsed, min_minute, extra_time, minute):
        assert SoccerAdapter.estimate_minute(elapsed, min_minute, extra_time) == minute

    def test_extra_time_stoppage_display(self):
        assert SoccerAdapter.display_value(122, "extra_time", True) == "120+2'"


class TestTransform:
    def test_final_result_wins_over_goals(self):
        match = openligadb_match(
            finished=True,
            goals=[openligadb_goal(1, 10, 1, 0)],
            results=[halftime_result(1, 0), final_result(3, 1)],
        )
        game = adapter_at(200).transform_match(match)

        assert isinstance(game, SoccerGame)
        assert (game.home_team.score, game.away_team.score) == (3, 1)
        assert game.halftime_score.home == 1
        assert game.matchday == 7
        assert game.venue == "Allianz Arena"

    def test_live_score_from_last_goal(self):
        goals = [
            openligadb_goal(1, 10, 1, 0),
            openligadb_goal(2, 33, 1, 1, scorer="Guirassy", penalty=True),
        ]
        game = adapter_at(40).transform_match(openligadb_match(goals=goals))

        assert (game.home_team.score, game.away_team.score) == (1, 1)
        assert game.goals[1].scorer_team == "away"
        assert game.goals[1].is_penalty

    def test_team_fields_and_colors(self):
        game = adapter_at(0).transform_match(openligadb_match(away=(999, "Newcomer FC", "NEW")))
        assert game.home_team.id == "40"
        assert game.home_team.abbreviation == "Bayern"
        assert game.home_team.color == "DC143C"
        assert game.away_team.color == BundesligaAdapter.default_color

    def test_detect_score_change_uses_goal_feed(self):
        goals = [openligadb_goal(1, 10, 1, 0), openligadb_goal(2, 30, 1, 1, own_goal=True)]
        adapter = adapter_at(40)
        game = adapter.transform_match(openligadb_match(goals=goals))

        result = adapter.detect_score_change(1, 0, 1, 1, game)

        assert result.type == ScoreType.GOAL
        assert result.team == "away"
        assert result.video == "own_goal"

    def test_display_helpers(self):
        adapter = adapter_at(0)
        league_game = adapter.transform_match(openligadb_match())
        cup_game = adapter.transform_match(CUP_MATCH)

        assert adapter.get_competition_name(league_game) == "Bundesliga"
        assert adapter.get_competition_name(cup_game) == "DFB-Pokal"
        assert adapter.get_period_name("second_half") == "2. Halbzeit"
        assert adapter.get_period_name("penalties") == ""
        assert "red_card" in adapter.get_celebration_types()


class TestBundesligaAdapter:
    ROUTES = {
        "/getcurrentgroup/bl1": {"groupName": "7. Spieltag", "groupOrderID": 7},
        "/getcurrentgroup/dfb": {"groupName": "2. Runde", "groupOrderID": 2},
        "/getmatchdata/bl1/2025/7": [
            openligadb_match(goals=[openligadb_goal(1, 10, 2, 0), openligadb_goal(2, 20, 2, 0)])
        ],
        "/getmatchdata/dfb/2025/2": [CUP_MATCH],
        "/getmatchdata/70001": openligadb_match(),
        "/getbltable/bl1/2025": [
            {"teamInfoId": 7, "teamName": "Borussia Dortmund", "points": 10, "goals": 12,
             "opponentGoals": 6, "goalDiff": 6, "matches": 5, "won": 3, "draw": 1, "lost": 1},
            {"teamInfoId": 40, "teamName": "FC Bayern München", "points": 10, "goals": 8,
             "opponentGoals": 8, "goalDiff": 0, "matches": 5, "won": 3, "draw": 1, "lost": 1},
        ],
    }

    @pytest.mark.asyncio
    async def test_scoreboard_contains_league_and_cup(self):
        adapter = adapter_at(30, self.ROUTES)
        games = await adapter.fetch_scoreboard()
        await adapter.close()

        assert [g.id for g in games] == ["70001", "80001"]
        assert [g.competition for g in games] == ["bundesliga", "dfb-pokal"]
        assert all(g.sport == "bundesliga" for g in games)

    @pytest.mark.asyncio
    async def test_scoreboard_propagates_fetch_errors(self):
        routes = {k: v for k, v in self.ROUTES.items() if k != "/getcurrentgroup/dfb"}
        adapter = adapter_at(30, routes)
        with pytest.raises(FetchError):
            await adapter.fetch_scoreboard()
        await adapter.close()

    @pytest.mark.asyncio
    async def test_game_details_have_no_stats(self):
        adapter = adapter_at(30, self.ROUTES)
        details = await adapter.fetch_game_details("70001")
        await adapter.close()

        assert details.game.id == "70001"
        assert details.stats is None

    @pytest.mark.asyncio
    async def test_unknown_game(self):
        adapter = adapter_at(30, self.ROUTES)
        with pytest.raises(FetchError):
            await adapter.fetch_game_details("1")
        await adapter.close()

    @pytest.mark.asyncio
    async def test_official_table(self):
        adapter = adapter_at(30, self.ROUTES)
        table = await adapter.fetch_table()
        await adapter.close()

        assert [row.team_info_id for row in table] == [7, 40]
        assert table[0].opponent_goals == 6

    @pytest.mark.asyncio
    async def test_live_table(self):
        """Bayern lead 2-0 at home and overtake Dortmund on the live table."""
        adapter = adapter_at(30, self.ROUTES)
        live = await adapter.fetch_live_table()
        await adapter.close()

        assert [e.team_id for e in live] == [40, 7]
        bayern = live[0]
        assert bayern.live_points == 13
        assert bayern.live_goal_difference == 2
        assert bayern.previous_position == 2
        assert live[1].live_points == 10
        assert live[1].live_goal_difference == 4

    @pytest.mark.asyncio
    async def test_past_season_live_table_is_official_table(self):
        """Today's 2-0 for Bayern must not be projected onto the 2022 table."""
        routes = {**self.ROUTES, "/getbltable/bl1/2022": self.ROUTES["/getbltable/bl1/2025"]}
        calls: list = []
        client = OpenLigaDBClient(transport=json_transport(routes, calls), **CLIENT_KWARGS)
        adapter = BundesligaAdapter(client, season=2025, now=minutes_after_kickoff(30))

        live = await adapter.fetch_live_table(2022)
        await adapter.close()

        assert [(e.team_id, e.points, e.live_points) for e in live] == [(7, 10, 10), (40, 10, 10)]
        assert all(e.movement == "same" for e in live)
        assert [c.url.path for c in calls] == ["/getbltable/bl1/2022"]

    @pytest.mark.asyncio
    async def test_explicit_current_season_is_projected(self):
        adapter = adapter_at(30, self.ROUTES)
        live = await adapter.fetch_live_table(2025)
        await adapter.close()

        assert live[0].team_id == 40
        assert live[0].live_points == 13

    @pytest.mark.asyncio
    async def test_empty_matchdays_give_empty_scoreboard(self):
        routes = {
            **self.ROUTES,
            "/getmatchdata/bl1/2025/7": [],
            "/getmatchdata/dfb/2025/2": [],
        }
        adapter = adapter_at(30, routes)
        games = await adapter.fetch_scoreboard()
        await adapter.close()

        assert games == []

    def test_season_derived_from_clock(self):
        adapter = adapter_at(0, season=None)
        assert adapter.season == 2025
