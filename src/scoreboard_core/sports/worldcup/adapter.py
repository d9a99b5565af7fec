"""
FIFA World Cup adapter - current round of the 2026 tournament.
"""

from __future__ import annotations

from ...adapters.tournament import TournamentAdapter

FIFA_WORLDCUP = "fifa-worldcup"


class WorldCupAdapter(TournamentAdapter):
    sport = "worldcup"
    competition = FIFA_WORLDCUP
    competition_name = "FIFA Weltmeisterschaft 2026"
    league_shortcut = "wm26"
    tournament_season = 2026
