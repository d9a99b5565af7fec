"""
UEFA Euro adapter - current round of the European Championship.

Euro 2020 was played in 2021 but OpenLigaDB files it under season 2020.
"""

from __future__ import annotations

from ...adapters.tournament import TournamentAdapter

UEFA_EURO = "uefa-euro"


class EuroAdapter(TournamentAdapter):
    sport = "euro"
    competition = UEFA_EURO
    competition_name = "UEFA Europameisterschaft 2020"
    league_shortcut = "em20"
    tournament_season = 2020
