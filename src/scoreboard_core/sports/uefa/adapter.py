"""
UEFA Champions League adapter - current round of the Champions League.

OpenLigaDB names the competition per season (ucl2025 for 2025/26), and
its team ids differ from the Bundesliga ids for the same clubs.
"""

from __future__ import annotations

from datetime import datetime

from ...adapters.tournament import TournamentAdapter

CHAMPIONS_LEAGUE = "champions-league"

# OpenLigaDB ucl team id -> primary colour
TEAM_COLORS: dict[int, str] = {
    7: "FDD835",  # Borussia Dortmund
    40: "DC143C",  # FC Bayern München
    6: "E32221",  # Bayer 04 Leverkusen
    91: "E1000F",  # Eintracht Frankfurt
    370: "EF0107",  # FC Liverpool
    364: "034694",  # Chelsea FC
    354: "EF0107",  # Arsenal FC
    4244: "6CABDD",  # Manchester City
    452: "132257",  # Tottenham Hotspur
    1075: "241F20",  # Newcastle United
    382: "FEBE10",  # Villarreal CF
    356: "A50044",  # FC Barcelona
    355: "CE3524",  # Atlético Madrid
    1135: "EE2523",  # Athletic Bilbao
    733: "0068A8",  # Inter Mailand
    369: "000000",  # Juventus Turin
    1160: "1E90FF",  # SSC Neapel
    1807: "003D7C",  # Atalanta Bergamo
    2281: "004170",  # Paris St. Germain
    376: "D30E22",  # PSV Eindhoven
    1210: "005BAA",  # FC Brügge
    4825: "0033A0",  # Union Saint-Gilloise
    1816: "E30613",  # Benfica Lissabon
    4604: "006638",  # Sporting CP
    2554: "FFC519",  # Galatasaray Istanbul
    453: "0047AB",  # FC Kopenhagen
    436: "EF3340",  # Olympiakos Piräus
    4458: "8B0000",  # Qarabag FK
    5707: "FFD700",  # FK Bodö/Glimt
    7081: "0066CC",  # Paphos FC
}


def uefa_season(today: datetime) -> int:
    """UEFA seasons start in September and are named after that year."""
    return today.year if today.month >= 9 else today.year - 1


class UEFAAdapter(TournamentAdapter):
    """Champions League via OpenLigaDB; round names are shown in English."""

    sport = "uefa"
    competition = CHAMPIONS_LEAGUE
    competition_name = "UEFA Champions League"
    team_colors = TEAM_COLORS
    round_names = {
        "ligaphase": "League Phase",
        "gruppenphase": "Group Stage",
        "achtelfinale": "Round of 16",
        "viertelfinale": "Quarter-finals",
        "halbfinale": "Semi-finals",
        "finale": "Final",
    }

    def default_season(self) -> int:
        return uefa_season(self._now())

    def default_league(self) -> str:
        return f"ucl{self.season}"
