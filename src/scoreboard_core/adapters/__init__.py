"""
Sport adapters: the per-sport fetch and transform boundary.

SportAdapter is the contract; SoccerAdapter holds the OpenLigaDB
transformation shared by association football plugins, and
TournamentAdapter narrows it to single-league cup tournaments.
"""

from .base import SportAdapter
from .soccer import SoccerAdapter
from .tournament import TournamentAdapter

__all__ = ["SportAdapter", "SoccerAdapter", "TournamentAdapter"]
