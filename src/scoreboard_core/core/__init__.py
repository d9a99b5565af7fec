"""
Core module for the scoreboard core.

This module provides the foundational components:
- Configuration management (config.py)
- Canonical data models (models.py)
- Enums (types.py)
- Error taxonomy (errors.py)
- Shared HTTP client infrastructure and TTL cache (http.py, cache.py)

Usage:
    from scoreboard_core.core import Settings, get_settings
    from scoreboard_core.core import Game, ScoreChangeResult, GameStatus
    from scoreboard_core.core.http import BaseApiClient, FetchError
"""

# Configuration
from .config import Settings, get_settings

# Errors
from .errors import (
    ActivationError,
    DuplicatePluginError,
    PluginError,
    PluginLoadError,
    ScoreAmbiguityWarning,
    ScoreboardError,
    UnknownPluginError,
)
from .http import FetchError, RateLimitError

# Types
from .types import CelebrationType, GameStatus, PluginState, ScoreType, Side

# Models
from .models import (
    Card,
    Game,
    GameClock,
    GameDetails,
    GameSituation,
    GameStats,
    Goal,
    LiveTableEntry,
    NFLGame,
    PlayerStats,
    ScoreChangeResult,
    ScorePair,
    SoccerClock,
    SoccerGame,
    TableEntry,
    Team,
    TeamStats,
    TournamentGame,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "ScoreboardError",
    "PluginError",
    "UnknownPluginError",
    "DuplicatePluginError",
    "PluginLoadError",
    "ActivationError",
    "FetchError",
    "RateLimitError",
    "ScoreAmbiguityWarning",
    # Types
    "CelebrationType",
    "GameStatus",
    "PluginState",
    "ScoreType",
    "Side",
    # Models
    "Team",
    "Game",
    "GameClock",
    "GameSituation",
    "NFLGame",
    "SoccerClock",
    "SoccerGame",
    "TournamentGame",
    "ScorePair",
    "Goal",
    "Card",
    "PlayerStats",
    "TeamStats",
    "GameStats",
    "GameDetails",
    "ScoreChangeResult",
    "TableEntry",
    "LiveTableEntry",
]
