"""
Scoreboard Core

Live scores, clocks and highlight events for pluggable sports, behind one
contract so a display never needs to know which sport is active.

Key Features:
- Plugin registry with lazy loading and ordered activation
- Sport adapters for the NFL (ESPN) and the Bundesliga (OpenLigaDB)
- Score-change detection for celebration triggers
- Live league table projected from in-progress results

Usage:
    from scoreboard_core import build_registry

    registry = build_registry()
    plugin = await registry.activate("nfl")
    games = await plugin.adapter.fetch_scoreboard()
"""

from .core.config import Settings, get_settings
from .plugins import PluginRegistry, build_registry

__version__ = "3.0.0"

__all__ = [
    "PluginRegistry",
    "Settings",
    "build_registry",
    "get_settings",
    "__version__",
]
