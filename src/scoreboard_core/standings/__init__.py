"""
Live standings engine.

Usage:
    from scoreboard_core.standings import calculate_live_table

    live = calculate_live_table(official_table, games)
"""

from .live_table import PositionZone, calculate_live_table, get_position_zone

__all__ = [
    "PositionZone",
    "calculate_live_table",
    "get_position_zone",
]
