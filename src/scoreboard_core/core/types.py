"""
Core enums shared by the registry, adapters and detectors.
"""

from enum import Enum
from typing import Literal


class GameStatus(str, Enum):
    """Canonical game status every adapter maps its provider's status onto."""

    scheduled = "scheduled"
    in_progress = "in_progress"
    halftime = "halftime"
    final = "final"


class ScoreType(str, Enum):
    """What kind of scoring play a score delta represents."""

    TOUCHDOWN = "TOUCHDOWN"
    TOUCHDOWN_PAT = "TOUCHDOWN_PAT"
    TOUCHDOWN_2PT = "TOUCHDOWN_2PT"
    FIELD_GOAL = "FIELD_GOAL"
    SAFETY = "SAFETY"
    EXTRA_POINT = "EXTRA_POINT"
    GOAL = "GOAL"


class PluginState(str, Enum):
    """Lifecycle state of a registered plugin."""

    registered = "registered"
    loading = "loading"
    active = "active"
    inactive = "inactive"
    error = "error"


Side = Literal["home", "away"]

# Celebration types are sport-defined strings declared in each manifest
CelebrationType = str
