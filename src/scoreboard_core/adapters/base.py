"""
Sport adapter contract.

Defines the interface every sport plugin's adapter must implement, so the
display layer can poll scores without knowing which sport is active.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..core.models import Game, GameDetails, ScoreChangeResult
from ..core.types import CelebrationType


class SportAdapter(ABC):
    """
    Abstract interface for sport adapters.

    The adapter is responsible for:
    1. Calling the sport's external provider
    2. Transforming the provider's schema into the canonical Game models
    3. Classifying score changes for that sport

    The adapter is NOT responsible for:
    - Polling cadence, retries or backoff (owned by the caller)
    - Which sport is active (owned by the plugin registry)
    """

    # Sport identifier, matches the plugin manifest id
    sport: str = ""

    # ==========================================================================
    # Provider Operations
    # ==========================================================================

    @abstractmethod
    async def fetch_scoreboard(self) -> list[Game]:
        """
        Fetch the current games from the provider.

        Returns:
            Canonical games; an empty list when the provider has none

        Raises:
            FetchError: If the provider request failed
        """
        ...

    @abstractmethod
    async def fetch_game_details(self, game_id: str) -> GameDetails:
        """
        Fetch one game plus its stats.

        Args:
            game_id: Provider game id

        Returns:
            GameDetails with ``stats`` None when the provider has no stats

        Raises:
            FetchError: If the request failed or the id is unknown
        """
        ...

    # ==========================================================================
    # Score Detection
    # ==========================================================================

    @abstractmethod
    def detect_score_change(
        self,
        prev_home: int,
        prev_away: int,
        new_home: int,
        new_away: int,
        game: Game,
    ) -> Optional[ScoreChangeResult]:
        """
        Classify what happened between two score snapshots.

        Must be a pure function of its inputs. Returns None when neither
        score went up.
        """
        ...

    # ==========================================================================
    # Display Helpers
    # ==========================================================================

    @abstractmethod
    def get_period_name(self, period: int | str) -> str:
        ...

    @abstractmethod
    def get_competition_name(self, game: Game) -> str:
        ...

    @abstractmethod
    def get_celebration_types(self) -> list[CelebrationType]:
        ...

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    async def close(self) -> None:
        """Release provider clients. Called when the plugin is unloaded."""
        return None
