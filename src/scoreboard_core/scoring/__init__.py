"""
Score-change detection.

Usage:
    from scoreboard_core.scoring import detect_american_football_score

    event = detect_american_football_score(0, 0, 7, 0)
    event.type   # ScoreType.TOUCHDOWN_PAT
    event.video  # "touchdown"

Card helpers are for callers that own a card feed. OpenLigaDB publishes no
cards, so games from the soccer adapters arrive with ``cards == []`` and
``detect_game_cards`` returns nothing until the caller attaches cards:

    game = game.model_copy(update={"cards": cards_from_feed})
    detect_game_cards(previous_game, game)  # ["red_card"]
"""

from .detector import (
    american_football_score_type,
    american_football_video,
    describe_score,
    detect_american_football_score,
    detect_card_events,
    detect_game_cards,
    detect_soccer_score,
    goal_video,
)

__all__ = [
    "american_football_score_type",
    "american_football_video",
    "describe_score",
    "detect_american_football_score",
    "detect_card_events",
    "detect_game_cards",
    "detect_soccer_score",
    "goal_video",
]
