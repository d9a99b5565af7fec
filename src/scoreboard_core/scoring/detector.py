"""
Score-change detection from two consecutive score snapshots.

Both sport families share the same diffing steps and differ only in how a
positive delta is classified:

- American football maps the delta onto a scoring play (6 = touchdown,
  3 = field goal, ...) and picks a celebration video from it.
- Association football treats any positive delta as a goal; the video comes
  from the game's goal feed (penalty, own goal) rather than the scoreline.

When both scores move in one poll an update was missed. Two polls cannot
tell which play came first, so the larger delta wins (home on a tie), the
result is flagged ``ambiguous`` and a ScoreAmbiguityWarning is emitted.

All functions here are pure apart from that diagnostic.
"""

from __future__ import annotations

import logging
import warnings
from typing import Callable, Iterable, Optional, Sequence

from ..core.errors import ScoreAmbiguityWarning
from ..core.models import Card, Game, Goal, ScoreChangeResult, SoccerGame
from ..core.types import CelebrationType, ScoreType, Side

logger = logging.getLogger(__name__)

Classifier = Callable[[int, Side, bool], ScoreChangeResult]


def _diff_scores(
    prev_home: int,
    prev_away: int,
    new_home: int,
    new_away: int,
    classify: Classifier,
) -> Optional[ScoreChangeResult]:
    home_diff = new_home - prev_home
    away_diff = new_away - prev_away

    if home_diff == 0 and away_diff == 0:
        return None

    if home_diff > 0 and away_diff == 0:
        return classify(home_diff, "home", False)

    if away_diff > 0 and home_diff == 0:
        return classify(away_diff, "away", False)

    if home_diff <= 0 and away_diff <= 0:
        # Score correction (e.g. a goal taken back), nothing to celebrate
        logger.debug(
            "Score went down %s-%s -> %s-%s, ignoring",
            prev_home, prev_away, new_home, new_away,
        )
        return None

    message = (
        f"Both scores changed between polls ({prev_home}-{prev_away} -> "
        f"{new_home}-{new_away}); possible missed update"
    )
    logger.warning(message)
    warnings.warn(message, ScoreAmbiguityWarning, stacklevel=3)

    if home_diff >= away_diff:
        return classify(home_diff, "home", True)
    return classify(away_diff, "away", True)


# =============================================================================
# American football
# =============================================================================

_AF_SCORE_TYPES: dict[int, ScoreType] = {
    1: ScoreType.EXTRA_POINT,
    2: ScoreType.SAFETY,  # two-point conversions land here too
    3: ScoreType.FIELD_GOAL,
    6: ScoreType.TOUCHDOWN,
    7: ScoreType.TOUCHDOWN_PAT,
    8: ScoreType.TOUCHDOWN_2PT,
}


def american_football_score_type(diff: int) -> ScoreType:
    """Map a positive point delta onto the scoring play it most likely was."""
    if diff in _AF_SCORE_TYPES:
        return _AF_SCORE_TYPES[diff]
    # 9+ means several plays were folded into one poll
    if diff >= 6:
        return ScoreType.TOUCHDOWN
    return ScoreType.FIELD_GOAL


def american_football_video(diff: int) -> Optional[CelebrationType]:
    """Celebration video for a point delta; extra points are not celebrated."""
    if diff >= 6:
        return "touchdown"
    if diff == 3:
        return "fieldgoal"
    if diff == 2:
        return "safety"
    return None


def _classify_american_football(diff: int, team: Side, ambiguous: bool) -> ScoreChangeResult:
    return ScoreChangeResult(
        type=american_football_score_type(diff),
        team=team,
        points=diff,
        video=american_football_video(diff),
        ambiguous=ambiguous,
    )


def detect_american_football_score(
    prev_home: int,
    prev_away: int,
    new_home: int,
    new_away: int,
) -> Optional[ScoreChangeResult]:
    """
    Classify the scoring play between two American football snapshots.

    Returns None when neither score went up.
    """
    return _diff_scores(prev_home, prev_away, new_home, new_away, _classify_american_football)


# =============================================================================
# Association football
# =============================================================================


def goal_video(goal: Optional[Goal]) -> CelebrationType:
    """Celebration video for the latest goal in the feed."""
    if goal is None:
        return "goal"
    if goal.is_penalty:
        return "penalty"
    if goal.is_own_goal:
        return "own_goal"
    return "goal"


def detect_soccer_score(
    prev_home: int,
    prev_away: int,
    new_home: int,
    new_away: int,
    goals: Sequence[Goal] = (),
) -> Optional[ScoreChangeResult]:
    """
    Detect a goal between two snapshots.

    ``goals`` is the game's goal feed in match order; its last entry decides
    between the goal, penalty and own-goal videos.
    """
    latest = goals[-1] if goals else None

    def classify(diff: int, team: Side, ambiguous: bool) -> ScoreChangeResult:
        return ScoreChangeResult(
            type=ScoreType.GOAL,
            team=team,
            points=diff,
            video=goal_video(latest),
            ambiguous=ambiguous,
        )

    return _diff_scores(prev_home, prev_away, new_home, new_away, classify)


_CARD_CELEBRATIONS: dict[str, CelebrationType] = {
    "red": "red_card",
    "yellow-red": "yellow_red_card",
}


def _card_key(card: Card) -> tuple:
    return (card.minute, card.player_name, card.team, card.type)


def detect_card_events(
    previous: Iterable[Card],
    current: Iterable[Card],
) -> list[CelebrationType]:
    """
    Celebration types for sending-offs that appeared since the last poll.

    Plain yellow cards are never celebrated.
    """
    seen = {_card_key(card) for card in previous}
    return [
        _CARD_CELEBRATIONS[card.type]
        for card in current
        if card.type in _CARD_CELEBRATIONS and _card_key(card) not in seen
    ]


def detect_game_cards(previous: Optional[Game], current: Game) -> list[CelebrationType]:
    """detect_card_events for two snapshots of the same soccer game."""
    if not isinstance(current, SoccerGame):
        return []
    prev_cards = previous.cards if isinstance(previous, SoccerGame) else []
    return detect_card_events(prev_cards, current.cards)


# =============================================================================
# Display
# =============================================================================

_HEADLINES: dict[ScoreType, str] = {
    ScoreType.TOUCHDOWN: "TOUCHDOWN!",
    ScoreType.TOUCHDOWN_PAT: "TOUCHDOWN!",
    ScoreType.TOUCHDOWN_2PT: "TOUCHDOWN + 2PT!",
    ScoreType.FIELD_GOAL: "FIELD GOAL!",
    ScoreType.SAFETY: "SAFETY!",
    ScoreType.EXTRA_POINT: "EXTRA POINT",
    ScoreType.GOAL: "GOAL!",
}


def describe_score(result: ScoreChangeResult) -> str:
    """Headline text for a score event."""
    return _HEADLINES.get(result.type, "SCORE!")
