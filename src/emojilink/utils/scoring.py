from __future__ import annotations

from emojilink.constants import LOWEST_SCORE_RATING, SCORE_RATINGS


def score_rating(score: int) -> str:
    """Symbol shown next to the final score on the game-over screen."""
    for threshold, symbol in SCORE_RATINGS:
        if score >= threshold:
            return symbol
    return LOWEST_SCORE_RATING
