"""
FSRS Update Formulas

Pure difficulty, stability and interval equations used by the scheduler.
Each function takes the parameter vector explicitly so alternative
parameter sets can be evaluated side by side.

Key principles:
- Difficulty moves by a fixed step per rating, then reverts toward the
  initial "Good" difficulty
- A lapse shrinks stability according to difficulty and prior stability
- Successful recall multiplies stability, with smaller gains for hard
  items and already-stable memories
"""

from __future__ import annotations
import math
from typing import Sequence

from eduforge.fsrs.constants import Rating, D_MIN, D_MAX, rating_offset


def clamp_difficulty(difficulty: float) -> float:
    """Clip difficulty to [1, 10]."""
    return min(max(difficulty, D_MIN), D_MAX)


def initial_difficulty(w: Sequence[float], rating: Rating) -> float:
    """
    Difficulty after the first review.

    Formula: D0 = w4 - w5 * (rating - 3)
    """
    return w[4] - w[5] * rating_offset(rating)


def next_difficulty(w: Sequence[float], difficulty: float, rating: Rating) -> float:
    """
    Difficulty step for an item that has been reviewed before.

    Formula: D' = D - w6 * (rating - 3)
    """
    return difficulty - w[6] * rating_offset(rating)


def mean_reversion(w: Sequence[float], difficulty: float) -> float:
    """
    Pull difficulty back toward the initial "Good" difficulty.

    Formula: D'' = w7 * w4 + (1 - w7) * D'
    """
    return w[7] * w[4] + (1 - w[7]) * difficulty


def update_difficulty(
    w: Sequence[float],
    difficulty: float,
    rating: Rating,
    is_new_card: bool
) -> float:
    """
    Full difficulty update: step, mean reversion, clamp.

    Args:
        w: Weight vector
        difficulty: Current difficulty (ignored for new cards)
        rating: Learner rating
        is_new_card: True if the item is in the NEW state

    Returns:
        New difficulty in [1, 10]
    """
    if is_new_card:
        stepped = initial_difficulty(w, rating)
    else:
        stepped = next_difficulty(w, difficulty, rating)

    return clamp_difficulty(mean_reversion(w, stepped))


def initial_stability(w: Sequence[float], rating: Rating) -> float:
    """Short-term stability indexed by rating: S = w[rating - 1]."""
    return w[int(rating) - 1]


def stability_after_lapse(
    w: Sequence[float],
    difficulty: float,
    stability: float,
    request_retention: float
) -> float:
    """
    Stability after forgetting a Review item (rating AGAIN).

    Formula:
        S' = w11 * D^(-w12) * ((S + 1)^w13 - 1) * exp(w14 * (1 - retention))

    Args:
        w: Weight vector
        difficulty: Difficulty after this review's update
        stability: Stability before the review
        request_retention: Target recall probability

    Returns:
        New (reduced) stability
    """
    return (
        w[11]
        * math.pow(difficulty, -w[12])
        * (math.pow(stability + 1, w[13]) - 1)
        * math.exp(w[14] * (1 - request_retention))
    )


def stability_after_recall(
    w: Sequence[float],
    difficulty: float,
    stability: float,
    request_retention: float,
    rating: Rating
) -> float:
    """
    Stability after a successful Review (HARD, GOOD or EASY).

    Formula:
        S' = S * (1 + exp(w8) * (11 - D) * S^(-w9)
                  * (exp(w10 * (1 - retention)) - 1)
                  * hard_penalty * easy_bonus)

    hard_penalty = w15 for HARD, easy_bonus = w16 for EASY, 1 otherwise.

    Args:
        w: Weight vector
        difficulty: Difficulty after this review's update
        stability: Stability before the review (must be > 0)
        request_retention: Target recall probability
        rating: HARD, GOOD or EASY

    Returns:
        New (increased) stability
    """
    if rating == Rating.AGAIN:
        raise ValueError("Use stability_after_lapse for AGAIN ratings")

    hard_penalty = w[15] if rating == Rating.HARD else 1.0
    easy_bonus = w[16] if rating == Rating.EASY else 1.0

    return stability * (
        1
        + math.exp(w[8])
        * (11 - difficulty)
        * math.pow(stability, -w[9])
        * (math.exp(w[10] * (1 - request_retention)) - 1)
        * hard_penalty
        * easy_bonus
    )


def next_interval(stability: float, request_retention: float, maximum_interval: int) -> int:
    """
    Days until the next review of a Review item.

    Formula: I = max(1, round(S * 9 * (1 / retention - 1))), capped at
    maximum_interval. Halves round up.
    """
    raw = stability * 9 * (1 / request_retention - 1)
    interval = max(1, math.floor(raw + 0.5))
    return min(interval, maximum_interval)
