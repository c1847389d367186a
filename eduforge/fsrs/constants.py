"""
FSRS Constants and Parameters

Rating and state enums plus the default FSRS v4 parameter table.
Values can be overridden per scheduler via SchedulerParameters (see config).
"""

from enum import IntEnum


# ---- Ratings ----

class Rating(IntEnum):
    """Learner's grade after a recall attempt."""
    AGAIN = 1  # Recall failed
    HARD = 2   # Recalled with significant effort
    GOOD = 3   # Recalled normally
    EASY = 4   # Recalled effortlessly


# ---- Lifecycle States ----

class State(IntEnum):
    """Lifecycle stage of an item."""
    NEW = 0
    LEARNING = 1
    REVIEW = 2
    RELEARNING = 3


# ---- Time ----

MS_PER_DAY = 86_400_000


# ---- Forgetting Curve ----

# R = DECAY_BASE ** (t / S), so stability is the time until R drops to 0.9
DECAY_BASE = 0.9


# ---- Difficulty Bounds ----

D_MIN = 1.0
D_MAX = 10.0


# ---- Default Parameters ----

DEFAULT_WEIGHTS = (
    0.4, 0.6, 2.4, 5.8,  # w0-w3: initial stability by rating
    4.93, 0.94,          # w4-w5: initial difficulty
    0.86, 0.01,          # w6-w7: difficulty step, mean reversion
    1.49, 0.14, 0.94,    # w8-w10: recall stability
    2.18, 0.05, 0.34, 1.26,  # w11-w14: lapse stability
    0.29, 2.61,          # w15-w16: hard penalty, easy bonus
)

DEFAULT_REQUEST_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL = 36500  # days

# Decimal places kept for stored stability and difficulty
STORAGE_PRECISION = 4


def rating_offset(rating: Rating) -> int:
    """Signed distance of a rating from GOOD (Again=-2 ... Easy=+1)."""
    return int(rating) - int(Rating.GOOD)
