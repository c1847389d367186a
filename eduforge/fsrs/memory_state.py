"""
Memory State - FSRS Item Record and Retrievability

Defines the per-item record and the quantities derived from it.

Key concepts:
- Stability (S): Days until recall probability decays to 0.9
- Difficulty (D): How hard the item is to learn (1-10 scale)
- Retrievability (R): Probability of successful recall at time t

Timestamps are integer milliseconds since the Unix epoch.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
import time

from eduforge.fsrs.constants import State, DECAY_BASE, MS_PER_DAY


@dataclass(frozen=True)
class MemoryState:
    """
    Scheduling record for a single item.

    Records are immutable: every review produces a new one.
    """
    stability: float   # S, in days
    difficulty: float  # D, range 1-10 (0 before the first review)
    reps: int          # Completed scheduling events
    lapses: int        # Again ratings given while in Review
    state: State
    last_review: int   # ms epoch of the most recent scheduling event
    due: int           # ms epoch at/after which the item may be shown again

    def __post_init__(self):
        """Coerce state to State (rejects unknown values)."""
        object.__setattr__(self, "state", State(self.state))

    @property
    def is_new(self) -> bool:
        return self.state == State.NEW

    def to_dict(self) -> dict:
        """Plain dict suitable for JSON storage."""
        data = asdict(self)
        data["state"] = int(self.state)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> MemoryState:
        return cls(
            stability=float(data["stability"]),
            difficulty=float(data["difficulty"]),
            reps=int(data["reps"]),
            lapses=int(data["lapses"]),
            state=State(int(data["state"])),
            last_review=int(data["last_review"]),
            due=int(data["due"]),
        )


# ---- Time Helpers ----

def now_ms() -> int:
    """Current instant in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def to_datetime(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def from_datetime(dt: datetime) -> int:
    """Convert a datetime (naive values are taken as UTC) to epoch milliseconds."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(round(dt.timestamp() * 1000))


def elapsed_days(since: int, now: int) -> float:
    """Real-valued days between two ms instants (negative if now < since)."""
    return (now - since) / MS_PER_DAY


# ---- Derived Quantities ----

def create_empty_stats(now: int) -> MemoryState:
    """
    Record for an item that has never been reviewed.

    Args:
        now: Creation instant (ms epoch)

    Returns:
        MemoryState in the NEW state with zeroed counters
    """
    return MemoryState(
        stability=0.0,
        difficulty=0.0,
        reps=0,
        lapses=0,
        state=State.NEW,
        last_review=now,
        due=now,
    )


def calculate_retrievability(stability: float, days: float) -> float:
    """
    Calculate retrievability from the forgetting curve.

    Formula: R = 0.9 ** (Δt / S)

    Interpretation:
    - Immediately after review: R = 1.0
    - After S days: R = 0.9
    - R decays smoothly toward 0 afterwards

    Args:
        stability: Stability in days (0 means no memory signal)
        days: Time since last review in days

    Returns:
        Retrievability between 0 and 1
    """
    if stability < 0:
        raise ValueError(f"stability must be non-negative, got {stability}")
    if stability == 0:
        return 0.0
    if days <= 0:
        return 1.0

    return DECAY_BASE ** (days / stability)


def get_retrievability(state: MemoryState, now: int) -> float:
    """
    Probability that the item is still recalled at `now`.

    NEW items carry no memory signal and always return 0.

    Args:
        state: Current record
        now: Query instant (ms epoch)

    Returns:
        Retrievability between 0 and 1
    """
    if state.state == State.NEW:
        return 0.0

    return calculate_retrievability(
        state.stability,
        elapsed_days(state.last_review, now)
    )
