"""
Scheduler - FSRS Algorithm Logic

Pure FSRS scheduling and state transitions (no database calls).

Main workflow:
1. Caller loads the item's MemoryState
2. Compute elapsed time since the last review
3. Update difficulty (step, mean reversion, clamp)
4. Update stability and lifecycle state
5. Derive the next interval and return a new record

This module handles ONLY the algorithm logic.
Database I/O is handled by the database module.

State transitions:
    NEW                    + any          -> LEARNING
    LEARNING / RELEARNING  + GOOD / EASY  -> REVIEW
    LEARNING / RELEARNING  + AGAIN / HARD -> LEARNING
    REVIEW                 + AGAIN        -> RELEARNING (lapse)
    REVIEW                 + HARD/GOOD/EASY -> REVIEW
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from eduforge.fsrs import memory_state, updates
from eduforge.fsrs.config import SchedulerParameters
from eduforge.fsrs.constants import Rating, State, MS_PER_DAY, STORAGE_PRECISION
from eduforge.fsrs.memory_state import MemoryState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewLog:
    """Log entry for one scheduling event."""
    rating: Rating
    state: State            # State before the review
    elapsed_days: float     # Days since the previous review (0 for NEW)
    scheduled_days: int     # Interval chosen by this review
    review: int             # ms epoch of the review

    def to_dict(self) -> dict:
        return {
            "rating": int(self.rating),
            "state": int(self.state),
            "elapsed_days": self.elapsed_days,
            "scheduled_days": self.scheduled_days,
            "review": self.review,
        }


def _validate(current: MemoryState) -> None:
    """Reject records that violate the scheduler's input contract."""
    if current.stability < 0:
        raise ValueError(f"stability must be non-negative, got {current.stability}")
    if current.reps < 0 or current.lapses < 0:
        raise ValueError(
            f"reps and lapses must be non-negative, got {current.reps}/{current.lapses}"
        )
    if current.state == State.REVIEW and current.stability == 0:
        raise ValueError("REVIEW item has zero stability")


class Scheduler:
    """
    FSRS scheduler bound to one parameter set.

    All methods are pure and take an explicit `now` (ms epoch); use the
    module-level wrappers for "current instant" defaults.

    Attributes:
        parameters: Weight vector, retention target and interval cap
    """

    def __init__(self, parameters: Optional[SchedulerParameters] = None):
        self.parameters = parameters or SchedulerParameters()

    def create_empty_stats(self, now: int) -> MemoryState:
        """Record for an item that has never been reviewed."""
        return memory_state.create_empty_stats(now)

    def get_retrievability(self, state: MemoryState, now: int) -> float:
        """Probability that the item is still recalled at `now`."""
        return memory_state.get_retrievability(state, now)

    def schedule(self, current: MemoryState, rating: Rating, now: int) -> MemoryState:
        """
        Apply one rating to a record and return the updated record.

        The input record is never modified.

        Args:
            current: Latest stored record for the item
            rating: Learner rating (1-4)
            now: Review instant (ms epoch)

        Returns:
            New MemoryState with updated S, D, counters and due date
        """
        new_state, _ = self.review(current, rating, now)
        return new_state

    def review(
        self,
        current: MemoryState,
        rating: Rating,
        now: int
    ) -> Tuple[MemoryState, ReviewLog]:
        """
        Apply one rating and also return a ReviewLog of the event.

        Args:
            current: Latest stored record for the item
            rating: Learner rating (1-4)
            now: Review instant (ms epoch)

        Returns:
            Tuple of (new_state, review_log)
        """
        rating = Rating(rating)
        _validate(current)

        p = self.parameters
        w = p.w
        is_new_card = current.state == State.NEW

        # Recorded in the log only; formulas use the previous S and D
        elapsed = 0.0 if is_new_card else memory_state.elapsed_days(current.last_review, now)

        new_difficulty = updates.update_difficulty(w, current.difficulty, rating, is_new_card)
        new_lapses = current.lapses

        if is_new_card:
            new_stability = updates.initial_stability(w, rating)
            new_state = State.LEARNING
        elif current.state in (State.LEARNING, State.RELEARNING):
            new_stability = updates.initial_stability(w, rating)
            if rating in (Rating.GOOD, Rating.EASY):
                new_state = State.REVIEW
            else:
                new_state = State.LEARNING
        elif rating == Rating.AGAIN:
            new_stability = updates.stability_after_lapse(
                w, new_difficulty, current.stability, p.request_retention
            )
            new_state = State.RELEARNING
            new_lapses += 1
        else:
            new_stability = updates.stability_after_recall(
                w, new_difficulty, current.stability, p.request_retention, rating
            )
            new_state = State.REVIEW

        if new_state == State.REVIEW:
            interval = updates.next_interval(
                new_stability, p.request_retention, p.maximum_interval
            )
        else:
            interval = 1

        logger.debug(
            "FSRS %s -> %s (rating=%s, S=%.4f, D=%.4f, interval=%dd)",
            current.state.name, new_state.name, rating.name,
            new_stability, new_difficulty, interval
        )

        new_record = MemoryState(
            stability=round(new_stability, STORAGE_PRECISION),
            difficulty=round(new_difficulty, STORAGE_PRECISION),
            reps=current.reps + 1,
            lapses=new_lapses,
            state=new_state,
            last_review=now,
            due=now + interval * MS_PER_DAY,
        )

        log = ReviewLog(
            rating=rating,
            state=current.state,
            elapsed_days=elapsed,
            scheduled_days=interval,
            review=now,
        )

        return new_record, log


# ---- Default-scheduler wrappers (current instant by default) ----

_default_scheduler = Scheduler()


def create_empty_stats(now: Optional[int] = None) -> MemoryState:
    if now is None:
        now = memory_state.now_ms()
    return _default_scheduler.create_empty_stats(now)


def get_retrievability(state: MemoryState, now: Optional[int] = None) -> float:
    if now is None:
        now = memory_state.now_ms()
    return _default_scheduler.get_retrievability(state, now)


def schedule(current: MemoryState, rating: Rating, now: Optional[int] = None) -> MemoryState:
    if now is None:
        now = memory_state.now_ms()
    return _default_scheduler.schedule(current, rating, now)
