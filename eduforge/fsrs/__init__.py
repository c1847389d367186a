"""
FSRS - Free Spaced Repetition Scheduler

Main API for EduForge review scheduling.

This module implements an FSRS v4 style scheduler with:
- Exponential forgetting curve: R = 0.9 ** (Δt / S)
- Difficulty updates with mean reversion, clamped to [1, 10]
- Separate stability formulas for lapses and successful recall
- Immutable per-item records (MemoryState)

Quick start:
    from eduforge import fsrs

    state = fsrs.create_empty_stats()
    state = fsrs.schedule(state, fsrs.Rating.GOOD)
    r = fsrs.get_retrievability(state)

    # Custom parameters, explicit clock
    scheduler = fsrs.Scheduler(fsrs.load_parameters())
    state, log = scheduler.review(state, fsrs.Rating.EASY, now=fsrs.now_ms())
"""

# Core scheduler API (algorithm logic)
from eduforge.fsrs.scheduler import (
    Scheduler,
    ReviewLog,
    create_empty_stats,
    get_retrievability,
    schedule,
)

# Constants and parameters
from eduforge.fsrs.constants import (
    Rating,
    State,
    MS_PER_DAY,
    DEFAULT_WEIGHTS,
    DEFAULT_REQUEST_RETENTION,
    DEFAULT_MAXIMUM_INTERVAL,
    rating_offset,
)
from eduforge.fsrs.config import SchedulerParameters, load_parameters

# Memory state (for advanced usage)
from eduforge.fsrs.memory_state import (
    MemoryState,
    calculate_retrievability,
    elapsed_days,
    now_ms,
    to_datetime,
    from_datetime,
)


__all__ = [
    # Core algorithm
    "Scheduler",
    "ReviewLog",
    "create_empty_stats",
    "get_retrievability",
    "schedule",

    # Enums
    "Rating",
    "State",
    "rating_offset",

    # Parameters
    "SchedulerParameters",
    "load_parameters",
    "MS_PER_DAY",
    "DEFAULT_WEIGHTS",
    "DEFAULT_REQUEST_RETENTION",
    "DEFAULT_MAXIMUM_INTERVAL",

    # Memory state
    "MemoryState",
    "calculate_retrievability",
    "elapsed_days",
    "now_ms",
    "to_datetime",
    "from_datetime",
]
