"""
Scheduler Configuration

SchedulerParameters bundles the weight vector, retention target and
interval cap. A scheduler owns one instance, so personalised parameters
can be swapped in without touching the algorithm.

Environment variables (read via load_parameters, .env supported):
    FSRS_WEIGHTS            comma-separated list of 17 floats
    FSRS_REQUEST_RETENTION  target recall probability, in (0, 1)
    FSRS_MAXIMUM_INTERVAL   interval cap in days
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from dotenv import load_dotenv

from eduforge.fsrs.constants import (
    DEFAULT_WEIGHTS,
    DEFAULT_REQUEST_RETENTION,
    DEFAULT_MAXIMUM_INTERVAL,
)


WEIGHT_COUNT = len(DEFAULT_WEIGHTS)


@dataclass(frozen=True)
class SchedulerParameters:
    """Fixed parameters of one FSRS scheduler."""
    w: Tuple[float, ...] = DEFAULT_WEIGHTS
    request_retention: float = DEFAULT_REQUEST_RETENTION
    maximum_interval: int = DEFAULT_MAXIMUM_INTERVAL

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "w", tuple(float(x) for x in self.w))

        if len(self.w) != WEIGHT_COUNT:
            raise ValueError(
                f"Expected {WEIGHT_COUNT} weights, got {len(self.w)}"
            )
        if not 0.0 < self.request_retention < 1.0:
            raise ValueError(
                f"request_retention must be in (0, 1), got {self.request_retention}"
            )
        if self.maximum_interval < 1:
            raise ValueError(
                f"maximum_interval must be at least 1 day, got {self.maximum_interval}"
            )


def parse_weights(raw: str) -> Tuple[float, ...]:
    """
    Parse a comma-separated weight list.

    Args:
        raw: String like "0.4, 0.6, 2.4, ..."

    Returns:
        Tuple of floats (length is checked by SchedulerParameters)
    """
    try:
        return tuple(float(part) for part in raw.split(",") if part.strip())
    except ValueError as exc:
        raise ValueError(f"FSRS_WEIGHTS is not a list of numbers: {raw!r}") from exc


def load_parameters(env_file: Optional[str] = None) -> SchedulerParameters:
    """
    Build SchedulerParameters from environment variables.

    Missing variables fall back to the defaults.

    Args:
        env_file: Optional path to a .env file (default: search from cwd)

    Returns:
        Validated SchedulerParameters
    """
    load_dotenv(env_file)

    weights: Sequence[float] = DEFAULT_WEIGHTS
    raw_weights = os.getenv("FSRS_WEIGHTS")
    if raw_weights:
        weights = parse_weights(raw_weights)

    retention = DEFAULT_REQUEST_RETENTION
    raw_retention = os.getenv("FSRS_REQUEST_RETENTION")
    if raw_retention:
        try:
            retention = float(raw_retention)
        except ValueError as exc:
            raise ValueError(
                f"FSRS_REQUEST_RETENTION is not a number: {raw_retention!r}"
            ) from exc

    maximum_interval = DEFAULT_MAXIMUM_INTERVAL
    raw_interval = os.getenv("FSRS_MAXIMUM_INTERVAL")
    if raw_interval:
        try:
            maximum_interval = int(raw_interval)
        except ValueError as exc:
            raise ValueError(
                f"FSRS_MAXIMUM_INTERVAL is not an integer: {raw_interval!r}"
            ) from exc

    return SchedulerParameters(
        w=weights,
        request_retention=retention,
        maximum_interval=maximum_interval,
    )
