"""
Simulate FSRS scheduling for a sequence of ratings.

Starts from an empty record and applies each rating in turn. By default
every review happens exactly at the item's due instant; --gap-days reviews
after a fixed gap instead.

Usage:
    python -m scripts.simulate_schedule --ratings 3,3,4,1,3
    python -m scripts.simulate_schedule --ratings 3,4,4,4 --gap-days 2 --start 2024-01-01

Scheduler parameters can be overridden with FSRS_WEIGHTS,
FSRS_REQUEST_RETENTION and FSRS_MAXIMUM_INTERVAL (see eduforge.fsrs.config).
"""

from __future__ import annotations

import argparse
from datetime import datetime
from typing import Optional

from eduforge import fsrs


def parse_ratings(raw: str) -> list[fsrs.Rating]:
    """Parse "3,3,4,1" into Rating values (argparse type)."""
    ratings = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ratings.append(fsrs.Rating(int(part)))
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"invalid rating {part!r} (expected 1=again, 2=hard, 3=good, 4=easy)"
            )
    if not ratings:
        raise argparse.ArgumentTypeError("at least one rating is required")
    return ratings


def simulate(
    ratings: list[fsrs.Rating],
    start: int,
    gap_days: Optional[float] = None,
    scheduler: Optional[fsrs.Scheduler] = None
) -> list[dict]:
    """
    Replay ratings from an empty record.

    Args:
        ratings: Ratings to apply, in order
        start: First review instant (ms epoch)
        gap_days: Fixed gap between reviews (default: review when due)
        scheduler: Scheduler to use (default: parameters from environment)

    Returns:
        One dict per review with the resulting state
    """
    scheduler = scheduler or fsrs.Scheduler(fsrs.load_parameters())
    state = scheduler.create_empty_stats(start)
    now = start
    rows = []

    for step, rating in enumerate(ratings, 1):
        retrievability = scheduler.get_retrievability(state, now)
        state, log = scheduler.review(state, rating, now)
        rows.append({
            "step": step,
            "review": now,
            "rating": rating,
            "retrievability": retrievability,
            "state": state,
            "interval": log.scheduled_days,
        })

        if gap_days is None:
            now = state.due
        else:
            now = now + int(gap_days * fsrs.MS_PER_DAY)

    return rows


def print_rows(rows: list[dict]) -> None:
    print("=" * 80)
    print(f"{'#':>3}  {'date':<10}  {'rating':<6}  {'R before':>8}  {'state':<10}  "
          f"{'S':>10}  {'D':>7}  {'days':>6}")
    print("-" * 80)
    for row in rows:
        state = row["state"]
        date = fsrs.to_datetime(row["review"]).date().isoformat()
        print(f"{row['step']:>3}  {date:<10}  {row['rating'].name:<6}  "
              f"{row['retrievability']:>8.3f}  {state.state.name:<10}  "
              f"{state.stability:>10.4f}  {state.difficulty:>7.4f}  {row['interval']:>6}")
    print("=" * 80)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Simulate FSRS scheduling for a rating sequence")
    parser.add_argument(
        "--ratings",
        type=parse_ratings,
        required=True,
        help="Comma-separated ratings, e.g. '3,3,4,1,3' (1=again ... 4=easy)"
    )
    parser.add_argument(
        "--start",
        type=datetime.fromisoformat,
        default=None,
        help="First review date/time in ISO format (default: now)"
    )
    parser.add_argument(
        "--gap-days",
        type=float,
        default=None,
        help="Review after a fixed number of days instead of at each due date"
    )

    args = parser.parse_args(argv)

    start = fsrs.from_datetime(args.start) if args.start else fsrs.now_ms()
    rows = simulate(args.ratings, start, gap_days=args.gap_days)
    print_rows(rows)


if __name__ == "__main__":
    main()
