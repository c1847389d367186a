"""
Tests for MemoryState, time helpers and retrievability.
"""

import json
from datetime import datetime, timezone

import pytest

from eduforge import fsrs
from eduforge.fsrs import MemoryState, Rating, State
from eduforge.fsrs.memory_state import calculate_retrievability

T0 = 1_700_000_000_000
DAY = fsrs.MS_PER_DAY


def reviewed(stability=2.4, state=State.LEARNING):
    return MemoryState(
        stability=stability,
        difficulty=4.93,
        reps=1,
        lapses=0,
        state=state,
        last_review=T0,
        due=T0 + DAY,
    )


class TestEmptyStats:

    def test_fields(self):
        empty = fsrs.create_empty_stats(T0)

        assert empty.state == State.NEW
        assert empty.stability == 0
        assert empty.difficulty == 0
        assert empty.reps == 0
        assert empty.lapses == 0
        assert empty.last_review == T0
        assert empty.due == T0
        assert empty.is_new

    def test_records_are_immutable(self):
        empty = fsrs.create_empty_stats(T0)
        with pytest.raises(AttributeError):
            empty.reps = 3

    def test_unknown_state_rejected(self):
        with pytest.raises(ValueError):
            MemoryState(stability=1.0, difficulty=5.0, reps=1, lapses=0,
                        state=9, last_review=T0, due=T0)

    def test_int_state_coerced(self):
        state = MemoryState(stability=1.0, difficulty=5.0, reps=1, lapses=0,
                            state=2, last_review=T0, due=T0)
        assert state.state is State.REVIEW


class TestRetrievability:

    @pytest.mark.parametrize("offset_days", [0, 1, 30, 10_000])
    def test_new_item_is_zero(self, offset_days):
        state = MemoryState(stability=5.0, difficulty=5.0, reps=0, lapses=0,
                            state=State.NEW, last_review=T0, due=T0)
        assert fsrs.get_retrievability(state, T0 + offset_days * DAY) == 0.0

    @pytest.mark.parametrize("state", [State.LEARNING, State.REVIEW, State.RELEARNING])
    def test_zero_stability_is_zero(self, state):
        assert fsrs.get_retrievability(reviewed(stability=0.0, state=state), T0 + DAY) == 0.0

    def test_ninety_percent_after_stability_days(self):
        state = reviewed(stability=2.4)
        now = T0 + int(2.4 * DAY)
        assert fsrs.get_retrievability(state, now) == pytest.approx(0.9)

    def test_fractional_days(self):
        state = reviewed(stability=10.0)
        now = T0 + DAY // 2
        assert fsrs.get_retrievability(state, now) == pytest.approx(0.9 ** 0.05)

    def test_decays_over_time(self):
        state = reviewed(stability=5.0)
        values = [fsrs.get_retrievability(state, T0 + d * DAY) for d in range(0, 30, 3)]

        assert values[0] == 1.0
        assert all(b < a for a, b in zip(values, values[1:]))
        assert all(0.0 <= v <= 1.0 for v in values)

    def test_query_before_last_review(self):
        assert fsrs.get_retrievability(reviewed(), T0 - DAY) == 1.0

    def test_idempotent(self):
        state = reviewed(stability=3.3)
        now = T0 + 7 * DAY
        assert fsrs.get_retrievability(state, now) == fsrs.get_retrievability(state, now)

    def test_negative_stability_rejected(self):
        with pytest.raises(ValueError):
            calculate_retrievability(-1.0, 2.0)


class TestSerialization:

    def test_dict_round_trip(self):
        state = fsrs.create_empty_stats(T0)
        for rating in (Rating.GOOD, Rating.GOOD, Rating.AGAIN, Rating.HARD, Rating.EASY):
            state = fsrs.schedule(state, rating, state.due)

        restored = MemoryState.from_dict(json.loads(json.dumps(state.to_dict())))
        assert restored == state

    def test_dict_uses_plain_state_value(self):
        data = fsrs.create_empty_stats(T0).to_dict()
        assert data["state"] == 0
        assert type(data["state"]) is int


class TestTimeHelpers:

    def test_elapsed_days_is_real_valued(self):
        assert fsrs.elapsed_days(T0, T0 + DAY + DAY // 4) == pytest.approx(1.25)

    def test_datetime_round_trip(self):
        dt = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
        assert fsrs.to_datetime(fsrs.from_datetime(dt)) == dt

    def test_naive_datetime_is_utc(self):
        assert fsrs.from_datetime(datetime(1970, 1, 2)) == DAY
