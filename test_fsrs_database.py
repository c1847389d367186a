"""
Tests for the SQLAlchemy persistence adapter.

Uses a temporary SQLite file per test via DATABASE_URL.
"""

import pytest
from sqlalchemy import text

from eduforge import fsrs
from eduforge.fsrs import Rating, Scheduler, State
from eduforge.fsrs import database

T0 = 1_700_000_000_000
DAY = fsrs.MS_PER_DAY


@pytest.fixture
def db_url(monkeypatch, tmp_path):
    url = f"sqlite:///{tmp_path / 'fsrs.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.delenv("TEST_MODE", raising=False)
    return url


@pytest.fixture
def db(db_url):
    database.init_db()
    return db_url


def reviewed_states(count):
    """Yield (state, log) pairs for a scripted sequence of reviews."""
    scheduler = Scheduler()
    state = scheduler.create_empty_stats(T0)
    ratings = [Rating.GOOD, Rating.GOOD, Rating.AGAIN, Rating.HARD, Rating.EASY]
    for rating in ratings[:count]:
        state, log = scheduler.review(state, rating, state.due)
        yield state, log


class TestDatabaseUrl:

    def test_missing_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(ValueError):
            database.get_database_url()

    def test_test_mode_switches_database(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://user:pw@localhost:5432/eduforge")
        monkeypatch.setenv("TEST_MODE", "true")

        assert database.is_test_mode()
        assert database.get_database_url() == "postgresql://user:pw@localhost:5432/test_eduforge"

    def test_plain_url(self, db_url):
        assert database.get_database_url() == db_url


class TestSchema:

    def test_init_is_idempotent(self, db):
        database.init_db()
        database.init_db()

    def test_missing_columns(self, db_url):
        with database.get_engine().begin() as conn:
            conn.execute(text("CREATE TABLE memory_state (item_id VARCHAR PRIMARY KEY)"))
            conn.execute(text("CREATE TABLE review_log (id INTEGER PRIMARY KEY)"))

        with pytest.raises(RuntimeError):
            database.init_db()

    def test_reset_clears_data(self, db):
        state, _ = next(reviewed_states(1))
        database.save_memory_state("card-1", state)

        database.reset_db()

        assert database.load_memory_state("card-1") is None


class TestMemoryStatePersistence:

    def test_unknown_item(self, db):
        assert database.load_memory_state("missing") is None

    def test_round_trip(self, db):
        for state, _ in reviewed_states(5):
            database.save_memory_state("card-1", state)
            assert database.load_memory_state("card-1") == state

    def test_empty_record_round_trip(self, db):
        empty = fsrs.create_empty_stats(T0)
        database.save_memory_state("card-new", empty)

        loaded = database.load_memory_state("card-new")
        assert loaded == empty
        assert loaded.state == State.NEW

    def test_last_write_wins(self, db):
        first, second = [s for s, _ in reviewed_states(2)]
        database.save_memory_state("card-1", second)
        database.save_memory_state("card-1", first)

        assert database.load_memory_state("card-1") == first

    def test_items_are_independent(self, db):
        first, second = [s for s, _ in reviewed_states(2)]
        database.save_memory_state("a", first)
        database.save_memory_state("b", second)

        assert database.load_memory_state("a") == first
        assert database.load_memory_state("b") == second


class TestReviewLogPersistence:

    def test_recent_reviews_newest_first(self, db):
        logs = []
        for _, log in reviewed_states(3):
            database.log_review("card-1", log)
            logs.append(log)

        recent = database.get_recent_reviews("card-1")

        assert [r["review"] for r in recent] == [log.review for log in reversed(logs)]
        assert recent[0] == {"item_id": "card-1", **logs[-1].to_dict()}

    def test_filter_and_limit(self, db):
        for _, log in reviewed_states(3):
            database.log_review("card-1", log)
            database.log_review("card-2", log)

        assert len(database.get_recent_reviews()) == 6
        assert len(database.get_recent_reviews(limit=2)) == 2
        assert {r["item_id"] for r in database.get_recent_reviews("card-2")} == {"card-2"}
