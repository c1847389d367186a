"""
SQLAlchemy ORM Models for FSRS Persistence

Defines MemoryStateRecord and ReviewLogRecord tables.
Timestamps are stored as epoch milliseconds to match MemoryState exactly.
"""

from sqlalchemy import BigInteger, Column, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class MemoryStateRecord(Base):
    """
    Persistent scheduling state for a single item.

    One row per item; each review overwrites the row.
    """
    __tablename__ = 'memory_state'

    item_id = Column(String(255), primary_key=True, nullable=False)

    # Memory model
    stability = Column(Float, nullable=False)
    difficulty = Column(Float, nullable=False)

    # Counters
    reps = Column(Integer, nullable=False, default=0)
    lapses = Column(Integer, nullable=False, default=0)

    state = Column(Integer, nullable=False)  # 0=NEW, 1=LEARNING, 2=REVIEW, 3=RELEARNING
    last_review = Column(BigInteger, nullable=False)  # ms epoch
    due = Column(BigInteger, nullable=False, index=True)  # ms epoch

    def __repr__(self):
        return f"<MemoryStateRecord({self.item_id}, state={self.state}, reps={self.reps})>"


class ReviewLogRecord(Base):
    """Log entry for a single scheduling event of an item."""
    __tablename__ = 'review_log'

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(String(255), nullable=False, index=True)

    rating = Column(Integer, nullable=False)  # 1=AGAIN, 2=HARD, 3=GOOD, 4=EASY
    state = Column(Integer, nullable=False)  # State before the review
    elapsed_days = Column(Float, nullable=False)
    scheduled_days = Column(Integer, nullable=False)
    review = Column(BigInteger, nullable=False)  # ms epoch

    def __repr__(self):
        return f"<ReviewLogRecord(id={self.id}, {self.item_id}, rating={self.rating})>"
