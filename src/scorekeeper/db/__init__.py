"""Database layer."""

from scorekeeper.db.engine import Database
from scorekeeper.db.models import Base, Candidate, DelayedTx, Nomination

__all__ = [
    "Base",
    "Candidate",
    "Database",
    "DelayedTx",
    "Nomination",
]
