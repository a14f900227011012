"""SQLAlchemy ORM models."""

from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all models."""


class DelayedTx(Base):
    """An announced nomination waiting for its time delay to pass.

    Identified by (number, controller): a controller announces at most one
    call per block.
    """

    __tablename__ = "delayed_txs"
    __table_args__ = (
        UniqueConstraint("number", "controller", name="uq_delayed_txs_number_controller"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    number: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    principal: Mapped[str] = mapped_column(String, nullable=False)
    controller: Mapped[str] = mapped_column(String, nullable=False, index=True)
    targets: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    call_hash: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, nullable=False
    )


class Nomination(Base):
    """Record of an executed nomination."""

    __tablename__ = "nominations"
    __table_args__ = (
        UniqueConstraint("controller", "era", name="uq_nominations_controller_era"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    controller: Mapped[str] = mapped_column(String, nullable=False, index=True)
    era: Mapped[int] = mapped_column(Integer, nullable=False)
    validators: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    # Planck amounts overflow 64-bit integers on some networks
    bonded: Mapped[str | None] = mapped_column(String, nullable=True)
    block_hash: Mapped[str] = mapped_column(String, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, nullable=False
    )


class Candidate(Base):
    """Display name for a validator stash."""

    __tablename__ = "candidates"

    stash: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now, nullable=False
    )
