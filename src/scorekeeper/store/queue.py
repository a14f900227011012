"""Queue store backed by the SQL database.

Holds delayed nominations waiting for their time delay, the records of
executed nominations, and validator display names.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, select

from scorekeeper.db.engine import Database
from scorekeeper.db.models import Candidate, DelayedTx, Nomination
from scorekeeper.execution.types import DelayedAction, ExecutionRecord

logger = logging.getLogger(__name__)


def _to_action(row: DelayedTx) -> DelayedAction:
    return DelayedAction(
        announced_block=row.number,
        principal=row.principal,
        controller=row.controller,
        targets=list(row.targets),
        action_hash=row.call_hash,
    )


def _to_record(row: Nomination) -> ExecutionRecord:
    return ExecutionRecord(
        controller=row.controller,
        era=row.era,
        targets=list(row.validators),
        bonded_amount=int(row.bonded) if row.bonded is not None else None,
        finalized_block_hash=row.block_hash,
        created_at=row.created_at,
    )


class QueueStore:
    """SQL-backed storage for the delayed nomination queue."""

    def __init__(self, database: Database) -> None:
        self._db = database

    # ------------------------------------------------------------------
    # Delayed transactions
    # ------------------------------------------------------------------

    async def get_all_delayed_txs(self) -> list[DelayedAction]:
        """All queued actions, oldest announcement first."""
        async with self._db.session() as session:
            result = await session.execute(
                select(DelayedTx).order_by(DelayedTx.number, DelayedTx.id)
            )
            return [_to_action(row) for row in result.scalars()]

    async def add_delayed_tx(
        self,
        announced_block: int,
        principal: str,
        controller: str,
        targets: list[str],
        call_hash: str,
    ) -> DelayedAction:
        """Queue an announced nomination.

        Raises:
            ValueError: If an action is already queued for this block and controller.
        """
        action = DelayedAction(
            announced_block=announced_block,
            principal=principal,
            controller=controller,
            targets=targets,
            action_hash=call_hash,
        )
        async with self._db.session() as session:
            existing = await session.scalar(
                select(DelayedTx.id).where(
                    DelayedTx.number == announced_block,
                    DelayedTx.controller == controller,
                )
            )
            if existing is not None:
                raise ValueError(
                    f"Delayed tx already queued for {controller} at block {announced_block}"
                )
            session.add(
                DelayedTx(
                    number=action.announced_block,
                    principal=action.principal,
                    controller=action.controller,
                    targets=action.targets,
                    call_hash=action.action_hash,
                )
            )
        logger.info(
            "delayed_tx_added",
            extra={
                "tx.announced_block": announced_block,
                "tx.controller": controller,
                "tx.call_hash": call_hash,
            },
        )
        return action

    async def delete_delayed_tx(self, announced_block: int, controller: str) -> bool:
        """Remove a queued action. Returns True if a row was deleted."""
        async with self._db.session() as session:
            result = await session.execute(
                delete(DelayedTx).where(
                    DelayedTx.number == announced_block,
                    DelayedTx.controller == controller,
                )
            )
            deleted = (result.rowcount or 0) > 0
        logger.debug(
            f"Deleted delayed tx {controller}@{announced_block}: {deleted}"
        )
        return deleted

    # ------------------------------------------------------------------
    # Execution records
    # ------------------------------------------------------------------

    async def set_nomination(
        self,
        controller: str,
        era: int,
        targets: list[str],
        bonded: int | None,
        finalized_block_hash: str,
    ) -> ExecutionRecord:
        """Write the execution record, replacing any for the same era."""
        async with self._db.session() as session:
            row = await session.scalar(
                select(Nomination).where(
                    Nomination.controller == controller, Nomination.era == era
                )
            )
            if row is None:
                row = Nomination(controller=controller, era=era)
                session.add(row)
            row.validators = list(targets)
            row.bonded = str(bonded) if bonded is not None else None
            row.block_hash = finalized_block_hash
            await session.flush()
            return _to_record(row)

    async def get_nominations(
        self, controller: str | None = None, limit: int = 20
    ) -> list[ExecutionRecord]:
        """Most recent execution records, newest era first."""
        stmt = select(Nomination).order_by(Nomination.era.desc(), Nomination.id.desc())
        if controller is not None:
            stmt = stmt.where(Nomination.controller == controller)
        async with self._db.session() as session:
            result = await session.execute(stmt.limit(limit))
            return [_to_record(row) for row in result.scalars()]

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    async def get_candidate_display_name(self, address: str) -> str | None:
        async with self._db.session() as session:
            candidate = await session.get(Candidate, address)
            return candidate.name if candidate and candidate.name else None

    async def set_candidate_name(self, address: str, name: str | None) -> None:
        async with self._db.session() as session:
            candidate = await session.get(Candidate, address)
            if candidate is None:
                session.add(Candidate(stash=address, name=name))
            else:
                candidate.name = name
