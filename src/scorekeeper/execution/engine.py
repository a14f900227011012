"""Decision engine for the delayed nomination queue.

Each tick walks a snapshot of the queue in order and, per action:

1. checks every target's commission (always, even after the delay passed)
2. if any target is invalid, cancels every matching announcement
3. otherwise executes the action once ``announced_block + delay <= block``

State is never carried between ticks. Cancellation leaves the action
queued; only a recorded execution removes it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING

from scorekeeper.chain.protocols import ChainData, PrincipalGroup, find_group
from scorekeeper.constants import (
    EXECUTION_COOLDOWN_MS,
    EXECUTION_TASK_NAME,
    TIME_DELAY_BLOCKS,
)
from scorekeeper.execution.announcements import AnnouncementCanceller
from scorekeeper.execution.executor import Cooldown, Executor
from scorekeeper.execution.notifier import Notifier, NullNotifier, notify
from scorekeeper.execution.progress import ProgressReporter, ProgressSink
from scorekeeper.execution.types import (
    ActionState,
    DelayedAction,
    ItemReport,
    TickReport,
    ValidityResult,
    all_valid,
)
from scorekeeper.execution.validity import CommissionChecker

if TYPE_CHECKING:
    from scorekeeper.store.queue import QueueStore

logger = logging.getLogger(__name__)


def classify(
    action: DelayedAction,
    validity: list[ValidityResult],
    current_block: int,
    delay_blocks: int,
) -> ActionState:
    """Decide what a pending action needs this tick.

    Validity is checked before eligibility so an action that turns invalid
    after its delay elapsed is still cancelled rather than executed.
    """
    if not all_valid(validity):
        return ActionState.INVALID
    if action.is_eligible(current_block, delay_blocks):
        return ActionState.VALID_ELIGIBLE
    return ActionState.VALID_WAITING


_PROGRESS_NOTES = {
    ActionState.EXECUTED: "Executed transaction",
    ActionState.CANCELLED: "Cancelled transaction",
}


class _TickAborted(Exception):
    """Chain state needed for a tick is unavailable."""


class ExecutionEngine:
    """Runs ticks over the delayed queue.

    Example:
        engine = ExecutionEngine(chain, store, groups, progress_sink=sink,
                                 commission_threshold=Decimal("10"))
        report = await engine.run_tick()
    """

    def __init__(
        self,
        chain: ChainData,
        store: QueueStore,
        groups: Sequence[PrincipalGroup],
        progress_sink: ProgressSink,
        commission_threshold: Decimal,
        delay_blocks: int = TIME_DELAY_BLOCKS,
        notifier: Notifier | None = None,
        cooldown: Cooldown | None = None,
        executor: Executor | None = None,
        task_name: str = EXECUTION_TASK_NAME,
    ):
        self._chain = chain
        self._store = store
        self._groups = list(groups)
        self._threshold = commission_threshold
        self._delay_blocks = delay_blocks
        self._notifier = notifier or NullNotifier()
        self._cooldown = cooldown or Cooldown(EXECUTION_COOLDOWN_MS)
        self._checker = CommissionChecker(chain)
        self._canceller = AnnouncementCanceller(chain, self._notifier)
        self._executor = executor or Executor(chain, store, notifier=self._notifier)
        self._progress = ProgressReporter(progress_sink, task_name)
        self._lock = asyncio.Lock()

    @property
    def delay_blocks(self) -> int:
        return self._delay_blocks

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def run_tick(self) -> TickReport:
        """Scan the queue once.

        Overlapping calls are skipped, not queued.
        """
        report = TickReport()
        if self._lock.locked():
            logger.warning("execution_tick_skipped_already_running")
            report.skipped = True
            return report

        async with self._lock:
            logger.info(
                "execution_tick_started",
                extra={"tick.delay_blocks": self._delay_blocks},
            )
            await self._run(report)
            logger.info(
                "execution_tick_finished",
                extra={
                    "tick.items": len(report.items),
                    "tick.executed": report.executed,
                    "tick.cancelled": report.cancelled,
                    "tick.aborted": report.aborted,
                },
            )
        return report

    async def _chain_state(self) -> tuple[int, int]:
        """Latest block and current era. Raises _TickAborted when unusable."""
        try:
            if not await self._chain.is_connected():
                raise _TickAborted("api is not connected")
            latest_block = await self._chain.get_latest_block()
            if latest_block is None:
                raise _TickAborted("latest block is unavailable")
            era = await self._chain.get_current_era()
            if era is None:
                raise _TickAborted("current era is unavailable")
        except _TickAborted:
            raise
        except Exception as e:
            raise _TickAborted(f"chain query failed: {e}") from e
        return latest_block, era

    async def _run(self, report: TickReport) -> None:
        try:
            latest_block, era = await self._chain_state()
        except _TickAborted as e:
            report.aborted = str(e)
            logger.error("execution_tick_aborted", extra={"tick.reason": report.aborted})
            return
        report.latest_block, report.era = latest_block, era

        try:
            actions = await self._store.get_all_delayed_txs()
        except Exception as e:
            report.aborted = f"queue read failed: {e}"
            logger.error(
                "execution_tick_aborted",
                extra={"tick.reason": report.aborted},
                exc_info=True,
            )
            return

        total = len(actions)
        for index, action in enumerate(actions):
            item = await self._process(action, latest_block, era)
            report.items.append(item)
            note = _PROGRESS_NOTES.get(item.state, "Processed transaction")
            self._progress.item_done(index, total, f"{note}: {action.action_hash}")

        self._progress.batch_done()

    async def _process(
        self, action: DelayedAction, latest_block: int, era: int
    ) -> ItemReport:
        """Resolve one action. Never raises."""
        item = ItemReport(action=action, state=ActionState.PENDING)
        try:
            await self._resolve(item, latest_block, era)
        except Exception as e:
            item.error = str(e)
            if item.state is ActionState.EXECUTING:
                item.state = ActionState.EXEC_FAILED
            else:
                item.state = ActionState.SKIPPED
            logger.error(
                "delayed_tx_processing_failed",
                extra={
                    "tx.announced_block": action.announced_block,
                    "tx.controller": action.controller,
                    "error.message": str(e),
                },
                exc_info=True,
            )
        return item

    async def _resolve(self, item: ItemReport, latest_block: int, era: int) -> None:
        action = item.action
        group = find_group(self._groups, action.controller)
        if group is None:
            self._skip(item, "nominator group not found")
            return
        if not action.targets:
            self._skip(item, "delayed tx has no targets")
            return

        validity = await self._checker.check_targets(action.targets, self._threshold)
        item.state = classify(action, validity, latest_block, self._delay_blocks)

        if item.state is ActionState.INVALID:
            await self._report_invalid(validity)
            item.state = ActionState.CANCELLING
            item.cancelled_announcements = await self._canceller.cancel_matching(
                group, action.action_hash
            )
            item.state = ActionState.CANCELLED
            return

        if item.state is ActionState.VALID_WAITING:
            logger.debug(
                f"Delayed tx {action.controller}@{action.announced_block} eligible at "
                f"block {action.announced_block + self._delay_blocks} (now {latest_block})"
            )
            return

        logger.info(
            "delayed_tx_ready",
            extra={
                "tx.announced_block": action.announced_block,
                "tx.controller": action.controller,
            },
        )
        item.state = ActionState.EXECUTING
        try:
            outcome = await self._executor.execute(action, group, era)
        finally:
            await self._cooldown.wait()

        if outcome.submitted:
            item.state = ActionState.EXECUTED
        else:
            item.state = ActionState.EXEC_FAILED
            item.error = outcome.error or "transaction not submitted"

    async def _report_invalid(self, validity: list[ValidityResult]) -> None:
        for result in validity:
            if result.valid or result.commission is None:
                continue
            logger.warning(
                "invalid_commission",
                extra={
                    "validator.address": result.target,
                    "validator.commission": str(result.commission),
                },
            )
            await notify(
                self._notifier,
                f"@room {result.target} has invalid commission: {result.commission}",
            )

    def _skip(self, item: ItemReport, reason: str) -> None:
        item.state = ActionState.SKIPPED
        item.error = reason
        logger.error(
            "delayed_tx_skipped",
            extra={
                "tx.announced_block": item.action.announced_block,
                "tx.controller": item.action.controller,
                "tx.reason": reason,
            },
        )
