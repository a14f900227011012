"""Execution watcher - runs engine ticks on a cron schedule.

The watcher owns the timing loop. All queue logic is delegated to
ExecutionEngine.
"""

import asyncio
import logging
from datetime import UTC, datetime

from croniter import croniter

from scorekeeper.execution.engine import ExecutionEngine

logger = logging.getLogger(__name__)


class ExecutionWatcher:
    """Triggers ExecutionEngine.run_tick at every cron occurrence.

    Example:
        watcher = ExecutionWatcher(engine, "*/15 * * * *")
        await watcher.start()
        ...
        await watcher.stop()  # waits for an in-flight tick to finish
    """

    def __init__(self, engine: ExecutionEngine, cron: str, run_immediately: bool = False):
        if not croniter.is_valid(cron):
            raise ValueError(f"Invalid cron expression: {cron}")
        self._engine = engine
        self._cron = cron
        self._run_immediately = run_immediately
        self._running = False
        self._wake = asyncio.Event()
        self._task: asyncio.Task | None = None
        self._tick_count = 0

    @property
    def cron(self) -> str:
        return self._cron

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def next_fire_time(self, now: datetime | None = None) -> datetime:
        base = now or datetime.now(UTC)
        return croniter(self._cron, base).get_next(datetime)

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._wake.clear()
        logger.info(
            "execution_watcher_started",
            extra={
                "watcher.cron": self._cron,
                "watcher.delay_blocks": self._engine.delay_blocks,
            },
        )
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Stop the loop. A tick already in progress runs to completion."""
        if not self._running:
            return
        self._running = False
        self._wake.set()
        if self._task:
            await self._task
            self._task = None
        logger.info("execution_watcher_stopped")

    async def _loop(self) -> None:
        if self._run_immediately:
            await self._tick()
        while self._running:
            delay = (self.next_fire_time() - datetime.now(UTC)).total_seconds()
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=max(delay, 0))
            except TimeoutError:
                pass
            if not self._running:
                break
            await self._tick()

    async def _tick(self) -> None:
        self._tick_count += 1
        logger.info("execution_cron_fired", extra={"watcher.tick": self._tick_count})
        try:
            await self._engine.run_tick()
        except Exception as e:
            logger.error(
                "execution_tick_error", extra={"error.message": str(e)}, exc_info=True
            )
