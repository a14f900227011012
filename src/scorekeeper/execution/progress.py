"""Progress reporting for execution ticks."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Protocol

from scorekeeper.execution.types import ProgressEvent

logger = logging.getLogger(__name__)

BATCH_COMPLETE_NOTE = "batch complete"


class ProgressSink(Protocol):
    def emit(self, event: ProgressEvent) -> None: ...


class LoggingProgressSink:
    """Writes progress events to the log."""

    def emit(self, event: ProgressEvent) -> None:
        logger.info(
            "job_progress",
            extra={
                "job.name": event.task_name,
                "job.progress": round(event.progress, 2),
                "job.note": event.note,
            },
        )


class JobStatusBoard:
    """Keeps the latest progress event per task, and fans out to other sinks."""

    def __init__(self, *sinks: ProgressSink):
        self._sinks = sinks
        self._latest: dict[str, ProgressEvent] = {}

    def emit(self, event: ProgressEvent) -> None:
        self._latest[event.task_name] = event
        for sink in self._sinks:
            sink.emit(event)

    def latest(self, task_name: str) -> ProgressEvent | None:
        return self._latest.get(task_name)

    def snapshot(self) -> dict[str, ProgressEvent]:
        return dict(self._latest)


class ProgressReporter:
    """Emits per-item and batch-complete events for one task.

    Delivery is fire-and-forget: a failing sink is logged and ignored.
    """

    def __init__(self, sink: ProgressSink, task_name: str):
        self._sink = sink
        self._task_name = task_name

    def item_done(self, index: int, total: int, note: str) -> float:
        """Report item ``index`` (zero-based) of a ``total``-item snapshot."""
        progress = (index + 1) / total * 100 if total else 100.0
        self._emit(progress, note)
        return progress

    def batch_done(self) -> None:
        self._emit(100.0, BATCH_COMPLETE_NOTE)

    def _emit(self, progress: float, note: str) -> None:
        event = ProgressEvent(
            task_name=self._task_name,
            progress=progress,
            timestamp=datetime.now(UTC),
            note=note,
        )
        try:
            self._sink.emit(event)
        except Exception as e:
            logger.warning(
                "progress_sink_failed",
                extra={"job.name": self._task_name, "error.message": str(e)},
            )
