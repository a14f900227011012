"""Execution subsystem - delayed nomination decisions and submission.

Public API:
- ExecutionEngine: Classifies and resolves every queued action per tick
- ExecutionWatcher: Cron loop that drives engine ticks
- Executor: Submits eligible actions and records them
- CommissionChecker: Commission validity checks
- AnnouncementCanceller: Cancels matching proxy announcements
- ProgressReporter / LoggingProgressSink / JobStatusBoard: Progress events
- Notifier / NullNotifier / TelegramNotifier: Best-effort alerts
"""

from scorekeeper.execution.announcements import AnnouncementCanceller
from scorekeeper.execution.engine import ExecutionEngine, classify
from scorekeeper.execution.executor import Cooldown, Executor, build_proxy_call
from scorekeeper.execution.notifier import (
    Notifier,
    NullNotifier,
    TelegramNotifier,
    build_notifier,
    notify,
)
from scorekeeper.execution.progress import (
    JobStatusBoard,
    LoggingProgressSink,
    ProgressReporter,
    ProgressSink,
)
from scorekeeper.execution.types import (
    ActionState,
    DelayedAction,
    ExecutionOutcome,
    ExecutionRecord,
    ItemReport,
    ProgressEvent,
    TickReport,
    ValidityResult,
    all_valid,
)
from scorekeeper.execution.validity import CommissionChecker
from scorekeeper.execution.watcher import ExecutionWatcher

__all__ = [
    "ActionState",
    "AnnouncementCanceller",
    "CommissionChecker",
    "Cooldown",
    "DelayedAction",
    "ExecutionEngine",
    "ExecutionOutcome",
    "ExecutionRecord",
    "ExecutionWatcher",
    "Executor",
    "ItemReport",
    "JobStatusBoard",
    "LoggingProgressSink",
    "Notifier",
    "NullNotifier",
    "ProgressEvent",
    "ProgressReporter",
    "ProgressSink",
    "TelegramNotifier",
    "TickReport",
    "ValidityResult",
    "all_valid",
    "build_notifier",
    "build_proxy_call",
    "classify",
    "notify",
]
