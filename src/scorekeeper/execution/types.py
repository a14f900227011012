"""Execution engine types.

Public types:
- DelayedAction: A queued announced nomination
- ActionState: Per-tick decision state of a DelayedAction
- ValidityResult: Commission check result for one target
- ExecutionOutcome: Result of submitting a DelayedAction
- ExecutionRecord: Persisted record of an executed nomination
- ProgressEvent: Progress notification emitted while a tick runs
- ItemReport / TickReport: What a tick did
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum


@dataclass
class DelayedAction:
    """A nomination announced at ``announced_block`` by ``controller``."""

    announced_block: int
    principal: str
    controller: str
    targets: list[str]
    action_hash: str

    def __post_init__(self) -> None:
        # Ordered set: keep first occurrence
        self.targets = list(dict.fromkeys(self.targets))

    @property
    def key(self) -> tuple[int, str]:
        return (self.announced_block, self.controller)

    def is_eligible(self, current_block: int, delay_blocks: int) -> bool:
        """Whether the time delay has elapsed at ``current_block``."""
        return self.announced_block + delay_blocks <= current_block


class ActionState(Enum):
    PENDING = "pending"
    INVALID = "invalid"
    VALID_WAITING = "valid_waiting"
    VALID_ELIGIBLE = "valid_eligible"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    EXECUTING = "executing"
    EXECUTED = "executed"
    EXEC_FAILED = "exec_failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ValidityResult:
    """Commission check for one target.

    ``commission`` is None when the query failed; such targets are invalid.
    """

    target: str
    commission: Decimal | None
    valid: bool
    error: str | None = None

    @property
    def indeterminate(self) -> bool:
        return self.commission is None


def all_valid(results: list[ValidityResult]) -> bool:
    """A batch is valid only if it is non-empty and every target is valid."""
    return bool(results) and all(r.valid for r in results)


@dataclass(frozen=True)
class ExecutionOutcome:
    submitted: bool
    finalized_block_hash: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ExecutionRecord:
    controller: str
    era: int
    targets: list[str]
    bonded_amount: int | None
    finalized_block_hash: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class ProgressEvent:
    task_name: str
    progress: float
    timestamp: datetime
    note: str


@dataclass
class ItemReport:
    action: DelayedAction
    state: ActionState
    cancelled_announcements: int = 0
    error: str | None = None


@dataclass
class TickReport:
    """Summary of one scan over the delayed queue."""

    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    latest_block: int | None = None
    era: int | None = None
    skipped: bool = False  # Another tick was already running
    aborted: str | None = None  # Reason the tick stopped before processing items
    items: list[ItemReport] = field(default_factory=list)

    def count(self, state: ActionState) -> int:
        return sum(1 for item in self.items if item.state is state)

    @property
    def executed(self) -> int:
        return self.count(ActionState.EXECUTED)

    @property
    def cancelled(self) -> int:
        return self.count(ActionState.CANCELLED)
