"""Submission of eligible delayed nominations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from scorekeeper.chain.protocols import ChainData, PrincipalGroup
from scorekeeper.chain.types import ProxyCall, address_url
from scorekeeper.constants import FINALIZATION_TIMEOUT_SECONDS, UNKNOWN_CANDIDATE_NAME
from scorekeeper.errors import SubmissionTimeoutError
from scorekeeper.execution.notifier import Notifier, NullNotifier, notify
from scorekeeper.execution.types import DelayedAction, ExecutionOutcome

if TYPE_CHECKING:
    from scorekeeper.store.queue import QueueStore

logger = logging.getLogger(__name__)


class Cooldown:
    """Fixed pause between submissions."""

    def __init__(
        self,
        delay_ms: int,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._delay = max(delay_ms, 0) / 1000
        self._sleep = sleep

    @property
    def seconds(self) -> float:
        return self._delay

    async def wait(self) -> None:
        if self._delay > 0:
            await self._sleep(self._delay)


def build_proxy_call(action: DelayedAction, group: PrincipalGroup) -> ProxyCall:
    """Wrap ``staking.nominate(targets)`` as an announced proxy execution."""
    return ProxyCall(
        delegate=group.controller_address,
        real=group.principal_address,
        targets=tuple(action.targets),
    )


class Executor:
    """Submits a delayed nomination and records it once finalized.

    On success the execution record is written before the queued action is
    deleted, so a crash in between leaves the action queued rather than
    losing the record.
    """

    def __init__(
        self,
        chain: ChainData,
        store: QueueStore,
        notifier: Notifier | None = None,
        network: str = "polkadot",
        finalization_timeout: float = FINALIZATION_TIMEOUT_SECONDS,
    ):
        self._chain = chain
        self._store = store
        self._notifier = notifier or NullNotifier()
        self._network = network
        self._finalization_timeout = finalization_timeout

    async def execute(
        self, action: DelayedAction, group: PrincipalGroup, era: int
    ) -> ExecutionOutcome:
        logger.info(
            "delayed_tx_executing",
            extra={
                "tx.announced_block": action.announced_block,
                "tx.controller": action.controller,
                "tx.call_hash": action.action_hash,
            },
        )

        bonded = await self._bonded_amount(group.principal_address)
        outcome = await self._submit(group, build_proxy_call(action, group))

        logger.info(
            "staking_tx_sent",
            extra={
                "tx.submitted": outcome.submitted,
                "tx.finalized_block_hash": outcome.finalized_block_hash,
                "error.message": outcome.error,
            },
        )
        if not outcome.submitted:
            return outcome

        block_hash = outcome.finalized_block_hash or ""
        await self._store.set_nomination(
            action.controller, era, action.targets, bonded, block_hash
        )
        try:
            deleted = await self._store.delete_delayed_tx(
                action.announced_block, action.controller
            )
        except Exception as e:
            logger.warning(
                "delayed_tx_delete_failed",
                extra={
                    "tx.announced_block": action.announced_block,
                    "tx.controller": action.controller,
                    "error.message": str(e),
                },
            )
        else:
            if not deleted:
                logger.warning(
                    "delayed_tx_already_removed",
                    extra={
                        "tx.announced_block": action.announced_block,
                        "tx.controller": action.controller,
                    },
                )

        message = await self.summary(action, group, block_hash)
        logger.info(message)
        await notify(self._notifier, message)
        return outcome

    async def summary(
        self, action: DelayedAction, group: PrincipalGroup, block_hash: str
    ) -> str:
        """Human-readable execution summary naming each target."""
        lines = [await self._target_line(target) for target in action.targets]
        account = address_url(group.principal_address, self._network)
        return (
            f"{account} executed announcement in finalized block #{block_hash} "
            f"announced at block #{action.announced_block}\n"
            "Validators Nominated:\n" + "\n".join(lines)
        )

    async def _target_line(self, target: str) -> str:
        try:
            name = await self._store.get_candidate_display_name(target)
        except Exception as e:
            logger.info(
                "candidate_name_lookup_failed",
                extra={"validator.address": target, "error.message": str(e)},
            )
            name = None
        if not name:
            logger.info(f"No display name for {target}")
            name = UNKNOWN_CANDIDATE_NAME
        return f"- {name} ({address_url(target, self._network)})"

    async def _bonded_amount(self, address: str) -> int | None:
        try:
            bonded, err = await self._chain.get_bonded_amount(address)
        except Exception as e:
            bonded, err = None, str(e)
        if err is not None:
            logger.warning(
                "bonded_query_failed",
                extra={"nominator.address": address, "error.message": err},
            )
            return None
        return bonded

    async def _submit(self, group: PrincipalGroup, call: ProxyCall) -> ExecutionOutcome:
        """Send the call, bounded by the finalization timeout.

        A timed out submission may still land on chain; the action stays
        queued and is re-evaluated next tick.
        """
        try:
            submitted, block_hash = await asyncio.wait_for(
                group.send_nomination_tx(call), timeout=self._finalization_timeout
            )
        except TimeoutError:
            error = SubmissionTimeoutError(
                f"no finalization within {self._finalization_timeout}s"
            )
            logger.error("staking_tx_timeout", extra={"error.message": str(error)})
            return ExecutionOutcome(submitted=False, error=str(error))
        except Exception as e:
            logger.error(
                "staking_tx_failed", extra={"error.message": str(e)}, exc_info=True
            )
            return ExecutionOutcome(submitted=False, error=str(e))
        return ExecutionOutcome(submitted=submitted, finalized_block_hash=block_hash)
