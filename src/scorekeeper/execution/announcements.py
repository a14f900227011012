"""Lookup and cancellation of outstanding proxy announcements."""

from __future__ import annotations

import logging

from scorekeeper.chain.protocols import ChainData, PrincipalGroup
from scorekeeper.chain.types import Announcement
from scorekeeper.execution.notifier import Notifier, NullNotifier, notify

logger = logging.getLogger(__name__)


class AnnouncementCanceller:
    """Cancels every announcement of a group that matches a call hash."""

    def __init__(self, chain: ChainData, notifier: Notifier | None = None):
        self._chain = chain
        self._notifier = notifier or NullNotifier()

    async def matching(self, group: PrincipalGroup, call_hash: str) -> list[Announcement]:
        announcements = await self._chain.get_proxy_announcements(
            group.principal_address
        )
        return [a for a in announcements if a.call_hash == call_hash]

    async def cancel_matching(self, group: PrincipalGroup, call_hash: str) -> int:
        """Cancel all matches. Returns the number of successful cancellations.

        Zero matches means the announcement was already resolved.
        """
        cancelled = 0
        for announcement in await self.matching(group, call_hash):
            logger.warning(
                "cancelling_announcement",
                extra={
                    "tx.call_hash": call_hash,
                    "tx.real": announcement.real,
                    "tx.controller": group.controller_address,
                },
            )
            await notify(self._notifier, f"Cancelling call with hash: {call_hash}")
            try:
                ok = await group.cancel_tx(announcement)
            except Exception as e:
                logger.error(
                    "announcement_cancel_failed",
                    extra={"tx.call_hash": call_hash, "error.message": str(e)},
                    exc_info=True,
                )
                continue
            if ok:
                cancelled += 1
            else:
                logger.error(
                    "announcement_cancel_failed",
                    extra={"tx.call_hash": call_hash},
                )
        return cancelled
