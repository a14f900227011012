"""Protocol definitions for the chain collaborators.

The execution engine only depends on these interfaces. Concrete clients
(RPC connections, signers) are supplied by the ``[chain] factory`` setting
or mocked in tests.

Read queries that can fail per address return ``(value, error)`` pairs; the
caller must inspect the error before trusting the value.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Protocol, runtime_checkable

from scorekeeper.chain.types import Announcement, ProxyCall


@runtime_checkable
class ChainData(Protocol):
    """Read access to the ledger."""

    async def is_connected(self) -> bool:
        """Whether the underlying API handle is usable."""
        ...

    async def get_latest_block(self) -> int | None:
        """Latest block number, or None if unavailable."""
        ...

    async def get_current_era(self) -> int | None:
        """Active era index, or None if unavailable."""
        ...

    async def get_bonded_amount(self, address: str) -> tuple[int | None, str | None]:
        """Bonded balance (planck) of a stash."""
        ...

    async def get_commission(self, address: str) -> tuple[Decimal | None, str | None]:
        """Validator commission as a percentage (0-100)."""
        ...

    async def get_proxy_announcements(self, address: str) -> list[Announcement]:
        """Outstanding proxy announcements made by ``address``."""
        ...


@runtime_checkable
class PrincipalGroup(Protocol):
    """A nominator account pair able to act through its staking proxy."""

    @property
    def controller_address(self) -> str: ...

    @property
    def principal_address(self) -> str: ...

    async def cancel_tx(self, announcement: Announcement) -> bool:
        """Remove an announcement. Returns True on inclusion."""
        ...

    async def send_nomination_tx(self, call: ProxyCall) -> tuple[bool, str | None]:
        """Submit the call and wait for finalization.

        Returns ``(submitted, finalized_block_hash)``.
        """
        ...


def find_group(
    groups: Sequence[PrincipalGroup], controller: str
) -> PrincipalGroup | None:
    """Find the group that owns ``controller``."""
    for group in groups:
        if group.controller_address == controller:
            return group
    return None
