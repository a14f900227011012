"""Commission validity checks for nomination targets."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from scorekeeper.chain.protocols import ChainData
from scorekeeper.execution.types import ValidityResult

logger = logging.getLogger(__name__)


class CommissionChecker:
    """Queries current commission for targets and flags those over a threshold.

    Failed lookups fail closed: the target is reported invalid with an
    unknown commission.
    """

    def __init__(self, chain: ChainData):
        self._chain = chain

    async def check_targets(
        self, targets: Sequence[str], threshold: Decimal
    ) -> list[ValidityResult]:
        return [await self._check(target, threshold) for target in targets]

    async def _check(self, target: str, threshold: Decimal) -> ValidityResult:
        try:
            commission, err = await self._chain.get_commission(target)
        except Exception as e:
            commission, err = None, str(e)

        if err is not None or commission is None:
            error = err or "no commission returned"
            logger.warning(
                "commission_query_failed",
                extra={"validator.address": target, "error.message": error},
            )
            return ValidityResult(target=target, commission=None, valid=False, error=error)

        valid = commission <= threshold
        logger.debug(f"Commission for {target}: {commission} (threshold {threshold})")
        return ValidityResult(target=target, commission=commission, valid=valid)
