"""Tests for commission validity checks and announcement cancellation."""

from decimal import Decimal
from unittest.mock import AsyncMock

from scorekeeper.chain.types import Announcement
from scorekeeper.execution.announcements import AnnouncementCanceller
from scorekeeper.execution.types import ValidityResult, all_valid
from scorekeeper.execution.validity import CommissionChecker
from tests.conftest import FakeChain, FakeGroup, ListNotifier


class TestCommissionChecker:
    async def test_flags_targets_over_threshold(self):
        chain = FakeChain(commissions={"A": Decimal("5"), "B": Decimal("15")})
        results = await CommissionChecker(chain).check_targets(["A", "B"], Decimal("10"))

        assert results == [
            ValidityResult(target="A", commission=Decimal("5"), valid=True),
            ValidityResult(target="B", commission=Decimal("15"), valid=False),
        ]
        assert all_valid(results) is False

    async def test_query_error_is_invalid(self):
        chain = FakeChain(commissions={"A": Decimal("5")})
        chain.commission_errors["A"] = "rpc error"

        results = await CommissionChecker(chain).check_targets(["A"], Decimal("10"))

        assert results[0].valid is False
        assert results[0].indeterminate is True
        assert results[0].error == "rpc error"

    async def test_raised_exception_is_invalid(self):
        chain = FakeChain()
        chain.get_commission = AsyncMock(side_effect=TimeoutError("slow node"))

        results = await CommissionChecker(chain).check_targets(["A", "B"], Decimal("10"))

        assert [r.valid for r in results] == [False, False]
        assert chain.get_commission.await_count == 2

    async def test_missing_value_without_error_is_invalid(self):
        chain = FakeChain()
        chain.get_commission = AsyncMock(return_value=(None, None))

        results = await CommissionChecker(chain).check_targets(["A"], Decimal("10"))

        assert results[0].valid is False
        assert results[0].error == "no commission returned"

    def test_all_valid_requires_results(self):
        assert all_valid([]) is False


class TestAnnouncementCanceller:
    async def test_cancels_only_matching(self):
        chain = FakeChain(
            announcements={
                "STASH": [
                    Announcement(call_hash="0x1", real="STASH"),
                    Announcement(call_hash="0x2", real="STASH"),
                ]
            }
        )
        group = FakeGroup()
        notifier = ListNotifier()

        cancelled = await AnnouncementCanceller(chain, notifier).cancel_matching(group, "0x2")

        assert cancelled == 1
        assert group.cancelled == [Announcement(call_hash="0x2", real="STASH")]
        assert notifier.messages == ["Cancelling call with hash: 0x2"]

    async def test_failed_cancel_not_counted(self):
        chain = FakeChain(
            announcements={"STASH": [Announcement(call_hash="0x1", real="STASH")]}
        )
        group = FakeGroup(cancel_result=False)

        cancelled = await AnnouncementCanceller(chain).cancel_matching(group, "0x1")

        assert cancelled == 0
        assert len(group.cancelled) == 1

    async def test_looks_up_principal_announcements(self):
        chain = FakeChain(
            announcements={"OTHER": [Announcement(call_hash="0x1", real="OTHER")]}
        )
        group = FakeGroup(principal_address="STASH")

        assert await AnnouncementCanceller(chain).matching(group, "0x1") == []

    async def test_raising_cancel_does_not_stop_remaining_matches(self):
        first = Announcement(call_hash="0xabc", real="STASH", height=8700)
        second = Announcement(call_hash="0xabc", real="STASH", height=8701)
        chain = FakeChain(announcements={"STASH": [first, second]})

        class FlakyGroup(FakeGroup):
            async def cancel_tx(self, announcement):
                self.cancelled.append(announcement)
                if len(self.cancelled) == 1:
                    raise RuntimeError("rpc dropped")
                return True

        group = FlakyGroup()

        cancelled = await AnnouncementCanceller(chain).cancel_matching(group, "0xabc")

        assert group.cancelled == [first, second]
        assert cancelled == 1
