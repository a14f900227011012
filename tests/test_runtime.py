"""Tests for wiring configuration into a runtime."""

from decimal import Decimal

import pytest

from scorekeeper.config.models import ChainConfig
from scorekeeper.errors import ConfigError
from scorekeeper.runtime import create_runtime, load_chain
from tests.conftest import FakeChain, FakeGroup


class TestLoadChain:
    async def test_missing_factory(self):
        with pytest.raises(ConfigError, match="No chain client configured"):
            await load_chain(ChainConfig())

    async def test_unknown_module(self):
        with pytest.raises(ConfigError, match="Cannot load chain factory"):
            await load_chain(ChainConfig(factory="scorekeeper_missing_mod:build"))

    async def test_sync_factory_with_options(self):
        chain, groups = await load_chain(
            ChainConfig(
                factory="tests.conftest:build_fake_chain",
                options={"commission": "12"},
            )
        )

        assert isinstance(chain, FakeChain)
        assert chain.commissions["A"] == Decimal("12")
        assert len(groups) == 1
        assert isinstance(groups[0], FakeGroup)

    async def test_async_factory(self):
        chain, groups = await load_chain(
            ChainConfig(factory="tests.conftest:build_fake_chain_async")
        )
        assert isinstance(chain, FakeChain)

    async def test_wrong_shape(self):
        with pytest.raises(ConfigError, match="must return"):
            await load_chain(ChainConfig(factory="tests.conftest:build_wrong_shape"))


class TestCreateRuntime:
    async def test_ticks_against_configured_chain(self, chain_config_file):
        from scorekeeper.config import load_config
        from scorekeeper.constants import EXECUTION_TASK_NAME
        from scorekeeper.execution.notifier import NullNotifier

        config = load_config(chain_config_file)
        runtime = await create_runtime(config)
        try:
            assert isinstance(runtime.notifier, NullNotifier)
            assert runtime.engine.delay_blocks == 1200

            await runtime.store.add_delayed_tx(8700, "STASH", "CTRL", ["A", "B"], "0x1")
            report = await runtime.engine.run_tick()

            assert report.executed == 1
            assert await runtime.store.get_all_delayed_txs() == []
            records = await runtime.store.get_nominations(controller="CTRL")
            assert records[0].targets == ["A", "B"]
            assert records[0].bonded_amount == 1
            assert runtime.status.latest(EXECUTION_TASK_NAME).progress == 100
        finally:
            await runtime.close()
