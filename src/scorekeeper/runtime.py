"""Wiring from configuration to a running execution engine."""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from scorekeeper.chain.protocols import ChainData, PrincipalGroup
from scorekeeper.config.models import ChainConfig, ScorekeeperConfig
from scorekeeper.db.engine import Database
from scorekeeper.errors import ConfigError
from scorekeeper.execution.engine import ExecutionEngine
from scorekeeper.execution.executor import Cooldown, Executor
from scorekeeper.execution.notifier import Notifier, build_notifier
from scorekeeper.execution.progress import JobStatusBoard, LoggingProgressSink
from scorekeeper.store.queue import QueueStore

logger = logging.getLogger(__name__)


async def load_chain(config: ChainConfig) -> tuple[ChainData, list[PrincipalGroup]]:
    """Import and call the configured chain factory.

    The factory receives ``config.options`` as keyword arguments and returns
    (or resolves to) ``(chain, groups)``.

    Raises:
        ConfigError: If the factory is missing or returns the wrong shape.
    """
    if not config.factory:
        raise ConfigError(
            "No chain client configured. Set chain.factory = 'module:callable'"
        )
    module_path, attr = config.factory.split(":", 1)
    try:
        module = importlib.import_module(module_path)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigError(f"Cannot load chain factory {config.factory}: {e}") from e

    result = factory(**config.options)
    if inspect.isawaitable(result):
        result = await result

    try:
        chain, groups = result
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"Chain factory {config.factory} must return (chain, groups)"
        ) from e
    if not isinstance(chain, ChainData):
        raise ConfigError(f"Chain factory {config.factory} returned {type(chain).__name__}, not ChainData")
    return chain, list(groups)


def open_database(config: ScorekeeperConfig) -> Database:
    return Database(database_url=config.database.url, database_path=config.database.path)


@dataclass
class Runtime:
    """Everything a running execution job needs."""

    config: ScorekeeperConfig
    database: Database
    store: QueueStore
    engine: ExecutionEngine
    status: JobStatusBoard
    notifier: Notifier
    groups: list[PrincipalGroup] = field(default_factory=list)

    async def close(self) -> None:
        close = getattr(self.notifier, "close", None)
        if close is not None:
            await close()
        await self.database.disconnect()


def build_engine(
    config: ScorekeeperConfig,
    chain: ChainData,
    store: QueueStore,
    groups: Sequence[PrincipalGroup],
    status: JobStatusBoard,
    notifier: Notifier,
) -> ExecutionEngine:
    executor = Executor(
        chain,
        store,
        notifier=notifier,
        network=config.network,
        finalization_timeout=config.execution.finalization_timeout_seconds,
    )
    return ExecutionEngine(
        chain,
        store,
        groups,
        progress_sink=status,
        commission_threshold=config.constraints.commission,
        delay_blocks=config.proxy.time_delay_blocks,
        notifier=notifier,
        cooldown=Cooldown(config.execution.cooldown_ms),
        executor=executor,
    )


async def create_runtime(config: ScorekeeperConfig) -> Runtime:
    """Connect the database, load the chain client and build the engine."""
    chain, groups = await load_chain(config.chain)

    database = open_database(config)
    await database.connect()
    await database.create_tables()
    store = QueueStore(database)

    status = JobStatusBoard(LoggingProgressSink())
    notifier = build_notifier(config.telegram)
    engine = build_engine(config, chain, store, groups, status, notifier)

    logger.info(
        "runtime_ready",
        extra={
            "runtime.groups": len(groups),
            "runtime.network": config.network,
            "runtime.database": database.url,
        },
    )
    return Runtime(
        config=config,
        database=database,
        store=store,
        engine=engine,
        status=status,
        notifier=notifier,
        groups=groups,
    )
