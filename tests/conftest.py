"""Shared test fixtures and fakes."""

from collections.abc import AsyncGenerator
from decimal import Decimal
from pathlib import Path

import pytest

from scorekeeper.chain.types import Announcement, ProxyCall
from scorekeeper.config.models import ScorekeeperConfig
from scorekeeper.db.engine import Database
from scorekeeper.execution.types import ProgressEvent
from scorekeeper.store.queue import QueueStore

# =============================================================================
# Chain fakes
# =============================================================================


class FakeChain:
    """In-memory ChainData."""

    def __init__(
        self,
        latest_block: int | None = 10_000,
        era: int | None = 42,
        commissions: dict[str, Decimal] | None = None,
        bonded: dict[str, int] | None = None,
        announcements: dict[str, list[Announcement]] | None = None,
        connected: bool = True,
    ):
        self.latest_block = latest_block
        self.era = era
        self.commissions = dict(commissions or {})
        self.commission_errors: dict[str, str] = {}
        self.bonded = dict(bonded or {})
        self.announcements = dict(announcements or {})
        self.connected = connected
        self.commission_queries: list[str] = []

    async def is_connected(self) -> bool:
        return self.connected

    async def get_latest_block(self) -> int | None:
        return self.latest_block

    async def get_current_era(self) -> int | None:
        return self.era

    async def get_bonded_amount(self, address: str) -> tuple[int | None, str | None]:
        if address not in self.bonded:
            return None, f"no ledger for {address}"
        return self.bonded[address], None

    async def get_commission(self, address: str) -> tuple[Decimal | None, str | None]:
        self.commission_queries.append(address)
        if address in self.commission_errors:
            return None, self.commission_errors[address]
        if address not in self.commissions:
            return None, f"{address} is not a validator"
        return self.commissions[address], None

    async def get_proxy_announcements(self, address: str) -> list[Announcement]:
        return list(self.announcements.get(address, []))


class FakeGroup:
    """PrincipalGroup that records cancellations and submissions."""

    def __init__(
        self,
        controller_address: str = "CTRL",
        principal_address: str = "STASH",
        submit_result: tuple[bool, str | None] = (True, "0xfinal"),
        cancel_result: bool = True,
    ):
        self._controller = controller_address
        self._principal = principal_address
        self.submit_result = submit_result
        self.cancel_result = cancel_result
        self.cancelled: list[Announcement] = []
        self.submitted: list[ProxyCall] = []

    @property
    def controller_address(self) -> str:
        return self._controller

    @property
    def principal_address(self) -> str:
        return self._principal

    async def cancel_tx(self, announcement: Announcement) -> bool:
        self.cancelled.append(announcement)
        return self.cancel_result

    async def send_nomination_tx(self, call: ProxyCall) -> tuple[bool, str | None]:
        self.submitted.append(call)
        return self.submit_result


class ListSink:
    """Progress sink collecting events."""

    def __init__(self) -> None:
        self.events: list[ProgressEvent] = []

    def emit(self, event: ProgressEvent) -> None:
        self.events.append(event)


class ListNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    async def send(self, message: str) -> None:
        self.messages.append(message)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config(tmp_path: Path) -> ScorekeeperConfig:
    return ScorekeeperConfig.model_validate(
        {"database": {"path": str(tmp_path / "scorekeeper.db")}}
    )


@pytest.fixture
def config_toml_content(tmp_path: Path) -> str:
    return f"""
network = "kusama"

[proxy]
time_delay_blocks = 1200

[cron]
execution = "*/5 * * * *"

[constraints]
commission = "10"

[execution]
cooldown_ms = 0

[database]
path = "{tmp_path / 'queue.db'}"
"""


@pytest.fixture
def config_file(tmp_path: Path, config_toml_content: str) -> Path:
    config_path = tmp_path / "config.toml"
    config_path.write_text(config_toml_content)
    return config_path


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Create a temporary test database."""
    db = Database(database_path=tmp_path / "test.db")
    await db.connect()
    await db.create_tables()

    yield db

    await db.disconnect()


@pytest.fixture
async def store(database: Database) -> QueueStore:
    return QueueStore(database)


# =============================================================================
# Chain Fixtures
# =============================================================================


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain(
        commissions={"A": Decimal("5"), "B": Decimal("5")},
        bonded={"STASH": 5_000_000_000_000},
    )


@pytest.fixture
def group() -> FakeGroup:
    return FakeGroup()


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


@pytest.fixture
def notifier() -> ListNotifier:
    return ListNotifier()


def build_fake_chain(**options: str) -> tuple[FakeChain, list[FakeGroup]]:
    """Chain factory referenced from test configs as ``tests.conftest:build_fake_chain``."""
    commission = Decimal(options.get("commission", "5"))
    return (
        FakeChain(commissions={"A": commission, "B": commission}, bonded={"STASH": 1}),
        [FakeGroup()],
    )


async def build_fake_chain_async(**options: str) -> tuple[FakeChain, list[FakeGroup]]:
    return build_fake_chain(**options)


def build_wrong_shape() -> FakeChain:
    return FakeChain()


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})


@pytest.fixture
def chain_config_file(tmp_path: Path, config_toml_content: str) -> Path:
    config_path = tmp_path / "chain.toml"
    config_path.write_text(
        config_toml_content
        + '\n[chain]\nfactory = "tests.conftest:build_fake_chain"\n'
    )
    return config_path
