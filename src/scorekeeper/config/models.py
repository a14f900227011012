"""Configuration models using Pydantic."""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator

from scorekeeper import constants
from scorekeeper.config.paths import get_database_path
from scorekeeper.errors import ConfigError

logger = logging.getLogger(__name__)


class ProxyConfig(BaseModel):
    """Proxy announcement settings."""

    time_delay_blocks: int = Field(default=constants.TIME_DELAY_BLOCKS, ge=0)


class CronConfig(BaseModel):
    """Job frequencies (croniter expressions)."""

    execution: str = constants.EXECUTION_CRON

    @field_validator("execution")
    @classmethod
    def _validate_cron(cls, value: str) -> str:
        from croniter import croniter

        if not croniter.is_valid(value):
            raise ValueError(f"Invalid cron expression: {value}")
        return value


class ConstraintsConfig(BaseModel):
    """Validator constraints.

    Commission is a percentage; a target whose commission is strictly
    greater than this value invalidates the nomination.
    """

    commission: Decimal = Field(default=Decimal("15"), ge=0, le=100)


class ExecutionConfig(BaseModel):
    """Execution job tuning."""

    cooldown_ms: int = Field(default=constants.EXECUTION_COOLDOWN_MS, ge=0)
    finalization_timeout_seconds: float = Field(
        default=constants.FINALIZATION_TIMEOUT_SECONDS, gt=0
    )


class DatabaseConfig(BaseModel):
    """Configuration for the queue database."""

    path: Path = Field(default_factory=get_database_path)
    url: str | None = None  # Takes precedence over path


class TelegramConfig(BaseModel):
    """Telegram notifier. Notifications are disabled unless both are set."""

    bot_token: SecretStr | None = None
    chat_id: str | None = None

    @property
    def enabled(self) -> bool:
        return self.bot_token is not None and bool(self.chat_id)


class SentryConfig(BaseModel):
    """Configuration for Sentry error reporting."""

    dsn: SecretStr | None = None
    environment: str = "production"
    release: str | None = None
    traces_sample_rate: float = 0.0
    profiles_sample_rate: float = 0.0
    send_default_pii: bool = False
    debug: bool = False


class ChainConfig(BaseModel):
    """Chain client wiring.

    ``factory`` is an import path ("package.module:callable") to a callable
    returning ``(ChainData, list[PrincipalGroup])``. Signing and connection
    details belong to that factory.
    """

    factory: str | None = None
    options: dict[str, str] = Field(default_factory=dict)

    @field_validator("factory")
    @classmethod
    def _validate_factory(cls, value: str | None) -> str | None:
        if value is not None and ":" not in value:
            raise ValueError("chain.factory must look like 'package.module:callable'")
        return value


class ScorekeeperConfig(BaseModel):
    """Root configuration model."""

    network: Literal["polkadot", "kusama", "local"] = "polkadot"
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    cron: CronConfig = Field(default_factory=CronConfig)
    constraints: ConstraintsConfig = Field(default_factory=ConstraintsConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    telegram: TelegramConfig | None = None
    sentry: SentryConfig | None = None
    chain: ChainConfig = Field(default_factory=ChainConfig)


__all__ = [
    "ChainConfig",
    "ConfigError",
    "ConstraintsConfig",
    "CronConfig",
    "DatabaseConfig",
    "ExecutionConfig",
    "ProxyConfig",
    "ScorekeeperConfig",
    "SentryConfig",
    "TelegramConfig",
]
