"""Configuration module."""

from scorekeeper.config.loader import get_default_config, load_config
from scorekeeper.config.models import (
    ChainConfig,
    ConfigError,
    ConstraintsConfig,
    CronConfig,
    DatabaseConfig,
    ExecutionConfig,
    ProxyConfig,
    ScorekeeperConfig,
    SentryConfig,
    TelegramConfig,
)
from scorekeeper.config.paths import (
    get_config_path,
    get_database_path,
    get_logs_path,
    get_scorekeeper_home,
)

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
    "get_config_path",
    "get_database_path",
    "get_default_config",
    "get_logs_path",
    "get_scorekeeper_home",
    "load_config",
]
