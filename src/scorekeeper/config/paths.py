"""Centralized path management for Scorekeeper.

All state (config, database, logs) is stored under a single base directory.
The base directory can be overridden with the SCOREKEEPER_HOME environment
variable.

Default locations:
- Linux/macOS: ~/.scorekeeper
- Windows: %USERPROFILE%\\.scorekeeper
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "SCOREKEEPER_HOME"


@lru_cache(maxsize=1)
def get_scorekeeper_home() -> Path:
    """Get the base directory for all Scorekeeper data.

    Resolution order:
    1. SCOREKEEPER_HOME environment variable (if set)
    2. Platform default (~/.scorekeeper)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".scorekeeper"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_scorekeeper_home() / "config.toml"


def get_database_path() -> Path:
    """Get the default SQLite database path."""
    return get_scorekeeper_home() / "scorekeeper.db"


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_scorekeeper_home() / "logs"
