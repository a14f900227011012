"""CLI command modules."""

from scorekeeper.cli.commands import (
    candidates,
    config,
    database,
    nominations,
    queue,
    serve,
    tick,
)

__all__ = [
    "candidates",
    "config",
    "database",
    "nominations",
    "queue",
    "serve",
    "tick",
]
