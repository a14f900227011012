"""Helpers for commands that only touch the local database."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from scorekeeper.config import load_config
from scorekeeper.runtime import open_database
from scorekeeper.store.queue import QueueStore


@asynccontextmanager
async def open_store(config_path: Path | None = None) -> AsyncGenerator[QueueStore, None]:
    config = load_config(config_path)
    database = open_database(config)
    await database.connect()
    try:
        await database.create_tables()
        yield QueueStore(database)
    finally:
        await database.disconnect()
