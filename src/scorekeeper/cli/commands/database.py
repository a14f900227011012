"""Database management commands."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from scorekeeper.cli.console import success


def register(app: typer.Typer) -> None:
    """Register the db command group."""
    db_app = typer.Typer(help="Database management commands")

    @db_app.command("init")
    def db_init(
        config: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """Create the queue database tables."""
        url = asyncio.run(_init(config))
        success(f"Database ready at {url}")

    app.add_typer(db_app, name="db")


async def _init(config_path: Path | None) -> str:
    from scorekeeper.config import load_config
    from scorekeeper.runtime import open_database

    database = open_database(load_config(config_path))
    await database.connect()
    try:
        await database.create_tables()
    finally:
        await database.disconnect()
    return database.url
