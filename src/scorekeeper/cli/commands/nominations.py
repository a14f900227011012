"""Execution record commands."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from scorekeeper.cli.console import console, warning


def register(app: typer.Typer) -> None:
    """Register the nominations command."""

    @app.command()
    def nominations(
        controller: Annotated[
            str | None,
            typer.Option("--controller", help="Only show this controller"),
        ] = None,
        limit: Annotated[
            int,
            typer.Option("--limit", "-n", help="Maximum records to show"),
        ] = 20,
        config: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """List executed nominations, newest era first."""
        asyncio.run(_list(config, controller, limit))


async def _list(config_path: Path | None, controller: str | None, limit: int) -> None:
    from rich.table import Table

    from scorekeeper.cli.commands._store import open_store

    async with open_store(config_path) as store:
        records = await store.get_nominations(controller=controller, limit=limit)

    if not records:
        warning("No nominations recorded")
        return

    table = Table(title="Nominations")
    table.add_column("Era", style="cyan")
    table.add_column("Controller")
    table.add_column("Bonded")
    table.add_column("Validators")
    table.add_column("Block hash", style="dim")
    for record in records:
        table.add_row(
            str(record.era),
            record.controller,
            str(record.bonded_amount) if record.bonded_amount is not None else "?",
            "\n".join(record.targets),
            record.finalized_block_hash,
        )
    console.print(table)
