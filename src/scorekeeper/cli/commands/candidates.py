"""Validator display name commands."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from scorekeeper.cli.console import success


def register(app: typer.Typer) -> None:
    """Register the candidates command group."""
    candidates_app = typer.Typer(help="Validator display names")

    @candidates_app.command("set")
    def candidates_set(
        stash: Annotated[str, typer.Argument(help="Validator stash address")],
        name: Annotated[str, typer.Argument(help="Display name")],
        config: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """Set the name shown for a validator in execution summaries."""
        asyncio.run(_set(config, stash, name))
        success(f"{stash} -> {name}")

    app.add_typer(candidates_app, name="candidates")


async def _set(config_path: Path | None, stash: str, name: str) -> None:
    from scorekeeper.cli.commands._store import open_store

    async with open_store(config_path) as store:
        await store.set_candidate_name(stash, name)
