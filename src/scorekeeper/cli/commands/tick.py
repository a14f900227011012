"""Run a single execution tick."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from scorekeeper.cli.console import console, error, warning


def register(app: typer.Typer) -> None:
    """Register the tick command."""

    @app.command()
    def tick(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
    ) -> None:
        """Scan the delayed queue once and print what happened."""
        from scorekeeper.logging import configure_logging

        configure_logging()
        asyncio.run(_tick(config))


async def _tick(config_path: Path | None) -> None:
    from rich.table import Table

    from scorekeeper.config import ConfigError, load_config
    from scorekeeper.constants import EXECUTION_TASK_NAME
    from scorekeeper.runtime import create_runtime

    try:
        config = load_config(config_path)
        runtime = await create_runtime(config)
    except (ConfigError, FileNotFoundError, ValueError) as e:
        error(str(e))
        raise typer.Exit(1) from e

    try:
        report = await runtime.engine.run_tick()
    finally:
        await runtime.close()

    if report.aborted:
        error(f"Tick aborted: {report.aborted}")
        raise typer.Exit(1)
    if report.skipped:
        warning("Another tick is already running")
        return

    console.print(f"Block #{report.latest_block}, era {report.era}")
    table = Table(title="Delayed transactions")
    table.add_column("Announced", style="cyan")
    table.add_column("Controller")
    table.add_column("State", style="green")
    table.add_column("Detail", style="dim")
    for item in report.items:
        table.add_row(
            str(item.action.announced_block),
            item.action.controller,
            item.state.value,
            item.error or "",
        )
    console.print(table)

    status = runtime.status.latest(EXECUTION_TASK_NAME)
    if status:
        console.print(f"[dim]{status.progress:.0f}% - {status.note}[/dim]")
