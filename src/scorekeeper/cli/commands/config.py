"""Configuration management commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from scorekeeper.cli.console import console, error, success


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, validate"),
        ] = None,
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: $SCOREKEEPER_HOME/config.toml)",
            ),
        ] = None,
    ) -> None:
        """Manage configuration."""
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        from pydantic import ValidationError
        from rich.syntax import Syntax
        from rich.table import Table

        from scorekeeper.config import load_config
        from scorekeeper.config.paths import get_config_path

        expanded_path = path.expanduser() if path else get_config_path()
        if not expanded_path.exists():
            error(f"Config file not found: {expanded_path}")
            raise typer.Exit(1)

        if action == "show":
            content = expanded_path.read_text()
            syntax = Syntax(content, "toml", theme="monokai", line_numbers=True)
            console.print(f"[bold]Config file: {expanded_path}[/bold]\n")
            console.print(syntax)

        elif action == "validate":
            try:
                config_obj = load_config(expanded_path)
            except (ValidationError, ValueError) as e:
                error(f"Invalid configuration: {e}")
                raise typer.Exit(1) from e

            table = Table(title="Configuration Summary")
            table.add_column("Setting", style="cyan")
            table.add_column("Value", style="green")
            table.add_row("Network", config_obj.network)
            table.add_row("Time delay (blocks)", str(config_obj.proxy.time_delay_blocks))
            table.add_row("Execution cron", config_obj.cron.execution)
            table.add_row("Max commission (%)", str(config_obj.constraints.commission))
            table.add_row("Cooldown (ms)", str(config_obj.execution.cooldown_ms))
            table.add_row("Chain factory", config_obj.chain.factory or "[yellow]unset[/yellow]")
            telegram = config_obj.telegram
            table.add_row(
                "Telegram notifier",
                "enabled" if telegram and telegram.enabled else "disabled",
            )
            console.print(table)
            success("Configuration is valid")

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: show, validate")
            raise typer.Exit(1)
