"""Delayed transaction queue commands."""

import asyncio
from pathlib import Path
from typing import Annotated

import click
import typer

from scorekeeper.cli.console import console, error, success, warning


def register(app: typer.Typer) -> None:
    """Register the queue command."""

    @app.command()
    def queue(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: list, add, remove"),
        ] = None,
        block: Annotated[
            int | None,
            typer.Option("--block", "-b", help="Block the call was announced at"),
        ] = None,
        controller: Annotated[
            str | None,
            typer.Option("--controller", help="Controller (proxy) address"),
        ] = None,
        principal: Annotated[
            str | None,
            typer.Option("--principal", help="Principal (stash) address"),
        ] = None,
        target: Annotated[
            list[str] | None,
            typer.Option("--target", "-t", help="Validator to nominate (repeatable)"),
        ] = None,
        call_hash: Annotated[
            str | None,
            typer.Option("--call-hash", help="Announced call hash"),
        ] = None,
        config: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """Inspect and edit the delayed transaction queue.

        Examples:
            scorekeeper queue list
            scorekeeper queue add -b 8700 --controller C --principal P -t A -t B --call-hash 0x..
            scorekeeper queue remove -b 8700 --controller C
        """
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        if action == "list":
            asyncio.run(_queue_list(config))

        elif action == "add":
            if block is None or not controller or not principal or not target or not call_hash:
                error("add requires --block, --controller, --principal, --target and --call-hash")
                raise typer.Exit(1)
            asyncio.run(_queue_add(config, block, principal, controller, target, call_hash))

        elif action == "remove":
            if block is None or not controller:
                error("remove requires --block and --controller")
                raise typer.Exit(1)
            asyncio.run(_queue_remove(config, block, controller))

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: list, add, remove")
            raise typer.Exit(1)


async def _queue_list(config_path: Path | None) -> None:
    from rich.table import Table

    from scorekeeper.cli.commands._store import open_store

    async with open_store(config_path) as store:
        actions = await store.get_all_delayed_txs()

    if not actions:
        warning("No delayed transactions queued")
        return

    table = Table(title="Delayed transactions")
    table.add_column("Announced", style="cyan")
    table.add_column("Controller")
    table.add_column("Principal")
    table.add_column("Targets")
    table.add_column("Call hash", style="dim")
    for action in actions:
        table.add_row(
            str(action.announced_block),
            action.controller,
            action.principal,
            "\n".join(action.targets),
            action.action_hash,
        )
    console.print(table)


async def _queue_add(
    config_path: Path | None,
    block: int,
    principal: str,
    controller: str,
    targets: list[str],
    call_hash: str,
) -> None:
    from scorekeeper.cli.commands._store import open_store

    async with open_store(config_path) as store:
        try:
            await store.add_delayed_tx(block, principal, controller, targets, call_hash)
        except ValueError as e:
            error(str(e))
            raise typer.Exit(1) from e
    success(f"Queued {call_hash} for {controller} at block {block}")


async def _queue_remove(config_path: Path | None, block: int, controller: str) -> None:
    from scorekeeper.cli.commands._store import open_store

    async with open_store(config_path) as store:
        removed = await store.delete_delayed_tx(block, controller)
    if removed:
        success(f"Removed delayed tx for {controller} at block {block}")
    else:
        error(f"No delayed tx for {controller} at block {block}")
        raise typer.Exit(1)
