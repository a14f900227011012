"""Main CLI application."""

import typer

from scorekeeper.cli.commands import (
    candidates,
    config,
    database,
    nominations,
    queue,
    serve,
    tick,
)

app = typer.Typer(
    name="scorekeeper",
    help="Scorekeeper - delayed proxy nomination executor",
    no_args_is_help=True,
)

for module in (serve, tick, queue, nominations, candidates, config, database):
    module.register(app)


if __name__ == "__main__":
    app()
