"""Server command for running the execution job."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        now: Annotated[
            bool,
            typer.Option(
                "--now",
                help="Run one tick immediately instead of waiting for the schedule",
            ),
        ] = False,
    ) -> None:
        """Run the execution job on its cron schedule."""
        try:
            asyncio.run(_run_server(config, now))
        except KeyboardInterrupt:
            # Use print here since logging may not be configured yet
            print("\nServer stopped")


async def _run_server(config_path: Path | None = None, run_now: bool = False) -> None:
    import signal as signal_module

    from scorekeeper.config import load_config
    from scorekeeper.execution.watcher import ExecutionWatcher
    from scorekeeper.logging import configure_logging
    from scorekeeper.observability import init_sentry
    from scorekeeper.runtime import create_runtime

    configure_logging(use_rich=True, log_to_file=True)

    logger.info("Loading configuration")
    config = load_config(config_path)
    init_sentry(config.sentry)

    runtime = await create_runtime(config)
    watcher = ExecutionWatcher(runtime.engine, config.cron.execution, run_immediately=run_now)
    logger.info(
        f"Starting execution job with frequency {config.cron.execution} "
        f"and time delay of {config.proxy.time_delay_blocks} blocks"
    )

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal_module.SIGTERM, signal_module.SIGINT):
        loop.add_signal_handler(sig, shutdown_event.set)

    try:
        await watcher.start()
        await shutdown_event.wait()
        logger.info("Shutting down, waiting for in-flight tick")
    finally:
        await watcher.stop()
        await runtime.close()
