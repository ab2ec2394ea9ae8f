"""
Run command: periodic game generation service
"""

import typer
from rich.console import Console

from microchess.config import Settings
from microchess.logging_config import setup_logging
from microchess.rules import ChessRules
from microchess.scheduler import GenerationJob, Scheduler

console = Console()


def run_command(
    once: bool = typer.Option(False, "--once", help="Generate one game and exit (also MICROCHESS_RUN_ONCE)"),
):
    """
    Generate a random game now and then every MICROCHESS_GENERATOR_INTERVAL ms.

    SIGINT/SIGTERM trigger a graceful drain: one last game if idle, otherwise
    a bounded wait for the game in progress.

    Examples:
        microchess run
        microchess run --once
    """
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_format, settings.log_file)

    job = GenerationJob(settings, ChessRules())
    scheduler = Scheduler(
        job,
        interval=settings.generator_interval,
        drain_timeout=settings.drain_timeout,
        run_once=once or settings.run_once,
        name="microchess",
    )
    scheduler.install_signal_handlers()
    scheduler.run()
    raise typer.Exit(0)
