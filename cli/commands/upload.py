"""
Upload command: periodic upload of the game log
"""

import typer
from rich.console import Console

from microchess.config import Settings
from microchess.core.errors import ConfigError
from microchess.logging_config import setup_logging
from microchess.scheduler import Scheduler
from microchess.upload import UploadJob

console = Console()


def upload_command(
    once: bool = typer.Option(False, "--once", help="Upload once and exit"),
):
    """
    Upload the deduplicated game log every MICROCHESS_INTERVAL ms.

    Requires JSONBIN_ACCESS_KEY; refuses to start without it.

    Examples:
        microchess upload
        microchess upload --once
    """
    settings = Settings.from_env()
    try:
        job = UploadJob(settings)
    except ConfigError as ex:
        console.print(f"[red]Error:[/red] {ex}")
        raise typer.Exit(1)

    setup_logging(settings.log_level, settings.log_format, settings.log_file)
    scheduler = Scheduler(
        job,
        interval=settings.upload_interval,
        drain_timeout=settings.drain_timeout,
        run_once=once,
        name="microchess-uploader",
    )
    scheduler.install_signal_handlers()
    scheduler.run()
    raise typer.Exit(0)
