#!/usr/bin/env python3
"""
microchess CLI - random chess game generator

Main entrypoint for the microchess command-line tool.
"""

import sys
from typing import List, Optional

import click
import typer
from rich.console import Console
from rich.table import Table

from cli.commands import replay, run, upload

# Initialize Typer app
app = typer.Typer(
    name="microchess",
    help="Random chess game generator with reproducible replay",
    add_completion=False,
)

# Console for rich output
console = Console()

# Add standalone commands
app.command("run")(run.run_command)
app.command("upload")(upload.upload_command)
app.command("replay")(replay.replay_command)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from microchess.rules import ChessRules

    table = Table(show_header=False, box=None)
    table.add_row("[bold]microchess CLI[/bold]", f"v{__version__}")
    table.add_row("Rules engine", f"{ChessRules.name} {ChessRules.version}")

    console.print(table)


def _same_named(base: type, name: str) -> set:
    return {cls for cls in base.__mro__ if cls.__name__ == name}


# Recent typer raises exceptions from its bundled click instead of the
# installed one; accept both.
USAGE_ERRORS = tuple({click.exceptions.UsageError} | _same_named(typer.BadParameter, "UsageError"))
ABORTS = tuple({click.exceptions.Abort} | _same_named(typer.Abort, "Abort"))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entrypoint.

    Exit codes: 0 success, 1 bad arguments; commands choose their own
    codes for other failures (replay uses 2 for store read errors, so usage
    errors cannot keep click's own code 2).
    """
    try:
        rv = app(args=argv, prog_name="microchess", standalone_mode=False)
    except USAGE_ERRORS as ex:
        ex.show()
        return 1
    except ABORTS:
        return 1
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    sys.exit(main())
