"""
Replay command: list stored games, replay a seed, verify a stored entry
"""

import json
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from microchess.config import Settings
from microchess.core.errors import EntryLookupError, PathSecurityError, StoreReadError
from microchess.log import read_json_array
from microchess.replay import (
    ReplayComparison,
    recent_entries,
    resolve_store_path,
    run_to_dict,
    select_entry,
    simulate,
    verify_entry,
)
from microchess.rules import ChessRules

console = Console()

EXIT_OK = 0
EXIT_BAD_ARGS = 1
EXIT_STORE_READ = 2
EXIT_LOOKUP = 3


def _fail(message: str, code: int, json_output: bool, **extra: Any) -> NoReturn:
    if json_output:
        print(json.dumps({"error": message, **extra}))
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code)


def _read_store(path: Path, json_output: bool) -> List[Any]:
    try:
        return read_json_array(str(path))
    except StoreReadError as ex:
        _fail(str(ex), EXIT_STORE_READ, json_output, path=str(path))


def _print_listing(path: Path, entries: List[Any], json_output: bool) -> None:
    sample = recent_entries(entries)
    if json_output:
        rows = []
        for idx, e in sample:
            e = e if isinstance(e, dict) else {}
            rows.append(
                {
                    "index": idx,
                    "seed": e.get("seed"),
                    "move_count": e.get("move_count"),
                    "result": e.get("result"),
                    "timestamp": e.get("timestamp"),
                }
            )
        print(json.dumps({"path": str(path), "entries": rows, "count": len(entries)}, indent=2))
        return

    table = Table(title=f"Last {len(sample)} entries from {escape(str(path))}")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Seed", style="yellow")
    table.add_column("Plies", justify="right")
    table.add_column("Result", style="green")
    table.add_column("Timestamp", style="dim")
    for idx, e in sample:
        e = e if isinstance(e, dict) else {}
        table.add_row(
            str(idx),
            escape(str(e.get("seed", "N/A"))),
            str(e.get("move_count", "N/A")),
            escape(str(e.get("result", "N/A"))),
            escape(str(e.get("timestamp", "N/A"))),
        )
    console.print(table)
    console.print("\nTo replay an entry: microchess replay --index <n> (0 = most recent)")
    console.print("To replay by seed: microchess replay --seed <seed>")


def _print_run(run: Dict[str, Any]) -> None:
    console.print(f"  seed: [yellow]{escape(run['seed'])}[/yellow]")
    rng = run["rng"] + (f"@{run['rng_version']}" if run.get("rng_version") else "")
    console.print(f"  rng:  {escape(rng)}")
    console.print(f"  move_count: {run['move_count']}")
    console.print(f"  final_fen: {escape(run['final_fen'])}")
    console.print(f"  pgn moves: {escape(run['pgn_moves'])}")


def _print_comparison(comparison: ReplayComparison) -> None:
    stored = comparison.stored
    console.print("[bold]--- stored entry ---[/bold]")
    rng = str(stored.get("rng", "")) + (f"@{stored['rng_version']}" if stored.get("rng_version") else "")
    console.print(f"  seed: [yellow]{escape(str(stored.get('seed')))}[/yellow]")
    console.print(f"  rng:  {escape(rng)}")
    console.print(f"  move_count: {stored.get('move_count')}")
    console.print(f"  final_fen: {escape(str(stored.get('final_fen')))}")
    console.print(f"  pgn: {escape(str(stored.get('pgn')))}")
    console.print("")
    console.print("[bold]--- simulated run ---[/bold]")
    _print_run(run_to_dict(comparison.simulated))
    console.print("")
    console.print(f"PGN match: {'YES' if comparison.pgn_match else 'NO'}")
    console.print(f"FEN match: {'YES' if comparison.fen_match else 'NO'}")
    if comparison.matched:
        console.print("[green]✓ Reproduction successful.[/green]")
    else:
        console.print(
            "[yellow]Reproduction mismatch: ensure the same rules engine version and RNG "
            "implementation are in use.[/yellow]"
        )


def replay_command(
    seed: Optional[str] = typer.Option(None, "--seed", "-s", help="Replay this seed (no stored comparison)"),
    index: Optional[int] = typer.Option(
        None, "--index", "-i", help="Replay the n-th most recent stored entry (0 = most recent)"
    ),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Alternate game log inside the allowed directory"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay stored games to verify reproducibility.

    Exit codes: 0 success, 1 bad arguments or forbidden path,
    2 store read failure, 3 entry lookup failure.

    Examples:
        microchess replay
        microchess replay --index 0
        microchess replay --seed abc123
        microchess replay --file ./other.json --index 2
    """
    settings = Settings.from_env()

    # Path check happens before any file access
    try:
        store_path = resolve_store_path(file or settings.output_file, settings.replay_base_dir)
    except PathSecurityError as ex:
        _fail(str(ex), EXIT_BAD_ARGS, json_output)

    if index is not None and index < 0:
        _fail(f"--index must be >= 0, got {index}", EXIT_BAD_ARGS, json_output)

    # No selector: list recent entries
    if not seed and index is None:
        entries = _read_store(store_path, json_output)
        _print_listing(store_path, entries, json_output)
        raise typer.Exit(EXIT_OK)

    rules = ChessRules()

    if index is not None:
        entries = _read_store(store_path, json_output)
        try:
            entry = select_entry(entries, index)
        except EntryLookupError as ex:
            _fail(str(ex), EXIT_LOOKUP, json_output)
        try:
            comparison = verify_entry(
                entry,
                rules,
                default_max_plies=settings.max_moves,
                prefer_external=settings.prefer_external_rng,
            )
        except ValueError as ex:
            _fail(f"Entry at index {index}: {ex}", EXIT_LOOKUP, json_output)

        if json_output:
            print(json.dumps({"index": index, **comparison.to_dict()}, indent=2))
        else:
            _print_comparison(comparison)
        raise typer.Exit(EXIT_OK)

    run = simulate(seed, settings.max_moves, rules, prefer_external=settings.prefer_external_rng)
    if json_output:
        print(json.dumps({"simulated": run_to_dict(run)}, indent=2))
    else:
        console.print("[bold]Simulated run (no stored entry was provided):[/bold]")
        _print_run(run_to_dict(run))
    raise typer.Exit(EXIT_OK)
