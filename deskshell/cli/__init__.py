"""
Command-Line Interface

CLI commands for running terminal sessions outside the desktop.

Commands:
    deskshell repl  - Interactive session (sandboxed, or --native)
    deskshell run   - Run command lines in one session and print the transcript
    deskshell info  - Display directory graph snapshot information

Usage:
    # Sandboxed session over the built-in demo graph
    deskshell repl

    # Sandboxed session over a document store dump
    deskshell repl --snapshot ./nodes.parquet --user alice

    # Bridged session on this machine
    deskshell repl --native

    # Scripted
    deskshell run "cd Documents" "cat notes.txt"

    # Node counts
    deskshell info --snapshot ./nodes.json
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from deskshell.types import LineKind, TranscriptLine

__all__ = ["main", "app"]

app = typer.Typer(
    name="deskshell",
    help="Terminal session engine for the desktop shell",
    no_args_is_help=True,
)
console = Console()

LINE_STYLES = {
    LineKind.PROMPT: "bold cyan",
    LineKind.OUTPUT: "",
    LineKind.ERROR: "red",
    LineKind.INFO: "green",
    LineKind.MUTED: "dim",
    LineKind.BRIDGE_ERROR: "bold magenta",
}

SnapshotOption = typer.Option(
    None,
    "--snapshot", "-s",
    help="Directory graph snapshot (.json or .parquet); default: demo graph",
    exists=True,
)
NativeOption = typer.Option(
    False,
    "--native",
    help="Bridge to a shell on this machine instead of the directory graph",
)
UserOption = typer.Option(
    None,
    "--user", "-u",
    help="Account name for sandboxed sessions",
)
ConfigOption = typer.Option(
    None,
    "--config", "-c",
    help="TOML configuration file",
    exists=True,
)
LogLevelOption = typer.Option(
    "WARNING",
    "--log-level",
    help="Logging level (DEBUG, INFO, WARNING, ERROR)",
)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_lines(lines: list[TranscriptLine]) -> None:
    for line in lines:
        console.print(line.text, style=LINE_STYLES.get(line.kind, ""), markup=False, highlight=False)


async def _start_session(
    snapshot: Optional[Path],
    native: bool,
    user: Optional[str],
    config_path: Optional[Path],
):
    from deskshell.config import ShellConfig
    from deskshell.graph import demo_graph, load_snapshot
    from deskshell.host import LocalHostBridge
    from deskshell.shell.coordinator import SessionCoordinator

    config = ShellConfig.from_file(config_path) if config_path else ShellConfig()
    if user:
        config = config.with_overrides(username=user)

    if native:
        return await SessionCoordinator.start(bridge=LocalHostBridge(), config=config)

    if snapshot:
        graph = load_snapshot(snapshot)
    else:
        graph = demo_graph(username=config.username, root_id=config.root_id)
    return await SessionCoordinator.start(graph=graph, config=config)


@app.command()
def repl(
    snapshot: Optional[Path] = SnapshotOption,
    native: bool = NativeOption,
    user: Optional[str] = UserOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Start an interactive terminal session."""
    load_dotenv()
    _setup_logging(log_level)

    async def _run() -> None:
        term = await _start_session(snapshot, native, user, config)
        _print_lines(term.session.transcript)
        console.print("[dim]Ctrl-D to quit[/]")

        try:
            while True:
                try:
                    line = console.input(term.prompt, markup=False)
                except EOFError:
                    console.print()
                    break
                except KeyboardInterrupt:
                    console.print("^C", style="dim")
                    continue

                before = len(term.session.transcript)
                await term.submit(line)
                transcript = term.session.transcript
                if not transcript:
                    console.clear()
                else:
                    # The prompt line was already shown by the input call
                    _print_lines(transcript[before + 1:])
        finally:
            await term.close()

    asyncio.run(_run())


@app.command()
def run(
    lines: list[str] = typer.Argument(
        ...,
        help="Command lines, executed in order",
    ),
    snapshot: Optional[Path] = SnapshotOption,
    native: bool = NativeOption,
    user: Optional[str] = UserOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Run command lines in one session and print the transcript."""
    load_dotenv()
    _setup_logging(log_level)

    async def _run() -> None:
        term = await _start_session(snapshot, native, user, config)
        produced: list[TranscriptLine] = []
        try:
            for line in lines:
                before = len(term.session.transcript)
                await term.submit(line)
                transcript = term.session.transcript
                if not transcript:
                    # clear: only what follows is shown
                    produced = []
                else:
                    produced.extend(transcript[before:])
        finally:
            await term.close()

        _print_lines(produced)

    asyncio.run(_run())


@app.command()
def info(
    snapshot: Path = typer.Option(
        ...,
        "--snapshot", "-s",
        help="Directory graph snapshot (.json or .parquet)",
        exists=True,
    ),
) -> None:
    """Display directory graph snapshot information."""
    from deskshell.graph import load_snapshot

    try:
        graph = load_snapshot(snapshot)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(code=1)

    stats = graph.stats()

    table = Table(title=f"Directory Graph: {snapshot}")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")

    table.add_row("Nodes", str(stats.total))
    table.add_row("Directories", str(stats.directories))
    table.add_row("Directory aliases", str(stats.aliases))
    table.add_row("Files", str(stats.files))
    table.add_row("Trashed", str(stats.trashed))
    table.add_row("Owners", str(len(stats.owners)))

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()
