"""
deskshell MCP Server

Single-tool MCP server that runs command lines in one terminal session.

The session lives for the whole server process, so the working directory
carries over between calls:
    cd Documents
    ls
    cat notes.txt
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from deskshell.config import ShellConfig
from deskshell.shell.coordinator import SessionCoordinator

# Load .env file for DESKSHELL_* settings
load_dotenv()

_coordinator: SessionCoordinator | None = None

BUSY_MESSAGE = "Busy: a command is still running. Try again when it finishes."
CLEARED_MESSAGE = "(transcript cleared)"


def get_coordinator() -> SessionCoordinator:
    """Get the process-wide session."""
    if _coordinator is None:
        raise RuntimeError("Session not initialized. Call init_session() first.")
    return _coordinator


async def init_session(
    snapshot: str | Path | None = None,
    native: bool = False,
    config: ShellConfig | None = None,
) -> SessionCoordinator:
    """
    Start the process-wide session.

    Args:
        snapshot: Directory graph snapshot; the demo graph when None
        native: Bridge to a shell on this machine instead
        config: Shell configuration (environment defaults when None)
    """
    global _coordinator
    from deskshell.graph import demo_graph, load_snapshot
    from deskshell.host import LocalHostBridge

    config = config or ShellConfig()
    if native:
        _coordinator = await SessionCoordinator.start(bridge=LocalHostBridge(), config=config)
    else:
        graph = load_snapshot(snapshot) if snapshot else demo_graph(config.username, config.root_id)
        _coordinator = await SessionCoordinator.start(graph=graph, config=config)
    return _coordinator


async def execute_command(command: str) -> str:
    """Submit one line and return the transcript lines it produced."""
    term = get_coordinator()
    if term.in_flight:
        return BUSY_MESSAGE

    before = len(term.session.transcript)
    if not await term.submit(command):
        return BUSY_MESSAGE

    transcript = term.session.transcript
    if not transcript:
        return CLEARED_MESSAGE
    produced = [line.text for line in transcript[before:]]
    while produced and not produced[-1]:
        produced.pop()
    return "\n".join(produced)


# =============================================================================
# MCP Server
# =============================================================================

def create_server(name: str = "deskshell") -> FastMCP:
    """Create the MCP server with the shell_execute tool."""
    mcp = FastMCP(name)

    @mcp.tool()
    async def shell_execute(command: str) -> str:
        """
        Run one command line in the terminal session.

        Sandboxed sessions understand:
            ls [path]        cd [path]        pwd
            cat <file>       echo <text>      history
            whoami           date             uptime
            help             clear

        Paths may be relative, absolute (/Users/...) or home-relative (~/...).
        Bridged sessions pass every line to the host shell; cd is tracked
        between calls.

        Args:
            command: The command line to execute

        Returns:
            The prompt line followed by the command's output
        """
        return await execute_command(command)

    return mcp


async def run_server(
    snapshot: str | Path | None = None,
    native: bool = False,
    config: ShellConfig | None = None,
) -> None:
    """Start the session and run the MCP server."""
    await init_session(snapshot, native=native, config=config)
    mcp = create_server()
    try:
        await mcp.run_stdio_async()
    finally:
        await get_coordinator().close()


# =============================================================================
# CLI Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point for the MCP server."""
    import sys

    parser = argparse.ArgumentParser(
        description="deskshell MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    python -m deskshell.mcp --snapshot ./nodes.parquet

MCP client config:
    {
        "mcpServers": {
            "deskshell": {
                "command": "python",
                "args": ["-m", "deskshell.mcp", "--snapshot", "./nodes.parquet"]
            }
        }
    }
""",
    )
    parser.add_argument(
        "--snapshot", "-s",
        type=Path,
        default=None,
        help="Directory graph snapshot (.json or .parquet); default: demo graph",
    )
    parser.add_argument(
        "--native",
        action="store_true",
        help="Bridge to a shell on this machine",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="TOML configuration file",
    )

    args = parser.parse_args()

    if args.snapshot and not args.snapshot.exists():
        print(f"Error: Snapshot not found: {args.snapshot}", file=sys.stderr)
        sys.exit(1)

    config = ShellConfig.from_file(args.config) if args.config else None
    asyncio.run(run_server(args.snapshot, native=args.native, config=config))


if __name__ == "__main__":
    main()
