"""
deskshell MCP Server

Exposes a terminal session via a single MCP tool (shell_execute) that
accepts command lines.

Tool:
    - shell_execute: Run a command line (ls, cd, pwd, cat, ... or any host
      command in native mode)

Usage:
    # Run the MCP server over the demo graph
    python -m deskshell.mcp

    # Over a document store dump
    python -m deskshell.mcp --snapshot ./nodes.parquet

    # Against this machine's shell
    python -m deskshell.mcp --native
"""

from deskshell.mcp.server import create_server, run_server

__all__ = ["create_server", "run_server"]
