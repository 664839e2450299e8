"""
Local Host Bridge

Runs instructions with the local system shell through asyncio
subprocesses. Used by ``deskshell repl --native`` and the MCP server's
native mode.

Example:
    >>> bridge = LocalHostBridge()
    >>> identity = await bridge.get_identity()
    >>> result = await bridge.execute("ls", cwd=identity.homedir)
    >>> print(result.stdout)
"""

from __future__ import annotations

import asyncio
import getpass
import logging
import os
import socket
from pathlib import Path

from deskshell.host.base import HostBridge
from deskshell.types import ExecResult, HostIdentity

logger = logging.getLogger(__name__)


class LocalHostBridge(HostBridge):
    """
    Host bridge backed by the local machine.

    Args:
        shell: Executable used to interpret instructions (default: $SHELL,
            falling back to /bin/sh)
        env: Extra environment variables for every command
    """

    def __init__(self, shell: str | None = None, env: dict[str, str] | None = None):
        self.shell = shell or os.environ.get("SHELL") or "/bin/sh"
        self._env = env or {}

    async def get_identity(self) -> HostIdentity:
        try:
            username = getpass.getuser()
        except (KeyError, OSError):
            username = None
        return HostIdentity(
            homedir=str(Path.home()),
            hostname=socket.gethostname(),
            username=username,
        )

    async def execute(self, command: str, cwd: str | None = None) -> ExecResult:
        logger.debug(f"Executing on host (cwd={cwd}): {command}")
        env = {**os.environ, **self._env} if self._env else None
        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                env=env,
                executable=self.shell,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            # Missing shell, bad cwd, fork failure
            logger.warning(f"Host execution failed: {e}")
            return ExecResult(success=False, exit_code=-1, transport_error=str(e))

        try:
            stdout, stderr = await proc.communicate()
        except asyncio.CancelledError:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()
            raise

        exit_code = proc.returncode if proc.returncode is not None else -1
        return ExecResult(
            success=exit_code == 0,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
            exit_code=exit_code,
        )
