"""
Native Session Bridge

Runs command lines of a bridged session on the host through a stateless
HostBridge, keeping the working directory as client-side shadow state.

Every host call may land in a fresh process, so a plain ``cd`` would be
forgotten as soon as it returned. Instead ``cd <target>`` is sent as one
compound instruction that changes directory and prints the result:

    cd '/home/alice/projects' && pwd

The printed absolute path becomes the new ``cwd_path``; every later
command is executed with that path as its working directory.

Transport failures (the round trip itself could not complete) are kept
apart from commands that ran and failed: they come back as a single
BRIDGE_ERROR line, while a failed command's stderr is ordinary ERROR
output.
"""

from __future__ import annotations

import logging
import posixpath
import shlex

from deskshell.config.settings import ShellConfig
from deskshell.host.base import BridgeError, HostBridge
from deskshell.shell.tokenizer import split_command
from deskshell.types import CommandResult, ExecResult, LineKind, Session

logger = logging.getLogger(__name__)


def bridge_error(shell_name: str, message: str) -> CommandResult:
    """Result for an engine-level transport failure."""
    return CommandResult(output=f"{shell_name}: bridge error: {message}", kind=LineKind.BRIDGE_ERROR)


def target_directory(session: Session, target: str) -> str:
    """
    Absolute host path a ``cd`` target refers to.

    "~" is the host home directory; other relative targets are joined
    onto the shadow working directory. The host shell normalizes "..".
    """
    home = session.home_path or "/"
    if target == "~":
        return home
    if target.startswith("~/"):
        return posixpath.join(home, target[2:])
    if target.startswith("/"):
        return target
    return posixpath.join(session.cwd_path or home, target)


class NativeSessionBridge:
    """
    Executes command lines of one bridged session on a host.

    Args:
        host: Host execution transport
        config: Shell configuration (shell name for bridge errors)
    """

    def __init__(self, host: HostBridge, config: ShellConfig | None = None):
        self.host = host
        self.config = config or ShellConfig()

    async def execute(self, session: Session, line: str) -> CommandResult:
        """
        Execute one raw command line.

        ``clear`` is handled locally and an empty line is a no-op; neither
        reaches the host. ``cd`` is synthesized as described above. Any
        other line is sent unchanged with the shadow cwd.

        Returns:
            stdout as output and stderr as error lines, or a bridge error
        """
        cmd_name, args = split_command(line)
        if not cmd_name:
            return CommandResult()

        if cmd_name == "clear":
            return CommandResult(clear_transcript=True)
        if cmd_name == "cd":
            return await self.change_directory(session, args[0] if args else "~")

        response = await self._round_trip(line.strip(), session.cwd_path)
        if isinstance(response, CommandResult):
            return response

        return CommandResult(
            output=response.stdout.rstrip("\n") or None,
            stderr=response.stderr.rstrip("\n") or None,
        )

    async def change_directory(self, session: Session, target: str) -> CommandResult:
        """
        Move the shadow cwd with a single ``cd <dir> && pwd`` round trip.

        ``cwd_path`` is only updated by the caller applying ``mutate_cwd``;
        on any failure it stays as it was.
        """
        directory = target_directory(session, target)
        instruction = f"cd {shlex.quote(directory)} && pwd"

        # The target is absolute; the shadow cwd may no longer exist on the host
        response = await self._round_trip(instruction, None)
        if isinstance(response, CommandResult):
            return response

        new_path = response.stdout.strip().splitlines()[-1] if response.stdout.strip() else ""
        if not response.success or not new_path:
            logger.debug(f"cd to '{directory}' failed (exit {response.exit_code})")
            return CommandResult.error(f"cd: {target}: No such file or directory")

        logger.debug(f"Host cwd -> {new_path}")
        return CommandResult(mutate_cwd=new_path)

    async def _round_trip(self, command: str, cwd: str | None) -> ExecResult | CommandResult:
        """Call the host; transport failures become a bridge error result."""
        try:
            response = await self.host.execute(command, cwd)
        except (BridgeError, OSError) as e:
            logger.warning(f"Host bridge call failed: {e}")
            return bridge_error(self.config.shell_name, str(e) or type(e).__name__)

        if response.transport_error:
            logger.warning(f"Host bridge transport error: {response.transport_error}")
            return bridge_error(self.config.shell_name, response.transport_error)
        return response
