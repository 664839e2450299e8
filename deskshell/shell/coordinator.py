"""
Session Coordinator

Owns one terminal Session and routes every submitted line to the backend
chosen when the session started: the virtual command dispatcher over a
directory graph (sandboxed) or the native bridge to a host (bridged).

Submissions are single-flight. While a line is executing ``in_flight`` is
True and further submissions are rejected, not queued, so effects on the
transcript and the working directory happen strictly in order.

Example:
    >>> term = await SessionCoordinator.start(graph=demo_graph())
    >>> await term.submit("ls")
    True
    >>> term.prompt
    'guest@deskshell ~ $ '

    >>> term = await SessionCoordinator.start(bridge=LocalHostBridge())
    >>> await term.submit("cd /tmp")
    >>> term.session.cwd_path
    '/tmp'
"""

from __future__ import annotations

import asyncio
import logging
import time

from deskshell.config.settings import ShellConfig
from deskshell.graph.base import DirectoryGraph
from deskshell.host.base import HostBridge
from deskshell.shell import commands
from deskshell.shell.completion import complete_line
from deskshell.shell.native import NativeSessionBridge, bridge_error
from deskshell.shell.path_resolver import collapse_home, path_to_string
from deskshell.shell.rc import parse_rc
from deskshell.shell.tokenizer import tokenize
from deskshell.types import CommandResult, LineKind, RcConfig, Session, SessionMode

logger = logging.getLogger(__name__)


class SessionCoordinator:
    """
    Single-flight command loop of one terminal instance.

    Use ``SessionCoordinator.start`` rather than the constructor; it picks
    the mode, fetches the host identity or reads the rc file, and seeds
    the banner.

    Args:
        session: Session state, owned by this coordinator
        config: Shell configuration
        graph: Directory graph (sandboxed sessions)
        bridge: Host bridge (bridged sessions)
    """

    def __init__(
        self,
        session: Session,
        config: ShellConfig,
        graph: DirectoryGraph | None = None,
        bridge: HostBridge | None = None,
    ):
        self.session = session
        self.config = config
        self.graph = graph
        self.native = NativeSessionBridge(bridge, config) if bridge is not None else None
        self._pending: asyncio.Future[CommandResult] | None = None
        self._abandoned = False

    @classmethod
    async def start(
        cls,
        graph: DirectoryGraph | None = None,
        bridge: HostBridge | None = None,
        config: ShellConfig | None = None,
    ) -> "SessionCoordinator":
        """
        Create a session.

        With a bridge the session is bridged for its whole lifetime and the
        host identity is fetched once; otherwise it is sandboxed over
        ``graph``, starting in the home node.

        Raises:
            ValueError: If neither a graph nor a bridge is given
        """
        config = config or ShellConfig()

        if bridge is not None:
            identity = await bridge.get_identity()
            session = Session(
                mode=SessionMode.BRIDGED,
                username=identity.username or config.username,
                hostname=identity.hostname,
                home_path=identity.homedir,
                cwd_path=identity.homedir,
                rc=RcConfig(show_motd=config.motd),
            )
            logger.info(f"Bridged session on {identity.hostname} (home {identity.homedir})")
        elif graph is not None:
            home_id = config.resolved_home_id
            if home_id not in graph:
                logger.warning(f"Home node '{home_id}' is not in the directory graph")
            session = Session(
                mode=SessionMode.SANDBOXED,
                username=config.username,
                hostname=config.hostname,
                home_id=home_id,
                cwd_id=home_id,
                rc=cls._load_rc(graph, home_id, config),
            )
            logger.info(f"Sandboxed session for '{config.username}' ({len(graph)} nodes)")
        else:
            raise ValueError("A sandboxed session needs a directory graph")

        coordinator = cls(session, config, graph=graph, bridge=bridge)
        coordinator._seed_banner()
        return coordinator

    @staticmethod
    def _load_rc(graph: DirectoryGraph, home_id: str, config: ShellConfig) -> RcConfig:
        node = graph.find_child(home_id, config.rc_filename)
        if node is None or node.is_directory or not node.content:
            return RcConfig(show_motd=config.motd)
        logger.debug(f"Loading rc file '{config.rc_filename}'")
        return parse_rc(node.content)

    def _seed_banner(self) -> None:
        session = self.session
        if session.mode is SessionMode.BRIDGED:
            session.append(f"deskshell {self.config.shell_name} • Native Shell Mode", LineKind.INFO)
            session.append(f"Connected to {session.hostname} as {session.username}", LineKind.MUTED)
            session.append("")
            return

        if session.rc.show_motd:
            for text in commands.system_info_lines(session, self.config):
                session.append(text, LineKind.INFO)
        else:
            session.append(f"deskshell • {self.config.shell_name}", LineKind.INFO)
        session.append("")
        session.append('Type "help" for available commands.', LineKind.MUTED)
        for startup in session.rc.startup_commands:
            session.append(f"> {startup}", LineKind.MUTED)
        session.append("")

    # =========================================================================
    # Presentation
    # =========================================================================

    @property
    def mode(self) -> SessionMode:
        return self.session.mode

    @property
    def in_flight(self) -> bool:
        return self.session.in_flight

    @property
    def display_path(self) -> str:
        """Working directory as shown in the prompt."""
        session = self.session
        if session.mode is SessionMode.BRIDGED:
            return collapse_home(session.cwd_path, session.home_path)
        return path_to_string(
            self.graph,
            session.cwd_id,
            session.home_id,
            root_id=self.config.root_id,
            max_depth=self.config.max_path_depth,
        )

    @property
    def prompt(self) -> str:
        return self.session.render_prompt(self.display_path)

    def complete(self, line: str) -> str:
        """Tab-complete the last word of ``line`` (sandboxed sessions only)."""
        if self.session.mode is not SessionMode.SANDBOXED or self.graph is None:
            return line
        return complete_line(self.graph, self.session, line)

    # =========================================================================
    # Submission
    # =========================================================================

    async def submit(self, line: str) -> bool:
        """
        Execute one input line.

        Appends the prompt and the line, dispatches, applies a cwd change,
        then appends the output and one blank separator line. ``clear``
        truncates the transcript instead. An empty line only appends its
        prompt.

        Returns:
            False if the line was rejected because another is in flight
        """
        session = self.session
        if session.in_flight:
            logger.debug(f"Rejected submission while busy: {line!r}")
            return False

        session.in_flight = True
        session.running_since = time.time()
        try:
            session.append(self.prompt + line, LineKind.PROMPT)
            if not line.strip():
                return True
            session.record_command(line.strip(), self.config.history_limit)

            result = await self._dispatch(line)

            if result.clear_transcript:
                session.clear_transcript()
                return True
            if result.mutate_cwd is not None:
                self._change_cwd(result.mutate_cwd)
            session.extend(result.to_lines())
            session.append("")
        finally:
            session.in_flight = False
            session.running_since = None
            self._pending = None
            self._abandoned = False
        return True

    async def _dispatch(self, line: str) -> CommandResult:
        if self.native is None:
            return commands.execute(self.graph, self.session, tokenize(line), self.config)

        self._pending = asyncio.ensure_future(self.native.execute(self.session, line))
        try:
            return await asyncio.wait_for(self._pending, timeout=self.config.bridge_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Host command timed out after {self.config.bridge_timeout}s: {line}")
            return bridge_error(
                self.config.shell_name,
                f"command timed out after {self.config.bridge_timeout:g}s",
            )
        except asyncio.CancelledError:
            if not self._abandoned:
                raise
            logger.info(f"Abandoned host command: {line}")
            return CommandResult(output="^C", kind=LineKind.MUTED)

    def _change_cwd(self, target: str) -> None:
        if self.session.mode is SessionMode.BRIDGED:
            self.session.cwd_path = target
        else:
            self.session.cwd_id = target
        logger.debug(f"cwd -> {target}")

    def abandon(self) -> bool:
        """
        Give up on the outstanding host round trip.

        The submission finishes with a ``^C`` line, the working directory
        is left unchanged and input is accepted again.

        Returns:
            True if there was a round trip to abandon
        """
        if self._pending is None or self._pending.done():
            return False
        self._abandoned = True
        self._pending.cancel()
        return True

    async def close(self) -> None:
        """Abandon any outstanding command and release the host bridge."""
        self.abandon()
        if self.native is not None:
            await self.native.host.close()
