"""
Session Types

The state of one terminal instance. A Session is created when the terminal
view mounts and discarded when it unmounts; nothing here is persisted.

Models:
    - SessionMode: sandboxed (directory graph) or bridged (host shell)
    - LineKind: How a transcript line should be presented
    - TranscriptLine: One line of terminal output
    - Session: Mode, working directory, transcript, single-flight flag
    - RcConfig: Parsed shell rc file (aliases, prompt style, banner)
"""

import time
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

PromptStyle = Literal["powerline", "minimal", "classic"]

GUEST_USERNAME = "guest"


class SessionMode(str, Enum):
    """Execution backend, fixed for the lifetime of a session."""

    SANDBOXED = "sandboxed"
    BRIDGED = "bridged"


class LineKind(str, Enum):
    """
    Presentation class of a transcript line.

    BRIDGE_ERROR marks engine-level transport failures and is never used
    for the stderr of a command that actually ran (that is ERROR).
    """

    PROMPT = "prompt"
    OUTPUT = "output"
    ERROR = "error"
    INFO = "info"
    MUTED = "muted"
    BRIDGE_ERROR = "bridge_error"


class TranscriptLine(BaseModel):
    """A single line in the terminal transcript."""

    text: str = ""
    kind: LineKind = LineKind.OUTPUT


class RcConfig(BaseModel):
    """
    Settings read from the user's shell rc file.

    Attributes:
        prompt_style: powerline, minimal or classic
        show_motd: Show the system info banner on session start
        aliases: First-token alias expansions
        startup_commands: Lines listed after the startup marker
    """

    prompt_style: PromptStyle = "powerline"
    show_motd: bool = True
    aliases: dict[str, str] = Field(default_factory=dict)
    startup_commands: list[str] = Field(default_factory=list)


class Session(BaseModel):
    """
    State owned exclusively by one terminal instance.

    Only a successful ``cd`` changes ``cwd_id``/``cwd_path``. The
    transcript is append-only; ``clear`` is the single operation that
    truncates it. ``in_flight`` is True while a submitted line is being
    executed, and no other line is accepted during that time.

    Attributes:
        mode: Backend selected when the session started
        username: Account name shown in the prompt
        hostname: Host name shown in the prompt
        home_id: Home node of the directory graph (sandboxed)
        cwd_id: Current directory node (sandboxed)
        home_path: Host home directory (bridged)
        cwd_path: Shadow copy of the host working directory (bridged)
        transcript: Ordered output lines
        in_flight: A command is executing
        running_since: Start time of the executing command
        command_history: Submitted non-empty lines, oldest first
        rc: Parsed rc file settings
        started_at: Session creation time
    """

    mode: SessionMode
    username: str = GUEST_USERNAME
    hostname: str = "deskshell"
    home_id: str | None = None
    cwd_id: str | None = None
    home_path: str | None = None
    cwd_path: str | None = None
    transcript: list[TranscriptLine] = Field(default_factory=list)
    in_flight: bool = False
    running_since: float | None = None
    command_history: list[str] = Field(default_factory=list)
    rc: RcConfig = Field(default_factory=RcConfig)
    started_at: float = Field(default_factory=time.time)

    @property
    def display_name(self) -> str:
        """Name of the home folder as shown to the user (``Guest``, ``Alice``)."""
        if self.username == GUEST_USERNAME:
            return "Guest"
        return self.username[:1].upper() + self.username[1:]

    def render_prompt(self, display_path: str) -> str:
        """
        Format the prompt for a display path in the rc prompt style.

        powerline: ``alice@box ~/src $ ``
        minimal:   ``~/src ❯ ``
        classic:   ``alice@box:~/src$ ``
        """
        style = self.rc.prompt_style
        if style == "minimal":
            return f"{display_path} ❯ "
        if style == "classic":
            return f"{self.username}@{self.hostname}:{display_path}$ "
        return f"{self.username}@{self.hostname} {display_path} $ "

    # === Transcript ===

    def append(self, text: str, kind: LineKind = LineKind.OUTPUT) -> None:
        """Append one line to the transcript."""
        self.transcript.append(TranscriptLine(text=text, kind=kind))

    def extend(self, lines: list[TranscriptLine]) -> None:
        """Append several lines to the transcript."""
        self.transcript.extend(lines)

    def clear_transcript(self) -> None:
        """Drop every transcript line."""
        self.transcript.clear()

    def lines(self) -> list[str]:
        """Transcript as plain text lines."""
        return [line.text for line in self.transcript]

    # === Command history ===

    def record_command(self, line: str, limit: int = 500) -> None:
        """Remember a submitted line, keeping at most ``limit`` entries."""
        if not line:
            return
        self.command_history.append(line)
        if len(self.command_history) > limit:
            del self.command_history[: len(self.command_history) - limit]
