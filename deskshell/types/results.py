"""
Result Types

Values passed between the dispatcher, the native bridge and the host.

Models:
    - CommandResult: Outcome of one builtin or bridged command
    - ExecResult: Response of the host execution transport
    - HostIdentity: Home directory and host name of the bridge host
"""

from pydantic import BaseModel, Field

from deskshell.types.session import LineKind, TranscriptLine


class CommandResult(BaseModel):
    """
    Outcome of executing one command line.

    Attributes:
        output: Text to show (may span lines), None for no output
        kind: Presentation class of the output lines
        stderr: Standard error of a bridged command, shown after output
        mutate_cwd: New working directory (node id or host path)
        clear_transcript: The coordinator must truncate the transcript
    """

    output: str | None = None
    kind: LineKind = LineKind.OUTPUT
    stderr: str | None = None
    mutate_cwd: str | None = None
    clear_transcript: bool = False

    @property
    def is_error(self) -> bool:
        return self.kind in (LineKind.ERROR, LineKind.BRIDGE_ERROR)

    @classmethod
    def error(cls, message: str) -> "CommandResult":
        """Build an error result."""
        return cls(output=message, kind=LineKind.ERROR)

    def to_lines(self) -> list[TranscriptLine]:
        """Split output and stderr into transcript lines."""
        lines: list[TranscriptLine] = []
        if self.output:
            lines.extend(
                TranscriptLine(text=text, kind=self.kind) for text in self.output.split("\n")
            )
        if self.stderr:
            lines.extend(
                TranscriptLine(text=text, kind=LineKind.ERROR) for text in self.stderr.split("\n")
            )
        return lines


class ExecResult(BaseModel):
    """
    Response of one host execution round trip.

    ``transport_error`` is set when the call itself could not complete;
    a command that ran and exited non-zero has ``success=False`` and a
    non-zero ``exit_code`` but no transport error.
    """

    success: bool
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    transport_error: str | None = None


class HostIdentity(BaseModel):
    """Identity of the bridge host, fetched once per session."""

    homedir: str
    hostname: str
    username: str | None = Field(default=None, description="Login name on the host")
