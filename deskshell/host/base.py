"""
Abstract Host Bridge Interface

The privileged execution transport a bridged session talks to. A bridge
runs one shell instruction string in a given working directory and
reports what happened; it keeps no state between calls.
"""

from abc import ABC, abstractmethod

from deskshell.types import ExecResult, HostIdentity


class BridgeError(RuntimeError):
    """The host transport could not complete a round trip."""


class HostBridge(ABC):
    """
    Host execution transport.

    ``execute`` must not raise for a command that ran and failed; that is
    an ExecResult with ``success=False``. Transport failures may either be
    reported through ``ExecResult.transport_error`` or raised as
    BridgeError; the session treats both the same way.
    """

    @abstractmethod
    async def get_identity(self) -> HostIdentity:
        """Home directory and host name of the host account."""
        ...

    @abstractmethod
    async def execute(self, command: str, cwd: str | None = None) -> ExecResult:
        """
        Run a shell instruction string on the host.

        Args:
            command: Instruction string, interpreted by the host shell
            cwd: Working directory to run it in (host default if None)

        Returns:
            Captured stdout, stderr and exit status
        """
        ...

    async def close(self) -> None:
        """Release transport resources. Default: nothing to release."""
        return None
