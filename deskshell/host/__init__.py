"""
Host Bridges

Transports that execute shell instructions on a host for bridged sessions.

Modules:
    base: HostBridge interface and BridgeError
    local: LocalHostBridge (asyncio subprocesses on this machine)

Example:
    >>> from deskshell.host import LocalHostBridge
    >>> term = await SessionCoordinator.start(bridge=LocalHostBridge())
"""

from deskshell.host.base import BridgeError, HostBridge
from deskshell.host.local import LocalHostBridge

__all__ = ["BridgeError", "HostBridge", "LocalHostBridge"]
