"""Port interfaces for transports and client consumers.

These protocols define the contracts that adapters must implement.
The client depends only on these interfaces, not concrete implementations.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from statsdpy.client import Client


@runtime_checkable
class ConnectionPort(Protocol):
    """Port for transmitting encoded StatsD payloads.

    Adapters implementing this protocol deliver a payload on a best-effort
    basis. A payload is one line, or several lines joined by newlines when
    the client flushes a batch.
    Examples: InMemoryConnection, BlackholeConnection, UdpConnection.
    """

    def send(self, line: str) -> None:
        """Transmit a payload. The return value is ignored."""
        ...


@runtime_checkable
class StatsdAware(Protocol):
    """Port for components that accept an injected client."""

    def set_statsd_client(self, client: "Client") -> None:
        """Receive the client this component should report through."""
        ...
