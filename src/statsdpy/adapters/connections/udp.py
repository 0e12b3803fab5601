"""UDP connection adapter.

Sends each payload as one datagram. Delivery is best effort: socket errors
are logged and the payload is dropped.
"""

import logging
import socket
import threading
from types import TracebackType

logger = logging.getLogger(__name__)


# @tra: Adapter.Connection.Udp
class UdpConnection:
    """UDP implementation of ConnectionPort.

    The socket is opened lazily on the first send and reopened after
    ``close()``.

    Example:
        ```python
        with UdpConnection("localhost", 8125) as connection:
            Client(connection).increment("started")
        ```
    """

    def __init__(self, host: str = "localhost", port: int = 8125) -> None:
        """Initialize the connection.

        Args:
            host: Collector host name or address.
            port: Collector UDP port.
        """
        self.host = host
        self.port = port
        self._socket: socket.socket | None = None
        self._lock = threading.Lock()

    def _get_socket(self) -> socket.socket:
        """Get or create the UDP socket."""
        with self._lock:
            if self._socket is None:
                family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
                self._socket = socket.socket(family, socket.SOCK_DGRAM)
            return self._socket

    def send(self, line: str) -> None:
        """Send a payload as a single datagram."""
        try:
            sock = self._get_socket()
            sock.sendto(line.encode(), (self.host, self.port))
        except OSError:
            logger.warning(
                "Cannot send to StatsD at %s:%s", self.host, self.port, exc_info=True
            )

    def close(self) -> None:
        """Close the socket if it is open."""
        with self._lock:
            if self._socket is not None:
                self._socket.close()
                self._socket = None

    def __enter__(self) -> "UdpConnection":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
