"""Connection adapters implementing ConnectionPort."""

from statsdpy.adapters.connections.in_memory import (
    BlackholeConnection,
    InMemoryConnection,
)
from statsdpy.adapters.connections.udp import UdpConnection

__all__ = [
    "BlackholeConnection",
    "InMemoryConnection",
    "UdpConnection",
]
