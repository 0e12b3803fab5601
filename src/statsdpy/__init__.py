"""statsdpy - StatsD client with sampling, timers and memory profiling."""

from statsdpy.adapters.connections import (
    BlackholeConnection,
    InMemoryConnection,
    UdpConnection,
)
from statsdpy.adapters.frameworks.asgi import StatsdMiddleware
from statsdpy.adapters.logging import StatsdLoggingHandler
from statsdpy.aware import StatsdAwareMixin
from statsdpy.client import Client
from statsdpy.config import StatsdConfig, create_client
from statsdpy.core.encoding.line import encode_line
from statsdpy.core.errors import ConfigurationError, StatsdError
from statsdpy.core.keys import compose_key
from statsdpy.core.models import MetricType
from statsdpy.core.ports import ConnectionPort, StatsdAware
from statsdpy.core.sampling import Sampler

__all__ = [
    "BlackholeConnection",
    "Client",
    "ConfigurationError",
    "ConnectionPort",
    "InMemoryConnection",
    "MetricType",
    "Sampler",
    "StatsdAware",
    "StatsdAwareMixin",
    "StatsdConfig",
    "StatsdError",
    "StatsdLoggingHandler",
    "StatsdMiddleware",
    "UdpConnection",
    "compose_key",
    "create_client",
    "encode_line",
]
