"""Client configuration read from arguments or the environment."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from statsdpy.adapters.connections.udp import UdpConnection
from statsdpy.client import DEFAULT_MAX_BATCH_SIZE, Client
from statsdpy.core.errors import ConfigurationError


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class StatsdConfig:
    """Settings for building a client.

    Attributes:
        host: Collector host.
        port: Collector UDP port (1-65535).
        namespace: Prefix for every metric name.
        sample_rate: Global sample rate in [0, 1].
        max_batch_size: Largest batched payload in bytes.
    """

    host: str = "localhost"
    port: int = 8125
    namespace: str = ""
    sample_rate: float = 1.0
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"port out of range: {self.port}")
        if not 0.0 <= self.sample_rate <= 1.0:
            raise ConfigurationError(
                f"sample_rate must be within [0, 1], got {self.sample_rate}"
            )
        if self.max_batch_size <= 0:
            raise ConfigurationError("max_batch_size must be positive")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = "STATSD_",
    ) -> "StatsdConfig":
        """Build a config from ``<prefix>HOST``, ``<prefix>PORT`` and friends.

        Unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if f"{prefix}HOST" in env:
            values["host"] = env[f"{prefix}HOST"]
        if f"{prefix}PORT" in env:
            values["port"] = _parse_int(f"{prefix}PORT", env[f"{prefix}PORT"])
        if f"{prefix}NAMESPACE" in env:
            values["namespace"] = env[f"{prefix}NAMESPACE"]
        if f"{prefix}SAMPLE_RATE" in env:
            values["sample_rate"] = _parse_float(
                f"{prefix}SAMPLE_RATE", env[f"{prefix}SAMPLE_RATE"]
            )
        if f"{prefix}MAX_BATCH_SIZE" in env:
            values["max_batch_size"] = _parse_int(
                f"{prefix}MAX_BATCH_SIZE", env[f"{prefix}MAX_BATCH_SIZE"]
            )
        return cls(**values)  # type: ignore[arg-type]


def create_client(config: StatsdConfig | None = None) -> Client:
    """Create a client sending over UDP.

    Args:
        config: Settings to use. Defaults to ``StatsdConfig.from_env()``.
    """
    config = config or StatsdConfig.from_env()
    return Client(
        UdpConnection(config.host, config.port),
        namespace=config.namespace,
        sample_rate=config.sample_rate,
        max_batch_size=config.max_batch_size,
    )
