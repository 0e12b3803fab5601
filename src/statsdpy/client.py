"""StatsD client facade.

The client composes keys, samples events, encodes lines and hands them to a
connection. Every public operation completes before returning; transport
faults are logged and never raised to the caller.
"""

import logging
import threading
import time
from collections.abc import Callable, Generator, Iterable
from contextlib import contextmanager
from typing import TypeVar

from statsdpy.core.encoding.line import encode_line
from statsdpy.core.errors import ConfigurationError
from statsdpy.core.keys import compose_key
from statsdpy.core.memory import MemoryProbe, MemoryTracker
from statsdpy.core.models import MetricType, MetricValue, Tags
from statsdpy.core.ports import ConnectionPort
from statsdpy.core.sampling import RandomSource, Sampler
from statsdpy.core.timing import TimingTracker, elapsed_ms

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_BATCH_SIZE = 512


def _chunk_lines(lines: Iterable[str], max_size: int) -> Generator[str]:
    """Join lines with newlines into payloads of at most ``max_size`` bytes.

    A line longer than ``max_size`` on its own is yielded as its own payload.
    """
    current: list[str] = []
    size = 0
    for line in lines:
        line_size = len(line.encode())
        extra = line_size + (1 if current else 0)
        if current and size + extra > max_size:
            yield "\n".join(current)
            current, size = [], 0
            extra = line_size
        current.append(line)
        size += extra
    if current:
        yield "\n".join(current)


# @tra: Client.Features
class Client:
    """StatsD client.

    Example:
        ```python
        from statsdpy import Client, UdpConnection

        statsd = Client(UdpConnection("localhost", 8125), namespace="app")
        statsd.increment("logins", tags={"region": "eu"})
        with statsd.timer("render"):
            render()
        ```
    """

    def __init__(
        self,
        connection: ConnectionPort,
        namespace: str = "",
        sample_rate: float = 1.0,
        *,
        random_source: RandomSource | None = None,
        memory_probe: MemoryProbe | None = None,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
    ) -> None:
        """Initialize the client.

        Args:
            connection: Transport implementing ConnectionPort.
            namespace: Prefix applied to every metric name ("" for none).
            sample_rate: Global sample rate used when a call passes no rate.
            random_source: Random draw for sampling (default random.random).
            memory_probe: Memory usage reader (default process RSS).
            max_batch_size: Largest payload in bytes sent when flushing a batch.
        """
        try:
            self.sample_rate = float(sample_rate)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"invalid sample rate: {sample_rate!r}") from exc
        if max_batch_size <= 0:
            raise ConfigurationError("max_batch_size must be positive")
        self.connection = connection
        self._namespace = namespace
        self.max_batch_size = max_batch_size
        self._sampler = Sampler(random_source)
        self._timings = TimingTracker()
        self._memory = MemoryTracker(memory_probe)
        self._batch: list[str] | None = None
        self._batch_lock = threading.Lock()

    # Namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    @namespace.setter
    def namespace(self, namespace: str) -> None:
        self._namespace = namespace

    def get_namespace(self) -> str:
        """Return the current namespace prefix."""
        return self._namespace

    def set_namespace(self, namespace: str) -> None:
        """Set the namespace prefix for subsequently sent metrics."""
        self._namespace = namespace

    # Counters

    def count(
        self,
        name: str,
        value: MetricValue,
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> None:
        """Send a counter delta."""
        self._send(name, value, MetricType.COUNTER, sample_rate, tags)

    def increment(
        self,
        name: str,
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> None:
        """Increment a counter by one."""
        self.count(name, 1, sample_rate, tags)

    def decrement(
        self,
        name: str,
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> None:
        """Decrement a counter by one."""
        self.count(name, -1, sample_rate, tags)

    # Timings

    def timing(
        self,
        name: str,
        millis: MetricValue,
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> None:
        """Send a timing in milliseconds."""
        self._send(name, millis, MetricType.TIMING, sample_rate, tags)

    def start_timing(self, name: str) -> None:
        """Open a timing session for ``name``, replacing any open one."""
        self._timings.start(name)

    def is_timing(self, name: str) -> bool:
        """Return True if start_timing(name) has not been ended yet."""
        return self._timings.is_open(name)

    def end_timing(
        self,
        name: str,
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> float | None:
        """Close the timing session for ``name`` and send the elapsed time.

        Returns:
            Elapsed milliseconds, even when sampling drops the line, or None
            if no session was open (nothing is sent).
        """
        elapsed = self._timings.stop(name)
        if elapsed is None:
            return None
        self.timing(name, elapsed, sample_rate, tags)
        return elapsed

    # @tra: Client.Time.Nested
    @contextmanager
    def timer(
        self,
        name: str,
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> Generator[None]:
        """Context manager that times its block.

        The timing is sent only when the block completes; an exception
        propagates unchanged and nothing is sent.
        """
        start = time.perf_counter()
        yield
        self.timing(name, elapsed_ms(start), sample_rate, tags)

    def time(
        self,
        name: str,
        func: Callable[[], T],
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> T:
        """Call ``func``, send its duration and return its result."""
        with self.timer(name, sample_rate, tags):
            return func()

    # Gauges and sets are never sampled

    def gauge(self, name: str, value: MetricValue, tags: Tags | None = None) -> None:
        """Send a gauge value, or a signed delta given as a string ("+11")."""
        self._send(name, value, MetricType.GAUGE, tags=tags, sampled=False)

    def set(self, name: str, value: MetricValue, tags: Tags | None = None) -> None:
        """Send a set member."""
        self._send(name, value, MetricType.SET, tags=tags, sampled=False)

    # Memory

    def memory(
        self,
        name: str,
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> None:
        """Send current process memory usage in bytes as a counter."""
        self.count(name, self._memory.usage(), sample_rate, tags)

    def start_memory_profile(self, name: str) -> None:
        """Record current memory usage as the baseline for ``name``."""
        self._memory.start(name)

    def is_profiling_memory(self, name: str) -> bool:
        return self._memory.is_open(name)

    def end_memory_profile(
        self,
        name: str,
        sample_rate: float | None = None,
        tags: Tags | None = None,
    ) -> int | None:
        """Close the memory profile for ``name`` and send the usage delta.

        Returns:
            Delta in bytes, or None if no profile was open (nothing is sent).
        """
        delta = self._memory.stop(name)
        if delta is None:
            return None
        self.count(name, delta, sample_rate, tags)
        return delta

    # Batching

    @property
    def is_batch(self) -> bool:
        return self._batch is not None

    # @tra: Client.Batch
    def start_batch(self) -> None:
        """Buffer lines until end_batch() or cancel_batch() is called."""
        with self._batch_lock:
            if self._batch is None:
                self._batch = []

    def end_batch(self) -> None:
        """Send buffered lines and leave batch mode."""
        with self._batch_lock:
            lines, self._batch = self._batch, None
        if lines:
            for payload in _chunk_lines(lines, self.max_batch_size):
                self._transmit(payload)

    def cancel_batch(self) -> None:
        """Discard buffered lines and leave batch mode."""
        with self._batch_lock:
            self._batch = None

    @contextmanager
    def batch(self) -> Generator["Client"]:
        """Context manager form of start_batch()/end_batch().

        Buffered lines are discarded if the block raises.
        """
        self.start_batch()
        try:
            yield self
        except BaseException:
            self.cancel_batch()
            raise
        self.end_batch()

    # Dispatch

    # @tra: Client.Sampling.CallRateWins
    # @tra: Client.Sampling.Unbiased
    def _send(
        self,
        name: str,
        value: MetricValue,
        metric_type: MetricType,
        sample_rate: float | None = None,
        tags: Tags | None = None,
        sampled: bool = True,
    ) -> None:
        rate = None
        if sampled:
            effective = self._sampler.effective_rate(self.sample_rate, sample_rate)
            if not self._sampler.should_send(effective):
                return
            rate = self._sampler.annotation(effective)
        key = compose_key(self._namespace, name)
        line = encode_line(key, value, metric_type, rate, tags)
        with self._batch_lock:
            if self._batch is not None:
                self._batch.append(line)
                return
        self._transmit(line)

    def _transmit(self, payload: str) -> None:
        try:
            self.connection.send(payload)
        except Exception:
            logger.warning("Failed to send StatsD payload %r", payload, exc_info=True)
