"""Elapsed-time tracking for timing metrics."""

import threading
import time


def elapsed_ms(start: float) -> float:
    """Milliseconds elapsed since a ``time.perf_counter()`` reading."""
    return (time.perf_counter() - start) * 1000


class TimingTracker:
    """Open timing sessions keyed by metric name.

    At most one session is open per key. Starting a key again overwrites the
    previous start; threads sharing a key therefore race, and the last start
    before a stop wins.
    """

    def __init__(self) -> None:
        self._starts: dict[str, float] = {}
        self._lock = threading.Lock()

    def start(self, key: str) -> None:
        """Record the current monotonic time for ``key``."""
        now = time.perf_counter()
        with self._lock:
            self._starts[key] = now

    def stop(self, key: str) -> float | None:
        """Close the session for ``key``.

        Returns:
            Elapsed milliseconds, or None if no session was open.
        """
        with self._lock:
            start = self._starts.pop(key, None)
        if start is None:
            return None
        return elapsed_ms(start)

    def is_open(self, key: str) -> bool:
        """Return True if a session for ``key`` is waiting to be stopped."""
        with self._lock:
            return key in self._starts

