"""Process memory sampling and profiling."""

import threading
from collections.abc import Callable

import psutil

MemoryProbe = Callable[[], int]


def resident_memory() -> int:
    """Return the resident set size of the current process in bytes."""
    return int(psutil.Process().memory_info().rss)


class MemoryTracker:
    """Open memory baselines keyed by metric name.

    Args:
        probe: Zero-argument callable returning current memory usage in
            bytes. Defaults to the process resident set size.
    """

    def __init__(self, probe: MemoryProbe | None = None) -> None:
        self._probe = probe or resident_memory
        self._baselines: dict[str, int] = {}
        self._lock = threading.Lock()

    def usage(self) -> int:
        """Current memory usage in bytes."""
        return self._probe()

    def start(self, key: str) -> None:
        """Record current usage as the baseline for ``key``."""
        baseline = self.usage()
        with self._lock:
            self._baselines[key] = baseline

    def stop(self, key: str) -> int | None:
        """Close the profile for ``key``.

        Returns:
            Usage delta in bytes (may be zero or negative), or None if no
            profile was open.
        """
        with self._lock:
            baseline = self._baselines.pop(key, None)
        if baseline is None:
            return None
        return self.usage() - baseline

    def is_open(self, key: str) -> bool:
        """Return True if a baseline for ``key`` is waiting to be stopped."""
        with self._lock:
            return key in self._baselines
