"""Test doubles shared across test modules."""

from collections.abc import Callable, Iterable


def sequence_source(values: Iterable[float]) -> Callable[[], float]:
    """Random source that replays the given draws, then repeats the last one."""
    draws = list(values)
    position = 0

    def _next() -> float:
        nonlocal position
        value = draws[min(position, len(draws) - 1)]
        position += 1
        return value

    return _next


class FailingConnection:
    """Connection whose send always raises."""

    def __init__(self) -> None:
        self.attempts = 0

    def send(self, line: str) -> None:
        self.attempts += 1
        raise ConnectionRefusedError("collector unreachable")
