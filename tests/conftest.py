"""Shared test fixtures for all test modules."""

from collections.abc import Iterable

import pytest
from tests.helpers import FailingConnection, sequence_source

from statsdpy.adapters.connections.in_memory import InMemoryConnection
from statsdpy.client import Client


@pytest.fixture
def connection() -> InMemoryConnection:
    """Provide an empty in-memory connection."""
    return InMemoryConnection()


@pytest.fixture
def client(connection: InMemoryConnection) -> Client:
    """Client under namespace "test" writing to the in-memory connection."""
    return Client(connection, "test")


@pytest.fixture
def client_factory(connection: InMemoryConnection):
    """Factory fixture for clients sharing the in-memory connection.

    Usage:
        def test_something(client_factory):
            client = client_factory(sample_rate=0.9, draws=[0.0])
    """

    def _client(
        namespace: str = "test",
        sample_rate: float = 1.0,
        draws: Iterable[float] | None = None,
        memory: Iterable[int] | None = None,
    ) -> Client:
        random_source = sequence_source(draws) if draws is not None else None
        memory_probe = None
        if memory is not None:
            readings = iter(memory)

            def memory_probe() -> int:
                return next(readings)

        return Client(
            connection,
            namespace,
            sample_rate,
            random_source=random_source,
            memory_probe=memory_probe,
        )

    return _client


@pytest.fixture
def failing_connection() -> FailingConnection:
    """Provide a connection that raises on every send."""
    return FailingConnection()
