"""In-memory connection adapters."""


# @tra: Adapter.Connection.InMemory
class InMemoryConnection:
    """In-memory implementation of ConnectionPort.

    Records every payload in a list. Suitable for testing and for
    inspecting what a client would put on the wire.
    """

    def __init__(self) -> None:
        self._messages: list[str] = []

    def send(self, line: str) -> None:
        """Record a payload."""
        self._messages.append(line)

    @property
    def messages(self) -> list[str]:
        """All recorded payloads, oldest first."""
        return list(self._messages)

    @property
    def last_message(self) -> str | None:
        """The most recent payload, or None if nothing was sent."""
        if not self._messages:
            return None
        return self._messages[-1]

    def clear(self) -> None:
        """Forget all recorded payloads."""
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)


class BlackholeConnection:
    """ConnectionPort implementation that discards every payload."""

    def send(self, line: str) -> None:
        """Discard a payload."""
