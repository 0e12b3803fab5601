"""Client injection for components that report metrics."""

from statsdpy.client import Client


class StatsdAwareMixin:
    """Basic implementation of the StatsdAware port.

    Components inherit this to receive a configured client from whoever
    builds them, instead of constructing one themselves.
    """

    statsd: Client | None = None

    def set_statsd_client(self, client: Client) -> None:
        """Set the client used for reporting."""
        self.statsd = client
