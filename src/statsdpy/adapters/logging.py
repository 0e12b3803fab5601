"""Python logging handler adapter for statsdpy.

This adapter bridges Python's standard library logging module to a StatsD
client, counting log records per level so error rates show up next to the
application's other metrics.
"""

import logging

from statsdpy.client import Client


# @tra: Adapter.Logging.StatsdHandler
class StatsdLoggingHandler(logging.Handler):
    """Logging handler that counts log records through a client.

    Each record increments ``<prefix>.<level>`` (level lowercased), tagged
    with the logger name. Records from statsdpy's own loggers are ignored.

    Example:
        ```python
        from statsdpy import Client, StatsdLoggingHandler, UdpConnection

        statsd = Client(UdpConnection(), namespace="app")
        logging.getLogger().addHandler(StatsdLoggingHandler(statsd))
        ```
    """

    def __init__(
        self,
        client: Client,
        prefix: str = "log",
        include_logger_tag: bool = True,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler.

        Args:
            client: Client the counters are sent through.
            prefix: Metric name prefix (default "log").
            include_logger_tag: Tag each counter with the logger name.
            level: Minimum record level handled.
        """
        super().__init__(level)
        self.client = client
        self.prefix = prefix
        self.include_logger_tag = include_logger_tag

    def metric_name(self, record: logging.LogRecord) -> str:
        """Return the counter name for a record."""
        level = record.levelname.lower()
        return f"{self.prefix}.{level}" if self.prefix else level

    def emit(self, record: logging.LogRecord) -> None:
        """Count a log record.

        Args:
            record: The log record to count.
        """
        # Records from this package would feed back into the client.
        if record.name == "statsdpy" or record.name.startswith("statsdpy."):
            return
        try:
            tags = {"logger": record.name} if self.include_logger_tag else None
            self.client.increment(self.metric_name(record), tags=tags)
        except Exception:
            self.handleError(record)
