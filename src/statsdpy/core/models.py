"""Core domain models for StatsD metrics."""

from collections.abc import Mapping
from enum import Enum

# A metric value is an integer, a float, or a pre-formatted numeric string
# such as "+11" for signed gauge deltas.
MetricValue = int | float | str

Tags = Mapping[str, object]


class MetricType(str, Enum):
    """StatsD type suffixes."""

    COUNTER = "c"
    TIMING = "ms"
    GAUGE = "g"
    SET = "s"
