"""StatsD line encoder.

Renders one metric observation into the wire format::

    <key>:<value>|<type>[|@<rate>][|#<tag>:<val>[,<tag>:<val>]...]
"""

import math
from decimal import Decimal

from statsdpy.core.models import MetricType, MetricValue, Tags


def _strip_fraction(text: str) -> str:
    """Drop trailing zeros of a positional decimal, and the point if bare."""
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_number(value: float | Decimal) -> str:
    """Render a float in positional notation with the fewest digits needed.

    ``100.0`` renders as ``100``, ``100.45`` as ``100.45`` and ``1e-05``
    as ``0.00001``.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return repr(value)
        value = Decimal(repr(value))
    return _strip_fraction(format(value, "f"))


def format_value(value: MetricValue | Decimal) -> str:
    """Render a metric value for the wire.

    Strings are passed through verbatim so callers can send pre-formatted
    values such as signed gauge deltas (``"+11"``).
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        return format_number(value)
    return str(value)


def format_tags(tags: Tags | None) -> str:
    """Render tags as ``name:value`` pairs in insertion order."""
    if not tags:
        return ""
    return ",".join(f"{name}:{format_value(val)}" for name, val in tags.items())


def encode_line(
    key: str,
    value: MetricValue,
    metric_type: MetricType | str,
    rate: float | None = None,
    tags: Tags | None = None,
) -> str:
    """Encode a single StatsD line.

    Args:
        key: Fully qualified metric key.
        value: Metric value (int, float or pre-formatted string).
        metric_type: Type suffix ("c", "ms", "g" or "s").
        rate: Sample rate annotation; omitted when None or >= 1.
        tags: Optional tags; omitted when empty.

    Returns:
        The wire line without a trailing newline.
    """
    suffix = metric_type.value if isinstance(metric_type, MetricType) else metric_type
    line = f"{key}:{format_value(value)}|{suffix}"
    if rate is not None and rate < 1:
        line += f"|@{format_number(float(rate))}"
    tag_str = format_tags(tags)
    if tag_str:
        line += f"|#{tag_str}"
    return line
