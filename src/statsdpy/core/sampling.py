"""Sample rate resolution and probabilistic sampling."""

import random
from collections.abc import Callable

RandomSource = Callable[[], float]


def clamp_rate(rate: float) -> float:
    """Clamp a sample rate into [0, 1], mapping NaN to 0."""
    if rate != rate:
        return 0.0
    return min(max(float(rate), 0.0), 1.0)


class Sampler:
    """Decides whether a sampled event is sent and how it is annotated.

    Every call to ``should_send`` takes a fresh draw from the random source,
    so events are sampled independently of each other.

    Args:
        random_source: Zero-argument callable returning a float in [0, 1).
            Defaults to ``random.random``.
    """

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random = random_source or random.random

    # @tra: Core.Sampling.EffectiveRate
    @staticmethod
    def effective_rate(global_rate: float | None, call_rate: float | None) -> float:
        """Resolve the rate for one event.

        A call-site rate below 1 wins over the client's global rate. A call
        rate of 1 or more (or None) means "not sampled here" and falls back
        to the global rate. With neither, the event is always sent.
        """
        if call_rate is not None and clamp_rate(call_rate) < 1.0:
            return clamp_rate(call_rate)
        if global_rate is not None:
            return clamp_rate(global_rate)
        return 1.0

    # @tra: Core.Sampling.Unbiased
    def should_send(self, rate: float) -> bool:
        """Return True if an event at ``rate`` should be sent."""
        rate = clamp_rate(rate)
        if rate >= 1.0:
            return True
        if rate <= 0.0:
            return False
        return self._random() < rate

    @staticmethod
    def annotation(rate: float) -> float | None:
        """Return the rate to put on the wire, or None when unsampled."""
        rate = clamp_rate(rate)
        if rate >= 1.0:
            return None
        return rate
