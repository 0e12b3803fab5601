"""Exceptions raised by statsdpy."""


class StatsdError(Exception):
    """Base class for all statsdpy errors."""


class ConfigurationError(StatsdError, ValueError):
    """Raised when a client or connection is configured with invalid values."""
