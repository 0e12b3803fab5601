"""Metric key composition."""


# @tra: Core.Keys.Compose
def compose_key(namespace: str, name: str) -> str:
    """Join a namespace prefix and a metric name into a fully qualified key.

    Args:
        namespace: Dotted prefix (e.g., "app.web"). Empty means no prefix.
        name: Metric name, passed through without validation.

    Returns:
        ``name`` when namespace is empty, else ``namespace + "." + name``.
    """
    if not namespace:
        return name
    return f"{namespace}.{name}"
