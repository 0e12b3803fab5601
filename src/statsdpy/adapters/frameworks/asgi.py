"""ASGI middleware reporting request metrics through a StatsD client.

Framework-agnostic: works with any ASGI server or framework (uvicorn,
Starlette, FastAPI, Django ASGI) without importing them.
"""

import fnmatch
import time
from collections.abc import Callable, Coroutine
from typing import Any

from statsdpy.aware import StatsdAwareMixin
from statsdpy.client import Client
from statsdpy.core.timing import elapsed_ms

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]


# @tra: Adapter.ASGI.StatsdMiddleware
class StatsdMiddleware(StatsdAwareMixin):
    """ASGI middleware that counts and times HTTP requests.

    For each HTTP request the middleware sends a counter and a timing, both
    tagged with method, path and status. A request whose app raises is
    recorded with status 500 and the exception is re-raised. Without a
    client (see ``set_statsd_client``) requests pass through untouched.
    """

    def __init__(
        self,
        app: ASGIApp,
        client: Client | None = None,
        exclude_paths: list[str] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            client: Client to report through (optional, can be injected later).
            exclude_paths: Paths to skip. Supports exact matches and wildcard
                          patterns (e.g., "/internal/*").
        """
        self.app = app
        self.statsd = client
        self.exclude_paths = exclude_paths or []
        self.request_counter_name = "http.requests"
        self.request_timer_name = "http.request_duration"
        self.sample_rate: float | None = None

    def set_request_counter_name(self, name: str) -> None:
        """Set the name of the request counter (default: "http.requests")."""
        self.request_counter_name = name

    def set_request_timer_name(self, name: str) -> None:
        """Set the name of the request timing (default: "http.request_duration")."""
        self.request_timer_name = name

    def set_sample_rate(self, rate: float | None) -> None:
        """Set the sample rate for request metrics (None uses the client's)."""
        self.sample_rate = rate

    def _path_excluded(self, path: str) -> bool:
        """Check if path matches any pattern in exclude_paths."""
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI callable interface that processes requests through the wrapped app."""
        if scope["type"] != "http" or self.statsd is None:
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        captured: dict[str, Any] = {"status": None}

        async def wrapped_send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                captured["status"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, wrapped_send)
        except Exception:
            self._record(scope, 500, elapsed_ms(start_time))
            raise
        self._record(scope, captured["status"] or 0, elapsed_ms(start_time))

    def _record(self, scope: Scope, status_code: int, duration_ms: float) -> None:
        """Send request metrics unless the path is excluded."""
        if self.statsd is None or self._path_excluded(scope["path"]):
            return
        tags = {
            "method": scope["method"],
            "path": scope["path"],
            "status": str(status_code),
        }
        self.statsd.increment(self.request_counter_name, self.sample_rate, tags)
        self.statsd.timing(self.request_timer_name, duration_ms, self.sample_rate, tags)
