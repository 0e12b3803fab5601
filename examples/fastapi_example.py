"""Example FastAPI application reporting request metrics to StatsD.

Run with:
    STATSD_NAMESPACE=example uvicorn examples.fastapi_example:app --reload

Watch the datagrams with:
    nc -ul 8125

Every request produces:
    example.http.requests:1|c|#method:GET,path:/users,status:200
    example.http.request_duration:<ms>|ms|#method:GET,path:/users,status:200
"""

import asyncio

from fastapi import FastAPI

from statsdpy import StatsdMiddleware, create_client

statsd = create_client()

app = FastAPI(title="StatsD Example")
app.add_middleware(StatsdMiddleware, client=statsd, exclude_paths=["/health"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    statsd.increment("root.visits", tags={"source": "example"})
    return {"message": "Hello! Every request is counted and timed."}


@app.get("/users")
async def get_users() -> dict[str, list[dict[str, str]]]:
    """Users endpoint timing a simulated database fetch."""
    with statsd.timer("db.fetch_users"):
        await asyncio.sleep(0.05)
    return {
        "users": [
            {"id": "1", "name": "Alice"},
            {"id": "2", "name": "Bob"},
        ]
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check, excluded from request metrics."""
    return {"status": "ok"}


@app.get("/error")
async def error_endpoint() -> dict[str, str]:
    """Error endpoint, recorded with status 500."""
    raise ValueError("Intentional error for demonstration")
