"""Step definitions for client BDD features."""

import re
import time
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when
from tests.helpers import sequence_source

from statsdpy.adapters.connections.in_memory import InMemoryConnection
from statsdpy.client import Client


@dataclass
class ClientScenarioContext:
    """State shared between the steps of one scenario.

    The client is built on first use so that Given steps can adjust its
    settings in any order.
    """

    connection: InMemoryConnection = field(default_factory=InMemoryConnection)
    namespace: str = ""
    sample_rate: float = 1.0
    draws: list[float] | None = None
    elapsed: float | None = None
    _client: Client | None = None

    @property
    def client(self) -> Client:
        if self._client is None:
            source = sequence_source(self.draws) if self.draws is not None else None
            self._client = Client(
                self.connection,
                self.namespace,
                self.sample_rate,
                random_source=source,
            )
        return self._client


@pytest.fixture
def ctx() -> ClientScenarioContext:
    """Fresh scenario context for each test."""
    return ClientScenarioContext()


# === Background Steps ===
@given("an in-memory connection")
def step_connection(ctx: ClientScenarioContext) -> None:
    ctx.connection = InMemoryConnection()


@given(parsers.parse('a client with namespace "{namespace}"'))
def step_client(ctx: ClientScenarioContext, namespace: str) -> None:
    ctx.namespace = namespace


@given(parsers.parse("the client has a global sample rate of {rate:g}"))
def step_global_rate(ctx: ClientScenarioContext, rate: float) -> None:
    ctx.sample_rate = rate


@given(parsers.parse("the random draws are {draws}"))
def step_draws(ctx: ClientScenarioContext, draws: str) -> None:
    ctx.draws = [float(d) for d in draws.split(",")]


# === Counter, Gauge and Namespace Steps ===
@when(parsers.parse('the client counts "{name}" by {value:d}'))
def step_count(ctx: ClientScenarioContext, name: str, value: int) -> None:
    ctx.client.count(name, value)


@when(parsers.parse('the client counts "{name}" by {value:d} at rate {rate:g}'))
def step_count_sampled(
    ctx: ClientScenarioContext, name: str, value: int, rate: float
) -> None:
    ctx.client.count(name, value, rate)


@when(
    parsers.parse(
        'the client counts "{name}" by {value:d} at rate {rate:g} {times:d} times'
    )
)
def step_count_repeated(
    ctx: ClientScenarioContext, name: str, value: int, rate: float, times: int
) -> None:
    for _ in range(times):
        ctx.client.count(name, value, rate)


@when(parsers.parse('the client increments "{name}"'))
def step_increment(ctx: ClientScenarioContext, name: str) -> None:
    ctx.client.increment(name)


@when(parsers.parse('the client decrements "{name}"'))
def step_decrement(ctx: ClientScenarioContext, name: str) -> None:
    ctx.client.decrement(name)


@when(parsers.parse('the client gauges "{name}" at "{value}"'))
def step_gauge(ctx: ClientScenarioContext, name: str, value: str) -> None:
    ctx.client.gauge(name, value)


@when(
    parsers.parse('the client gauges "{name}" at "{value}" with tag {tag}={tag_value}')
)
def step_gauge_tagged(
    ctx: ClientScenarioContext, name: str, value: str, tag: str, tag_value: str
) -> None:
    ctx.client.gauge(name, value, {tag: tag_value})


@when(parsers.parse('the namespace is changed to "{namespace}"'))
def step_set_namespace(ctx: ClientScenarioContext, namespace: str) -> None:
    ctx.client.set_namespace(namespace)


# === Timing Steps ===
@when(parsers.parse('timing "{name}" is started'))
def step_start_timing(ctx: ClientScenarioContext, name: str) -> None:
    ctx.client.start_timing(name)


@when(parsers.parse('timing "{name}" is ended'))
def step_end_timing(ctx: ClientScenarioContext, name: str) -> None:
    ctx.elapsed = ctx.client.end_timing(name)


@when(parsers.parse("{ms:d} milliseconds pass"))
def step_sleep(ms: int) -> None:
    time.sleep(ms / 1000)


@when(parsers.parse('"{name}" is timed around a nested timing of "{inner}"'))
def step_nested_time(ctx: ClientScenarioContext, name: str, inner: str) -> None:
    client = ctx.client
    result = client.time(
        name,
        lambda: client.time(inner, lambda: "foobar", tags={"run": 2}),
        tags={"run": 1},
    )
    assert result == "foobar"


# === Assertions ===
@then(parsers.parse('the last line should be "{line}"'))
def then_last_line(ctx: ClientScenarioContext, line: str) -> None:
    assert ctx.connection.last_message == line


@then(parsers.parse('line {n:d} should be "{line}"'))
def then_nth_line(ctx: ClientScenarioContext, n: int, line: str) -> None:
    assert ctx.connection.messages[n - 1] == line


@then(parsers.parse('the last line should match "{pattern}"'))
def then_last_line_matches(ctx: ClientScenarioContext, pattern: str) -> None:
    assert ctx.connection.last_message is not None
    assert re.fullmatch(pattern, ctx.connection.last_message)


@then(parsers.parse('line {n:d} should match "{pattern}"'))
def then_nth_line_matches(ctx: ClientScenarioContext, n: int, pattern: str) -> None:
    assert re.fullmatch(pattern, ctx.connection.messages[n - 1])


@then(parsers.parse("{n:d} line should have been sent"))
@then(parsers.parse("{n:d} lines should have been sent"))
def then_line_count(ctx: ClientScenarioContext, n: int) -> None:
    assert len(ctx.connection) == n


@then(parsers.parse("between {low:d} and {high:d} lines should have been sent"))
def then_line_count_between(ctx: ClientScenarioContext, low: int, high: int) -> None:
    assert low <= len(ctx.connection) <= high


@then(parsers.parse("the elapsed time should be at least {ms:d} milliseconds"))
def then_elapsed_at_least(ctx: ClientScenarioContext, ms: int) -> None:
    assert ctx.elapsed is not None
    assert ctx.elapsed >= ms


@then("no elapsed time should be returned")
def then_no_elapsed(ctx: ClientScenarioContext) -> None:
    assert ctx.elapsed is None
