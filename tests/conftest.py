"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Callable, Optional

import pytest

from price_ticker.fetch.transport import HttpResponse
from price_ticker.runtime.cancellation import CancellationToken


class RecordingSleeper:
    """Sleeper that returns immediately and records every requested duration."""

    def __init__(self, on_sleep: Optional[Callable[[int], None]] = None):
        self.calls: list[float] = []
        self.on_sleep = on_sleep

    def sleep(self, seconds: float, token: Optional[CancellationToken] = None) -> None:
        self.calls.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.calls))

    @property
    def total(self) -> float:
        return sum(self.calls)


class ScriptedTransport:
    """Transport replaying a fixed sequence of responses or exceptions."""

    def __init__(self, script: list[Any]):
        self.script = list(script)
        self.calls = 0
        self.closed = False

    def get(self) -> HttpResponse:
        self.calls += 1
        # The last entry repeats once the script runs out
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


def price_body(value: Any = 67123.45) -> bytes:
    return json.dumps({"bitcoin": {"usd": value}}).encode("utf-8")


@pytest.fixture
def token() -> CancellationToken:
    return CancellationToken()


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


@pytest.fixture
def make_transport() -> Callable[[list[Any]], ScriptedTransport]:
    return ScriptedTransport


@pytest.fixture
def ok_response() -> HttpResponse:
    return HttpResponse(status=200, body=price_body())


@pytest.fixture
def status_response() -> Callable[[int], HttpResponse]:
    def _make(status: int) -> HttpResponse:
        return HttpResponse(status=status, body=b'{"status": {"error_code": %d}}' % status)
    return _make


@pytest.fixture
def make_body() -> Callable[..., bytes]:
    return price_body


@pytest.fixture
def make_sleeper() -> Callable[..., RecordingSleeper]:
    return RecordingSleeper
