"""Sleeping primitives for the poll loop."""

import time
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from .cancellation import CancellationToken


class Sleeper(Protocol):
    """Anything that can block the calling thread for a number of seconds."""

    def sleep(self, seconds: float, token: Optional["CancellationToken"] = None) -> None:
        ...


class SystemSleeper:
    """Real-time sleeper; returns early when the token is woken."""

    def sleep(self, seconds: float, token: Optional["CancellationToken"] = None) -> None:
        if seconds <= 0:
            return
        if token is None:
            time.sleep(seconds)
        else:
            token.wait(seconds)


def sleep_cancellable(
    sleeper: Sleeper,
    seconds: float,
    token: "CancellationToken",
    tick_seconds: float = 1.0
) -> bool:
    """
    Sleep for `seconds` in slices of at most one tick, checking the token
    before every slice.

    Returns:
        True if the full duration elapsed, False if cancelled
    """
    remaining = seconds
    while remaining > 0:
        if token.is_requested():
            return False
        step = min(tick_seconds, remaining)
        sleeper.sleep(step, token)
        remaining -= step
    return not token.is_requested()
