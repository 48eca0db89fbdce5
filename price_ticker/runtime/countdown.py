"""Cancellable countdown between two fetches."""

from enum import Enum
from typing import Callable, Optional

import structlog

from .cancellation import CancellationToken
from .clock import Sleeper, SystemSleeper

logger = structlog.get_logger(__name__)

TickCallback = Callable[[int, int], None]


class CountdownOutcome(Enum):
    """Terminal states of a countdown. Neither is an error."""
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class Countdown:
    """
    Waits `total` ticks, reporting progress once per tick.

    State machine: Running(elapsed) -> Running(elapsed + 1) on each tick,
    -> CANCELLED when the token is seen set before the next sleep,
    -> COMPLETE once `total` ticks elapsed without cancellation.
    """

    def __init__(self, sleeper: Optional[Sleeper] = None, tick_seconds: float = 1.0) -> None:
        self.sleeper = sleeper if sleeper is not None else SystemSleeper()
        self.tick_seconds = tick_seconds

    def run(self, total: int, on_tick: TickCallback, token: CancellationToken) -> CountdownOutcome:
        """
        Run the countdown.

        Args:
            total: Number of ticks to wait
            on_tick: Called with (elapsed, total) for elapsed = 0 .. total - 1
            token: Checked before every tick callback and before every sleep

        Returns:
            CANCELLED as soon as the token is set, COMPLETE otherwise
        """
        for elapsed in range(total):
            if token.is_requested():
                return self._cancelled(elapsed, total)
            on_tick(elapsed, total)
            if token.is_requested():
                return self._cancelled(elapsed, total)
            self.sleeper.sleep(self.tick_seconds, token)

        if token.is_requested():
            return self._cancelled(total, total)
        return CountdownOutcome.COMPLETE

    def _cancelled(self, elapsed: int, total: int) -> CountdownOutcome:
        logger.debug("Countdown cancelled", elapsed=elapsed, total=total)
        return CountdownOutcome.CANCELLED
