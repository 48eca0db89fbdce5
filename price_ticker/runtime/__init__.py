"""
Cooperative cancellation runtime.

A single CancellationToken is shared by the poll loop, the countdown and the
two shutdown producers (signal handler and stdin listener).
"""
from .cancellation import CancellationToken
from .clock import Sleeper, SystemSleeper
from .countdown import Countdown, CountdownOutcome
from .exit_watcher import ExitWatcher

__all__ = [
    "CancellationToken",
    "Countdown",
    "CountdownOutcome",
    "ExitWatcher",
    "Sleeper",
    "SystemSleeper",
]
