"""
Main poll loop coordinator.

Composes one fetch per poll cycle into a DisplayState, renders it, then waits
out the interval on a cancellable countdown. The loop ends only through the
shared CancellationToken, after which shutdown is always a success.
"""

import sys
from dataclasses import replace
from typing import IO, Callable, Optional

import structlog

from .config.defaults import TickerConfig, get_default_config
from .display.console import ConsoleRenderer
from .fetch.fetcher import PriceFetcher
from .fetch.retry import RetryPolicy
from .fetch.transport import HttpTransport, Transport
from .models import DisplayState, PriceReading
from .runtime.cancellation import CancellationToken
from .runtime.clock import Sleeper, SystemSleeper
from .runtime.countdown import Countdown, CountdownOutcome
from .runtime.exit_watcher import ExitWatcher
from .utils.time import now

logger = structlog.get_logger(__name__)

EXIT_OK = 0


class PriceTickerEngine:
    """
    Owns every piece of state for one run: the cancellation token, the HTTP
    transport, the fetcher, the countdown and the exit watcher. Separate
    instances share nothing, so several can run side by side in tests.

    Poll cycle:
    Fetch (with retries) → Render → Countdown (progress per tick) → repeat
    """

    def __init__(
        self,
        config: Optional[TickerConfig] = None,
        transport: Optional[Transport] = None,
        sleeper: Optional[Sleeper] = None,
        renderer: Optional[ConsoleRenderer] = None,
        stdin: Optional[IO[str]] = None,
        clock: Optional[Callable[[], str]] = None,
        token: Optional[CancellationToken] = None
    ) -> None:
        """Initialize the engine; nothing touches the network until run()."""
        self.config = config or get_default_config()
        self.logger = logger
        self.token = token or CancellationToken()
        self.sleeper = sleeper if sleeper is not None else SystemSleeper()

        time_format = self.config.display.time_format
        self.clock = clock or (lambda: now(time_format))

        self.fetcher = PriceFetcher(
            transport=transport or HttpTransport.from_params(self.config.endpoint),
            token=self.token,
            policy=RetryPolicy.from_params(self.config.retry),
            sleeper=self.sleeper,
            price_path=self.config.endpoint.price_path,
            tick_seconds=self.config.schedule.tick_seconds,
        )
        self.countdown = Countdown(self.sleeper, tick_seconds=self.config.schedule.tick_seconds)
        self.renderer = renderer or ConsoleRenderer(
            self.config.display, quit_command=self.config.shutdown.quit_command
        )
        self.exit_watcher = ExitWatcher(
            self.token,
            stdin=stdin if stdin is not None else sys.stdin,
            quit_command=self.config.shutdown.quit_command,
            signals=self.config.shutdown.signals,
            keyboard_enabled=self.config.shutdown.keyboard_enabled,
        )

        self.cycles_completed = 0
        self.last_reading: Optional[PriceReading] = None

        self.logger.info(
            "Price ticker engine initialized",
            url=self.config.endpoint.url,
            interval_ticks=self.config.schedule.interval_ticks
        )

    def run(self) -> int:
        """
        Run poll cycles until cancellation is requested.

        Returns:
            Process exit status, always 0
        """
        self.exit_watcher.start()
        self.logger.info("Price ticker started")

        try:
            while not self.token.is_requested():
                self.run_cycle()
        finally:
            self.shutdown()

        return EXIT_OK

    def run_cycle(self) -> CountdownOutcome:
        """One poll cycle: fetch, render, count down."""
        reading = self.fetcher.fetch()
        self.last_reading = reading

        total = self.config.schedule.interval_ticks
        state = DisplayState(
            reading=reading,
            updated_at=self.clock(),
            seconds_remaining=total,
            total=total,
        )
        self.renderer.render(state)

        def on_tick(elapsed: int, total: int) -> None:
            self.renderer.render_progress(replace(state, seconds_remaining=total - elapsed))

        outcome = self.countdown.run(total, on_tick, self.token)
        self.cycles_completed += 1

        self.logger.debug(
            "Poll cycle finished",
            cycle=self.cycles_completed,
            valid=reading.valid,
            outcome=outcome.value
        )
        return outcome

    def request_stop(self) -> None:
        """Request shutdown from code (same path as the quit command)."""
        self.token.request()

    def shutdown(self) -> None:
        """Stop the exit watcher, release the connection and say goodbye."""
        self.exit_watcher.stop(join_timeout=self.config.shutdown.join_timeout)
        self.fetcher.close()
        self.renderer.farewell()
        self.logger.info("Price ticker stopped", cycles=self.cycles_completed)
