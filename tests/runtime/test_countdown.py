"""Tests for the cancellable countdown."""

import time

from price_ticker.runtime.cancellation import CancellationToken
from price_ticker.runtime.clock import SystemSleeper, sleep_cancellable
from price_ticker.runtime.countdown import Countdown, CountdownOutcome


class TestCountdown:

    def test_complete_run_ticks_in_order(self, token, sleeper):
        ticks = []
        outcome = Countdown(sleeper).run(5, lambda elapsed, total: ticks.append((elapsed, total)), token)

        assert outcome is CountdownOutcome.COMPLETE
        assert ticks == [(0, 5), (1, 5), (2, 5), (3, 5), (4, 5)]
        assert sleeper.calls == [1.0] * 5

    def test_cancel_after_tick_ten(self, token, sleeper):
        ticks = []

        def on_tick(elapsed, total):
            ticks.append(elapsed)
            if elapsed == 10:
                token.request()

        outcome = Countdown(sleeper).run(60, on_tick, token)

        assert outcome is CountdownOutcome.CANCELLED
        assert ticks == list(range(11))
        # Returns before sleeping after tick 10
        assert len(sleeper.calls) == 10

    def test_cancel_during_sleep_stops_before_next_tick(self, token, make_sleeper):
        sleeper = make_sleeper(on_sleep=lambda count: token.request() if count == 3 else None)
        ticks = []

        outcome = Countdown(sleeper).run(60, lambda elapsed, total: ticks.append(elapsed), token)

        assert outcome is CountdownOutcome.CANCELLED
        assert ticks == [0, 1, 2]

    def test_already_cancelled_never_ticks(self, token, sleeper):
        token.request()
        ticks = []

        outcome = Countdown(sleeper).run(60, lambda elapsed, total: ticks.append(elapsed), token)

        assert outcome is CountdownOutcome.CANCELLED
        assert ticks == []
        assert sleeper.calls == []

    def test_cancel_during_final_sleep(self, token, make_sleeper):
        sleeper = make_sleeper(on_sleep=lambda count: token.request() if count == 2 else None)
        ticks = []

        outcome = Countdown(sleeper).run(2, lambda elapsed, total: ticks.append(elapsed), token)

        assert outcome is CountdownOutcome.CANCELLED
        assert ticks == [0, 1]

    def test_zero_total_completes_immediately(self, token, sleeper):
        assert Countdown(sleeper).run(0, lambda e, t: None, token) is CountdownOutcome.COMPLETE
        assert sleeper.calls == []

    def test_custom_tick_length(self, token, sleeper):
        Countdown(sleeper, tick_seconds=0.25).run(3, lambda e, t: None, token)
        assert sleeper.calls == [0.25, 0.25, 0.25]

    def test_real_sleeper_wakes_on_request(self):
        token = CancellationToken()
        countdown = Countdown(SystemSleeper(), tick_seconds=10.0)

        def on_tick(elapsed, total):
            token.request()

        started = time.monotonic()
        # request() happens inside the tick, so the sleep is skipped entirely
        assert countdown.run(3, on_tick, token) is CountdownOutcome.CANCELLED
        assert time.monotonic() - started < 5


class TestSleepCancellable:

    def test_full_duration(self, token, sleeper):
        assert sleep_cancellable(sleeper, 3.5, token) is True
        assert sleeper.calls == [1.0, 1.0, 1.0, 0.5]

    def test_stops_when_cancelled(self, token, make_sleeper):
        sleeper = make_sleeper(on_sleep=lambda count: token.request() if count == 2 else None)
        assert sleep_cancellable(sleeper, 10, token) is False
        assert sleeper.calls == [1.0, 1.0]

    def test_system_sleeper_returns_early_on_wakeup(self):
        token = CancellationToken()
        token.request()
        started = time.monotonic()
        SystemSleeper().sleep(10, token)
        assert time.monotonic() - started < 5
