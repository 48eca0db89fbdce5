"""Unit tests for the poll loop engine."""

import io
from dataclasses import replace
from unittest.mock import Mock

import pytest

from price_ticker.config.defaults import ScheduleParams, ShutdownParams, get_default_config
from price_ticker.engine import EXIT_OK, PriceTickerEngine
from price_ticker.errors import TransportError
from price_ticker.fetch.transport import HttpResponse
from price_ticker.models import DisplayState, PriceReading
from price_ticker.runtime.countdown import CountdownOutcome


@pytest.fixture
def config():
    defaults = get_default_config()
    return replace(
        defaults,
        schedule=ScheduleParams(interval_ticks=5, tick_seconds=1.0),
        shutdown=ShutdownParams(keyboard_enabled=False, signals=()),
    )


def build_engine(config, transport, sleeper, renderer=None, **kwargs):
    return PriceTickerEngine(
        config,
        transport=transport,
        sleeper=sleeper,
        renderer=renderer or Mock(),
        stdin=io.StringIO(""),
        clock=lambda: "10/19/2026 at 03:04 PM",
        **kwargs
    )


class TestRunCycle:
    """Test suite for a single poll cycle."""

    def test_cycle_renders_reading_then_counts_down(self, config, make_transport, ok_response, sleeper):
        renderer = Mock()
        engine = build_engine(config, make_transport([ok_response]), sleeper, renderer)

        outcome = engine.run_cycle()

        assert outcome is CountdownOutcome.COMPLETE
        renderer.render.assert_called_once_with(DisplayState(
            reading=PriceReading.ok(67123.45),
            updated_at="10/19/2026 at 03:04 PM",
            seconds_remaining=5,
            total=5,
        ))
        remaining = [call.args[0].seconds_remaining for call in renderer.render_progress.call_args_list]
        assert remaining == [5, 4, 3, 2, 1]
        assert engine.cycles_completed == 1

    def test_failed_fetch_still_renders_and_waits(self, config, make_transport, status_response, sleeper):
        renderer = Mock()
        engine = build_engine(config, make_transport([status_response(404)]), sleeper, renderer)

        outcome = engine.run_cycle()

        assert outcome is CountdownOutcome.COMPLETE
        state = renderer.render.call_args.args[0]
        assert state.reading.valid is False
        assert state.updated_at == "10/19/2026 at 03:04 PM"
        assert engine.last_reading == PriceReading.invalid()

    def test_failures_do_not_accumulate_across_cycles(self, config, make_transport, ok_response, status_response, sleeper):
        transport = make_transport([
            status_response(503), status_response(503), status_response(503),
            TransportError("refused"), ok_response,
        ])
        engine = build_engine(config, transport, sleeper)

        engine.run_cycle()
        assert engine.last_reading.valid is False
        engine.run_cycle()
        assert engine.last_reading.valid is True
        assert transport.calls == 5


class TestRun:
    """Test suite for the full run loop."""

    def test_stops_when_cancelled_during_countdown(self, config, make_transport, ok_response, make_sleeper):
        holder = {}
        sleeper = make_sleeper(on_sleep=lambda count: holder["engine"].request_stop() if count == 7 else None)
        renderer = Mock()
        transport = make_transport([ok_response])
        engine = build_engine(config, transport, sleeper, renderer)
        holder["engine"] = engine

        assert engine.run() == EXIT_OK

        assert engine.cycles_completed == 2
        assert transport.calls == 2
        assert transport.closed is True
        renderer.farewell.assert_called_once()

    def test_exit_status_is_zero_after_failed_fetch(self, config, make_transport, status_response, make_sleeper):
        holder = {}
        sleeper = make_sleeper(on_sleep=lambda count: holder["engine"].request_stop())
        engine = build_engine(config, make_transport([status_response(500)]), sleeper)
        holder["engine"] = engine

        assert engine.run() == EXIT_OK
        assert engine.last_reading.valid is False

    def test_cancelled_before_start_never_fetches(self, config, make_transport, ok_response, sleeper, token):
        token.request()
        transport = make_transport([ok_response])
        renderer = Mock()
        engine = build_engine(config, transport, sleeper, renderer, token=token)

        assert engine.run() == EXIT_OK
        assert transport.calls == 0
        renderer.render.assert_not_called()
        renderer.farewell.assert_called_once()

    def test_quit_command_on_stdin_stops_the_loop(self, make_transport, ok_response, make_sleeper):
        config = replace(
            get_default_config(),
            schedule=ScheduleParams(interval_ticks=3, tick_seconds=1.0),
            shutdown=ShutdownParams(signals=()),
        )
        holder = {}

        def on_sleep(count):
            # Give the listener thread time to consume "q" before the next check
            holder["engine"].token.wait(0.05)

        engine = PriceTickerEngine(
            config,
            transport=make_transport([ok_response]),
            sleeper=make_sleeper(on_sleep=on_sleep),
            renderer=Mock(),
            stdin=io.StringIO("hello\nq\n"),
            clock=lambda: "now",
        )
        holder["engine"] = engine

        assert engine.run() == EXIT_OK
        assert engine.token.is_requested() is True
        assert engine.exit_watcher.listener_alive is False

    def test_independent_engines_do_not_share_cancellation(self, config, make_transport, ok_response, sleeper):
        first = build_engine(config, make_transport([ok_response]), sleeper)
        second = build_engine(config, make_transport([ok_response]), sleeper)

        first.request_stop()

        assert first.token.is_requested() is True
        assert second.token.is_requested() is False
