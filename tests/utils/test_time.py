"""Tests for display time formatting."""

from datetime import datetime

from price_ticker.utils.time import DISPLAY_TIME_FORMAT, format_display_time, now


class TestDisplayTime:

    def test_default_format(self):
        ts = datetime(2026, 10, 19, 15, 4, 0)
        assert format_display_time(ts) == "10/19/2026 at 03:04 PM"

    def test_morning_time(self):
        assert format_display_time(datetime(2026, 1, 2, 9, 30)) == "01/02/2026 at 09:30 AM"

    def test_now_with_fixed_time(self):
        assert now(current=datetime(2026, 10, 19, 0, 5)) == "10/19/2026 at 12:05 AM"

    def test_now_custom_format(self):
        assert now("%H:%M", current=datetime(2026, 10, 19, 23, 59)) == "23:59"

    def test_now_uses_wall_clock(self):
        value = now()
        parsed = datetime.strptime(value, DISPLAY_TIME_FORMAT)
        assert abs((datetime.now() - parsed).total_seconds()) < 120
