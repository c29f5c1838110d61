"""Tests for the desktop front-end: ticky.ui.widgets, ticky.ui.app, ticky.__main__.

Qt runs on the offscreen platform so no display is needed.
"""

import os
import unittest
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from ticky.core.clock import Clock

MS = 1_000_000


class FakeClock(Clock):
    name = "fake"

    def __init__(self):
        self.t = 0

    def _read(self):
        return self.t


def _app():
    return QApplication.instance() or QApplication([])


# ──────────────────────────────────────────────────────────────────────────
# widgets.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestFormatElapsed(unittest.TestCase):

    def test_zero(self):
        from ticky.core.duration import Duration
        from ticky.ui.widgets import format_elapsed
        self.assertEqual(format_elapsed(Duration(0)), "00:00:00.000")

    def test_hours_minutes_seconds_millis(self):
        from ticky.core.duration import Duration
        from ticky.ui.widgets import format_elapsed
        d = Duration.from_seconds(2 * 3600 + 3 * 60 + 4) + Duration.from_millis(56)
        self.assertEqual(format_elapsed(d), "02:03:04.056")

    def test_millis_truncated(self):
        from ticky.core.duration import Duration
        from ticky.ui.widgets import format_elapsed
        self.assertEqual(format_elapsed(Duration(1_999_999)), "00:00:00.001")

    def test_negative_clamps_to_zero(self):
        from ticky.core.duration import Duration
        from ticky.ui.widgets import format_elapsed
        self.assertEqual(format_elapsed(Duration(-5 * MS)), "00:00:00.000")

    def test_more_than_a_day(self):
        from ticky.core.duration import Duration
        from ticky.ui.widgets import format_elapsed
        self.assertEqual(format_elapsed(Duration.from_seconds(100 * 3600)), "100:00:00.000")


# ──────────────────────────────────────────────────────────────────────────
# app.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestStopwatchWindow(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.app = _app()

    def setUp(self):
        from ticky.core.stopwatch import Stopwatch
        from ticky.ui.app import StopwatchWindow
        self.clock = FakeClock()
        self.sw = Stopwatch(clock=self.clock)
        settings = {"refresh_interval_ms": 20, "always_on_top": False}
        self.window = StopwatchWindow(stopwatch=self.sw, settings=settings)

    def tearDown(self):
        self.window.close()
        self.window.deleteLater()

    def test_initial_display(self):
        self.assertEqual(self.window._widgets["time"].text(), "00:00:00.000")
        self.assertEqual(self.window._widgets["start"].text(), "Start")
        self.assertEqual(self.window.refresh_interval_ms, 20)

    def test_start_button_toggles(self):
        self.window._widgets["start"].click()
        self.assertTrue(self.sw.is_running())
        self.assertEqual(self.window._widgets["start"].text(), "Stop")

        self.clock.t += 1500 * MS
        self.window._widgets["start"].click()
        self.assertFalse(self.sw.is_running())
        self.assertEqual(self.window._widgets["start"].text(), "Start")
        self.assertEqual(self.window._widgets["time"].text(), "00:00:01.500")

    def test_tick_refreshes_running_display(self):
        self.window.toggle()
        self.clock.t += 250 * MS
        self.window._tick()
        self.assertEqual(self.window._widgets["time"].text(), "00:00:00.250")

    def test_reset_button(self):
        self.window.toggle()
        self.clock.t += 250 * MS
        self.window._widgets["reset"].click()
        self.assertFalse(self.sw.is_running())
        self.assertEqual(self.sw.elapsed_ns_whole(), 0)
        self.assertEqual(self.window._widgets["time"].text(), "00:00:00.000")
        self.assertEqual(self.window._widgets["start"].text(), "Start")

    def test_restart_button(self):
        self.window.toggle()
        self.clock.t += 900 * MS
        self.window._widgets["restart"].click()
        self.assertTrue(self.sw.is_running())
        self.clock.t += 100 * MS
        self.window._tick()
        self.assertEqual(self.window._widgets["time"].text(), "00:00:00.100")


# ──────────────────────────────────────────────────────────────────────────
# __main__.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestEntryPoint(unittest.TestCase):

    def test_uncaught_exception_is_logged_and_exits(self):
        from ticky.__main__ import run
        from ticky.common.logger import log
        with patch("ticky.ui.app.main", side_effect=RuntimeError("boom")):
            with self.assertLogs(log, level="ERROR") as captured:
                with self.assertRaises(SystemExit) as exit_info:
                    run()
        self.assertEqual(exit_info.exception.code, 1)
        self.assertIn("Uncaught exception", captured.output[0])

    def test_system_exit_passes_through(self):
        from ticky.__main__ import run
        with patch("ticky.ui.app.main", side_effect=SystemExit(0)):
            with self.assertRaises(SystemExit) as exit_info:
                run()
        self.assertEqual(exit_info.exception.code, 0)


if __name__ == "__main__":
    unittest.main()
