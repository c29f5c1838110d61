import sys
from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)
from ticky.common.logger import get_logger, log, resolve_log_level
from ticky.core import config
from ticky.core.stopwatch import Stopwatch
from ticky.ui.widgets import build_stopwatch_row, format_elapsed


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the ticky desktop stopwatch. Shows one stopwatch with Start/Stop, Reset and Restart.
class StopwatchWindow(QMainWindow):

    def __init__(self, stopwatch=None, settings=None, font_family="Calibri"):
        super().__init__()
        self.setWindowTitle("Ticky")

        # -- Settings --
        s = settings if settings is not None else config.load_settings()
        self.refresh_interval_ms = s.get("refresh_interval_ms", 50)
        self.always_on_top = s.get("always_on_top", True)
        if self.always_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        self.stopwatch = stopwatch if stopwatch is not None else Stopwatch()

        # -- Build UI --
        central = QWidget()
        self.setCentralWidget(central)
        self._main_lay = QVBoxLayout(central)

        row, self._widgets = build_stopwatch_row(
            font_family,
            on_toggle=self.toggle,
            on_reset=self.reset,
            on_restart=self.restart,
        )
        self._main_lay.addWidget(row)
        self._update_display()
        QTimer.singleShot(0, self.adjustSize)

        # -- Tick timer --
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(self.refresh_interval_ms)
        log.debug(f"Opened stopwatch window, refreshing every {self.refresh_interval_ms}ms")

    # ------------------------------------------------------------------ #
    #  Actions                                                             #
    # ------------------------------------------------------------------ #

    def toggle(self):
        if self.stopwatch.is_running():
            self.stopwatch.stop()
        else:
            self.stopwatch.start()
        self._update_display()

    def reset(self):
        self.stopwatch.reset()
        self._update_display()

    def restart(self):
        self.stopwatch.restart()
        self._update_display()

    # ------------------------------------------------------------------ #
    #  Display                                                             #
    # ------------------------------------------------------------------ #

    def _update_display(self):
        running = self.stopwatch.is_running()
        self._widgets["time"].setText(format_elapsed(self.stopwatch.elapsed()))
        self._widgets["start"].setText("Stop" if running else "Start")

    def _tick(self):
        # Stopped stopwatches don't change, so skip the redraw
        if self.stopwatch.is_running():
            self._update_display()

    def closeEvent(self, event):
        self._timer.stop()
        log.info(f"Closing stopwatch window at {self.stopwatch}")
        super().closeEvent(event)


def main():
    settings = config.load_settings()
    get_logger(
        level=resolve_log_level(settings["log_level"]),
        persistent=settings["persistent_log"],
        console=settings["console_log"],
        historical_debugs=10 if settings["persistent_log"] else 0,
    )
    log.info("=== INITIALIZED NEW SESSION ===")
    app = QApplication(sys.argv)
    window = StopwatchWindow(settings=settings)
    window.show()
    sys.exit(app.exec())
