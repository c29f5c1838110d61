"""Stopwatch widget builders.

Each builder returns a (container, widget_dict) tuple.  The container is
a QWidget with objectName "rowBg" that can be inserted into a layout.
The widget_dict maps logical names to sub-widgets for later updates.
"""

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QFontMetrics
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QWidget,
)
from ticky.core.duration import ZERO


def format_elapsed(duration):
    """Format a Duration as HH:MM:SS.mmm. Negative values clamp to zero, milliseconds are truncated."""
    millis = max(0, duration.nanoseconds // 1_000_000)
    seconds, ms = divmod(millis, 1000)
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def build_stopwatch_row(font_family, on_toggle, on_reset, on_restart, time_pt=18, action_pt=10):
    """Build the stopwatch row: elapsed time, Start/Stop toggle, Reset and Restart.

    Returns (container, widget_dict).
    """
    time_font = QFont(font_family, time_pt)
    time_font.setBold(True)
    action_font = QFont(font_family, action_pt)

    rc = QWidget()
    rc.setObjectName("rowBg")
    rc_lay = QHBoxLayout(rc)
    rc_lay.setContentsMargins(0, 0, 0, 0)
    rc_lay.setSpacing(6)

    # Col 0: time
    time_lbl = QLabel(format_elapsed(ZERO))
    time_lbl.setFont(time_font)
    time_lbl.setAlignment(Qt.AlignCenter)
    time_lbl.setMinimumWidth(QFontMetrics(time_font).horizontalAdvance("00:00:00.000 "))
    rc_lay.addWidget(time_lbl)

    # Col 1: Start / Stop
    start_btn = QPushButton("Start")
    start_btn.setFont(action_font)
    start_btn.setMinimumWidth(QFontMetrics(action_font).horizontalAdvance("Start") + 20)
    start_btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
    start_btn.clicked.connect(lambda _=False: on_toggle())
    rc_lay.addWidget(start_btn)

    # Col 2: Reset
    reset_btn = QPushButton("Reset")
    reset_btn.setFont(action_font)
    reset_btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
    reset_btn.clicked.connect(lambda _=False: on_reset())
    rc_lay.addWidget(reset_btn)

    # Col 3: Restart
    restart_btn = QPushButton("Restart")
    restart_btn.setFont(action_font)
    restart_btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
    restart_btn.clicked.connect(lambda _=False: on_restart())
    rc_lay.addWidget(restart_btn)

    widget_dict = {
        "time": time_lbl, "start": start_btn,
        "reset": reset_btn, "restart": restart_btn,
        "container": rc,
    }
    return rc, widget_dict
