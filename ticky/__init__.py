"""Ticky: a simple stopwatch."""
from .core.clock import Clock, ClockError, EpochClock, MonotonicClock, get_default_clock, set_default_clock
from .core.duration import Duration
from .core.stopwatch import Stopwatch

__version__ = "0.1.0"

__all__ = [
    "Clock",
    "ClockError",
    "Duration",
    "EpochClock",
    "MonotonicClock",
    "Stopwatch",
    "get_default_clock",
    "set_default_clock",
]
