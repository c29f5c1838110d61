"""Clock sources a stopwatch reads from.

Two sources exist, named after the features that enable them:

* ``stdtime``: :class:`MonotonicClock`, ``time.monotonic_ns()``. Always available.
* ``hifitime``: :class:`EpochClock`, ``time.time_ns()``. Nanosecond epoch timestamps,
  calendar correct, but free to step backwards when the system clock is adjusted.

When both are enabled ``hifitime`` wins; when neither is, ``stdtime`` is used.
"""

import time
from abc import ABC, abstractmethod
from ticky.common.logger import log
from ticky.core import config
from ticky.core.duration import Duration


class ClockError(RuntimeError):
    """The underlying clock could not be read. A stopwatch cannot recover from this."""


class Clock(ABC):
    name = "abstract"

    @abstractmethod
    def _read(self):
        ...

    def now(self):
        """Current reading in integer nanoseconds since an arbitrary, source-specific epoch."""
        try:
            reading = self._read()
        except OSError as e:
            raise ClockError(f"Failed to read the '{self.name}' clock: {e}") from e
        if isinstance(reading, bool) or not isinstance(reading, int):
            raise ClockError(f"The '{self.name}' clock returned a non-integer reading: {reading!r}")
        return reading

    # Absolute distance between now and an earlier reading, so a clock stepping backwards never yields negative time.
    def since(self, anchor):
        return Duration(abs(self.now() - anchor))

    def __repr__(self):
        return f"{type(self).__name__}()"


class MonotonicClock(Clock):
    name = "stdtime"

    def _read(self):
        return time.monotonic_ns()


class EpochClock(Clock):
    name = "hifitime"

    def _read(self):
        return time.time_ns()


# Feature name -> clock class, in priority order (first enabled wins).
CLOCKS = {
    EpochClock.name: EpochClock,
    MonotonicClock.name: MonotonicClock,
}
FALLBACK_CLOCK = MonotonicClock.name

_default_clock = None


# Picks the clock to use from a list of enabled feature names.
def resolve_clock_name(features):
    enabled = set()
    for feature in features:
        if feature in CLOCKS:
            enabled.add(feature)
        else:
            log.warning(f"Ignoring unknown clock feature '{feature}', expected one of: {', '.join(CLOCKS)}")
    for name in CLOCKS:
        if name in enabled:
            return name
    return FALLBACK_CLOCK

def build_clock(features):
    name = resolve_clock_name(features)
    clock = CLOCKS[name]()
    log.debug(f"Selected clock '{name}' from features {list(features)}")
    return clock

# The clock used by stopwatches that weren't handed one explicitly. Built from settings on first use.
def get_default_clock():
    global _default_clock
    if _default_clock is None:
        _default_clock = build_clock(config.load_settings()["clock_features"])
    return _default_clock

# Overrides the default clock for every stopwatch created afterwards. Passing None re-reads settings on next use.
def set_default_clock(clock):
    global _default_clock
    _default_clock = clock
    log.debug(f"Default clock set to {clock!r}")
