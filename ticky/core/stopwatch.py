import copy
from datetime import timedelta
from ticky.common.logger import log
from ticky.core.clock import get_default_clock
from ticky.core.duration import Duration, ZERO

# This object handles elapsed time tracking across any number of start/stop cycles. Only running intervals count;
# the gap between a stop() and the next start() is never added.
class Stopwatch:
    """A simple stopwatch.

    Usage::

        sw = Stopwatch.start_new()
        # Do something ...
        sw.stop()
        print(f"Elapsed time: {sw.elapsed_ms_whole()}ms")

    Redundant calls are no-ops: ``start()`` on a running stopwatch keeps the current lap, and ``stop()`` on a
    stopped one adds nothing. Not thread-safe; share one across threads only behind a lock.
    """

    # Zero elapsed, not running. The clock is read once so `timer` always holds a real (if inert) reading.
    def __init__(self, clock=None):
        self._clock = clock if clock is not None else get_default_clock()
        self._elapsed = ZERO
        self.timer = self._clock.now()
        self._running = False

    #region === Construction ===

    @classmethod
    def start_new(cls, clock=None):
        sw = cls(clock=clock)
        sw.start()
        return sw

    # Stopped stopwatch pre-seeded with an already elapsed duration. Accepts a Duration or a datetime.timedelta.
    @classmethod
    def from_duration(cls, duration, clock=None):
        if isinstance(duration, timedelta):
            duration = Duration.from_timedelta(duration)
        if not isinstance(duration, Duration):
            raise TypeError(f"Expected a Duration or timedelta, got {type(duration).__name__}")
        if duration < ZERO:
            raise ValueError(f"A stopwatch cannot hold negative elapsed time: {duration!r}")
        sw = cls(clock=clock)
        sw._elapsed = duration
        log.debug(f"Seeded stopwatch with {duration!r}")
        return sw

    #endregion === Construction ===

    #region === State Transitions ===

    # Starts (or resumes) the stopwatch.
    def start(self):
        if not self._running:
            self.timer = self._clock.now()
            self._running = True
            log.debug(f"Started stopwatch at {self.timer} on {self._clock!r}")

    # Stops (or pauses) the stopwatch, folding the current lap into the accumulated total.
    def stop(self):
        if self._running:
            lap = self._clock.since(self.timer)
            self._elapsed += lap
            self._running = False
            log.debug(f"Stopped stopwatch after a lap of {lap.nanoseconds}ns, total {self._elapsed.nanoseconds}ns")

    # Simply restores the stopwatch to a fresh, stopped 0.
    def reset(self):
        self._elapsed = ZERO
        self.timer = self._clock.now()
        self._running = False
        log.debug("Reset stopwatch to 0")

    def restart(self):
        self.reset()
        self.start()

    #endregion === State Transitions ===

    #region === Readers ===

    def is_running(self):
        return self._running

    def elapsed(self):
        """Total elapsed time, including the lap in progress when running."""
        if self._running:
            return self._elapsed + self._clock.since(self.timer)
        return self._elapsed

    def into_duration(self):
        return self.elapsed()

    # Fractional readers
    def elapsed_ms(self):
        return self.elapsed().to_unit("ms")

    def elapsed_us(self):
        return self.elapsed().to_unit("us")

    def elapsed_ns(self):
        return self.elapsed().to_unit("ns")

    def elapsed_s(self):
        return self.elapsed().to_unit("s")

    # Whole readers, rounded to the nearest unit with halves going up.
    def elapsed_ms_whole(self):
        return self.elapsed().round_to("ms")

    def elapsed_us_whole(self):
        return self.elapsed().round_to("us")

    def elapsed_ns_whole(self):
        return self.elapsed().nanoseconds

    def elapsed_s_whole(self):
        return self.elapsed().round_to("s")

    #endregion === Readers ===

    # Independent snapshot sharing the same clock. Taking it does not read the clock.
    def copy(self):
        return copy.copy(self)

    # Equal when the accumulated time, the running anchor and the running flag all match. The clock is not compared.
    # Mutable, so unhashable.
    def __eq__(self, other):
        if isinstance(other, Stopwatch):
            return (self._elapsed, self.timer, self._running) == (other._elapsed, other.timer, other._running)
        return NotImplemented

    __hash__ = None

    def __str__(self):
        return f"{self.elapsed_ms_whole()}ms"

    def __repr__(self):
        return f"Stopwatch(elapsed={self.elapsed()!r}, running={self._running}, clock={self._clock!r})"
