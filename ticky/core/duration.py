"""Duration value type, a signed count of whole nanoseconds.

Sums stay exact; rounding only happens when a caller asks for a whole unit.
"""

import math
from datetime import timedelta
from fractions import Fraction

# Nanoseconds per unit. Keys are the unit names accepted by to_unit() and round_to().
UNITS = {
    "ns": 1,
    "us": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
}


def _unit_ns(unit):
    try:
        return UNITS[unit]
    except KeyError:
        raise ValueError(f"Unknown duration unit '{unit}', expected one of: {', '.join(UNITS)}") from None


# Integer division rounding to nearest, halves away from zero.
def _div_round(value, divisor):
    quotient, remainder = divmod(abs(value), divisor)
    if remainder * 2 >= divisor:
        quotient += 1
    return quotient if value >= 0 else -quotient


# Same rounding for a finite float, done on its exact binary value.
def _round_float(value):
    exact = Fraction(value)
    return _div_round(exact.numerator, exact.denominator)


class Duration:
    """An immutable span of time stored as integer nanoseconds."""

    __slots__ = ("_ns",)

    def __init__(self, nanoseconds=0):
        if isinstance(nanoseconds, bool) or not isinstance(nanoseconds, int):
            raise TypeError(f"Duration expects an integer number of nanoseconds, got {type(nanoseconds).__name__}")
        self._ns = nanoseconds

    #region === Construction ===

    @classmethod
    def from_unit(cls, value, unit):
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"Cannot build a Duration from non-finite value {value!r}")
        scale = _unit_ns(unit)
        if isinstance(value, int):
            return cls(value * scale)
        return cls(_round_float(value * scale))

    @classmethod
    def from_seconds(cls, seconds):
        return cls.from_unit(seconds, "s")

    @classmethod
    def from_millis(cls, millis):
        return cls.from_unit(millis, "ms")

    @classmethod
    def from_micros(cls, micros):
        return cls.from_unit(micros, "us")

    @classmethod
    def from_nanos(cls, nanos):
        return cls(nanos)

    @classmethod
    def from_timedelta(cls, delta):
        # timedelta normalizes to days/seconds/microseconds, all integers
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls(micros * 1_000)

    @classmethod
    def from_stopwatch(cls, stopwatch):
        """Elapsed time of ``stopwatch`` at the moment of the call."""
        return stopwatch.elapsed()

    #endregion === Construction ===

    #region === Conversion ===

    @property
    def nanoseconds(self):
        return self._ns

    # Fractional value in the given unit.
    def to_unit(self, unit):
        return self._ns / _unit_ns(unit)

    # Whole value in the given unit, rounded to nearest with halves away from zero.
    def round_to(self, unit):
        return _div_round(self._ns, _unit_ns(unit))

    def to_seconds(self):
        return self.to_unit("s")

    def to_timedelta(self):
        """Convert to ``datetime.timedelta``, rounding to the nearest microsecond."""
        return timedelta(microseconds=self.round_to("us"))

    #endregion === Conversion ===

    #region === Arithmetic ===

    def __add__(self, other):
        if isinstance(other, Duration):
            return Duration(self._ns + other._ns)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Duration):
            return Duration(self._ns - other._ns)
        return NotImplemented

    def __neg__(self):
        return Duration(-self._ns)

    def __abs__(self):
        return Duration(abs(self._ns))

    def __mul__(self, factor):
        if isinstance(factor, bool) or not isinstance(factor, (int, float)):
            return NotImplemented
        if isinstance(factor, int):
            return Duration(self._ns * factor)
        if not math.isfinite(factor):
            raise ValueError(f"Cannot scale a Duration by non-finite factor {factor!r}")
        return Duration(_round_float(self._ns * factor))

    __rmul__ = __mul__

    # Duration / Duration is a plain ratio, Duration / number is a scaled Duration.
    def __truediv__(self, other):
        if isinstance(other, Duration):
            return self._ns / other._ns
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            return NotImplemented
        if isinstance(other, int):
            if other < 0:
                return Duration(_div_round(-self._ns, -other))
            return Duration(_div_round(self._ns, other))
        return Duration(_round_float(self._ns / other))

    def __floordiv__(self, other):
        if isinstance(other, Duration):
            return self._ns // other._ns
        if isinstance(other, int) and not isinstance(other, bool):
            return Duration(self._ns // other)
        return NotImplemented

    def __mod__(self, other):
        if isinstance(other, Duration):
            return Duration(self._ns % other._ns)
        return NotImplemented

    def __bool__(self):
        return self._ns != 0

    #endregion === Arithmetic ===

    #region === Comparison ===

    def __eq__(self, other):
        if isinstance(other, Duration):
            return self._ns == other._ns
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, Duration):
            return self._ns < other._ns
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, Duration):
            return self._ns <= other._ns
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, Duration):
            return self._ns > other._ns
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, Duration):
            return self._ns >= other._ns
        return NotImplemented

    def __hash__(self):
        return hash(self._ns)

    #endregion === Comparison ===

    def __repr__(self):
        return f"Duration({self._ns})"

    def __str__(self):
        return f"{self.to_unit('ms')}ms"


ZERO = Duration(0)
