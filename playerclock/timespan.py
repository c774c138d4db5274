"""Signed durations with one-second resolution."""

from __future__ import annotations

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

_INT32_RANGE = 1 << 32
_INT32_MIN = -(1 << 31)


def _wrap_int32(value: int) -> int:
    """Reduce an integer to the signed 32-bit range, wrapping on overflow."""
    return (value - _INT32_MIN) % _INT32_RANGE + _INT32_MIN


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _trunc_div(a, b)


class TimeSpan:
    """A length of time stored as a signed 32-bit count of seconds.

    The component accessors split the span the way truncating integer
    division does, so a negative span yields non-positive components.
    """

    __slots__ = ("_seconds",)

    def __init__(self, seconds: int = 0) -> None:
        self._seconds = _wrap_int32(int(seconds))

    @classmethod
    def from_parts(cls, days: int, hours: int, minutes: int, seconds: int) -> TimeSpan:
        """Build a span from days, hours, minutes and seconds."""
        total = (
            int(days) * SECONDS_PER_DAY
            + int(hours) * SECONDS_PER_HOUR
            + int(minutes) * SECONDS_PER_MINUTE
            + int(seconds)
        )
        return cls(total)

    def days(self) -> int:
        """Whole days in the span."""
        return _trunc_div(self._seconds, SECONDS_PER_DAY)

    def hours(self) -> int:
        """Hours left over after the whole days."""
        return _trunc_mod(_trunc_div(self._seconds, SECONDS_PER_HOUR), 24)

    def minutes(self) -> int:
        """Minutes left over after the whole hours."""
        return _trunc_mod(_trunc_div(self._seconds, SECONDS_PER_MINUTE), 60)

    def seconds(self) -> int:
        """Seconds left over after the whole minutes."""
        return _trunc_mod(self._seconds, 60)

    def total_seconds(self) -> int:
        """The whole span in seconds."""
        return self._seconds

    def __add__(self, other: object) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self._seconds + other._seconds)

    def __sub__(self, other: object) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self._seconds - other._seconds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self._seconds == other._seconds

    def __hash__(self) -> int:
        return hash(("TimeSpan", self._seconds))

    def __repr__(self) -> str:
        return f"TimeSpan({self._seconds})"