"""Calendar date and time for the years 2000 to 2099, without time zones."""

from __future__ import annotations

from enum import Enum

from playerclock.timespan import TimeSpan

SECONDS_FROM_1970_TO_2000 = 946684800

# January to November; December is never needed.
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30)

_DAY_NAMES = "SunMonTueWedThuFriSat"
_MONTH_NAMES = "JanFebMarAprMayJunJulAugSepOctNovDec"


def _u8(value: int) -> int:
    return value & 0xFF


def _u16(value: int) -> int:
    return value & 0xFFFF


def _u32(value: int) -> int:
    return value & 0xFFFFFFFF


def _date2days(y: int, m: int, d: int) -> int:
    """Days since 2000-01-01 for a date in 2000--2099."""
    if y >= 2000:
        y -= 2000
    days = d + sum(_DAYS_IN_MONTH[: max(m - 1, 0)])
    if m > 2 and y % 4 == 0:
        days += 1
    return _u16(days + 365 * y + (y + 3) // 4 - 1)


def _time2ulong(days: int, h: int, m: int, s: int) -> int:
    return _u32(((days * 24 + h) * 60 + m) * 60 + s)


def _conv2d(text: str, pos: int) -> int:
    """Read two decimal digits at ``pos``; a leading non-digit counts as zero."""
    if pos + 2 > len(text):
        raise ValueError(f"expected two digits at position {pos} of {text!r}")
    first, second = text[pos], text[pos + 1]
    tens = ord(first) - ord("0") if "0" <= first <= "9" else 0
    return _u8(10 * tens + ord(second) - ord("0"))


def _month_from_name(name: str) -> int:
    """Month number from an abbreviated English month name."""
    if len(name) < 3:
        raise ValueError(f"invalid month name: {name!r}")
    first = name[0]
    if first == "J":
        if name[1] == "a":
            return 1
        return 6 if name[2] == "n" else 7
    if first == "F":
        return 2
    if first == "A":
        return 4 if name[2] == "r" else 8
    if first == "M":
        return 3 if name[2] == "r" else 5
    simple = {"S": 9, "O": 10, "N": 11, "D": 12}
    if first in simple:
        return simple[first]
    raise ValueError(f"invalid month name: {name!r}")


class TimestampFormat(Enum):
    """Predefined ISO 8601 layouts produced by :meth:`DateTime.timestamp`."""

    FULL = "full"  # YYYY-MM-DDThh:mm:ss
    TIME = "time"  # hh:mm:ss
    DATE = "date"  # YYYY-MM-DD


class DateTime:
    """A broken-down date and time (no time zone, DST or leap seconds).

    Fields are stored as bytes, the year as an offset from 2000. Invalid
    dates such as 31 February can be built; :meth:`is_valid` detects them.
    """

    __slots__ = ("_y_off", "_m", "_d", "_hh", "_mm", "_ss")

    def __init__(
        self,
        year: int = 2000,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> None:
        year = _u16(year)
        if year >= 2000:
            year -= 2000
        self._y_off = _u8(year)
        self._m = _u8(month)
        self._d = _u8(day)
        self._hh = _u8(hour)
        self._mm = _u8(minute)
        self._ss = _u8(second)

    @classmethod
    def from_unixtime(cls, t: int = SECONDS_FROM_1970_TO_2000) -> DateTime:
        """Build from seconds since 1970-01-01 00:00:00 (unsigned 32-bit)."""
        t = _u32(_u32(t) - SECONDS_FROM_1970_TO_2000)
        ss = t % 60
        t //= 60
        mm = t % 60
        t //= 60
        hh = t % 24
        days = _u16(t // 24)

        y_off = 0
        while True:
            leap = 1 if y_off % 4 == 0 else 0
            if days < 365 + leap:
                break
            days -= 365 + leap
            y_off = _u8(y_off + 1)

        month = 1
        while month < 12:
            per_month = _DAYS_IN_MONTH[month - 1]
            if leap and month == 2:
                per_month += 1
            if days < per_month:
                break
            days -= per_month
            month += 1

        result = cls.__new__(cls)
        result._y_off = y_off
        result._m = month
        result._d = _u8(days + 1)
        result._hh = hh
        result._mm = mm
        result._ss = ss
        return result

    @classmethod
    def from_build_strings(cls, date: str, time: str) -> DateTime:
        """Build from strings like ``"Apr 16 2020"`` and ``"18:34:56"``."""
        if len(date) < 11:
            raise ValueError(f"date string too short: {date!r}")
        if len(time) < 8:
            raise ValueError(f"time string too short: {time!r}")
        result = cls.__new__(cls)
        result._y_off = _conv2d(date, 9)
        result._m = _month_from_name(date)
        result._d = _conv2d(date, 4)
        result._hh = _conv2d(time, 0)
        result._mm = _conv2d(time, 3)
        result._ss = _conv2d(time, 6)
        return result

    @classmethod
    def from_iso8601(cls, text: str) -> DateTime:
        """Build from ``"YYYY-MM-DDThh:mm:ss"``; missing trailing parts default."""
        ref = "2000-01-01T00:00:00"
        merged = text[: len(ref)] + ref[len(text):]
        result = cls.__new__(cls)
        result._y_off = _conv2d(merged, 2)
        result._m = _conv2d(merged, 5)
        result._d = _conv2d(merged, 8)
        result._hh = _conv2d(merged, 11)
        result._mm = _conv2d(merged, 14)
        result._ss = _conv2d(merged, 17)
        return result

    def year(self) -> int:
        """The full year (2000--2099)."""
        return 2000 + self._y_off

    def month(self) -> int:
        """The month (1--12)."""
        return self._m

    def day(self) -> int:
        """The day of the month (1--31)."""
        return self._d

    def hour(self) -> int:
        """The hour (0--23)."""
        return self._hh

    def minute(self) -> int:
        """The minute (0--59)."""
        return self._mm

    def second(self) -> int:
        """The second (0--59)."""
        return self._ss

    def twelve_hour(self) -> int:
        """The hour on a 12-hour clock (1--12)."""
        if self._hh in (0, 12):
            return 12
        if self._hh > 12:
            return self._hh - 12
        return self._hh

    def is_pm(self) -> bool:
        """Whether the time is at or after noon."""
        return self._hh >= 12

    def _fields(self) -> tuple[int, int, int, int, int, int]:
        return (self._y_off, self._m, self._d, self._hh, self._mm, self._ss)

    def is_valid(self) -> bool:
        """Whether the fields name a real moment between 2000 and 2099."""
        if self._y_off >= 100:
            return False
        return self._fields() == DateTime.from_unixtime(self.unixtime())._fields()

    def to_string(self, fmt: str) -> str:
        """Replace the specifiers in ``fmt`` with this date and time.

        Specifiers: YYYY, YY, MM, MMM, DD, DDD, hh, mm, ss, AP and ap. When
        AP or ap appears, hh uses the 12-hour clock.
        """
        buf = list(fmt)
        ap_tag = "ap" in fmt or "AP" in fmt
        is_pm = False
        hour = self._hh
        if ap_tag:
            is_pm = self._hh >= 12
            hour = self.twelve_hour()

        def at(j: int) -> str:
            return buf[j] if j < len(buf) else ""

        def digit(value: int) -> str:
            return chr(_u8(ord("0") + value))

        def put_two(j: int, value: int) -> None:
            buf[j] = digit(value // 10)
            buf[j + 1] = digit(value % 10)

        def put_name(j: int, names: str, index: int) -> None:
            buf[j:j + 3] = names[3 * index:3 * index + 3]

        for i in range(len(buf) - 1):
            pair = at(i) + at(i + 1)
            if pair == "hh":
                put_two(i, hour)
            if at(i) + at(i + 1) == "mm":
                put_two(i, self._mm)
            if at(i) + at(i + 1) == "ss":
                put_two(i, self._ss)
            if at(i) + at(i + 1) + at(i + 2) == "DDD":
                put_name(i, _DAY_NAMES, self.day_of_the_week())
            elif at(i) + at(i + 1) == "DD":
                put_two(i, self._d)
            if at(i) + at(i + 1) + at(i + 2) == "MMM":
                put_name(i, _MONTH_NAMES, (self._m - 1) % 12)
            elif at(i) + at(i + 1) == "MM":
                put_two(i, self._m)
            if at(i) + at(i + 1) + at(i + 2) + at(i + 3) == "YYYY":
                buf[i] = "2"
                buf[i + 1] = "0"
                buf[i + 2] = digit((self._y_off // 10) % 10)
                buf[i + 3] = digit(self._y_off % 10)
            elif at(i) + at(i + 1) == "YY":
                buf[i] = digit((self._y_off // 10) % 10)
                buf[i + 1] = digit(self._y_off % 10)
            if at(i) + at(i + 1) == "AP":
                buf[i:i + 2] = "PM" if is_pm else "AM"
            elif at(i) + at(i + 1) == "ap":
                buf[i:i + 2] = "pm" if is_pm else "am"
        return "".join(buf)

    def day_of_the_week(self) -> int:
        """Day of the week, 0 for Sunday to 6 for Saturday."""
        return (_date2days(self._y_off, self._m, self._d) + 6) % 7

    def secondstime(self) -> int:
        """Seconds since 2000-01-01 00:00:00."""
        days = _date2days(self._y_off, self._m, self._d)
        return _time2ulong(days, self._hh, self._mm, self._ss)

    def unixtime(self) -> int:
        """Seconds since 1970-01-01 00:00:00."""
        return _u32(self.secondstime() + SECONDS_FROM_1970_TO_2000)

    def timestamp(self, opt: TimestampFormat = TimestampFormat.FULL) -> str:
        """An ISO 8601 string in one of the predefined layouts."""
        if opt is TimestampFormat.TIME:
            return f"{self._hh:02d}:{self._mm:02d}:{self._ss:02d}"
        if opt is TimestampFormat.DATE:
            return f"{self.year()}-{self._m:02d}-{self._d:02d}"
        return (
            f"{self.year()}-{self._m:02d}-{self._d:02d}"
            f"T{self._hh:02d}:{self._mm:02d}:{self._ss:02d}"
        )

    def __add__(self, span: object) -> DateTime:
        if not isinstance(span, TimeSpan):
            return NotImplemented
        return DateTime.from_unixtime(self.unixtime() + span.total_seconds())

    def __sub__(self, other: object) -> DateTime | TimeSpan:
        if isinstance(other, TimeSpan):
            return DateTime.from_unixtime(self.unixtime() - other.total_seconds())
        if isinstance(other, DateTime):
            return TimeSpan(self.unixtime() - other.unixtime())
        return NotImplemented

    def _key(self) -> tuple[int, int, int, int, int, int]:
        return (self.year(), self._m, self._d, self._hh, self._mm, self._ss)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return not other < self

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return other < self

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return not self < other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(("DateTime", self._key()))

    def __repr__(self) -> str:
        return (
            f"DateTime({self.year()}, {self._m}, {self._d}, "
            f"{self._hh}, {self._mm}, {self._ss})"
        )