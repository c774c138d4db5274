import pytest

from playerclock.rtctime import SECONDS_FROM_1970_TO_2000, DateTime, TimestampFormat
from playerclock.timespan import TimeSpan


def test_default_is_start_of_2000():
    dt = DateTime()
    assert dt.unixtime() == SECONDS_FROM_1970_TO_2000
    assert dt.secondstime() == 0
    assert dt == DateTime.from_unixtime(SECONDS_FROM_1970_TO_2000)


def test_first_of_2000_is_saturday():
    assert DateTime(2000, 1, 1).day_of_the_week() == 6


def test_year_offset_and_full_year_agree():
    assert DateTime(20, 4, 16) == DateTime(2020, 4, 16)
    assert DateTime(2020, 4, 16).year() == 2020


def test_accessors():
    dt = DateTime(2020, 4, 16, 18, 34, 56)
    assert (dt.year(), dt.month(), dt.day()) == (2020, 4, 16)
    assert (dt.hour(), dt.minute(), dt.second()) == (18, 34, 56)
    assert dt.is_pm()


def test_to_string_documented_example():
    dt = DateTime(2020, 4, 16, 18, 34, 56)
    assert dt.to_string("DDD, DD MMM YYYY hh:mm:ss") == "Thu, 16 Apr 2020 18:34:56"


def test_to_string_twelve_hour_mode():
    dt = DateTime(2020, 4, 16, 18, 34, 56)
    assert dt.to_string("hh:mm AP") == "06:34 PM"
    assert dt.to_string("hh ap") == "06 pm"


def test_to_string_leaves_other_text():
    dt = DateTime(2020, 4, 16, 18, 34, 56)
    assert dt.to_string("YY/MM") == "20/04"
    assert dt.to_string("x") == "x"


def test_timestamp_formats():
    dt = DateTime(2020, 4, 16, 18, 34, 56)
    assert dt.timestamp() == "2020-04-16T18:34:56"
    assert dt.timestamp(TimestampFormat.TIME) == "18:34:56"
    assert dt.timestamp(TimestampFormat.DATE) == "2020-04-16"


def test_build_strings():
    dt = DateTime.from_build_strings("Apr 16 2020", "18:34:56")
    assert dt == DateTime(2020, 4, 16, 18, 34, 56)


@pytest.mark.parametrize(
    "name,month",
    [("Jan", 1), ("Feb", 2), ("Mar", 3), ("Apr", 4), ("May", 5), ("Jun", 6),
     ("Jul", 7), ("Aug", 8), ("Sep", 9), ("Oct", 10), ("Nov", 11), ("Dec", 12)],
)
def test_build_strings_months(name, month):
    dt = DateTime.from_build_strings(f"{name}  5 2021", "00:00:00")
    assert dt.month() == month
    assert dt.day() == 5


def test_build_strings_bad_month():
    with pytest.raises(ValueError):
        DateTime.from_build_strings("Xyz 16 2020", "18:34:56")


def test_iso8601():
    dt = DateTime.from_iso8601("2020-06-25T15:29:37")
    assert dt == DateTime(2020, 6, 25, 15, 29, 37)
    assert dt.timestamp() == "2020-06-25T15:29:37"


def test_iso8601_partial_uses_defaults():
    assert DateTime.from_iso8601("2020-06-25") == DateTime(2020, 6, 25)


def test_is_valid():
    assert DateTime(2020, 2, 29).is_valid()
    assert not DateTime(2020, 2, 31).is_valid()
    assert not DateTime(2021, 2, 29).is_valid()
    assert not DateTime(2020, 1, 1, 24).is_valid()


@pytest.mark.parametrize(
    "fields",
    [(2000, 1, 1, 0, 0, 0), (2020, 4, 16, 18, 34, 56), (2099, 12, 31, 23, 59, 59),
     (2024, 2, 29, 12, 0, 1)],
)
def test_unixtime_round_trip(fields):
    dt = DateTime(*fields)
    back = DateTime.from_unixtime(dt.unixtime())
    assert back == dt
    assert back.is_valid()
    assert dt.unixtime() - dt.secondstime() == SECONDS_FROM_1970_TO_2000


def test_twelve_hour():
    assert DateTime(2020, 1, 1, 0).twelve_hour() == 12
    assert DateTime(2020, 1, 1, 12).twelve_hour() == 12
    assert DateTime(2020, 1, 1, 9).twelve_hour() == 9
    assert DateTime(2020, 1, 1, 9).is_pm() is False


def test_add_and_subtract_span():
    dt = DateTime(2020, 12, 31, 23, 59, 30)
    span = TimeSpan(90)
    later = dt + span
    assert later > dt
    assert later - dt == span
    assert later - span == dt
    assert later.year() == 2021


def test_difference_is_negative_when_earlier():
    a = DateTime(2020, 1, 1)
    b = DateTime(2020, 1, 2)
    assert (a - b).total_seconds() == -(b - a).total_seconds()


def test_ordering():
    a = DateTime(2020, 1, 1, 0, 0, 0)
    b = DateTime(2020, 1, 1, 0, 0, 1)
    assert a < b and a <= b and b > a and b >= a
    assert not a > b
    assert a <= DateTime(2020, 1, 1) and a >= DateTime(2020, 1, 1)
    assert sorted([b, a]) == [a, b]


def test_hash_matches_equality():
    assert hash(DateTime(2020, 5, 5)) == hash(DateTime(20, 5, 5))
    assert len({DateTime(2020, 5, 5), DateTime(20, 5, 5)}) == 1