from datetime import datetime, timedelta, timezone

import pytest

from oidfed import unixtime
from oidfed.unixtime import TimeValidationError


def test_from_json_epoch_offset():
    assert unixtime.from_json(5) == datetime(1970, 1, 1, 0, 0, 5, tzinfo=timezone.utc)


def test_round_trip_fractional():
    assert unixtime.to_json(unixtime.from_json(1700000000.25)) == pytest.approx(1700000000.25)


def test_round_trip_integer():
    assert unixtime.to_json(unixtime.from_json(100)) == 100.0


def test_to_json_unset_is_zero():
    assert unixtime.to_json(None) == 0


def test_to_json_naive_treated_as_utc():
    naive = datetime(1970, 1, 1, 0, 0, 10)
    assert unixtime.to_json(naive) == 10.0


@pytest.mark.parametrize("bad", ["5", True, None, [1]])
def test_from_json_rejects_non_numbers(bad):
    with pytest.raises(TypeError):
        unixtime.from_json(bad)


def test_now_is_aware_and_current():
    before = datetime.now(timezone.utc)
    current = unixtime.now()
    after = datetime.now(timezone.utc)
    assert current.tzinfo is not None
    assert before <= current <= after


def test_until_future_positive_and_past_negative():
    current = unixtime.now()
    assert unixtime.until(current + timedelta(hours=1)) > timedelta(minutes=59)
    assert unixtime.until(current - timedelta(hours=1)) < timedelta(0)


def test_until_unset_is_minimum():
    assert unixtime.until(None) == timedelta.min


def test_verify_time_valid():
    current = unixtime.now()
    unixtime.verify_time(current - timedelta(minutes=1), current + timedelta(minutes=1))
    unixtime.verify_time(None, None)
    assert unixtime.to_json(None) == 0


def test_verify_time_not_yet_valid():
    with pytest.raises(TimeValidationError, match="not yet valid"):
        unixtime.verify_time(unixtime.now() + timedelta(hours=1), None)


def test_verify_time_expired():
    with pytest.raises(TimeValidationError, match="expired"):
        unixtime.verify_time(None, unixtime.now() - timedelta(hours=1))


def test_duration_from_json_whole_seconds():
    assert unixtime.duration_from_json(90) == timedelta(seconds=90)


def test_duration_from_json_truncates_fraction():
    assert unixtime.duration_from_json(1.5) == timedelta(seconds=1)


def test_duration_round_trip():
    assert unixtime.duration_to_json(unixtime.duration_from_json(3600)) == 3600.0


def test_duration_to_json_fractional():
    assert unixtime.duration_to_json(timedelta(milliseconds=2500)) == 2.5


def test_duration_from_json_rejects_string():
    with pytest.raises(TypeError):
        unixtime.duration_from_json("10")