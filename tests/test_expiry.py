"""
Tests for oss_template.storage.expiry: duration conversion.
"""

from datetime import datetime, timedelta, timezone

import pytest

from oss_template.exceptions import CallerMisuseError
from oss_template.storage.expiry import (
    TimeUnit,
    expiration_from,
    to_seconds,
    to_timedelta,
)


class TestToTimedelta:

    @pytest.mark.parametrize(
        "unit, expected",
        [
            (TimeUnit.DAYS, timedelta(days=2)),
            (TimeUnit.HOURS, timedelta(hours=2)),
            (TimeUnit.MINUTES, timedelta(minutes=2)),
            (TimeUnit.SECONDS, timedelta(seconds=2)),
            (TimeUnit.MILLISECONDS, timedelta(milliseconds=2)),
        ],
    )
    def test_units(self, unit, expected):
        assert to_timedelta(2, unit) == expected

    def test_default_unit_is_minutes(self):
        assert to_timedelta(10) == timedelta(minutes=10)

    def test_timedelta_passes_through(self):
        assert to_timedelta(timedelta(hours=1), TimeUnit.DAYS) == timedelta(hours=1)

    def test_unit_by_name(self):
        assert to_timedelta(3, "hours") == timedelta(hours=3)

    def test_negative_rejected(self):
        with pytest.raises(CallerMisuseError):
            to_timedelta(-1)


class TestToSeconds:

    def test_minutes(self):
        assert to_seconds(5) == 300

    def test_fraction_rounds_up(self):
        assert to_seconds(1500, TimeUnit.MILLISECONDS) == 2

    def test_at_least_one_second(self):
        assert to_seconds(0, TimeUnit.SECONDS) == 1


def test_expiration_from_fixed_now():
    now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert expiration_from(10, TimeUnit.MINUTES, now=now) == datetime(2024, 1, 1, 12, 10, tzinfo=timezone.utc)


def test_expiration_from_is_utc_and_future():
    before = datetime.now(timezone.utc)
    result = expiration_from(1, TimeUnit.HOURS)
    assert result.tzinfo is not None
    assert result - before >= timedelta(hours=1)
