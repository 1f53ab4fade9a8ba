from datetime import datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sunclock.compute import orbit_angle


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_winter_solstice_sits_at_ninety_degrees():
    assert orbit_angle(_utc(2023, 12, 21, 12)) == pytest.approx(90.0)


def test_leap_year_solstice_day():
    # Day 355 of a leap year is Dec 20.
    assert orbit_angle(_utc(2024, 12, 20, 12)) == pytest.approx(90.0)


def test_one_day_after_solstice():
    assert orbit_angle(_utc(2023, 12, 22)) == pytest.approx(90 + 360 / 365)


def test_new_year_wraps_from_previous_solstice():
    assert orbit_angle(_utc(2023, 1, 1)) == pytest.approx(90 + 11 / 365 * 360)


def test_same_calendar_day_same_angle():
    assert orbit_angle(_utc(2021, 3, 1)) == orbit_angle(_utc(2023, 3, 1))


@given(
    st.datetimes(
        min_value=datetime(1900, 1, 1),
        max_value=datetime(2100, 12, 31),
        timezones=st.just(timezone.utc),
    )
)
def test_orbit_angle_range(instant):
    assert 0 <= orbit_angle(instant) < 360
