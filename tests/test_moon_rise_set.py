import math
from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sunclock.compute import (
    COMPASS_POINTS,
    azimuth_to_compass,
    greenwich_sidereal_degrees,
    moon_position,
    moon_rise_set,
)
from sunclock.timeutil import decimal_hour

J2000 = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)
JST = timezone(timedelta(hours=9))

RISING_SIDE = ("N", "NE", "E", "SE", "S")
SETTING_SIDE = ("S", "SW", "W", "NW", "N")
TOKYO = (35.6762, 139.6503)


def as_tuple(moon):
    return (moon.moonrise, moon.moonset, moon.moonrise_dir, moon.moonset_dir)


@pytest.mark.parametrize(
    "azimuth, expected",
    [
        (0, "N"),
        (22.4, "N"),
        (22.5, "NE"),
        (45, "NE"),
        (67.5, "E"),
        (90, "E"),
        (180, "S"),
        (270, "W"),
        (315, "NW"),
        (337.5, "N"),
        (359.9, "N"),
        (-10, "N"),
    ],
)
def test_azimuth_to_compass(azimuth, expected):
    assert azimuth_to_compass(azimuth) == expected


def test_sidereal_time_at_j2000():
    assert greenwich_sidereal_degrees(J2000) == pytest.approx(280.46061837)


def test_moon_position_at_j2000():
    ra, dec = moon_position(J2000)
    assert ra == pytest.approx(221.9, abs=0.1)
    assert dec == pytest.approx(-10.79, abs=0.1)

def moon_altitude(moment: datetime, latitude: float, longitude: float) -> float:
    ra, dec = moon_position(moment)
    hour_angle = math.radians(greenwich_sidereal_degrees(moment) + longitude - ra)
    phi, delta = math.radians(latitude), math.radians(dec)
    return math.degrees(
        math.asin(
            math.sin(phi) * math.sin(delta)
            + math.cos(phi) * math.cos(delta) * math.cos(hour_angle)
        )
    )


def event_moment(instant: datetime, hour: float) -> datetime:
    return instant + timedelta(hours=hour - decimal_hour(instant))


def extreme_declinations() -> tuple[datetime, datetime]:
    """Instants of the highest and lowest declination in February 2024."""
    start = datetime(2024, 2, 1, tzinfo=timezone.utc)
    samples = [start + timedelta(hours=6 * i) for i in range(4 * 28)]
    return (
        max(samples, key=lambda t: moon_position(t)[1]),
        min(samples, key=lambda t: moon_position(t)[1]),
    )


def test_mid_latitude_rise_and_set():
    instant = datetime(2024, 6, 21, 12, tzinfo=JST)
    moon = moon_rise_set(instant, *TOKYO)

    assert moon.moonrise is not None and moon.moonset is not None
    assert 0 < moon.moonset - moon.moonrise < 25
    assert moon.moonrise_dir in RISING_SIDE
    assert moon.moonset_dir in SETTING_SIDE
    transit = (moon.moonrise + moon.moonset) / 2
    assert abs(transit - decimal_hour(instant)) <= 13


@pytest.mark.parametrize("day", range(10, 24))
def test_events_sit_on_the_horizon(day):
    instant = datetime(2024, 6, day, 12, tzinfo=JST)
    moon = moon_rise_set(instant, *TOKYO)

    for hour in (moon.moonrise, moon.moonset):
        altitude = moon_altitude(event_moment(instant, hour), *TOKYO)
        assert altitude == pytest.approx(0.125, abs=0.05)


def test_result_is_deterministic():
    instant = datetime(2024, 6, 21, 12, tzinfo=JST)
    assert moon_rise_set(instant, 35.0, 139.0) == moon_rise_set(instant, 35.0, 139.0)


def test_poles_give_sentinels():
    up_all_day = (0.0, None, "", "")
    never_up = (None, None, "", "")
    high, low = extreme_declinations()
    assert moon_position(high)[1] > 15
    assert moon_position(low)[1] < -15

    assert as_tuple(moon_rise_set(high, 90.0, 0.0)) == up_all_day
    assert as_tuple(moon_rise_set(high, -90.0, 0.0)) == never_up
    assert as_tuple(moon_rise_set(low, 90.0, 0.0)) == never_up
    assert as_tuple(moon_rise_set(low, -90.0, 0.0)) == up_all_day


def test_moon_never_sets_far_north_when_declination_is_high():
    high, _ = extreme_declinations()
    moon = moon_rise_set(high, 80.0, 0.0)
    assert moon.moonrise == 0.0
    assert moon.moonset is None


@given(
    instant=st.datetimes(
        min_value=datetime(1950, 1, 1),
        max_value=datetime(2050, 12, 31),
        timezones=st.just(timezone.utc),
    ),
    latitude=st.floats(min_value=-90, max_value=90),
    longitude=st.floats(min_value=-180, max_value=180),
)
def test_every_latitude_gets_a_well_formed_answer(instant, latitude, longitude):
    moon = moon_rise_set(instant, latitude, longitude)
    if moon.moonrise is None:
        assert moon.moonset is None
        assert moon.moonrise_dir == moon.moonset_dir == ""
    elif moon.moonset is None:
        assert moon.moonrise == 0.0
        assert moon.moonrise_dir == moon.moonset_dir == ""
    else:
        assert moon.moonrise <= moon.moonset
        assert moon.moonrise_dir in COMPASS_POINTS
        assert moon.moonset_dir in COMPASS_POINTS
