from datetime import datetime, timezone

import pytest

from sunclock.cities import GeocodingError
from sunclock.compute import compute_clock_state, parse_when, run
from sunclock.config import load_settings
from sunclock.models import GeoCoordinate, QueryInput

pytestmark = pytest.mark.usefixtures("clean_env")

EQUATOR = GeoCoordinate(latitude=0.0, longitude=0.0)


def test_clock_state_at_noon_on_the_equator():
    instant = datetime(2024, 6, 21, 12, 0, 15, tzinfo=timezone.utc)
    state = compute_clock_state(instant, EQUATOR, "Null Island")

    assert state.location_name == "Null Island"
    assert state.day_of_year == 173
    assert state.decimal_hour == pytest.approx(12 + 15 / 3600)
    assert state.hand_angle == pytest.approx(90, abs=0.1)
    assert state.second_angle == pytest.approx(0.0)
    assert state.day_arc.sweep == pytest.approx(180.0)
    assert state.sky.background == "#7fb3e0"
    assert 0 <= state.orbit_angle < 360
    assert 0 <= state.moon_phase < 1
    assert not state.southern_hemisphere


def test_naive_instant_is_read_as_local_time():
    state = compute_clock_state(datetime(2024, 1, 1, 8, 30), EQUATOR)
    assert state.instant.tzinfo is not None
    assert state.decimal_hour == pytest.approx(8.5)


def test_southern_hemisphere_flag():
    state = compute_clock_state(
        datetime(2024, 1, 1, tzinfo=timezone.utc), GeoCoordinate(-33.87, 151.21)
    )
    assert state.southern_hemisphere


def test_clock_state_is_deterministic(tokyo, summer_noon_jst):
    assert compute_clock_state(summer_noon_jst, tokyo) == compute_clock_state(
        summer_noon_jst, tokyo
    )


def test_parse_when():
    parsed = parse_when("2024-03-20 06:45")
    assert (parsed.hour, parsed.minute) == (6, 45)
    assert parsed.tzinfo is not None
    with pytest.raises(ValueError):
        parse_when("20 March 2024")


def test_run_with_explicit_time():
    state = run(QueryInput("Tokyo", "2024-03-20 06:00"), settings=load_settings({}))
    assert state.location_name == "Tokyo"
    assert state.instant.hour == 6
    assert state.coordinate.latitude == pytest.approx(35.6762)


def test_run_uses_injected_clock():
    fixed = datetime(2024, 9, 22, 18, 30, tzinfo=timezone.utc)
    state = run(QueryInput("London"), now=lambda: fixed, settings=load_settings({}))
    assert state.instant == fixed


def test_run_empty_city_uses_default():
    fixed = datetime(2024, 9, 22, 18, 30, tzinfo=timezone.utc)
    settings = load_settings({"SUNCLOCK_CITY": "Cairo"})
    assert run(QueryInput(""), now=lambda: fixed, settings=settings).location_name == "Cairo"


def test_run_errors():
    settings = load_settings({})
    with pytest.raises(GeocodingError):
        run(QueryInput("Atlantis"), settings=settings)
    with pytest.raises(ValueError):
        run(QueryInput("Tokyo", "tomorrow"), settings=settings)
