from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sunclock.compute import REFERENCE_NEW_MOON, moon_phase
from sunclock.geometry import SYNODIC_PERIOD

instants = st.datetimes(
    min_value=datetime(1900, 1, 1),
    max_value=datetime(2100, 12, 31),
    timezones=st.just(timezone.utc),
)


def _circular_distance(a: float, b: float) -> float:
    d = abs(a - b)
    return min(d, 1 - d)


def test_reference_instant_is_new_moon():
    assert moon_phase(REFERENCE_NEW_MOON) == 0.0


def test_half_period_is_full_moon():
    half = REFERENCE_NEW_MOON + timedelta(days=SYNODIC_PERIOD / 2)
    assert moon_phase(half) == pytest.approx(0.5, abs=1e-6)


def test_known_full_moon():
    # Full moon of 2024-04-23 23:49 UTC.
    instant = datetime(2024, 4, 23, 23, 49, tzinfo=timezone.utc)
    assert moon_phase(instant) == pytest.approx(0.5, abs=0.05)


def test_before_reference_stays_in_range():
    phase = moon_phase(datetime(1990, 5, 17, 3, tzinfo=timezone.utc))
    assert 0 <= phase < 1


@given(instants)
def test_phase_range(instant):
    assert 0 <= moon_phase(instant) < 1


@given(instants)
def test_phase_repeats_every_synodic_month(instant):
    later = instant + timedelta(days=SYNODIC_PERIOD)
    assert _circular_distance(moon_phase(instant), moon_phase(later)) < 1e-6
