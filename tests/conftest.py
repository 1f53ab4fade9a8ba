from datetime import datetime, timedelta, timezone

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from sunclock.compute import compute_clock_state  # noqa: E402
from sunclock.models import GeoCoordinate  # noqa: E402

JST = timezone(timedelta(hours=9))


@pytest.fixture
def tokyo() -> GeoCoordinate:
    return GeoCoordinate(latitude=35.6762, longitude=139.6503)


@pytest.fixture
def summer_noon_jst() -> datetime:
    return datetime(2024, 6, 21, 12, 0, 0, tzinfo=JST)


@pytest.fixture
def clock_state(tokyo, summer_noon_jst):
    return compute_clock_state(summer_noon_jst, tokyo, location_name="Tokyo")


@pytest.fixture
def clean_env(monkeypatch):
    for var in (
        "SUNCLOCK_CITY",
        "SUNCLOCK_LANG",
        "SUNCLOCK_GEOCODER",
        "SUNCLOCK_USER_AGENT",
    ):
        monkeypatch.delenv(var, raising=False)
