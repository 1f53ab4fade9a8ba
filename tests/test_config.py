import pytest

from sunclock.config import load_settings

pytestmark = pytest.mark.usefixtures("clean_env")


def test_defaults():
    settings = load_settings({})
    assert settings.default_city is None
    assert settings.lang == "en"
    assert settings.geocoder == "off"
    assert settings.user_agent == "SunClock/1.0"


def test_values_are_read():
    settings = load_settings(
        {
            "SUNCLOCK_CITY": " Seoul ",
            "SUNCLOCK_LANG": "KO",
            "SUNCLOCK_GEOCODER": "nominatim",
            "SUNCLOCK_USER_AGENT": "my-clock/2.0",
        }
    )
    assert settings.default_city == "Seoul"
    assert settings.lang == "ko"
    assert settings.geocoder == "nominatim"
    assert settings.user_agent == "my-clock/2.0"


def test_unknown_values_fall_back():
    settings = load_settings({"SUNCLOCK_LANG": "fr", "SUNCLOCK_GEOCODER": "google"})
    assert settings.lang == "en"
    assert settings.geocoder == "off"


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SUNCLOCK_CITY", "Lima")
    assert load_settings().default_city == "Lima"
