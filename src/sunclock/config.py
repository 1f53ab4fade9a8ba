"""Runtime settings read from the environment (``.env`` loaded by entry points)."""

import os
from dataclasses import dataclass

_GEOCODER_CHOICES = ("off", "nominatim")
_LANG_CHOICES = ("en", "ko")


@dataclass(frozen=True)
class Settings:
    """Process-wide options. Missing variables fall back to defaults."""

    default_city: str | None  # SUNCLOCK_CITY; None = registry default
    lang: str  # SUNCLOCK_LANG ("en" or "ko")
    geocoder: str  # SUNCLOCK_GEOCODER ("off" or "nominatim")
    user_agent: str  # SUNCLOCK_USER_AGENT, sent to the geocoder


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from ``os.environ`` (or an explicit mapping, for tests).

    Unknown language or geocoder values fall back to the defaults.
    """
    env = os.environ if environ is None else environ

    lang = env.get("SUNCLOCK_LANG", "en").strip().lower()
    if lang not in _LANG_CHOICES:
        lang = "en"

    geocoder = env.get("SUNCLOCK_GEOCODER", "off").strip().lower()
    if geocoder not in _GEOCODER_CHOICES:
        geocoder = "off"

    return Settings(
        default_city=env.get("SUNCLOCK_CITY", "").strip() or None,
        lang=lang,
        geocoder=geocoder,
        user_agent=env.get("SUNCLOCK_USER_AGENT", "SunClock/1.0"),
    )
