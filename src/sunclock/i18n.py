"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "해시계",
        "en": "SunClock",
    },
    "label_city": {
        "ko": "도시",
        "en": "City",
    },
    "label_sunrise": {
        "ko": "일출",
        "en": "Sunrise",
    },
    "label_sunset": {
        "ko": "일몰",
        "en": "Sunset",
    },
    "label_moonrise": {
        "ko": "월출",
        "en": "Moonrise",
    },
    "label_moonset": {
        "ko": "월몰",
        "en": "Moonset",
    },
    "label_phase": {
        "ko": "달의 위상",
        "en": "Moon phase",
    },
    "label_day_length": {
        "ko": "낮의 길이",
        "en": "Day length",
    },
    "moon_always_up": {
        "ko": "지지 않음",
        "en": "Always up",
    },
    "moon_never_up": {
        "ko": "뜨지 않음",
        "en": "Not visible",
    },
    "error_city": {
        "ko": "도시를 찾을 수 없어요. ({error})",
        "en": "City not found. ({error})",
    },
    "season_winter": {
        "ko": "겨울",
        "en": "Winter",
    },
    "season_spring": {
        "ko": "봄",
        "en": "Spring",
    },
    "season_summer": {
        "ko": "여름",
        "en": "Summer",
    },
    "season_autumn": {
        "ko": "가을",
        "en": "Autumn",
    },
    "date_dec_solstice": {
        "ko": "12월 21일",
        "en": "Dec 21",
    },
    "date_mar_equinox": {
        "ko": "3월 20일",
        "en": "Mar 20",
    },
    "date_jun_solstice": {
        "ko": "6월 21일",
        "en": "Jun 21",
    },
    "date_sep_equinox": {
        "ko": "9월 22일",
        "en": "Sep 22",
    },
}

# Orbit-dial positions of the solstices/equinoxes in the order Earth passes
# them: the orbit angle grows clockwise on screen from 90° (bottom).
_SEASON_POINTS: tuple[tuple[str, str], ...] = (
    ("bottom", "date_dec_solstice"),
    ("left", "date_mar_equinox"),
    ("top", "date_jun_solstice"),
    ("right", "date_sep_equinox"),
)
_NORTHERN_SEASONS = ("season_winter", "season_spring", "season_summer", "season_autumn")
_SOUTHERN_SEASONS = ("season_summer", "season_autumn", "season_winter", "season_spring")


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def season_labels(southern: bool, lang: str) -> tuple[tuple[str, str, str], ...]:
    """(position, season, date) for the four cardinal points of the orbit dial.

    The dates stay fixed to the orbit; the season names swap for observers
    south of the equator.
    """
    names = _SOUTHERN_SEASONS if southern else _NORTHERN_SEASONS
    return tuple(
        (position, t(season, lang), t(date_key, lang))
        for (position, date_key), season in zip(_SEASON_POINTS, names)
    )
