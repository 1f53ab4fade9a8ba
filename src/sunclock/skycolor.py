"""Time-of-day sky tint, keyed to sunrise and sunset.

The sky brightens through five anchors on the way up from sunrise and
darkens through the same anchors mirrored around sunset, giving eight
linear segments per day. Whichever of the two ramps is darker wins, so
short winter days never reach full daylight. The polar sentinels of
``solar_times`` are handled separately: (0, 24) is always full daylight
and (12, 12) is always full night, where the ramps alone would leave a
zero-length day at horizon twilight.
"""

import numpy as np

from sunclock.models import SkyColor

# (hours after sunrise / before sunset, colour, star-field opacity)
_ANCHORS: tuple[tuple[float, str, float], ...] = (
    (-1.5, "#05070f", 1.0),  # first light; earlier hours stay deep night
    (-0.75, "#0b1a3a", 0.8),  # navy
    (0.0, "#3b3f6e", 0.4),  # twilight at the horizon crossing
    (1.0, "#4f7fb8", 0.1),  # dawn blue
    (2.75, "#7fb3e0", 0.0),  # full daylight
)

_OFFSETS = np.array([a[0] for a in _ANCHORS])
_LEVELS = np.arange(len(_ANCHORS), dtype=float)
_RGB = np.array(
    [[int(c[i : i + 2], 16) for i in (1, 3, 5)] for _, c, _ in _ANCHORS],
    dtype=float,
)
_STAR_OPACITY = np.array([a[2] for a in _ANCHORS])


def _level(offset_hours: float) -> float:
    """Brightness level 0 (night) … 4 (day) for hours past the horizon crossing."""
    return float(np.interp(offset_hours, _OFFSETS, _LEVELS))


def _hex(rgb: np.ndarray) -> str:
    r, g, b = (int(round(v)) for v in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def sky_level(hour: float, sunrise: float, sunset: float) -> float:
    day_length = sunset - sunrise
    if day_length >= 24:
        return float(_LEVELS[-1])
    if day_length <= 0:
        return float(_LEVELS[0])
    morning = _level(hour - sunrise)
    evening = _level(sunset - hour)
    return min(morning, evening)


def sky_color(hour: float, sunrise: float, sunset: float) -> SkyColor:
    """Background colour and star opacity for a decimal local hour.

    Args:
        hour: Local clock time in decimal hours, [0, 24).
        sunrise: Decimal hour of sunrise from ``solar_times``.
        sunset: Decimal hour of sunset from ``solar_times``.

    Returns:
        SkyColor with a ``#rrggbb`` background and star opacity in [0, 1].
    """
    level = sky_level(hour, sunrise, sunset)
    rgb = np.array([np.interp(level, _LEVELS, _RGB[:, ch]) for ch in range(3)])
    opacity = float(np.interp(level, _LEVELS, _STAR_OPACITY))
    return SkyColor(background=_hex(rgb), star_opacity=round(opacity, 4))
