"""SVG clock-face renderer.

Produces a standalone SVG string (and an HTML wrapper for embedding via
st.components.v1.html()). The face is drawn on a square viewBox of side
``size``:

  - the sun sits at the centre, Earth travels on the orbit circle at
    ``state.orbit_angle`` (SVG angles, y grows downward);
  - around Earth, the 24-hour dial shows the day wedge from sunrise to
    sunset, with 6:00 at 3 o'clock and noon at the bottom;
  - a ring of 30 moon icons shows today's phase and the next 29 days.
"""

from __future__ import annotations

import html
from dataclasses import dataclass

from sunclock.geometry import (
    FULL_MOON,
    arc_path,
    hour_to_angle,
    moon_ring,
    polar_to_cartesian,
)
from sunclock.i18n import season_labels, t
from sunclock.models import ClockState
from sunclock.timeutil import format_hours

# Layout at the reference size of 800; scaled linearly for other sizes.
REF_SIZE = 800
ORBIT_RADIUS = 280
DAY_CIRCLE_RADIUS = 70
SUN_RADIUS = 30
MOON_RING_RADIUS = 95
MOON_ICON_RADIUS = 5
MOON_COUNT = 30
_LABEL_OFFSET = 32
STAR_COUNT = 120
_STAR_SEED = 42

_SUN_COLOR = "#f5c842"
_ORBIT_COLOR = "#334"
_DAY_COLOR = "#2a4a6b"
_NIGHT_COLOR = "#0d1528"
_NIGHT_BASE_COLOR = "#0a0e1a"
_DIAL_BORDER_COLOR = "#4a9eff"
_MOON_DARK_COLOR = "#1a1a2e"
_MOON_LIT_CURRENT = "#e8e0c8"
_MOON_LIT_OTHER = "#c8c0a8"
_HAND_COLOR = "rgba(255, 140, 100, 0.85)"
_FONT = "system-ui, sans-serif"

_MASK32 = 0xFFFFFFFF


@dataclass(frozen=True)
class FieldStar:
    """A decorative background star."""

    x: float
    y: float
    r: float
    opacity: float


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def _mulberry32(seed: int):
    """Tiny seeded PRNG so the star field is identical on every frame."""
    state = seed & _MASK32

    def rand() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK32
        z = _imul(state ^ (state >> 15), state | 1)
        z ^= (z + _imul(z ^ (z >> 7), z | 61)) & _MASK32
        return ((z ^ (z >> 14)) & _MASK32) / 4294967296

    return rand


def star_field(count: int, size: float, seed: int = _STAR_SEED) -> tuple[FieldStar, ...]:
    """Deterministic background stars spread over a ``size`` square."""
    rng = _mulberry32(seed)
    stars: list[FieldStar] = []
    for _ in range(count):
        stars.append(
            FieldStar(
                x=rng() * size,
                y=rng() * size,
                r=rng() * 1.2 + 0.3,
                opacity=rng() * 0.5 + 0.1,
            )
        )
    return tuple(stars)


def _f(value: float) -> str:
    return f"{value:.2f}"


def _season_label_parts(
    state: ClockState, center: float, scale: float, lang: str
) -> list[str]:
    orbit_r = ORBIT_RADIUS * scale
    offset = _LABEL_OFFSET * scale
    placements = {
        "bottom": (center, center + orbit_r + offset, "middle", 16),
        "top": (center, center - orbit_r - offset + 10 * scale, "middle", -12),
        "right": (center + orbit_r + offset, center + 5 * scale, "start", 16),
        "left": (center - orbit_r - offset, center + 5 * scale, "end", 16),
    }
    parts: list[str] = []
    for position, season, date in season_labels(state.southern_hemisphere, lang):
        x, y, anchor, dy = placements[position]
        parts.append(
            f'<g class="season">'
            f'<text x="{_f(x)}" y="{_f(y)}" fill="#667" font-size="{_f(14 * scale)}"'
            f' font-family="{_FONT}" text-anchor="{anchor}">{html.escape(season)}</text>'
            f'<text x="{_f(x)}" y="{_f(y + dy * scale)}" fill="#445"'
            f' font-size="{_f(11 * scale)}" font-family="{_FONT}"'
            f' text-anchor="{anchor}">{html.escape(date)}</text>'
            f"</g>"
        )
    return parts


def _moon_ring_parts(state: ClockState, ex: float, ey: float, scale: float) -> list[str]:
    icon_r = MOON_ICON_RADIUS * scale
    parts: list[str] = []
    for marker in moon_ring(
        ex, ey, MOON_RING_RADIUS * scale, icon_r, state.moon_phase, MOON_COUNT
    ):
        opacity = 1 if marker.is_current else 0.25
        stroke = "rgba(255,255,255,0.4)" if marker.is_current else "rgba(255,255,255,0.08)"
        stroke_w = 0.6 if marker.is_current else 0.3
        lit = _MOON_LIT_CURRENT if marker.is_current else _MOON_LIT_OTHER
        parts.append(f'<g class="moon" opacity="{opacity}">')
        parts.append(
            f'<circle cx="{_f(marker.x)}" cy="{_f(marker.y)}" r="{_f(icon_r)}"'
            f' fill="{_MOON_DARK_COLOR}" stroke="{stroke}" stroke-width="{stroke_w}"/>'
        )
        if marker.path == FULL_MOON:
            parts.append(
                f'<circle cx="{_f(marker.x)}" cy="{_f(marker.y)}" r="{_f(icon_r)}"'
                f' fill="{lit}"/>'
            )
        elif marker.path:
            parts.append(f'<path d="{marker.path}" fill="{lit}"/>')
        parts.append("</g>")
    return parts


def _dial_parts(state: ClockState, ex: float, ey: float, scale: float) -> list[str]:
    r = DAY_CIRCLE_RADIUS * scale
    parts = [
        "<defs>"
        f'<clipPath id="earth-clip"><circle cx="{_f(ex)}" cy="{_f(ey)}" r="{_f(r)}"/>'
        "</clipPath></defs>",
        f'<circle cx="{_f(ex)}" cy="{_f(ey)}" r="{_f(r)}" fill="{_NIGHT_BASE_COLOR}"/>',
    ]

    day_d = arc_path(ex, ey, r, state.day_arc)
    night_d = arc_path(ex, ey, r, state.night_arc)
    if day_d:
        parts.append(
            f'<path class="day" d="{day_d}" fill="{_DAY_COLOR}" clip-path="url(#earth-clip)"/>'
        )
    if night_d:
        parts.append(
            f'<path class="night" d="{night_d}" fill="{_NIGHT_COLOR}"'
            ' clip-path="url(#earth-clip)"/>'
        )
    parts.append(
        f'<circle cx="{_f(ex)}" cy="{_f(ey)}" r="{_f(r)}" fill="none"'
        f' stroke="{_DIAL_BORDER_COLOR}" stroke-width="1.5"/>'
    )

    # Noon and midnight ticks
    for hour, alpha in ((12, 0.3), (0, 0.15)):
        angle = hour_to_angle(hour)
        x1, y1 = polar_to_cartesian(ex, ey, r - 2 * scale, angle)
        x2, y2 = polar_to_cartesian(ex, ey, r - 10 * scale, angle)
        parts.append(
            f'<line x1="{_f(x1)}" y1="{_f(y1)}" x2="{_f(x2)}" y2="{_f(y2)}"'
            f' stroke="rgba(255, 255, 255, {alpha})" stroke-width="1"/>'
        )

    # Second hand
    sx1, sy1 = polar_to_cartesian(ex, ey, -10 * scale, state.second_angle)
    sx2, sy2 = polar_to_cartesian(ex, ey, r - 8 * scale, state.second_angle)
    parts.append(
        f'<line class="second-hand" x1="{_f(sx1)}" y1="{_f(sy1)}" x2="{_f(sx2)}"'
        f' y2="{_f(sy2)}" stroke="rgba(255, 255, 255, 0.12)" stroke-width="0.75"'
        ' stroke-linecap="round"/>'
    )

    # 24-hour hand: tapered kite from tail through the hub to the tip
    a = state.hand_angle
    tip = polar_to_cartesian(ex, ey, r - 6 * scale, a)
    tail = polar_to_cartesian(ex, ey, -14 * scale, a)
    side1 = polar_to_cartesian(ex, ey, 3 * scale, a + 90)
    side2 = polar_to_cartesian(ex, ey, 3 * scale, a - 90)
    points = " ".join(f"{_f(x)},{_f(y)}" for x, y in (tip, side1, tail, side2))
    parts.append(f'<polygon class="hour-hand" points="{points}" fill="{_HAND_COLOR}"/>')

    parts.append(
        f'<circle cx="{_f(ex)}" cy="{_f(ey)}" r="{_f(5 * scale)}" fill="{_DIAL_BORDER_COLOR}"/>'
    )
    parts.append(
        f'<circle cx="{_f(ex)}" cy="{_f(ey)}" r="{_f(2.5 * scale)}" fill="{_NIGHT_COLOR}"/>'
    )
    return parts


def _caption(state: ClockState, scale: float, lang: str) -> str:
    moon = state.moon
    if moon.moonrise is not None and moon.moonset is None:
        moon_text = t("moon_always_up", lang)
    elif moon.moonrise is None:
        moon_text = t("moon_never_up", lang)
    else:
        moon_text = (
            f"↑{format_hours(moon.moonrise)} {moon.moonrise_dir}"
            f"  ↓{format_hours(moon.moonset)} {moon.moonset_dir}"
        )
    lines = (
        state.location_name,
        f"{t('label_sunrise', lang)} {format_hours(state.solar.sunrise)}"
        f"  {t('label_sunset', lang)} {format_hours(state.solar.sunset)}",
        f"{t('label_moonrise', lang)}/{t('label_moonset', lang)} {moon_text}",
    )
    tspans = "".join(
        f'<tspan x="{_f(16 * scale)}" dy="{_f((0 if i == 0 else 16) * scale)}">'
        f"{html.escape(line)}</tspan>"
        for i, line in enumerate(lines)
        if line
    )
    return (
        f'<text class="caption" x="{_f(16 * scale)}" y="{_f(28 * scale)}" fill="#8899aa"'
        f' font-size="{_f(13 * scale)}" font-family="{_FONT}">{tspans}</text>'
    )


def render_clock_svg(state: ClockState, size: int = REF_SIZE, lang: str = "en") -> str:
    """Return the full clock face as a standalone SVG document.

    Args:
        state: Fully computed clock state.
        size: Side of the square viewBox in user units.
        lang: Language code ('ko' or 'en') for labels.

    Returns:
        SVG markup string.
    """
    scale = size / REF_SIZE
    center = size / 2
    ex, ey = polar_to_cartesian(center, center, ORBIT_RADIUS * scale, state.orbit_angle)

    star_parts = [
        f'<circle cx="{_f(s.x)}" cy="{_f(s.y)}" r="{_f(s.r * scale)}"'
        f' fill="rgba(200, 210, 255, {s.opacity * state.sky.star_opacity:.3f})"/>'
        for s in star_field(STAR_COUNT, size)
    ]

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {size} {size}"'
        f' width="{size}" height="{size}">',
        f'<rect class="sky" x="0" y="0" width="{size}" height="{size}"'
        f' fill="{state.sky.background}"/>',
        *star_parts,
        f'<circle class="orbit" cx="{_f(center)}" cy="{_f(center)}"'
        f' r="{_f(ORBIT_RADIUS * scale)}" fill="none" stroke="{_ORBIT_COLOR}"'
        ' stroke-width="1.5"/>',
        *_season_label_parts(state, center, scale, lang),
        f'<circle class="sun" cx="{_f(center)}" cy="{_f(center)}"'
        f' r="{_f(SUN_RADIUS * scale)}" fill="{_SUN_COLOR}"/>',
        f'<circle cx="{_f(center)}" cy="{_f(center)}" r="{_f((SUN_RADIUS + 8) * scale)}"'
        f' fill="none" stroke="{_SUN_COLOR}33" stroke-width="4"/>',
        *_moon_ring_parts(state, ex, ey, scale),
        *_dial_parts(state, ex, ey, scale),
        _caption(state, scale, lang),
        "</svg>",
    ]
    return "\n".join(parts)


def render_clock_html(state: ClockState, lang: str = "en") -> str:
    """Return a self-contained HTML page with the clock SVG centred on the sky colour.

    Suitable for st.components.v1.html(); the SVG scales to the iframe width.
    """
    svg = render_clock_svg(state, lang=lang)
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{
    width: 100%;
    background: {state.sky.background};
    overflow: hidden;
}}
#clock svg {{
    display: block;
    width: 100%;
    max-width: {REF_SIZE}px;
    height: auto;
    margin: 0 auto;
}}
</style>
</head>
<body>
<div id="clock">
{svg}
</div>
</body>
</html>"""
