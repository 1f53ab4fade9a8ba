"""Dial and moon-icon geometry: maps engine outputs onto SVG coordinates.

Dial convention: 6:00 sits at 0° (3 o'clock in screen space) and the dial
turns clockwise once per day, so noon is at the bottom and midnight at
the top. Angles follow SVG screen coordinates (y grows downward).
"""

import math

from sunclock.models import DayArc, MoonMarker, SolarTimes

SYNODIC_PERIOD = 29.53058770576  # days
FULL_MOON = "full"

# Phase windows treated as a dark disc / filled disc.
_NEW_MOON_WINDOW = 0.01
_FULL_MOON_WINDOW = 0.01


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def hour_to_angle(hour: float) -> float:
    """Map a decimal hour onto the 24-hour dial, 6:00 at 0°."""
    return ((hour - 6) / 24) * 360


def polar_to_cartesian(
    cx: float, cy: float, r: float, angle_deg: float
) -> tuple[float, float]:
    angle_rad = math.radians(angle_deg)
    return cx + r * math.cos(angle_rad), cy + r * math.sin(angle_rad)


def day_arc(solar: SolarTimes) -> DayArc:
    """Dial wedge from sunrise forward to sunset."""
    sweep = max(0.0, min(360.0, solar.day_length / 24 * 360))
    return DayArc(
        start_angle=hour_to_angle(solar.sunrise),
        end_angle=hour_to_angle(solar.sunset),
        sweep=sweep,
    )


def night_arc(solar: SolarTimes) -> DayArc:
    """Complement of :func:`day_arc`: sunset forward to sunrise."""
    day = day_arc(solar)
    return DayArc(
        start_angle=day.end_angle,
        end_angle=day.start_angle,
        sweep=360.0 - day.sweep,
    )


def describe_arc(
    cx: float,
    cy: float,
    r: float,
    start_angle: float,
    end_angle: float,
    sweep: float | None = None,
) -> str:
    """SVG pie-wedge path from start_angle clockwise to end_angle.

    ``sweep`` overrides the forward span derived from the two angles, which
    is needed to tell a full turn from an empty one. Empty wedges yield "".
    """
    if sweep is None:
        sweep = (end_angle - start_angle) % 360
    if sweep <= 0:
        return ""
    if sweep >= 360:
        # Coincident endpoints draw nothing in SVG; split the disc in two.
        return (
            f"M {_fmt(cx - r)} {_fmt(cy)} "
            f"A {_fmt(r)} {_fmt(r)} 0 1 1 {_fmt(cx + r)} {_fmt(cy)} "
            f"A {_fmt(r)} {_fmt(r)} 0 1 1 {_fmt(cx - r)} {_fmt(cy)} Z"
        )
    x1, y1 = polar_to_cartesian(cx, cy, r, start_angle)
    x2, y2 = polar_to_cartesian(cx, cy, r, start_angle + sweep)
    large_arc = 1 if sweep > 180 else 0
    return (
        f"M {_fmt(cx)} {_fmt(cy)} L {_fmt(x1)} {_fmt(y1)} "
        f"A {_fmt(r)} {_fmt(r)} 0 {large_arc} 1 {_fmt(x2)} {_fmt(y2)} Z"
    )


def arc_path(cx: float, cy: float, r: float, arc: DayArc) -> str:
    return describe_arc(cx, cy, r, arc.start_angle, arc.end_angle, arc.sweep)


def moon_phase_path(cx: float, cy: float, r: float, phase: float) -> str:
    """SVG path of the lit part of a moon icon.

    Returns "" near new moon (nothing to draw) and ``FULL_MOON`` near full
    moon, where the caller draws a plain disc. Waxing moons are lit on the
    right limb, waning moons on the left. The terminator is a half-ellipse
    of half-width ``|cos(2π·phase)|·r`` that bulges toward the lit limb for
    crescents and toward the dark limb for gibbous phases.
    """
    phase = phase % 1.0

    if phase < _NEW_MOON_WINDOW or phase > 1 - _NEW_MOON_WINDOW:
        return ""
    if abs(phase - 0.5) < _FULL_MOON_WINDOW:
        return FULL_MOON

    k = math.cos(phase * 2 * math.pi)
    rx = abs(k) * r
    crescent = k > 0

    if phase < 0.5:
        # Right limb top→bottom clockwise, terminator back up.
        limb_sweep = 1
        terminator_sweep = 0 if crescent else 1
    else:
        # Left limb top→bottom counter-clockwise, terminator back up.
        limb_sweep = 0
        terminator_sweep = 1 if crescent else 0

    top = f"{_fmt(cx)} {_fmt(cy - r)}"
    bottom = f"{_fmt(cx)} {_fmt(cy + r)}"
    return (
        f"M {top} "
        f"A {_fmt(r)} {_fmt(r)} 0 0 {limb_sweep} {bottom} "
        f"A {_fmt(rx)} {_fmt(r)} 0 0 {terminator_sweep} {top} Z"
    )


def moon_ring(
    cx: float,
    cy: float,
    ring_radius: float,
    icon_radius: float,
    phase: float,
    count: int = 30,
) -> tuple[MoonMarker, ...]:
    """Phase icons for today and the following ``count - 1`` days.

    Index 0 sits at the top of the ring; later days run counter-clockwise,
    the direction the moon travels around the Earth.
    """
    markers: list[MoonMarker] = []
    for i in range(count):
        phase_i = (phase + i / SYNODIC_PERIOD) % 1.0
        angle = -90 - (i / count) * 360
        x, y = polar_to_cartesian(cx, cy, ring_radius, angle)
        markers.append(
            MoonMarker(
                index=i,
                x=x,
                y=y,
                phase=phase_i,
                path=moon_phase_path(x, y, icon_radius, phase_i),
                is_current=i == 0,
            )
        )
    return tuple(markers)
