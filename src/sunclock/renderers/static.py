"""Matplotlib static PNG renderer."""

import logging
import re
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Polygon, Wedge

from sunclock.geometry import FULL_MOON, moon_ring, polar_to_cartesian
from sunclock.models import ClockState
from sunclock.renderers.svg_clock import (
    DAY_CIRCLE_RADIUS,
    MOON_COUNT,
    MOON_ICON_RADIUS,
    MOON_RING_RADIUS,
    ORBIT_RADIUS,
    REF_SIZE,
    STAR_COUNT,
    SUN_RADIUS,
    star_field,
)

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent.parent
_CENTER = REF_SIZE / 2


def lit_polygon(
    cx: float, cy: float, r: float, phase: float, samples: int = 48
) -> np.ndarray:
    """Vertices of the lit part of a moon icon, screen coordinates (y down).

    Same shape as ``geometry.moon_phase_path``: limb half-circle on the
    right while waxing, left while waning, closed by a half-ellipse
    terminator at ``cos(2π·phase)·r`` from the centre line.
    """
    phase = phase % 1.0
    side = 1.0 if phase < 0.5 else -1.0
    k = np.cos(phase * 2 * np.pi)
    theta = np.linspace(0.0, np.pi, samples)
    # Limb runs top → bottom, terminator bottom → top.
    limb = np.column_stack([cx + side * r * np.sin(theta), cy - r * np.cos(theta)])
    back = theta[::-1]
    terminator = np.column_stack(
        [cx + side * k * r * np.sin(back), cy - r * np.cos(back)]
    )
    return np.vstack([limb, terminator])


def default_stem(state: ClockState) -> str:
    """File name stem: location and local time, safe for any place name."""
    name = re.sub(r"[^\w.-]+", "_", state.location_name).strip("._") or "sunclock"
    return f"{name}__{state.instant:%Y_%m_%d_%H_%M}"


def render_static_clock(state: ClockState, chart_size: int = 8) -> Figure:
    """Render a ClockState as a static matplotlib image.

    Args:
        state: Fully computed clock state.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor(state.sky.background)
    ax.set_facecolor(state.sky.background)

    stars = star_field(STAR_COUNT, REF_SIZE)
    alphas = np.array([s.opacity for s in stars]) * state.sky.star_opacity
    colors = np.zeros((len(stars), 4))
    colors[:, :3] = (200 / 255, 210 / 255, 1.0)
    colors[:, 3] = np.clip(alphas, 0.0, 1.0)
    ax.scatter(
        [s.x for s in stars],
        [s.y for s in stars],
        s=np.array([s.r for s in stars]) ** 2 * 4,
        c=colors,
        linewidths=0,
        zorder=1,
    )

    ax.add_patch(
        Circle((_CENTER, _CENTER), ORBIT_RADIUS, fill=False, edgecolor="#333344", lw=1.5)
    )
    ax.add_patch(Circle((_CENTER, _CENTER), SUN_RADIUS, color="#f5c842", zorder=2))

    ex, ey = polar_to_cartesian(_CENTER, _CENTER, ORBIT_RADIUS, state.orbit_angle)

    for marker in moon_ring(
        ex, ey, MOON_RING_RADIUS, MOON_ICON_RADIUS, state.moon_phase, MOON_COUNT
    ):
        alpha = 1.0 if marker.is_current else 0.25
        dark = Circle((marker.x, marker.y), MOON_ICON_RADIUS, color="#1a1a2e")
        dark.set(alpha=alpha, zorder=3)
        ax.add_patch(dark)
        if marker.path == FULL_MOON:
            lit = Circle((marker.x, marker.y), MOON_ICON_RADIUS)
        elif marker.path:
            verts = lit_polygon(marker.x, marker.y, MOON_ICON_RADIUS, marker.phase)
            lit = Polygon(verts, closed=True)
        else:
            continue
        lit.set(color="#e8e0c8", alpha=alpha, zorder=4)
        ax.add_patch(lit)

    # y is inverted below, so Wedge angles match the SVG dial angles.
    ax.add_patch(Circle((ex, ey), DAY_CIRCLE_RADIUS, color="#0a0e1a", zorder=5))
    for arc, color in ((state.day_arc, "#2a4a6b"), (state.night_arc, "#0d1528")):
        if arc.sweep > 0:
            ax.add_patch(
                Wedge(
                    (ex, ey),
                    DAY_CIRCLE_RADIUS,
                    arc.start_angle,
                    arc.start_angle + arc.sweep,
                    color=color,
                    zorder=6,
                )
            )
    ax.add_patch(
        Circle((ex, ey), DAY_CIRCLE_RADIUS, fill=False, edgecolor="#4a9eff", lw=1.5, zorder=7)
    )

    tip = polar_to_cartesian(ex, ey, DAY_CIRCLE_RADIUS - 6, state.hand_angle)
    tail = polar_to_cartesian(ex, ey, -14, state.hand_angle)
    ax.plot([tail[0], tip[0]], [tail[1], tip[1]], color="#ff8c64", linewidth=2.5, zorder=8)
    ax.add_patch(Circle((ex, ey), 5, color="#4a9eff", zorder=9))

    ax.set_xlim(0, REF_SIZE)
    ax.set_ylim(0, REF_SIZE)
    ax.invert_yaxis()
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_static_clock(state: ClockState, output_path: Path | None = None) -> Path:
    """Save a ClockState as a PNG file.

    Args:
        state: Fully computed clock state.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        output_path = _ROOT / "results" / f"{default_stem(state)}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_clock(state)
    fig.savefig(output_path, facecolor=state.sky.background)
    plt.close(fig)
    logger.info("Saved PNG clock face to %s", output_path)
    return output_path
