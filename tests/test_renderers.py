import dataclasses
from datetime import datetime, timezone

import numpy as np
import pytest
from matplotlib.figure import Figure

from sunclock.compute import compute_clock_state
from sunclock.models import GeoCoordinate
from sunclock.renderers.static import (
    default_stem,
    lit_polygon,
    render_static_clock,
    save_static_clock,
)
from sunclock.renderers.svg_clock import (
    MOON_COUNT,
    render_clock_html,
    render_clock_svg,
    star_field,
)


def test_svg_document(clock_state):
    svg = render_clock_svg(clock_state)
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert f'fill="{clock_state.sky.background}"' in svg
    assert svg.count('<g class="moon"') == MOON_COUNT
    for cls in ("sky", "orbit", "sun", "day", "night", "hour-hand", "second-hand"):
        assert f'class="{cls}"' in svg
    assert "Tokyo" in svg
    assert "Winter" in svg


def test_svg_scales_viewbox(clock_state):
    assert 'viewBox="0 0 400 400"' in render_clock_svg(clock_state, size=400)


def test_svg_korean_labels(clock_state):
    assert "겨울" in render_clock_svg(clock_state, lang="ko")


def test_polar_night_has_no_day_wedge():
    state = compute_clock_state(
        datetime(2023, 12, 21, 12, tzinfo=timezone.utc), GeoCoordinate(80.0, 15.0)
    )
    svg = render_clock_svg(state)
    assert 'class="day"' not in svg
    assert 'class="night"' in svg


def test_html_page_wraps_svg(clock_state):
    page = render_clock_html(clock_state)
    assert page.startswith("<!DOCTYPE html>")
    assert "<svg" in page
    assert clock_state.sky.background in page


def test_star_field_is_deterministic():
    first = star_field(50, 800)
    assert first == star_field(50, 800)
    assert first != star_field(50, 800, seed=7)
    assert all(0 <= s.x < 800 and 0 <= s.y < 800 for s in first)
    assert all(0.3 <= s.r < 1.5 and 0.1 <= s.opacity < 0.6 for s in first)


@pytest.mark.parametrize("phase, side", [(0.1, 1), (0.4, 1), (0.6, -1), (0.9, -1)])
def test_lit_polygon_sits_on_the_lit_side(phase, side):
    verts = lit_polygon(0, 0, 10, phase)
    assert verts.shape == (96, 2)
    limb = verts[:48]
    assert np.all(side * limb[:, 0] >= -1e-9)


def test_render_static_clock(clock_state):
    fig = render_static_clock(clock_state, chart_size=4)
    assert isinstance(fig, Figure)


def test_save_static_clock(clock_state, tmp_path):
    out = save_static_clock(clock_state, tmp_path / "clock.png")
    assert out == tmp_path / "clock.png"
    assert out.stat().st_size > 0


@pytest.mark.parametrize(
    "name, stem",
    [
        ("Tokyo", "Tokyo"),
        ("São Paulo", "São_Paulo"),
        ("10/12 Rue X, Paris", "10_12_Rue_X_Paris"),
        ("../etc", "etc"),
        ("", "sunclock"),
    ],
)
def test_default_stem_is_a_flat_file_name(clock_state, name, stem):
    state = dataclasses.replace(clock_state, location_name=name)
    assert default_stem(state) == f"{stem}__2024_06_21_12_00"
