"""CLI entry point for clock-face generation.

    uv run sunclock --city Tokyo --when "2024-06-21 12:00" --format png
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from sunclock.cities import GeocodingError
from sunclock.compute import run
from sunclock.config import load_settings
from sunclock.models import ClockState, QueryInput
from sunclock.renderers.static import default_stem, save_static_clock
from sunclock.renderers.svg_clock import render_clock_svg
from sunclock.timeutil import format_hours

logger = logging.getLogger(__name__)


def summarize(state: ClockState) -> str:
    """One-line text summary of a computed clock state."""
    moon = state.moon
    if moon.moonrise is not None and moon.moonset is None:
        moon_part = "moon up all day"
    elif moon.moonrise is None:
        moon_part = "moon below horizon all day"
    else:
        moon_part = (
            f"moonrise {format_hours(moon.moonrise)} {moon.moonrise_dir}, "
            f"moonset {format_hours(moon.moonset)} {moon.moonset_dir}"
        )
    return (
        f"{state.location_name} {state.instant:%Y-%m-%d %H:%M}: "
        f"sunrise {format_hours(state.solar.sunrise)}, "
        f"sunset {format_hours(state.solar.sunset)}, "
        f"moon phase {state.moon_phase:.3f}, {moon_part}"
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sunclock", description="Render the day/night clock face for a city"
    )
    p.add_argument("--city", default="", help="city name (default: SUNCLOCK_CITY)")
    p.add_argument("--when", default=None, help='local time "YYYY-MM-DD HH:MM" (default: now)')
    p.add_argument("--format", choices=["svg", "png"], default="svg")
    p.add_argument("--output", type=Path, default=None, help="output file path")
    p.add_argument("--lang", choices=["en", "ko"], default=None)
    p.add_argument("--verbose", action="store_true")
    return p


def main(
    argv: list[str] | None = None, now: Callable[[], datetime] | None = None
) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    lang = args.lang or settings.lang
    query = QueryInput(city=args.city, when=args.when)

    try:
        if now is None:
            state = run(query, settings=settings)
        else:
            state = run(query, now=now, settings=settings)
    except (GeocodingError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(summarize(state))

    if args.format == "png":
        path = save_static_clock(state, args.output)
    else:
        path = args.output or Path(f"{default_stem(state)}.svg")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_clock_svg(state, lang=lang), encoding="utf-8")
        logger.info("Saved SVG clock face to %s", path)

    print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
