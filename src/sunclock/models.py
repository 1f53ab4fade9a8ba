"""Data model definitions: the boundaries between input, compute and render layers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    city: str  # City name ("Tokyo", "São Paulo") or free-form place
    when: str | None = None  # "YYYY-MM-DD HH:MM" local time; None = now


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer position on the globe."""

    latitude: float  # Decimal degrees, north positive, [-90, 90]
    longitude: float  # Decimal degrees, east positive, [-180, 180]


@dataclass(frozen=True)
class City:
    """A named entry of the location registry."""

    name: str
    coordinate: GeoCoordinate


@dataclass(frozen=True)
class SolarTimes:
    """Sunrise/sunset as decimal local hours.

    Polar sentinels: (0, 24) for continuous daylight, (12, 12) for
    continuous darkness.
    """

    sunrise: float
    sunset: float

    @property
    def day_length(self) -> float:
        return self.sunset - self.sunrise


@dataclass(frozen=True)
class MoonRiseSet:
    """Moonrise/moonset as decimal local hours with compass directions.

    ``moonrise=0, moonset=None`` means the moon stays up all day;
    both ``None`` means it never clears the horizon.
    """

    moonrise: float | None
    moonset: float | None
    moonrise_dir: str  # "N", "NE", ... or "" when there is no rise
    moonset_dir: str  # "" when there is no set


@dataclass(frozen=True)
class SkyColor:
    """Background tint and star-field visibility for a time of day."""

    background: str  # "#rrggbb"
    star_opacity: float  # 0 = stars hidden, 1 = full night


@dataclass(frozen=True)
class DayArc:
    """A wedge of the 24-hour dial, in dial degrees."""

    start_angle: float
    end_angle: float
    sweep: float  # Forward span start → end, [0, 360]


@dataclass(frozen=True)
class MoonMarker:
    """One icon of the lunar phase ring."""

    index: int  # 0 = today, i = i days ahead
    x: float
    y: float
    phase: float  # [0, 1)
    path: str  # SVG path, "" (new moon) or "full"
    is_current: bool


@dataclass(frozen=True)
class ClockState:
    """The sole input to renderers. Fully computed state."""

    instant: datetime  # Aware datetime in the observer's local clock
    location_name: str
    coordinate: GeoCoordinate
    day_of_year: int
    decimal_hour: float  # Local clock hour with fractional part
    solar: SolarTimes
    day_arc: DayArc
    night_arc: DayArc
    hand_angle: float  # 24-hour hand, dial degrees
    second_angle: float  # Second hand, degrees (0 = 3 o'clock)
    orbit_angle: float  # Earth's position on the orbit circle, [0, 360)
    moon_phase: float  # [0, 1)
    moon: MoonRiseSet
    sky: SkyColor

    @property
    def southern_hemisphere(self) -> bool:
        return self.coordinate.latitude < 0
