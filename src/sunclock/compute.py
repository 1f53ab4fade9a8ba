"""Astronomy computation layer: solar times, orbit position, lunar phase and rise/set.

All functions are pure: the instant is always an argument, nothing reads
the clock, nothing is cached. Trigonometric domain violations (polar day,
circumpolar moon) map to documented sentinels instead of NaN.
"""

import math
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from sunclock.cities import resolve_location
from sunclock.config import Settings, load_settings
from sunclock.geometry import SYNODIC_PERIOD, day_arc, hour_to_angle, night_arc
from sunclock.models import (
    ClockState,
    GeoCoordinate,
    MoonRiseSet,
    QueryInput,
    SolarTimes,
)
from sunclock.skycolor import sky_color
from sunclock.timeutil import (
    day_of_year,
    days_in_year,
    days_since_j2000,
    decimal_hour,
    julian_centuries,
    to_local,
)

# Single-harmonic solar declination
_AXIAL_TILT_DEG = 23.45
_EQUINOX_DAY = 81

# Orbit dial: the winter solstice sits at a fixed angle
WINTER_SOLSTICE_DAY = 355
SOLSTICE_ANGLE_DEG = 90.0

REFERENCE_NEW_MOON = datetime(2000, 1, 6, 18, 14, 0, tzinfo=timezone.utc)

# Mean parallax minus refraction allowance for the moon's upper limb
MOON_RISE_ALTITUDE_DEG = 0.125
# Sidereal rate minus the moon's mean eastward drift, degrees per hour
_MOON_HOUR_ANGLE_RATE = 15.04107 - 13.176396 / 24
# Horizon-crossing refinements per event; the moon moves ~0.5° per hour
_MOON_EVENT_PASSES = 3

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def solar_declination(day: int) -> float:
    """Approximate solar declination in degrees for a 1-based day of year."""
    return _AXIAL_TILT_DEG * math.sin(math.radians(360 / 365 * (day - _EQUINOX_DAY)))


def solar_times(day: int, latitude: float) -> SolarTimes:
    """Sunrise and sunset as decimal local hours, symmetric about noon.

    Args:
        day: 1-based day of year.
        latitude: Observer latitude in degrees.

    Returns:
        SolarTimes; (0, 24) under the midnight sun, (12, 12) in polar night.
    """
    declination = math.radians(solar_declination(day))
    cos_omega = -math.tan(math.radians(latitude)) * math.tan(declination)

    if cos_omega < -1:
        return SolarTimes(sunrise=0.0, sunset=24.0)
    if cos_omega > 1:
        return SolarTimes(sunrise=12.0, sunset=12.0)

    omega = math.degrees(math.acos(cos_omega))
    return SolarTimes(sunrise=12 - omega / 15, sunset=12 + omega / 15)


def orbit_angle(instant: datetime) -> float:
    """Earth's position on the orbit dial in degrees, [0, 360).

    The winter solstice (day 355) sits at 90° and the angle grows by one
    full turn per calendar year. The value is the same for both
    hemispheres; only the season labels around the dial are swapped.
    """
    day = day_of_year(instant)
    year_length = days_in_year(to_local(instant).year)
    days_since_solstice = (day - WINTER_SOLSTICE_DAY + year_length) % year_length
    fraction = days_since_solstice / year_length
    return (SOLSTICE_ANGLE_DEG + fraction * 360) % 360


def moon_phase(instant: datetime) -> float:
    """Lunar phase fraction in [0, 1): 0 new moon, 0.5 full moon."""
    elapsed = to_local(instant) - REFERENCE_NEW_MOON
    days = elapsed.total_seconds() / 86400
    # Non-negative for dates before the reference too.
    phase = (days % SYNODIC_PERIOD) / SYNODIC_PERIOD
    # A tiny negative remainder can round up to the full period.
    return 0.0 if phase >= 1.0 else phase


def moon_position(instant: datetime) -> tuple[float, float]:
    """Geocentric right ascension and declination of the moon, degrees.

    Mean longitude, mean anomaly and argument of latitude each carry only
    the leading periodic term of the lunar theory. The dropped terms
    (evection, variation) reach about 1.3° in longitude, roughly ten
    minutes of rise/set time.
    """
    t = julian_centuries(instant)
    mean_longitude = 218.316 + 481267.881 * t
    mean_anomaly = 134.963 + 477198.868 * t
    arg_latitude = 93.272 + 483202.018 * t

    lon = math.radians(mean_longitude + 6.289 * math.sin(math.radians(mean_anomaly)))
    lat = math.radians(5.128 * math.sin(math.radians(arg_latitude)))
    obliquity = math.radians(23.4393 - 0.0130 * t)

    ra = math.atan2(
        math.sin(lon) * math.cos(obliquity) - math.tan(lat) * math.sin(obliquity),
        math.cos(lon),
    )
    dec = math.asin(
        math.sin(lat) * math.cos(obliquity)
        + math.cos(lat) * math.sin(obliquity) * math.sin(lon)
    )
    return math.degrees(ra) % 360, math.degrees(dec)


def greenwich_sidereal_degrees(instant: datetime) -> float:
    """Greenwich Mean Sidereal Time as an angle, [0, 360)."""
    d = days_since_j2000(instant)
    return (280.46061837 + 360.98564736629 * d) % 360


def azimuth_to_compass(azimuth: float) -> str:
    """Bucket an azimuth (0 = N, 90 = E) into one of eight 45° sectors."""
    return COMPASS_POINTS[int(((azimuth + 22.5) % 360) // 45)]


def _acos_deg(value: float) -> float:
    return math.degrees(math.acos(max(-1.0, min(1.0, value))))


def _cos_semi_arc(phi: float, delta: float) -> float:
    """Cosine of the hour angle at which the moon stands at the rise altitude."""
    sin_h0 = math.sin(math.radians(MOON_RISE_ALTITUDE_DEG))
    numerator = sin_h0 - math.sin(phi) * math.sin(delta)
    denominator = math.cos(phi) * math.cos(delta)
    if denominator <= 0:
        # On the pole the moon's altitude is its declination all day.
        return math.copysign(math.inf, numerator) if numerator else math.inf
    return numerator / denominator


def _moon_hour_angle(instant: datetime, longitude: float) -> tuple[float, float]:
    """Local hour angle in [-180, 180) and declination of the moon, degrees."""
    ra, dec = moon_position(instant)
    local_sidereal = greenwich_sidereal_degrees(instant) + longitude
    return (local_sidereal - ra + 180) % 360 - 180, dec


def _refine_event(
    instant: datetime, latitude: float, longitude: float, hour: float, side: int
) -> tuple[float, float]:
    """Walk a first-guess rise (side -1) or set (side +1) onto the horizon.

    The moon's position is re-evaluated at each estimate, so its drift
    between the instant and the event is accounted for.

    Returns:
        (event hour on the instant's clock, declination at the event).
    """
    phi = math.radians(latitude)
    start = decimal_hour(instant)
    dec = 0.0
    for _ in range(_MOON_EVENT_PASSES):
        moment = instant + timedelta(hours=hour - start)
        hour_angle, dec = _moon_hour_angle(moment, longitude)
        target = side * _acos_deg(_cos_semi_arc(phi, math.radians(dec)))
        hour += ((target - hour_angle + 180) % 360 - 180) / _MOON_HOUR_ANGLE_RATE
    return hour, dec


def _rise_azimuth(latitude: float, dec: float) -> float:
    cos_phi = max(math.cos(math.radians(latitude)), 1e-12)
    return _acos_deg(math.sin(math.radians(dec)) / cos_phi)


def moon_rise_set(instant: datetime, latitude: float, longitude: float) -> MoonRiseSet:
    """Moonrise/moonset around the transit nearest the instant.

    Times are decimal hours on the instant's local clock, measured from
    the instant's midnight and not wrapped: a rise before midnight comes
    out negative, a set after the next midnight exceeds 24. A first guess
    from the moon's position at the instant is refined against its
    position at each event.

    Args:
        instant: Moment of interest.
        latitude: Observer latitude in degrees.
        longitude: Observer longitude in degrees, east positive.

    Returns:
        MoonRiseSet; ``moonrise=0, moonset=None`` when the moon never sets,
        both ``None`` when it never rises.
    """
    local = to_local(instant)
    hour_angle_now, dec = _moon_hour_angle(local, longitude)
    cos_h = _cos_semi_arc(math.radians(latitude), math.radians(dec))

    if cos_h < -1:
        return MoonRiseSet(moonrise=0.0, moonset=None, moonrise_dir="", moonset_dir="")
    if cos_h > 1:
        return MoonRiseSet(moonrise=None, moonset=None, moonrise_dir="", moonset_dir="")

    semi_arc_hours = math.degrees(math.acos(cos_h)) / _MOON_HOUR_ANGLE_RATE
    transit = decimal_hour(local) - hour_angle_now / _MOON_HOUR_ANGLE_RATE

    rise, rise_dec = _refine_event(
        local, latitude, longitude, transit - semi_arc_hours, -1
    )
    moonset, set_dec = _refine_event(
        local, latitude, longitude, transit + semi_arc_hours, 1
    )
    # A grazing moon can converge both events onto the same transit.
    moonset = max(moonset, rise)

    return MoonRiseSet(
        moonrise=rise,
        moonset=moonset,
        moonrise_dir=azimuth_to_compass(_rise_azimuth(latitude, rise_dec)),
        moonset_dir=azimuth_to_compass(360 - _rise_azimuth(latitude, set_dec)),
    )


def compute_clock_state(
    instant: datetime,
    coordinate: GeoCoordinate,
    location_name: str = "",
) -> ClockState:
    """Evaluate every engine function for one frame.

    Args:
        instant: Moment to display. Naive values are read as system local time.
        coordinate: Observer position.
        location_name: Display label carried through to renderers.

    Returns:
        ClockState ready for any renderer.
    """
    local = to_local(instant)
    day = day_of_year(local)
    hour = decimal_hour(local)
    solar = solar_times(day, coordinate.latitude)
    decimal_seconds = local.second + local.microsecond / 1_000_000

    return ClockState(
        instant=local,
        location_name=location_name,
        coordinate=coordinate,
        day_of_year=day,
        decimal_hour=hour,
        solar=solar,
        day_arc=day_arc(solar),
        night_arc=night_arc(solar),
        hand_angle=hour_to_angle(hour),
        second_angle=(decimal_seconds / 60) * 360 - 90,
        orbit_angle=orbit_angle(local),
        moon_phase=moon_phase(local),
        moon=moon_rise_set(local, coordinate.latitude, coordinate.longitude),
        sky=sky_color(hour, solar.sunrise, solar.sunset),
    )


def _system_now() -> datetime:
    return datetime.now().astimezone()


def parse_when(when: str) -> datetime:
    """Parse a ``"YYYY-MM-DD HH:MM"`` local time string into an aware datetime.

    Raises:
        ValueError: When the string does not match the format.
    """
    return datetime.strptime(when, "%Y-%m-%d %H:%M").astimezone()


def run(
    query: QueryInput,
    now: Callable[[], datetime] = _system_now,
    settings: Settings | None = None,
) -> ClockState:
    """Top-level entry point: takes a QueryInput and returns a ClockState.

    Args:
        query: User input (city name, optional time string).
        now: Clock used when ``query.when`` is empty.
        settings: Runtime settings; read from the environment when None.

    Returns:
        Fully computed ClockState.

    Raises:
        GeocodingError: When the city cannot be resolved.
        ValueError: When ``query.when`` is malformed.
    """
    settings = settings or load_settings()
    city = resolve_location(query.city, settings)
    instant = parse_when(query.when) if query.when else now()
    return compute_clock_state(instant, city.coordinate, location_name=city.name)
