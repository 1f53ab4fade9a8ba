"""Calendar and clock arithmetic shared by the astronomy functions.

Every function takes its instant explicitly. Naive datetimes are read as
system local time; aware datetimes keep their own UTC offset as the local
clock. No timezone database is consulted.
"""

import calendar
from datetime import datetime, timezone

_J2000 = 2451545.0
_UNIX_EPOCH_JD = 2440587.5
_SECONDS_PER_DAY = 86400.0


def to_local(instant: datetime) -> datetime:
    """Return an aware datetime on the observer's local clock."""
    if instant.tzinfo is None:
        return instant.astimezone()
    return instant


def to_utc(instant: datetime) -> datetime:
    return to_local(instant).astimezone(timezone.utc)


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_year(year: int) -> int:
    """366 when February has a 29th that year, else 365."""
    return 366 if is_leap_year(year) else 365


def day_of_year(instant: datetime) -> int:
    """1-based day number: whole days elapsed since Dec 31 of the previous year."""
    return to_local(instant).timetuple().tm_yday


def decimal_hour(instant: datetime) -> float:
    """Local clock time as hours with a fractional part, [0, 24)."""
    local = to_local(instant)
    return (
        local.hour
        + local.minute / 60
        + local.second / 3600
        + local.microsecond / 3_600_000_000
    )


def julian_date(instant: datetime) -> float:
    """Julian Date (UT) of the instant."""
    return to_utc(instant).timestamp() / _SECONDS_PER_DAY + _UNIX_EPOCH_JD


def julian_centuries(instant: datetime) -> float:
    """Julian centuries elapsed since J2000.0."""
    return (julian_date(instant) - _J2000) / 36525.0


def days_since_j2000(instant: datetime) -> float:
    return julian_date(instant) - _J2000


def format_hours(hours: float | None) -> str:
    """Render decimal hours as ``HH:MM`` on the clock face; ``--:--`` for None."""
    if hours is None:
        return "--:--"
    if hours == 24.0:
        # Polar-day sunset sentinel
        return "24:00"
    total_minutes = round(hours * 60) % 1440
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"
