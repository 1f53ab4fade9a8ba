"""Location registry: named cities plus an optional Nominatim fallback."""

import logging
import unicodedata

import httpx

from sunclock.config import Settings
from sunclock.models import City, GeoCoordinate

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Location could not be resolved."""


def _city(name: str, latitude: float, longitude: float) -> City:
    return City(name=name, coordinate=GeoCoordinate(latitude, longitude))


CITIES: tuple[City, ...] = (
    _city("New York", 40.7128, -74.006),
    _city("London", 51.5074, -0.1278),
    _city("Tokyo", 35.6762, 139.6503),
    _city("Paris", 48.8566, 2.3522),
    _city("Sydney", -33.8688, 151.2093),
    _city("Dubai", 25.2048, 55.2708),
    _city("Singapore", 1.3521, 103.8198),
    _city("Hong Kong", 22.3193, 114.1694),
    _city("Los Angeles", 34.0522, -118.2437),
    _city("Shanghai", 31.2304, 121.4737),
    _city("Mumbai", 19.076, 72.8777),
    _city("São Paulo", -23.5505, -46.6333),
    _city("Mexico City", 19.4326, -99.1332),
    _city("Cairo", 30.0444, 31.2357),
    _city("Moscow", 55.7558, 37.6173),
    _city("Istanbul", 41.0082, 28.9784),
    _city("Buenos Aires", -34.6037, -58.3816),
    _city("Seoul", 37.5665, 126.978),
    _city("Lagos", 6.5244, 3.3792),
    _city("Jakarta", -6.2088, 106.8456),
    _city("Berlin", 52.52, 13.405),
    _city("Madrid", 40.4168, -3.7038),
    _city("Rome", 41.9028, 12.4964),
    _city("Bangkok", 13.7563, 100.5018),
    _city("Toronto", 43.6532, -79.3832),
    _city("Chicago", 41.8781, -87.6298),
    _city("Nairobi", -1.2921, 36.8219),
    _city("Lima", -12.0464, -77.0428),
    _city("Tehran", 35.6892, 51.389),
    _city("Bogotá", 4.711, -74.0721),
    _city("Delhi", 28.6139, 77.209),
    _city("Ho Chi Minh City", 10.8231, 106.6297),
    _city("Johannesburg", -26.2041, 28.0473),
    _city("Stockholm", 59.3293, 18.0686),
    _city("Athens", 37.9838, 23.7275),
    _city("Lisbon", 38.7223, -9.1393),
    _city("Vienna", 48.2082, 16.3738),
    _city("Warsaw", 52.2297, 21.0122),
    _city("Riyadh", 24.7136, 46.6753),
    _city("Kuala Lumpur", 3.139, 101.6869),
    _city("Cape Town", -33.9249, 18.4241),
    _city("Santiago", -33.4489, -70.6693),
    _city("Manila", 14.5995, 120.9842),
    _city("Taipei", 25.033, 121.5654),
    _city("San Francisco", 37.7749, -122.4194),
    _city("Auckland", -36.8485, 174.7633),
    _city("Reykjavik", 64.1466, -21.9426),
    _city("Anchorage", 61.2181, -149.9003),
    _city("Beijing", 39.9042, 116.4074),
    _city("Casablanca", 33.5731, -7.5898),
)

DEFAULT_CITY_INDEX = 0


def _fold(name: str) -> str:
    """Case- and accent-insensitive lookup key ("São Paulo" → "sao paulo")."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.casefold().split())


_BY_KEY: dict[str, City] = {_fold(c.name): c for c in CITIES}


def find_city(name: str) -> City | None:
    """Registry lookup. Returns None when the name is not registered."""
    return _BY_KEY.get(_fold(name))


def default_city(settings: Settings) -> City:
    if settings.default_city:
        city = find_city(settings.default_city)
        if city is not None:
            return city
        logger.warning(
            "SUNCLOCK_CITY=%r is not in the registry; using %s",
            settings.default_city,
            CITIES[DEFAULT_CITY_INDEX].name,
        )
    return CITIES[DEFAULT_CITY_INDEX]


def _geocode_nominatim(place: str, user_agent: str) -> City | None:
    """Nominatim (OpenStreetMap) geocoder. Returns a City or None."""
    params = {"q": place, "format": "json", "limit": 1}
    headers = {"User-Agent": user_agent}
    resp = httpx.get(
        "https://nominatim.openstreetmap.org/search",
        params=params,
        headers=headers,
        timeout=10,
    )
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return _city(r["display_name"], float(r["lat"]), float(r["lon"]))


def resolve_location(place: str, settings: Settings) -> City:
    """Resolve a place name to a City.

    Empty names resolve to the configured default city. Registry names
    match case- and accent-insensitively. Anything else goes to Nominatim
    when ``settings.geocoder == "nominatim"``.

    Raises:
        GeocodingError: When the place is unknown or the geocoder fails.
    """
    if not place or not place.strip():
        return default_city(settings)

    city = find_city(place)
    if city is not None:
        return city

    if settings.geocoder != "nominatim":
        raise GeocodingError(f"Unknown city: {place}")

    logger.info("Geocoding %r via Nominatim", place)
    try:
        city = _geocode_nominatim(place, settings.user_agent)
    except httpx.HTTPError as e:
        raise GeocodingError(f"Geocoder request failed: {e}") from e
    if city is None:
        raise GeocodingError(f"Address not found: {place}")
    return city
