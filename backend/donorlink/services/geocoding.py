import logging
from typing import List, Optional

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from donorlink.config import GEOCODER_TIMEOUT_SECONDS, NOMINATIM_USER_AGENT
from donorlink.core.proximity import GeoPoint

logger = logging.getLogger(__name__)

FALLBACK_LABEL = "Current Location"
MIN_QUERY_LENGTH = 3
MAX_SUGGESTIONS = 5

# most specific first
_LABEL_KEYS = ("suburb", "neighbourhood", "village", "town", "city", "county", "state")


def format_location(raw: Optional[dict]) -> str:
    address = (raw or {}).get("address") or {}
    for key in _LABEL_KEYS:
        if address.get(key):
            return address[key]
    return FALLBACK_LABEL


class Geocoder:
    """Human-readable labels for points and points for typed addresses."""

    def __init__(self, geolocator=None):
        self.geolocator = geolocator or Nominatim(
            user_agent=NOMINATIM_USER_AGENT,
            timeout=GEOCODER_TIMEOUT_SECONDS,
        )

    def reverse_geocode(self, point: GeoPoint) -> str:
        try:
            location = self.geolocator.reverse((point.latitude, point.longitude), exactly_one=True)
        except GeopyError as e:
            logger.warning("Reverse geocoding failed for %s: %s", point, e)
            return FALLBACK_LABEL
        if location is None:
            return FALLBACK_LABEL
        return format_location(location.raw)

    def search_address(self, text: str) -> List[GeoPoint]:
        text = (text or "").strip()
        if len(text) < MIN_QUERY_LENGTH:
            return []
        try:
            locations = self.geolocator.geocode(text, exactly_one=False, limit=MAX_SUGGESTIONS)
        except GeopyError as e:
            logger.warning("Address search failed for %r: %s", text, e)
            return []
        return [
            GeoPoint(location.latitude, location.longitude)
            for location in (locations or [])[:MAX_SUGGESTIONS]
        ]


_geocoder = None


def get_geocoder() -> Geocoder:
    global _geocoder
    if _geocoder is None:
        _geocoder = Geocoder()
    return _geocoder
