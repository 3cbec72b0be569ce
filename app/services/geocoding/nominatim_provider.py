import logging
from typing import Dict, Any, Optional

import requests

from app.models.moderation import GeocodeResult
from .base import GeocodingProvider, first_present

logger = logging.getLogger(__name__)

# Address fields tried in order when deriving each value
WARD_FIELDS = (
    "suburb", "neighbourhood", "city_district", "district",
    "municipality", "county", "state_district",
)
AREA_FIELDS = ("suburb", "neighbourhood", "village", "town", "city_district", "city")
CITY_FIELDS = ("city", "town", "village", "county")


class NominatimProvider(GeocodingProvider):
    """
    OpenStreetMap Nominatim reverse-geocoding provider.

    - No API key required.
    - Uses a strict timeout (<= 3 seconds).
    - Includes a User-Agent header as required by Nominatim usage policy.
    - Never raises upstream exceptions; returns None on failure.
    """

    BASE_URL = "https://nominatim.openstreetmap.org/reverse"

    def __init__(self, user_agent: str = "civicpulse/1.0", timeout_seconds: float = 3.0):
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds

    def reverse_geocode(self, latitude: float, longitude: float) -> Optional[GeocodeResult]:
        try:
            params = {
                "lat": latitude,
                "lon": longitude,
                "format": "jsonv2",
                "addressdetails": 1,
            }
            headers = {
                "User-Agent": self.user_agent,
                "Accept": "application/json",
            }
            resp = requests.get(self.BASE_URL, params=params, headers=headers, timeout=self.timeout_seconds)
            if resp.status_code != 200:
                logger.warning(f"Nominatim reverse-geocode failed with status {resp.status_code}")
                return None

            data: Dict[str, Any] = resp.json()
            if not isinstance(data, dict):
                logger.warning("Nominatim reverse-geocode returned a non-object payload")
                return None
            address = data.get("address") or {}

            return GeocodeResult(
                area=first_present(address, AREA_FIELDS),
                city=first_present(address, CITY_FIELDS),
                state=first_present(address, ("state",)),
                full_address=first_present(data, ("display_name",)),
                ward_hint=first_present(address, WARD_FIELDS),
                provider="nominatim",
            )
        except Exception as e:
            # Fail gracefully – never block or crash complaint creation.
            logger.warning(f"Nominatim reverse-geocode error: {e}")
            return None
