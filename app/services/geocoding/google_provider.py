import logging
from typing import Dict, Any, Optional

import requests

from app.models.moderation import GeocodeResult
from .base import GeocodingProvider, UNKNOWN

logger = logging.getLogger(__name__)


class GoogleMapsProvider(GeocodingProvider):
    """
    Google Maps reverse-geocoding provider.

    - Opt-in: used only when GEOCODING_PROVIDER=google AND GOOGLE_MAPS_API_KEY is set.
    - Same output schema as other providers.
    - Fails gracefully and never raises upstream exceptions.
    """

    BASE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    WARD_TYPES = (
        ["sublocality_level_1", "sublocality"],
        ["neighborhood"],
        ["administrative_area_level_3"],
        ["administrative_area_level_2"],
    )

    def __init__(self, api_key: Optional[str], timeout_seconds: float = 3.0):
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    def reverse_geocode(self, latitude: float, longitude: float) -> Optional[GeocodeResult]:
        if not self.api_key:
            logger.info("GoogleMapsProvider called without API key; skipping.")
            return None

        try:
            params = {
                "latlng": f"{latitude},{longitude}",
                "key": self.api_key,
            }
            resp = requests.get(self.BASE_URL, params=params, timeout=self.timeout_seconds)
            if resp.status_code != 200:
                logger.warning(f"Google Maps reverse-geocode failed with status {resp.status_code}")
                return None

            data: Dict[str, Any] = resp.json()
            results = data.get("results") or []
            if not results:
                return None

            first = results[0]
            components = first.get("address_components") or []

            def _get_component(types):
                for c in components:
                    if any(t in c.get("types", []) for t in types):
                        return c.get("long_name")
                return None

            ward_hint = UNKNOWN
            for types in self.WARD_TYPES:
                found = _get_component(types)
                if found:
                    ward_hint = found
                    break

            return GeocodeResult(
                area=_get_component(["sublocality", "neighborhood"]) or UNKNOWN,
                city=_get_component(["locality", "postal_town"]) or UNKNOWN,
                state=_get_component(["administrative_area_level_1"]) or UNKNOWN,
                full_address=first.get("formatted_address") or UNKNOWN,
                ward_hint=ward_hint,
                provider="google",
            )
        except Exception as e:
            logger.warning(f"Google Maps reverse-geocode error: {e}")
            return None
