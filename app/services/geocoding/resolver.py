import logging
from typing import Optional

from app.core.settings import settings
from app.models.moderation import GeocodeResult
from .base import GeocodingProvider, fallback_result
from .nominatim_provider import NominatimProvider
from .google_provider import GoogleMapsProvider

logger = logging.getLogger(__name__)


class Geocoder:
    """
    Reverse geocoding with a guaranteed answer.

    Wraps one provider; any provider failure (or exception) yields the fixed
    fallback for the default municipality so submission is never blocked.
    """

    def __init__(self, provider: Optional[GeocodingProvider], default_city: str, default_state: str):
        self.provider = provider
        self.default_city = default_city
        self.default_state = default_state

    def lookup(self, latitude: float, longitude: float) -> GeocodeResult:
        result = None
        if self.provider is not None:
            try:
                result = self.provider.reverse_geocode(latitude, longitude)
            except Exception as e:
                logger.warning(f"Geocoding provider raised: {e}")
                result = None

        if result is None:
            logger.warning(f"Reverse geocode failed for ({latitude}, {longitude}), using fallback")
            return fallback_result(self.default_city, self.default_state)
        return result


def get_geocoding_provider() -> GeocodingProvider:
    """
    Resolve the active geocoding provider based on settings.

    Rules:
    - Default: Nominatim (no API key required).
    - If GEOCODING_PROVIDER='google' AND GOOGLE_MAPS_API_KEY is set, use Google.
    """
    provider_name = (settings.GEOCODING_PROVIDER or "nominatim").lower()

    if provider_name == "google" and settings.GOOGLE_MAPS_API_KEY:
        logger.info("Geocoding provider initialized: google")
        return GoogleMapsProvider(
            api_key=settings.GOOGLE_MAPS_API_KEY,
            timeout_seconds=settings.GEOCODING_TIMEOUT_SECONDS,
        )

    if provider_name == "google":
        logger.warning("GEOCODING_PROVIDER=google but GOOGLE_MAPS_API_KEY is not set. Falling back to Nominatim.")

    logger.info("Geocoding provider initialized: nominatim")
    return NominatimProvider(
        user_agent=settings.GEOCODING_USER_AGENT,
        timeout_seconds=settings.GEOCODING_TIMEOUT_SECONDS,
    )


def build_geocoder() -> Geocoder:
    return Geocoder(
        provider=get_geocoding_provider(),
        default_city=settings.DEFAULT_CITY,
        default_state=settings.DEFAULT_STATE,
    )
