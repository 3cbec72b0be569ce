from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional
import logging

from app.models.moderation import GeocodeResult

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class GeocodingProvider(ABC):
    """
    Abstract reverse-geocoding provider.

    Contract:
    - Input: latitude, longitude (floats)
    - Output: GeocodeResult on success, None on any failure
      (network error, timeout, non-200, malformed payload)
    - MUST NEVER raise upstream exceptions.
    - Implementations should enforce a network timeout <= 3 seconds.
    """

    @abstractmethod
    def reverse_geocode(self, latitude: float, longitude: float) -> Optional[GeocodeResult]:
        raise NotImplementedError


def first_present(fields: Dict, keys: Iterable[str], default: str = UNKNOWN) -> str:
    """First non-empty value among keys, in priority order."""
    for key in keys:
        value = fields.get(key)
        if value:
            return str(value)
    return default


def fallback_result(city: str, state: str) -> GeocodeResult:
    return GeocodeResult(
        area=UNKNOWN,
        city=city,
        state=state,
        full_address=UNKNOWN,
        ward_hint=UNKNOWN,
        provider="fallback",
    )
