"""
Ward / Division Router - deterministic geographic routing.

Lookup order for the ward:
1. First zone rectangle containing the coordinates
2. Ward synthesized from the reverse-geocode ward hint (if usable)
3. The "unassigned" sentinel ward

The division is derived from the ward name by substring rules, falling back
to the "unmapped" sentinel. Same inputs always give the same ward/division.
"""

from typing import NamedTuple, Optional
import logging

from app.config.reference_data import RoutingTable

logger = logging.getLogger(__name__)

UNUSABLE_HINTS = {"", "unknown"}


class WardAssignment(NamedTuple):
    ward: str
    division: str


class WardRouter:
    def __init__(self, routing: RoutingTable):
        self.routing = routing

    def map_to_ward(self, latitude: float, longitude: float, ward_hint: Optional[str] = None) -> str:
        for zone in self.routing.zones:
            if zone.contains(latitude, longitude):
                return zone.ward

        hint = (ward_hint or "").strip()
        if hint.lower() not in UNUSABLE_HINTS:
            return f"{self.routing.ward_prefix}{hint}"

        return self.routing.unassigned_ward

    def map_ward_to_division(self, ward: str) -> str:
        for fragment, division in self.routing.division_rules:
            if fragment in ward:
                return division
        return self.routing.unmapped_division

    def route(self, latitude: float, longitude: float, ward_hint: Optional[str] = None) -> WardAssignment:
        ward = self.map_to_ward(latitude, longitude, ward_hint)
        division = self.map_ward_to_division(ward)
        logger.info(f"Routed ({latitude}, {longitude}) to ward '{ward}' / division '{division}'")
        return WardAssignment(ward=ward, division=division)
