"""
Static routing reference data for the Amravati deployment.

Zone rectangles, ward→division rules and the default officer directory.
These are read-only values handed to the router and officer assignor at
construction time; tests build their own tables instead of patching these.
"""

from typing import Tuple

from pydantic import BaseModel

from app.models.complaint import Officer


class Zone(BaseModel):
    """Named coordinate rectangle (bounds inclusive)."""
    ward: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    class Config:
        frozen = True

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.lat_min <= latitude <= self.lat_max and self.lon_min <= longitude <= self.lon_max


class RoutingTable(BaseModel):
    zones: Tuple[Zone, ...]
    division_rules: Tuple[Tuple[str, str], ...]  # (ward substring, division), first match wins
    ward_prefix: str
    unassigned_ward: str
    unmapped_division: str

    class Config:
        frozen = True


WARD_PREFIX = "Amravati Ward – "

AMRAVATI_ZONES: Tuple[Zone, ...] = (
    # Pushpak Colony / VMV / Camp Area
    Zone(ward=f"{WARD_PREFIX}Pushpak Colony Zone", lat_min=20.870, lat_max=20.890, lon_min=77.730, lon_max=77.760),
    # Rajapeth / Badnera Road
    Zone(ward=f"{WARD_PREFIX}Rajapeth Zone", lat_min=20.900, lat_max=20.930, lon_min=77.740, lon_max=77.770),
    # Panchvati / Shegaon Naka
    Zone(ward=f"{WARD_PREFIX}Panchvati Zone", lat_min=20.940, lat_max=20.970, lon_min=77.750, lon_max=77.790),
    # Old City / Jaistambh Chowk
    Zone(ward=f"{WARD_PREFIX}Old City Zone", lat_min=20.910, lat_max=20.930, lon_min=77.720, lon_max=77.740),
)

AMRAVATI_DIVISION_RULES: Tuple[Tuple[str, str], ...] = (
    ("Pushpak Colony", "Zone-1"),
    ("Rajapeth", "Zone-2"),
    ("Panchvati", "Zone-3"),
    ("Old City", "Zone-4"),
)

AMRAVATI_ROUTING = RoutingTable(
    zones=AMRAVATI_ZONES,
    division_rules=AMRAVATI_DIVISION_RULES,
    ward_prefix=WARD_PREFIX,
    unassigned_ward=f"{WARD_PREFIX}Unassigned",
    unmapped_division="Zone-Unmapped",
)

DEFAULT_OFFICERS: Tuple[Officer, ...] = (
    Officer(id="OFF-001", name="Rohit Patil", email="rohit.patil@civicpulse.example",
            ward=f"{WARD_PREFIX}Pushpak Colony Zone", division="Zone-1", department="Sanitation"),
    Officer(id="OFF-002", name="Ayesha Khan", email="ayesha.khan@civicpulse.example",
            ward=f"{WARD_PREFIX}Rajapeth Zone", division="Zone-2", department="Road"),
    Officer(id="OFF-003", name="Suresh Jadhav", email="suresh.jadhav@civicpulse.example",
            ward=f"{WARD_PREFIX}Panchvati Zone", division="Zone-3", department="Water"),
    Officer(id="OFF-004", name="Neha Deshmukh", email="neha.deshmukh@civicpulse.example",
            ward=f"{WARD_PREFIX}Old City Zone", division="Zone-4", department="Streetlight"),
)
