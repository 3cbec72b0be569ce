import pytest

from app.config.reference_data import AMRAVATI_ROUTING, RoutingTable, Zone
from app.services.ward_routing import WardRouter

from conftest import OUTSIDE, PANCHVATI


@pytest.fixture
def router():
    return WardRouter(AMRAVATI_ROUTING)


@pytest.mark.parametrize("lat, lon, ward, division", [
    (20.88, 77.745, "Amravati Ward – Pushpak Colony Zone", "Zone-1"),
    (20.905, 77.76, "Amravati Ward – Rajapeth Zone", "Zone-2"),
    (PANCHVATI[0], PANCHVATI[1], "Amravati Ward – Panchvati Zone", "Zone-3"),
    (20.92, 77.73, "Amravati Ward – Old City Zone", "Zone-4"),
])
def test_known_rectangles(router, lat, lon, ward, division):
    assert router.route(lat, lon) == (ward, division)


def test_bounds_are_inclusive(router):
    assert router.map_to_ward(20.870, 77.730) == "Amravati Ward – Pushpak Colony Zone"
    assert router.map_to_ward(20.890, 77.760) == "Amravati Ward – Pushpak Colony Zone"


def test_first_rectangle_wins():
    routing = RoutingTable(
        zones=(
            Zone(ward="North", lat_min=0, lat_max=10, lon_min=0, lon_max=10),
            Zone(ward="Overlap", lat_min=5, lat_max=15, lon_min=5, lon_max=15),
        ),
        division_rules=(("North", "D-1"), ("Overlap", "D-2")),
        ward_prefix="Test Ward – ",
        unassigned_ward="Test Ward – Unassigned",
        unmapped_division="D-None",
    )
    assert WardRouter(routing).route(7, 7) == ("North", "D-1")
    assert WardRouter(routing).route(12, 12) == ("Overlap", "D-2")


def test_rectangle_beats_ward_hint(router):
    assert router.map_to_ward(PANCHVATI[0], PANCHVATI[1], "Badnera") == "Amravati Ward – Panchvati Zone"


def test_usable_hint_synthesizes_ward(router):
    assert router.route(OUTSIDE[0], OUTSIDE[1], "Badnera") == ("Amravati Ward – Badnera", "Zone-Unmapped")


def test_hint_matching_a_division_rule(router):
    assert router.route(OUTSIDE[0], OUTSIDE[1], "Rajapeth East") == ("Amravati Ward – Rajapeth East", "Zone-2")


@pytest.mark.parametrize("hint", [None, "", "   ", "Unknown", "unknown"])
def test_unusable_hint_gives_sentinels(router, hint):
    assert router.route(OUTSIDE[0], OUTSIDE[1], hint) == ("Amravati Ward – Unassigned", "Zone-Unmapped")


def test_routing_is_idempotent(router):
    first = router.route(20.915, 77.755, "Somewhere")
    assert all(router.route(20.915, 77.755, "Somewhere") == first for _ in range(10))
