"""
Shared fixtures: in-memory Firestore, fake collaborators and an intake
service factory. Environment is pinned before the app settings load so no
test ever reaches real Firestore, Gemini or SMTP.
"""

import base64
import os

os.environ["USE_MOCK_DB"] = "true"
os.environ["MOCK_DB_PATH"] = ""
os.environ["AI_ENABLED"] = "false"
os.environ["OFFICER_SOURCE"] = "static"

from typing import Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402

from app.config.mock_firestore import MockFirestore  # noqa: E402
from app.config.reference_data import AMRAVATI_ROUTING, DEFAULT_OFFICERS  # noqa: E402
from app.models.moderation import GeocodeResult, VisionScan  # noqa: E402
from app.services.ai_plugin.base import VisionClassifier  # noqa: E402
from app.services.complaint_intake import ComplaintIntakeService  # noqa: E402
from app.services.complaint_store import ComplaintStore  # noqa: E402
from app.services.duplicate_detection import DuplicateDetectionService  # noqa: E402
from app.services.email_service import Mailer  # noqa: E402
from app.services.geocoding.base import GeocodingProvider  # noqa: E402
from app.services.geocoding.resolver import Geocoder  # noqa: E402
from app.services.moderation import ModerationCoordinator  # noqa: E402
from app.services.notification_service import NotificationDispatcher  # noqa: E402
from app.services.officer_assignment import OfficerAssignor, OfficerDirectory  # noqa: E402
from app.services.spam_heuristics import SpamHeuristicEngine  # noqa: E402
from app.services.ward_routing import WardRouter  # noqa: E402

# Inside the Panchvati rectangle; OFF-003 (Water) covers it
PANCHVATI = (20.95, 77.77)
# Outside every rectangle
OUTSIDE = (21.20, 78.10)


def image_data_url(content: bytes = b"\x89PNG\r\n\x1a\nburst-pipe-photo", mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


class FakeVisionClassifier(VisionClassifier):
    def __init__(self, scan: Optional[VisionScan] = None, error: Optional[Exception] = None):
        self.scan = scan
        self.error = error
        self.calls: List[tuple] = []

    def is_enabled(self) -> bool:
        return True

    def get_model_info(self) -> Dict[str, str]:
        return {"name": "fake-vision", "version": "test"}

    def classify(self, image_payload: str, description: str) -> Optional[VisionScan]:
        self.calls.append((image_payload, description))
        if self.error is not None:
            raise self.error
        return self.scan

    def get_timeout_seconds(self) -> float:
        return 1.0


class FakeGeocodingProvider(GeocodingProvider):
    def __init__(self, result: Optional[GeocodeResult] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    def reverse_geocode(self, latitude: float, longitude: float) -> Optional[GeocodeResult]:
        self.calls.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.result


class RecordingMailer(Mailer):
    def __init__(self, ok: bool = True, error: Optional[Exception] = None):
        self.ok = ok
        self.error = error
        self.sent: List[Dict] = []

    def send(self, to: str, subject: str, html: str) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "html": html})
        return self.ok


def amravati_geocode(ward_hint: str = "Unknown") -> GeocodeResult:
    return GeocodeResult(
        area="Shegaon Naka",
        city="Amravati",
        state="Maharashtra",
        full_address="Shegaon Naka, Amravati, Maharashtra, India",
        ward_hint=ward_hint,
        provider="fake",
    )


@pytest.fixture
def db():
    return MockFirestore()


@pytest.fixture
def store(db):
    return ComplaintStore(db)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def make_intake(store, mailer):
    """
    Build a ComplaintIntakeService over the shared store and mailer.

    Any collaborator can be swapped through keyword arguments.
    """

    def _make(
        vision: Optional[VisionClassifier] = None,
        geocode_provider: Optional[GeocodingProvider] = None,
        routing=AMRAVATI_ROUTING,
        officers=DEFAULT_OFFICERS,
        intake_store: Optional[ComplaintStore] = None,
        intake_mailer: Optional[Mailer] = None,
    ) -> ComplaintIntakeService:
        backing = intake_store or store
        moderation = ModerationCoordinator(
            duplicate_service=DuplicateDetectionService(backing),
            spam_engine=SpamHeuristicEngine(backing),
            vision_classifier=vision,
        )
        return ComplaintIntakeService(
            store=backing,
            moderation=moderation,
            geocoder=Geocoder(
                geocode_provider or FakeGeocodingProvider(amravati_geocode()),
                default_city="Amravati",
                default_state="Maharashtra",
            ),
            router=WardRouter(routing),
            assignor=OfficerAssignor(OfficerDirectory(officers)),
            dispatcher=NotificationDispatcher(backing, intake_mailer or mailer),
        )

    return _make
