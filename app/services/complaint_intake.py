"""
Complaint Intake Service - orchestrates a single citizen submission.

Stages:
    VALIDATING → MODERATING → (REJECTED | ROUTING) → ASSIGNING → NOTIFYING → PERSISTED

IMPORTANT:
- Only moderation rejections and the complaint insert can fail a submission.
- Geocoding, routing, officer assignment and notifications always degrade to
  fallback values; they never surface errors to the citizen.
- Nothing is written for a rejected submission.
- The complaint is inserted before any notification is written, so a failed
  insert leaves no partial records behind.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional
import logging
import math

from pydantic import BaseModel

from app.models.complaint import ComplaintCreate, ComplaintResponse, Notification
from app.models.moderation import ModerationResult
from app.services.complaint_store import ComplaintStore, new_id
from app.services.geocoding.resolver import Geocoder
from app.services.moderation import (
    ModerationCoordinator,
    ModerationDecision,
    decide,
    resolve_final_category,
)
from app.services.notification_service import NotificationDispatcher, Scheduler, run_now
from app.services.officer_assignment import OfficerAssignor
from app.services.priority_assignment import assign_priority
from app.services.ward_routing import WardRouter

logger = logging.getLogger(__name__)


class IntakeStage(str, Enum):
    VALIDATING = "validating"
    MODERATING = "moderating"
    REJECTED = "rejected"
    ROUTING = "routing"
    ASSIGNING = "assigning"
    NOTIFYING = "notifying"
    PERSISTED = "persisted"


class ComplaintRejected(Exception):
    """A hard rejection: nothing persisted, reason reported to the submitter."""

    code = "REJECTED"
    status_code = 422

    def __init__(self, message: str, reason: str = "", details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.details = details or {}

    def to_detail(self) -> Dict:
        detail = {"code": self.code, "error": self.message}
        if self.reason:
            detail["reason"] = self.reason
        detail.update(self.details)
        return detail


class InvalidSubmission(ComplaintRejected):
    code = "INVALID_SUBMISSION"
    status_code = 400


class AuthenticityRejected(ComplaintRejected):
    code = "AI_GENERATED"
    status_code = 422


class DuplicateConflict(ComplaintRejected):
    code = "DUPLICATE_ACTIVE"
    status_code = 409


class SpamRejected(ComplaintRejected):
    code = "SPAM"
    status_code = 422


class ComplaintPersistenceError(Exception):
    """The complaint insert failed. Fatal for the submission."""


class IntakeOutcome(BaseModel):
    complaint: ComplaintResponse
    notifications: List[Notification]
    moderation: ModerationResult


def to_document(complaint: ComplaintResponse) -> Dict:
    """Firestore document body: enums flattened to their values, id excluded."""
    data = complaint.model_dump(exclude={"id"})
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in data.items()}


class ComplaintIntakeService:
    def __init__(
        self,
        store: ComplaintStore,
        moderation: ModerationCoordinator,
        geocoder: Geocoder,
        router: WardRouter,
        assignor: OfficerAssignor,
        dispatcher: NotificationDispatcher,
        confidence_threshold: float = 0.6,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.store = store
        self.moderation = moderation
        self.geocoder = geocoder
        self.router = router
        self.assignor = assignor
        self.dispatcher = dispatcher
        self.confidence_threshold = confidence_threshold
        self.clock = clock

    def _enter(self, complaint_id: str, stage: IntakeStage) -> None:
        logger.info(f"[INTAKE {complaint_id}] {stage.value}")

    def _validate(self, payload: ComplaintCreate) -> None:
        missing = [name for name in ("user_id", "category", "description") if not str(getattr(payload, name, "") or "").strip()]
        if missing:
            raise InvalidSubmission("Missing required fields", details={"fields": missing})
        for name in ("latitude", "longitude"):
            value = getattr(payload, name, None)
            if value is None or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidSubmission("Missing location", details={"fields": [name]})

    def _rejection(self, decision: ModerationDecision, result: ModerationResult) -> ComplaintRejected:
        if decision == ModerationDecision.REJECT_AI_GENERATED:
            return AuthenticityRejected(
                "Uploaded image appears AI-generated. Please upload a real issue photo.",
                reason=result.ai_generated_reason or "Image authenticity check failed.",
            )
        if decision == ModerationDecision.REJECT_DUPLICATE:
            return DuplicateConflict(
                "Problem already reported and not resolved yet.",
                details={"duplicate_against": result.duplicate_against.model_dump()},
            )
        return SpamRejected(
            "Upload flagged as spam. Please provide a valid civic issue report.",
            reason=result.spam_reason or "Spam signal detected.",
        )

    def submit(self, payload: ComplaintCreate, schedule: Scheduler = run_now) -> IntakeOutcome:
        """
        Run one submission through the pipeline.

        Args:
            payload: Validated submission
            schedule: How to run the officer email (BackgroundTasks.add_task
                from the route, or inline by default)

        Raises:
            ComplaintRejected: moderation (or validation) rejected the submission
            ComplaintPersistenceError: the complaint could not be stored
        """
        complaint_id = new_id("CMP")
        photo_url = (payload.photo_url or "").strip()

        self._enter(complaint_id, IntakeStage.VALIDATING)
        self._validate(payload)

        self._enter(complaint_id, IntakeStage.MODERATING)
        moderation = self.moderation.moderate(
            user_id=payload.user_id,
            photo_url=photo_url,
            description=payload.description,
            submitted_category=payload.category,
        )
        decision = decide(moderation)
        if decision != ModerationDecision.ACCEPT:
            self._enter(complaint_id, IntakeStage.REJECTED)
            logger.warning(f"[INTAKE {complaint_id}] rejected: {decision.value}")
            raise self._rejection(decision, moderation)

        category = resolve_final_category(moderation, payload.category, self.confidence_threshold)
        priority = assign_priority(category, payload.description)

        self._enter(complaint_id, IntakeStage.ROUTING)
        location = self.geocoder.lookup(payload.latitude, payload.longitude)
        routed = self.router.route(payload.latitude, payload.longitude, location.ward_hint)

        self._enter(complaint_id, IntakeStage.ASSIGNING)
        assignment = self.assignor.assign(routed.ward, routed.division, category)

        complaint = ComplaintResponse(
            id=complaint_id,
            user_id=payload.user_id,
            category=category,
            description=payload.description,
            photo_url=photo_url,
            latitude=payload.latitude,
            longitude=payload.longitude,
            priority=priority,
            status=assignment.status,
            worker_name=assignment.worker_name,
            area=location.area,
            city=location.city,
            state=location.state,
            full_address=location.full_address,
            ward=routed.ward,
            division=routed.division,
            department=assignment.department,
            assigned_officer_id=assignment.officer_id,
            assigned_officer_name=assignment.worker_name,
            image_hash=moderation.image_hash,
            moderation_flags=moderation.flags(),
            ai_generated_flag=moderation.is_ai_generated,
            spam_flag=moderation.is_spam,
            duplicate_flag=moderation.is_duplicate,
            classified_category=category,
            classification_confidence=moderation.classification_confidence,
            created_at=self.clock(),
        )

        try:
            self.store.insert_complaint(complaint.id, to_document(complaint))
        except Exception as e:
            logger.error(f"Failed to save complaint {complaint.id} to Firestore: {e}", exc_info=True)
            raise ComplaintPersistenceError("Failed to create complaint") from e

        self._enter(complaint_id, IntakeStage.NOTIFYING)
        notifications = self.dispatcher.dispatch(complaint, assignment.officer, schedule)

        self._enter(complaint_id, IntakeStage.PERSISTED)
        return IntakeOutcome(complaint=complaint, notifications=notifications, moderation=moderation)


def load_officer_directory(store: ComplaintStore):
    """Officer directory from settings.OFFICER_SOURCE ("static" or "firestore")."""
    from app.config.reference_data import DEFAULT_OFFICERS
    from app.core.settings import settings
    from app.services.officer_assignment import OfficerDirectory

    if settings.OFFICER_SOURCE.lower() == "firestore":
        try:
            officers = store.list_officers()
            if officers:
                logger.info(f"Loaded {len(officers)} officers from Firestore")
                return OfficerDirectory(officers)
            logger.warning("Officers collection is empty, using built-in directory")
        except Exception as e:
            logger.warning(f"Failed to load officers from Firestore ({e}), using built-in directory")
    return OfficerDirectory(DEFAULT_OFFICERS)


def build_intake_service(db=None) -> ComplaintIntakeService:
    """Wire the pipeline from settings. Collaborators are built once per service."""
    from app.config.firebase import get_db
    from app.config.reference_data import AMRAVATI_ROUTING
    from app.core.settings import settings
    from app.services.ai_plugin.registry import get_vision_classifier
    from app.services.duplicate_detection import DuplicateDetectionService
    from app.services.email_service import build_mailer
    from app.services.geocoding.resolver import build_geocoder
    from app.services.spam_heuristics import SpamHeuristicEngine

    store = ComplaintStore(db if db is not None else get_db())
    moderation = ModerationCoordinator(
        duplicate_service=DuplicateDetectionService(store),
        spam_engine=SpamHeuristicEngine(
            store,
            repeat_window_days=settings.SPAM_REPEAT_WINDOW_DAYS,
            repeat_threshold=settings.SPAM_REPEAT_THRESHOLD,
        ),
        vision_classifier=get_vision_classifier(),
    )
    return ComplaintIntakeService(
        store=store,
        moderation=moderation,
        geocoder=build_geocoder(),
        router=WardRouter(AMRAVATI_ROUTING),
        assignor=OfficerAssignor(load_officer_directory(store)),
        dispatcher=NotificationDispatcher(store, build_mailer()),
        confidence_threshold=settings.CLASSIFICATION_CONFIDENCE_THRESHOLD,
    )


# Global service instance (singleton pattern)
_intake_service: Optional[ComplaintIntakeService] = None


def get_intake_service() -> ComplaintIntakeService:
    """
    Get or create the ComplaintIntakeService singleton.

    Used as a FastAPI dependency; tests override it with their own wiring.
    """
    global _intake_service
    if _intake_service is None:
        _intake_service = build_intake_service()
    return _intake_service
