"""
Moderation Coordinator - merges every content check into one verdict.

Inputs per submission:
1. Content fingerprint of the photo
2. Duplicate lookup by fingerprint
3. Local spam heuristics (text + repeat submissions)
4. Text category classifier, optionally overridden by the remote vision
   classifier when it is configured and answers

Decision order (first hit wins):
1. AI-generated image            → reject (authenticity)
2. Duplicate of an OPEN complaint → reject (conflict)
3. Spam (heuristic, remote, or duplicate of a resolved complaint) → reject (quality)
4. Accept
"""

from enum import Enum
from typing import Optional
import logging

from app.models.complaint import ComplaintCategory, is_resolved_status
from app.models.moderation import ModerationResult
from app.services.ai_plugin.base import VisionClassifier
from app.services.category_classifier import classify_from_text, normalize_category
from app.services.duplicate_detection import DuplicateDetectionService
from app.services.spam_heuristics import SpamHeuristicEngine
from app.utils.content_hash import compute_image_fingerprint

logger = logging.getLogger(__name__)

HEURISTIC_MODEL = "heuristic"


class ModerationDecision(str, Enum):
    ACCEPT = "ACCEPT"
    REJECT_AI_GENERATED = "REJECT_AI_GENERATED"
    REJECT_DUPLICATE = "REJECT_DUPLICATE"
    REJECT_SPAM = "REJECT_SPAM"


def decide(result: ModerationResult) -> ModerationDecision:
    if result.is_ai_generated:
        return ModerationDecision.REJECT_AI_GENERATED
    if result.is_duplicate and result.duplicate_against is not None:
        if not is_resolved_status(result.duplicate_against.status):
            return ModerationDecision.REJECT_DUPLICATE
    if result.is_spam:
        return ModerationDecision.REJECT_SPAM
    return ModerationDecision.ACCEPT


def resolve_final_category(
    result: ModerationResult,
    submitted_category: str,
    threshold: float = 0.6,
) -> ComplaintCategory:
    """
    Classifier category when confident enough, otherwise what the citizen chose.
    A low-confidence guess never overrides explicit citizen intent.
    """
    if result.classification_confidence >= threshold:
        return result.classified_category
    return normalize_category(submitted_category)


class ModerationCoordinator:
    def __init__(
        self,
        duplicate_service: DuplicateDetectionService,
        spam_engine: SpamHeuristicEngine,
        vision_classifier: Optional[VisionClassifier] = None,
    ):
        self.duplicate_service = duplicate_service
        self.spam_engine = spam_engine
        self.vision_classifier = vision_classifier

    def _scan_remote(self, photo_url: str, description: str):
        if self.vision_classifier is None or not photo_url:
            return None
        try:
            return self.vision_classifier.classify(photo_url, description)
        except Exception as e:
            # Providers should not raise, but a broken plug-in must not fail intake
            logger.warning(f"⚠️ Vision classifier raised, treating as unavailable: {e}")
            return None

    def _model_tag(self, remote) -> str:
        if remote is None:
            return HEURISTIC_MODEL
        if remote.model_name:
            return remote.model_name
        try:
            return self.vision_classifier.get_model_info().get("name") or "remote"
        except Exception as e:
            logger.warning(f"⚠️ Vision classifier model info unavailable: {e}")
            return "remote"

    def moderate(
        self,
        user_id: str,
        photo_url: str,
        description: str,
        submitted_category: str,
    ) -> ModerationResult:
        photo = (photo_url or "").strip()
        image_hash = compute_image_fingerprint(photo)

        duplicate = self.duplicate_service.check_duplicate(image_hash)
        spam = self.spam_engine.evaluate(user_id, description)
        text_classification = classify_from_text(description, submitted_category)
        remote = self._scan_remote(photo, description)

        if remote is None:
            logger.info("Vision classifier unavailable, using text classifier and heuristics")

        spam_reasons = [spam.reason, remote.spam_reason if remote else "", duplicate.spam_reason]

        return ModerationResult(
            image_hash=image_hash,
            is_ai_generated=bool(remote and remote.is_ai_generated),
            ai_generated_reason=remote.ai_generated_reason if remote else "",
            is_spam=spam.is_spam or bool(remote and remote.is_spam) or duplicate.is_stale,
            spam_reason=" ".join(r for r in spam_reasons if r).strip(),
            is_duplicate=duplicate.is_duplicate,
            duplicate_against=duplicate.match,
            classified_category=remote.category if remote else text_classification.category,
            classification_confidence=remote.confidence if remote else text_classification.confidence,
            model=self._model_tag(remote),
        )
