"""
Spam Heuristic Engine - local, deterministic content checks.

Runs on every submission, never calls external services. Each rule that
fires contributes one human-readable reason; the submission is spam when at
least one rule fires.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional
import logging
import re

from pydantic import BaseModel, Field

from app.services.complaint_store import ComplaintStore

logger = logging.getLogger(__name__)


class SpamVerdict(BaseModel):
    reasons: List[str] = Field(default_factory=list)

    @property
    def is_spam(self) -> bool:
        return bool(self.reasons)

    @property
    def reason(self) -> str:
        return " ".join(self.reasons)


class SpamHeuristicEngine:
    MIN_DESCRIPTION_LENGTH = 8
    LINK_PATTERN = re.compile(r"(https?://|www\.)")
    REPEATED_CHAR_PATTERN = re.compile(r"([a-zA-Z])\1{6,}")
    TEST_CONTENT_PATTERN = re.compile(r"(test\s*test|asdf|qwerty|dummy)")

    def __init__(
        self,
        store: ComplaintStore,
        repeat_window_days: int = 7,
        repeat_threshold: int = 2,
    ):
        self.store = store
        self.repeat_window_days = repeat_window_days
        self.repeat_threshold = repeat_threshold

    def evaluate(self, user_id: str, description: str, now: Optional[datetime] = None) -> SpamVerdict:
        text = (description or "").strip()
        lower = text.lower()
        reasons = []

        if len(text) < self.MIN_DESCRIPTION_LENGTH:
            reasons.append("Description is too short.")
        if self.LINK_PATTERN.search(lower):
            reasons.append("Description contains promotional links.")
        if self.REPEATED_CHAR_PATTERN.search(lower):
            reasons.append("Description has repeated characters.")
        if self.TEST_CONTENT_PATTERN.search(lower):
            reasons.append("Description looks like spam/test content.")

        since = (now or datetime.now(timezone.utc)) - timedelta(days=self.repeat_window_days)
        repeated = self.store.count_recent_by_description(user_id, text, since)
        if repeated >= self.repeat_threshold:
            reasons.append("Same description was already submitted repeatedly by this user.")

        verdict = SpamVerdict(reasons=reasons)
        if verdict.is_spam:
            logger.info(f"Spam heuristics fired for user {user_id}: {verdict.reason}")
        return verdict
