"""
Duplicate Detection Service - image fingerprint matching.

DESIGN PRINCIPLES:
- A photo identical to one already on file points at the same issue
- Only the most recent prior complaint with the same fingerprint matters
- Open match (Submitted / In Progress) → hard reject, the issue is still active
- Resolved match (Resolved / Resolved (Pending Admin) / Closed) → stale duplicate,
  reported to moderation as a spam signal rather than a conflict

This is a point-in-time read. Two simultaneous uploads of the same photo can
both pass (see DESIGN.md).
"""

from typing import Optional
import logging

from pydantic import BaseModel

from app.models.complaint import is_resolved_status
from app.models.moderation import DuplicateMatch
from app.services.complaint_store import ComplaintStore

logger = logging.getLogger(__name__)


class DuplicateCheck(BaseModel):
    match: Optional[DuplicateMatch] = None

    @property
    def is_duplicate(self) -> bool:
        return self.match is not None

    @property
    def is_stale(self) -> bool:
        return self.match is not None and is_resolved_status(self.match.status)

    @property
    def is_hard_reject(self) -> bool:
        return self.match is not None and not is_resolved_status(self.match.status)

    @property
    def spam_reason(self) -> str:
        if not self.is_stale:
            return ""
        return f"Same image was previously reported and resolved (Complaint {self.match.id})."


class DuplicateDetectionService:
    """
    Looks up prior submissions by image fingerprint.
    """

    def __init__(self, store: ComplaintStore):
        self.store = store

    def check_duplicate(self, image_hash: Optional[str]) -> DuplicateCheck:
        if not image_hash:
            return DuplicateCheck()

        matches = self.store.find_by_fingerprint(image_hash, limit=1)
        if not matches:
            return DuplicateCheck()

        complaint_id, data = matches[0]
        match = DuplicateMatch(id=complaint_id, status=str(data.get("status") or ""))
        result = DuplicateCheck(match=match)

        if result.is_hard_reject:
            logger.warning(f"Duplicate image matches open complaint {match.id} ({match.status})")
        else:
            logger.info(f"Duplicate image matches resolved complaint {match.id} ({match.status})")
        return result
