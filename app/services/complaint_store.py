"""
Complaint Store - Firestore persistence for the intake pipeline.

Collections:
- complaints: one document per accepted submission (id = complaint id)
- notifications: admin notifications created as intake side effects
- officers: optional officer directory (see scripts/seed_officers.py)

The store is the only shared resource between submissions. Writes raise on
failure; callers decide whether a failure is fatal.
"""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from firebase_admin import firestore

from app.models.complaint import Notification, NotificationType, Officer

logger = logging.getLogger(__name__)

COMPLAINTS = "complaints"
NOTIFICATIONS = "notifications"
OFFICERS = "officers"


def new_id(prefix: str) -> str:
    """Short public id, e.g. CMP-9f2c41ab."""
    return f"{prefix}-{secrets.token_hex(4)}"


def normalize_description(description: Optional[str]) -> str:
    """Case- and whitespace-insensitive form used for repeat detection."""
    return " ".join((description or "").split()).lower()


class ComplaintStore:
    def __init__(self, db: Any):
        self.db = db

    def insert_complaint(self, complaint_id: str, data: Dict) -> None:
        document = dict(data)
        document["description_normalized"] = normalize_description(data.get("description"))
        self.db.collection(COMPLAINTS).document(complaint_id).set(document)
        logger.info(f"Complaint saved to Firestore: {complaint_id}")

    def get_complaint(self, complaint_id: str) -> Optional[Dict]:
        doc = self.db.collection(COMPLAINTS).document(complaint_id).get()
        if not doc.exists:
            return None
        return doc.to_dict()

    def find_by_fingerprint(self, image_hash: str, limit: int = 1) -> List[Tuple[str, Dict]]:
        """Complaints sharing an image hash, most recently created first."""
        query = (
            self.db.collection(COMPLAINTS)
            .where("image_hash", "==", image_hash)
            .order_by("created_at", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        return [(doc.id, doc.to_dict()) for doc in query.stream()]

    def count_recent_by_description(self, user_id: str, description: str, since: datetime) -> int:
        query = (
            self.db.collection(COMPLAINTS)
            .where("user_id", "==", user_id)
            .where("description_normalized", "==", normalize_description(description))
            .where("created_at", ">=", since)
        )
        return len(list(query.stream()))

    def insert_notification(
        self,
        complaint_id: str,
        notification_type: NotificationType,
        message: str,
    ) -> Notification:
        notification = Notification(
            id=new_id("NTF"),
            complaint_id=complaint_id,
            type=notification_type,
            message=message,
            is_read=False,
            created_at=datetime.now(timezone.utc),
        )
        data = notification.model_dump(mode="python", exclude={"id"})
        data["type"] = notification.type.value
        self.db.collection(NOTIFICATIONS).document(notification.id).set(data)
        logger.info(f"Notification {notification.id} ({notification.type.value}) saved for complaint {complaint_id}")
        return notification

    def list_notifications(self, complaint_id: str) -> List[Notification]:
        query = self.db.collection(NOTIFICATIONS).where("complaint_id", "==", complaint_id)
        return [Notification(id=doc.id, **doc.to_dict()) for doc in query.stream()]

    def list_officers(self) -> List[Officer]:
        return [Officer(id=doc.id, **doc.to_dict()) for doc in self.db.collection(OFFICERS).stream()]

    def upsert_officer(self, officer: Officer) -> None:
        self.db.collection(OFFICERS).document(officer.id).set(officer.model_dump(exclude={"id"}))
