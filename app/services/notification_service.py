"""
Notification Dispatcher - best-effort side effects of an accepted complaint.

Two independent effects:
1. ASSIGNED admin notification in Firestore (only when an officer was assigned)
2. Assignment email to the officer (only when the officer has an email)

Neither effect can fail the submission: errors are logged and swallowed,
and the complaint record is never rolled back.
"""

from html import escape
from typing import Callable, List, Optional
import logging

from app.models.complaint import ComplaintResponse, Notification, NotificationType, Officer
from app.services.complaint_store import ComplaintStore
from app.services.email_service import Mailer

logger = logging.getLogger(__name__)

ASSIGNMENT_SUBJECT = "New Complaint Assigned"

# schedule(fn, *args) runs fn later (e.g. BackgroundTasks.add_task) or right away
Scheduler = Callable[..., None]


def run_now(fn: Callable, *args) -> None:
    fn(*args)


def assignment_message(complaint: ComplaintResponse, officer_name: str) -> str:
    return (
        f"Complaint {complaint.id} auto-assigned to {officer_name} "
        f"({complaint.category.value}) in {complaint.ward}."
    )


def assignment_email_html(complaint: ComplaintResponse) -> str:
    rows = [
        ("ID", complaint.id),
        ("Category", complaint.category.value),
        ("Priority", complaint.priority.value),
        ("Ward", complaint.ward),
        ("Division", complaint.division),
        ("Description", complaint.description),
        ("Location", complaint.full_address),
        ("GPS", f"{complaint.latitude}, {complaint.longitude}"),
    ]
    body = "\n".join(f"<p><b>{label}:</b> {escape(str(value))}</p>" for label, value in rows)
    return f"<h2>{ASSIGNMENT_SUBJECT}</h2>\n{body}"


class NotificationDispatcher:
    def __init__(self, store: ComplaintStore, mailer: Optional[Mailer] = None):
        self.store = store
        self.mailer = mailer

    def notify_admin_assignment(self, complaint: ComplaintResponse, officer: Officer) -> Optional[Notification]:
        try:
            return self.store.insert_notification(
                complaint.id,
                NotificationType.ASSIGNED,
                assignment_message(complaint, officer.name),
            )
        except Exception as e:
            logger.error(f"⚠️ Failed to record ASSIGNED notification for {complaint.id}: {e}")
            return None

    def email_officer(self, complaint: ComplaintResponse, officer: Officer) -> bool:
        if self.mailer is None or not officer.email:
            return False
        try:
            return self.mailer.send(officer.email, ASSIGNMENT_SUBJECT, assignment_email_html(complaint))
        except Exception as e:
            logger.error(f"❌ Assignment email for {complaint.id} failed: {e}")
            return False

    def dispatch(
        self,
        complaint: ComplaintResponse,
        officer: Optional[Officer],
        schedule: Scheduler = run_now,
    ) -> List[Notification]:
        """
        Record the admin notification now and hand the email to `schedule`.

        Returns the notifications that were actually stored.
        """
        if officer is None:
            return []

        notifications = []
        notification = self.notify_admin_assignment(complaint, officer)
        if notification is not None:
            notifications.append(notification)

        if officer.email:
            try:
                schedule(self.email_officer, complaint, officer)
            except Exception as e:
                logger.error(f"⚠️ Could not schedule assignment email for {complaint.id}: {e}")

        return notifications
