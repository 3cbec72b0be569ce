from datetime import datetime, timezone

from app.models.complaint import (
    ComplaintCategory,
    ComplaintResponse,
    ComplaintStatus,
    NotificationType,
    Officer,
    Priority,
)
from app.services.notification_service import (
    ASSIGNMENT_SUBJECT,
    NotificationDispatcher,
    assignment_email_html,
    assignment_message,
)

from conftest import RecordingMailer

OFFICER = Officer(
    id="OFF-003", name="Suresh Jadhav", email="suresh@example.org",
    ward="Amravati Ward – Panchvati Zone", division="Zone-3", department="Water",
)


def complaint(**overrides):
    values = dict(
        id="CMP-0001",
        user_id="USR-1",
        category=ComplaintCategory.WATER,
        description="Major pipe burst <flooding> the street",
        latitude=20.95,
        longitude=77.77,
        priority=Priority.HIGH,
        status=ComplaintStatus.IN_PROGRESS,
        worker_name=OFFICER.name,
        full_address="Shegaon Naka, Amravati",
        ward=OFFICER.ward,
        division="Zone-3",
        department="Water",
        classified_category=ComplaintCategory.WATER,
        classification_confidence=0.75,
        created_at=datetime(2026, 5, 1, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return ComplaintResponse(**values)


def test_assignment_message():
    assert assignment_message(complaint(), OFFICER.name) == (
        "Complaint CMP-0001 auto-assigned to Suresh Jadhav (Water) in Amravati Ward – Panchvati Zone."
    )


def test_email_html_lists_fields_escaped():
    html = assignment_email_html(complaint())
    for text in ("CMP-0001", "Water", "High", "Zone-3", "Shegaon Naka, Amravati", "20.95, 77.77"):
        assert text in html
    assert "&lt;flooding&gt;" in html
    assert "<flooding>" not in html


def test_dispatch_records_notification_and_emails(store):
    mailer = RecordingMailer()
    notifications = NotificationDispatcher(store, mailer).dispatch(complaint(), OFFICER)

    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.ASSIGNED
    assert notifications[0].is_read is False
    assert store.list_notifications("CMP-0001") == notifications
    assert mailer.sent[0]["to"] == "suresh@example.org"
    assert mailer.sent[0]["subject"] == ASSIGNMENT_SUBJECT


def test_no_officer_no_side_effects(store):
    mailer = RecordingMailer()
    assert NotificationDispatcher(store, mailer).dispatch(complaint(), None) == []
    assert store.list_notifications("CMP-0001") == []
    assert mailer.sent == []


def test_officer_without_email_gets_notification_only(store):
    mailer = RecordingMailer()
    officer = OFFICER.model_copy(update={"email": None})
    assert len(NotificationDispatcher(store, mailer).dispatch(complaint(), officer)) == 1
    assert mailer.sent == []


def test_email_is_handed_to_scheduler(store):
    mailer = RecordingMailer()
    scheduled = []
    NotificationDispatcher(store, mailer).dispatch(complaint(), OFFICER, schedule=lambda fn, *args: scheduled.append((fn, args)))

    assert mailer.sent == []
    fn, args = scheduled[0]
    assert fn(*args) is True
    assert len(mailer.sent) == 1


def test_mailer_failure_is_swallowed(store):
    dispatcher = NotificationDispatcher(store, RecordingMailer(error=OSError("smtp down")))
    assert len(dispatcher.dispatch(complaint(), OFFICER)) == 1


def test_notification_store_failure_is_swallowed(store, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("firestore unavailable")

    monkeypatch.setattr(store, "insert_notification", broken)
    mailer = RecordingMailer()

    assert NotificationDispatcher(store, mailer).dispatch(complaint(), OFFICER) == []
    assert len(mailer.sent) == 1
