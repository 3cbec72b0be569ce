import json
from datetime import datetime, timedelta, timezone

from app.config.mock_firestore import DESCENDING, MockFirestore


def test_set_get_update():
    db = MockFirestore()
    ref = db.collection("complaints").document("CMP-1")
    assert ref.get().exists is False

    ref.set({"status": "Submitted"})
    ref.update({"status": "In Progress"})

    snapshot = ref.get()
    assert snapshot.exists
    assert snapshot.id == "CMP-1"
    assert snapshot.to_dict() == {"status": "In Progress"}


def test_where_order_by_limit():
    db = MockFirestore()
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    complaints = db.collection("complaints")
    for i, status in enumerate(["Submitted", "Resolved", "Submitted"]):
        complaints.document(f"CMP-{i}").set({"image_hash": "abc", "status": status, "created_at": base + timedelta(days=i)})
    complaints.document("CMP-other").set({"image_hash": "zzz", "created_at": base + timedelta(days=9)})

    docs = list(
        complaints.where("image_hash", "==", "abc")
        .order_by("created_at", direction=DESCENDING)
        .limit(2)
        .stream()
    )
    assert [d.id for d in docs] == ["CMP-2", "CMP-1"]

    recent = list(complaints.where("created_at", ">=", base + timedelta(days=1)).stream())
    assert {d.id for d in recent} == {"CMP-1", "CMP-2", "CMP-other"}


def test_snapshots_are_copies():
    db = MockFirestore()
    ref = db.collection("officers").document("OFF-1")
    ref.set({"name": "A"})
    ref.get().to_dict()["name"] = "B"
    assert ref.get().to_dict()["name"] == "A"


def test_collections_lists_written_collections():
    db = MockFirestore()
    db.collection("complaints").document("CMP-1").set({})
    db.collection("notifications").document("NTF-1").set({})
    assert sorted(c.id for c in db.collections()) == ["complaints", "notifications"]


def test_file_backed_round_trip_keeps_datetimes(tmp_path):
    path = tmp_path / "mock_db.json"
    created = datetime(2026, 2, 3, 4, 5, tzinfo=timezone.utc)

    MockFirestore(str(path)).collection("complaints").document("CMP-1").set({"created_at": created})
    assert "__datetime__" in json.loads(path.read_text())["complaints"]["CMP-1"]["created_at"]

    reloaded = MockFirestore(str(path)).collection("complaints").document("CMP-1").get()
    assert reloaded.to_dict()["created_at"] == created
