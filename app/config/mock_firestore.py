"""
In-memory Firestore stand-in for local development and tests.

Implements only the slice of the google-cloud-firestore client API that the
application uses:

    db.collection(name).document(id).set(data) / .get() / .update(data)
    db.collection(name).where(field, op, value).order_by(field, direction=...).limit(n).stream()
    db.collections()

When a path is given, every write is flushed to a JSON file so data survives
restarts (USE_MOCK_DB=true with MOCK_DB_PATH).
"""

import json
import logging
import os
import threading
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DESCENDING = "DESCENDING"
ASCENDING = "ASCENDING"

_OPERATORS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a is not None and a < b,
    "<=": lambda a, b: a is not None and a <= b,
    ">": lambda a, b: a is not None and a > b,
    ">=": lambda a, b: a is not None and a >= b,
    "in": lambda a, b: a in b,
}


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return {"__datetime__": value.isoformat()}
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_encode(v) for v in value]
    return value


def _decode(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value.keys()) == {"__datetime__"}:
            return datetime.fromisoformat(value["__datetime__"])
        return {k: _decode(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_decode(v) for v in value]
    return value


class MockDocumentSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict]:
        return dict(self._data) if self._data is not None else None


class MockDocumentReference:
    def __init__(self, db: "MockFirestore", collection: str, doc_id: str):
        self._db = db
        self._collection = collection
        self.id = doc_id

    def set(self, data: Dict) -> None:
        self._db._write(self._collection, self.id, dict(data))

    def update(self, data: Dict) -> None:
        current = self._db._read(self._collection, self.id)
        if current is None:
            raise KeyError(f"No document to update: {self._collection}/{self.id}")
        current.update(data)
        self._db._write(self._collection, self.id, current)

    def get(self) -> MockDocumentSnapshot:
        return MockDocumentSnapshot(self.id, self._db._read(self._collection, self.id))


class MockQuery:
    def __init__(self, db: "MockFirestore", collection: str):
        self._db = db
        self._collection = collection
        self._filters: List[tuple] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None

    def _clone(self) -> "MockQuery":
        query = MockQuery(self._db, self._collection)
        query._filters = list(self._filters)
        query._order = self._order
        query._limit = self._limit
        return query

    def where(self, field_path: str, op_string: str, value: Any) -> "MockQuery":
        if op_string not in _OPERATORS:
            raise ValueError(f"Unsupported operator for mock Firestore: {op_string}")
        query = self._clone()
        query._filters.append((field_path, op_string, value))
        return query

    def order_by(self, field_path: str, direction: str = ASCENDING) -> "MockQuery":
        query = self._clone()
        query._order = (field_path, direction)
        return query

    def limit(self, count: int) -> "MockQuery":
        query = self._clone()
        query._limit = count
        return query

    def stream(self):
        docs = [
            (doc_id, data)
            for doc_id, data in self._db._scan(self._collection)
            if all(_OPERATORS[op](data.get(field), value) for field, op, value in self._filters)
        ]

        if self._order:
            field, direction = self._order
            # Firestore drops documents missing the ordered field
            docs = [d for d in docs if d[1].get(field) is not None]
            docs.sort(key=lambda d: d[1][field], reverse=(direction == DESCENDING))

        if self._limit is not None:
            docs = docs[: self._limit]

        for doc_id, data in docs:
            yield MockDocumentSnapshot(doc_id, data)


class MockCollectionReference(MockQuery):
    def __init__(self, db: "MockFirestore", name: str):
        super().__init__(db, name)
        self.id = name

    def document(self, doc_id: Optional[str] = None) -> MockDocumentReference:
        return MockDocumentReference(self._db, self._collection, doc_id or uuid.uuid4().hex[:20])


class MockFirestore:
    """Thread-safe dict-of-dicts Firestore replacement."""

    def __init__(self, path: Optional[str] = None):
        self._path = path
        self._lock = threading.Lock()
        self._data: Dict[str, Dict[str, Dict]] = {}
        if path and os.path.exists(path):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    self._data = _decode(json.load(f))
                logger.info(f"[MOCK FIRESTORE] Loaded {path}")
            except (OSError, ValueError) as e:
                logger.warning(f"[MOCK FIRESTORE] Could not load {path}: {e}. Starting empty.")
                self._data = {}

    def collection(self, name: str) -> MockCollectionReference:
        return MockCollectionReference(self, name)

    def collections(self) -> List[MockCollectionReference]:
        with self._lock:
            return [MockCollectionReference(self, name) for name in self._data]

    def _read(self, collection: str, doc_id: str) -> Optional[Dict]:
        with self._lock:
            data = self._data.get(collection, {}).get(doc_id)
            return dict(data) if data is not None else None

    def _scan(self, collection: str):
        with self._lock:
            return [(doc_id, dict(data)) for doc_id, data in self._data.get(collection, {}).items()]

    def _write(self, collection: str, doc_id: str, data: Dict) -> None:
        with self._lock:
            self._data.setdefault(collection, {})[doc_id] = data
            self._flush()

    def _flush(self) -> None:
        if not self._path:
            return
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(_encode(self._data), f, indent=2)


def get_mock_db(path: Optional[str] = None) -> MockFirestore:
    return MockFirestore(path)
