"""Test fixtures with mocked Firebase services."""
import operator
import uuid
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.models.common import GeoPointIn, WorkerStatus
from backend.models.worker import LocatedEntity, Rating


# --- Fake Firestore in-memory store ---

_OPS = {
    "==": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def _same_type_order(stored, value):
    if stored is None or isinstance(stored, bool) != isinstance(value, bool):
        return False
    if isinstance(stored, (int, float)) and isinstance(value, (int, float)):
        return True
    return type(stored) is type(value)


class FakeDocRef:
    def __init__(self, store, collection_path, doc_id):
        self._store = store
        self._collection_path = collection_path
        self.id = doc_id

    def _key(self):
        return (self._collection_path, self.id)

    def get(self):
        data = self._store.get(self._key())
        return FakeDocSnapshot(self.id, data, self._collection_path, self._store)

    def set(self, data):
        self._store[self._key()] = dict(data)

    def update(self, data):
        existing = self._store.get(self._key(), {})
        existing.update(data)
        self._store[self._key()] = existing

    def delete(self):
        self._store.pop(self._key(), None)

    def collection(self, name):
        return FakeCollectionRef(self._store, f"{self._collection_path}/{self.id}/{name}")


class FakeDocSnapshot:
    def __init__(self, doc_id, data, collection_path, store):
        self.id = doc_id
        self._data = data
        self._collection_path = collection_path
        self._store = store
        self.exists = data is not None
        self.reference = FakeDocRef(store, collection_path, doc_id)

    def to_dict(self):
        return dict(self._data) if self._data else None


class FakeQuery:
    def __init__(self, store, collection_path, docs=None):
        self._store = store
        self._collection_path = collection_path
        self._docs = docs

    def _get_docs(self):
        if self._docs is not None:
            return self._docs
        results = []
        for (coll, doc_id), data in self._store.items():
            if coll == self._collection_path:
                results.append(FakeDocSnapshot(doc_id, data, self._collection_path, self._store))
        return results

    def where(self, filter=None, **kwargs):
        docs = self._get_docs()
        if filter:
            field = filter.field_path
            op = filter.op_string
            value = filter.value
        else:
            field = kwargs.get("field")
            op = kwargs.get("op")
            value = kwargs.get("value")
        compare = _OPS[op]
        # Firestore leaves out documents missing the field or holding another type
        filtered = [
            d for d in docs
            if _same_type_order(d.to_dict().get(field), value) and compare(d.to_dict()[field], value)
        ]
        return FakeQuery(self._store, self._collection_path, filtered)

    def limit(self, n):
        docs = self._get_docs()[:n]
        return FakeQuery(self._store, self._collection_path, docs)

    def stream(self, timeout=None, **kwargs):
        self._store.stream_timeouts.append(timeout)
        return iter(self._get_docs())


class FakeCollectionRef(FakeQuery):
    def __init__(self, store, collection_path):
        super().__init__(store, collection_path)

    def document(self, doc_id):
        return FakeDocRef(self._store, self._collection_path, doc_id)

    def add(self, data):
        doc_id = uuid.uuid4().hex
        doc_ref = FakeDocRef(self._store, self._collection_path, doc_id)
        doc_ref.set(data)
        return None, doc_ref


class FakeStore(dict):
    """Documents keyed by (collection_path, doc_id), plus the timeouts passed to stream()."""

    def __init__(self):
        super().__init__()
        self.stream_timeouts = []


class FakeFirestoreClient:
    def __init__(self):
        self._store = FakeStore()

    def collection(self, name):
        return FakeCollectionRef(self._store, name)


# --- Fake Storage ---

class FakeBlob:
    def __init__(self, name, bucket):
        self.name = name
        self._bucket = bucket

    def upload_from_string(self, data, content_type=None):
        self._bucket._blobs[self.name] = data

    def exists(self):
        return self.name in self._bucket._blobs

    def delete(self):
        self._bucket._blobs.pop(self.name, None)

    def generate_signed_url(self, expiration=None, method=None):
        return f"https://storage.example.com/signed/{self.name}"


class FakeBucket:
    name = "worker-search-test"

    def __init__(self):
        self._blobs = {}

    def blob(self, name):
        return FakeBlob(name, self)

    def exists(self):
        return True


# --- Fixtures ---

@pytest.fixture()
def fake_db():
    return FakeFirestoreClient()


@pytest.fixture()
def fake_bucket():
    return FakeBucket()


@pytest.fixture()
def client(fake_db, fake_bucket):
    with patch("backend.dependencies._init_firebase"):
        with patch("backend.dependencies.get_firestore_client", return_value=fake_db):
            with patch("backend.dependencies.get_storage_bucket", return_value=fake_bucket):
                from backend.main import app
                yield TestClient(app)


@pytest.fixture()
def add_worker(fake_db):
    """Insert a worker document into the fake workers collection."""
    def _add(worker_id: str, latitude=None, longitude=None, status="approved", **fields):
        data = {"status": status, **fields}
        if latitude is not None:
            data["latitude"] = latitude
        if longitude is not None:
            data["longitude"] = longitude
        fake_db.collection("workers").document(worker_id).set(data)
        return worker_id
    return _add


@pytest.fixture()
def make_entity():
    """Build an in-memory LocatedEntity; approved with a position unless told otherwise."""
    def _make(
        entity_id: str,
        latitude: float | None = 9.50,
        longitude: float | None = -13.68,
        status: WorkerStatus = WorkerStatus.approved,
        rating_average: float | None = None,
        rating_count: int = 0,
        **attributes,
    ) -> LocatedEntity:
        position = None
        if latitude is not None and longitude is not None:
            position = GeoPointIn(latitude=latitude, longitude=longitude)
        return LocatedEntity(
            id=entity_id,
            position=position,
            attributes=attributes,
            status=status,
            rating=Rating(average=rating_average, count=rating_count),
        )
    return _make
