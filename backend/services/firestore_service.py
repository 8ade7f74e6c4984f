import logging
import math
from datetime import datetime, timezone

from google.cloud.firestore import Client as FirestoreClient
from google.cloud.firestore_v1 import FieldFilter
from google.cloud.firestore_v1.base_query import BaseQuery

from backend.config import settings
from backend.models.common import GeoPointIn, WorkerStatus
from backend.models.worker import LocatedEntity, Rating

# Document fields that are not free-form attributes
_RESERVED_FIELDS = {"status", "latitude", "longitude", "rating_average", "rating_count"}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _is_number(value) -> bool:
    # Firestore range filters only match numeric values
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _position_from_doc(doc_id: str, data: dict) -> GeoPointIn | None:
    lat = data.get("latitude")
    lon = data.get("longitude")
    if lat is None and lon is None:
        return None
    if not (_is_number(lat) and _is_number(lon)):
        logging.warning("Worker %s has a malformed position (%r, %r); ignoring it", doc_id, lat, lon)
        return None
    lat = float(lat)
    lon = float(lon)
    if not (math.isfinite(lat) and math.isfinite(lon) and -90 <= lat <= 90 and -180 <= lon <= 180):
        logging.warning("Worker %s has an out-of-range position (%s, %s); ignoring it", doc_id, lat, lon)
        return None
    return GeoPointIn(latitude=lat, longitude=lon)


def _status_from_doc(data: dict) -> WorkerStatus:
    try:
        return WorkerStatus(data.get("status", WorkerStatus.pending.value))
    except ValueError:
        return WorkerStatus.pending


def _rating_from_doc(doc_id: str, data: dict) -> Rating:
    average = data.get("rating_average")
    count = data.get("rating_count")
    try:
        return Rating(
            average=float(average) if average is not None else None,
            count=int(count or 0),
        )
    except (TypeError, ValueError):
        logging.warning("Worker %s has a malformed rating (%r, %r); ignoring it", doc_id, average, count)
        return Rating()


def _hourly_rate_from_doc(doc_id: str, data: dict) -> float | None:
    rate = data.get("hourly_rate")
    if rate is None:
        return None
    if not _is_number(rate) or not math.isfinite(rate):
        logging.warning("Worker %s has a malformed hourly rate (%r); ignoring it", doc_id, rate)
        return None
    return float(rate)


def _worker_doc_to_entity(doc) -> LocatedEntity:
    data = doc.to_dict()
    attributes = {k: v for k, v in data.items() if k not in _RESERVED_FIELDS}
    if "hourly_rate" in attributes:
        attributes["hourly_rate"] = _hourly_rate_from_doc(doc.id, data)
    return LocatedEntity(
        id=doc.id,
        position=_position_from_doc(doc.id, data),
        attributes=attributes,
        status=_status_from_doc(data),
        rating=_rating_from_doc(doc.id, data),
    )


# --- Workers ---

def list_approved_workers(
    db: FirestoreClient,
    lat_min: float | None = None,
    lat_max: float | None = None,
    timeout: float | None = None,
) -> list[LocatedEntity]:
    """Approved workers, optionally restricted to a latitude band.

    Needs a composite index on (status, latitude) when the band is given.
    Workers without a usable position come back with ``position=None``.
    """
    query: BaseQuery = db.collection(settings.workers_collection).where(
        filter=FieldFilter("status", "==", WorkerStatus.approved.value)
    )
    if lat_min is not None:
        query = query.where(filter=FieldFilter("latitude", ">=", lat_min))
    if lat_max is not None:
        query = query.where(filter=FieldFilter("latitude", "<=", lat_max))

    return [_worker_doc_to_entity(doc) for doc in query.stream(timeout=timeout)]


def list_worker_review_ratings(db: FirestoreClient, worker_id: str) -> list[float]:
    reviews = (
        db.collection(settings.workers_collection)
        .document(worker_id)
        .collection("reviews")
        .stream()
    )
    ratings = []
    for r in reviews:
        value = r.to_dict().get("rating")
        if value is not None:
            ratings.append(float(value))
    return ratings


def update_worker_rating(
    db: FirestoreClient, worker_id: str, average: float | None, count: int
) -> None:
    db.collection(settings.workers_collection).document(worker_id).update({
        "rating_average": average,
        "rating_count": count,
        "updated_at": _now(),
    })
