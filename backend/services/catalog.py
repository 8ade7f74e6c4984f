"""Catalog readers feeding the radius search engine.

The engine only sees the ``WorkerCatalog`` protocol; any store that can hand
back approved workers (optionally narrowed by a bounding box) fits.
"""
import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from google.api_core import exceptions as google_exceptions
from google.cloud.firestore import Client as FirestoreClient

from backend.errors import UpstreamUnavailable
from backend.models.worker import LocatedEntity
from backend.services import firestore_service
from backend.utils.geo import BoundingBox


class WorkerCatalog(Protocol):
    def fetch_approved_entities_with_position(
        self,
        attribute_filter: str | None = None,
        bounding_box: BoundingBox | None = None,
    ) -> Iterable[LocatedEntity]:
        ...


class FirestoreWorkerCatalog:
    """Reads the workers collection.

    Status and the latitude band are pushed down to Firestore. Firestore has no
    substring operator, so ``attribute_filter`` is left to the candidate filter,
    as is the longitude side of the box.
    """

    def __init__(self, db: FirestoreClient, timeout: float | None = None):
        self._db = db
        self._timeout = timeout

    def fetch_approved_entities_with_position(
        self,
        attribute_filter: str | None = None,
        bounding_box: BoundingBox | None = None,
    ) -> list[LocatedEntity]:
        lat_min = bounding_box.lat_min if bounding_box else None
        lat_max = bounding_box.lat_max if bounding_box else None
        try:
            workers = firestore_service.list_approved_workers(
                self._db, lat_min=lat_min, lat_max=lat_max, timeout=self._timeout
            )
        except google_exceptions.GoogleAPIError as e:
            logging.error("Worker catalog read failed: %s", e)
            raise UpstreamUnavailable("Worker catalog is unavailable") from e
        return [w for w in workers if w.position is not None]


class InMemoryWorkerCatalog:
    """Catalog over a fixed snapshot of entities, returned as-is."""

    def __init__(self, entities: Sequence[LocatedEntity]):
        self._entities = tuple(entities)

    def fetch_approved_entities_with_position(
        self,
        attribute_filter: str | None = None,
        bounding_box: BoundingBox | None = None,
    ) -> list[LocatedEntity]:
        return list(self._entities)
