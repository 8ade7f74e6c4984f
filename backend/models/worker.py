from typing import Any

from pydantic import BaseModel, ConfigDict

from backend.models.common import GeoPointIn, WorkerStatus


class Rating(BaseModel):
    model_config = ConfigDict(frozen=True)

    average: float | None = None
    count: int = 0


class LocatedEntity(BaseModel):
    """Snapshot of a worker as read from the catalog.

    ``position`` is None when the worker never shared a location (or the stored
    one was unusable); such workers can never be returned by a radius search.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    position: GeoPointIn | None = None
    attributes: dict[str, Any] = {}
    status: WorkerStatus = WorkerStatus.pending
    rating: Rating = Rating()
