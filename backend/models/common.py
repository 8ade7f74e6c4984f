from enum import Enum

from pydantic import BaseModel


class WorkerStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    suspended = "suspended"


class GeoPointIn(BaseModel):
    latitude: float
    longitude: float
