from pydantic import BaseModel, Field

from backend.config import settings
from backend.models.common import GeoPointIn


class SearchRequest(BaseModel):
    query_point: GeoPointIn
    radius_km: float
    attribute_filter: str | None = None
    limit: int = 100
    # Narrowing filters from the worker search screen
    district_filter: str | None = None
    min_rating: float | None = None
    max_hourly_rate: float | None = None


class WorkerSearchBody(BaseModel):
    """Wire shape of POST /api/v1/search/workers."""
    profession: str | None = None
    latitude: float
    longitude: float
    radius_km: float = Field(default_factory=lambda: settings.default_radius_km)
    limit: int = Field(default_factory=lambda: settings.default_search_limit)
    district: str | None = None
    min_rating: float | None = None
    max_hourly_rate: float | None = None

    def to_request(self) -> SearchRequest:
        return SearchRequest(
            query_point=GeoPointIn(latitude=self.latitude, longitude=self.longitude),
            radius_km=self.radius_km,
            attribute_filter=self.profession,
            limit=self.limit,
            district_filter=self.district,
            min_rating=self.min_rating,
            max_hourly_rate=self.max_hourly_rate,
        )


class WorkerSearchHit(BaseModel):
    id: str
    name: str
    profession: str | None = None
    city: str | None = None
    commune: str | None = None
    district: str | None = None
    location_label: str | None = None
    rating_average: float | None = None
    rating_count: int = 0
    hourly_rate: float | None = None
    currency: str | None = None
    avatar_url: str | None = None
    distance_km: float
