"""Great-circle distance and bounding-box helpers for radius search.

The bounding box is only a shortlist: it is always a superset of the true
search disk, exact filtering is done with ``haversine_km``.
"""
import math
from dataclasses import dataclass

from backend.models.common import GeoPointIn

# Mean Earth radius
EARTH_RADIUS_KM = 6371.0
# Slightly under the true ~111.19 km, so boxes come out a little wide
KM_PER_DEGREE = 111.0
MIN_COS_LATITUDE = 0.01


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in kilometres between two points given in decimal degrees."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


@dataclass(frozen=True)
class BoundingBox:
    """Latitude/longitude range. ``lon_min > lon_max`` means the box wraps the antimeridian."""

    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    @property
    def crosses_antimeridian(self) -> bool:
        return self.lon_min > self.lon_max

    def contains(self, point: GeoPointIn) -> bool:
        if not self.lat_min <= point.latitude <= self.lat_max:
            return False
        if self.crosses_antimeridian:
            return point.longitude >= self.lon_min or point.longitude <= self.lon_max
        return self.lon_min <= point.longitude <= self.lon_max


def bounding_box(center: GeoPointIn, radius_km: float) -> BoundingBox:
    lat = center.latitude
    lon = center.longitude

    lat_delta = radius_km / KM_PER_DEGREE
    lat_min = lat - lat_delta
    lat_max = lat + lat_delta

    # Disk touches a pole: every longitude is reachable
    if lat_min <= -90.0 or lat_max >= 90.0:
        return BoundingBox(max(lat_min, -90.0), min(lat_max, 90.0), -180.0, 180.0)

    cos_lat = math.cos(math.radians(lat))
    lon_delta = radius_km / (KM_PER_DEGREE * max(cos_lat, MIN_COS_LATITUDE))
    # Half-width of the spherical cap; wider than the linear estimate for big radii
    sin_ratio = math.sin(math.radians(lat_delta)) / cos_lat
    if sin_ratio >= 1.0:
        return BoundingBox(lat_min, lat_max, -180.0, 180.0)
    lon_delta = max(lon_delta, math.degrees(math.asin(sin_ratio)))
    if lon_delta >= 180.0:
        return BoundingBox(lat_min, lat_max, -180.0, 180.0)

    lon_min = lon - lon_delta
    lon_max = lon + lon_delta
    if lon_min < -180.0:
        lon_min += 360.0
    if lon_max > 180.0:
        lon_max -= 360.0
    return BoundingBox(lat_min, lat_max, lon_min, lon_max)
