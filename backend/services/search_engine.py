"""Radius search over the worker catalog.

Pipeline: validate -> read catalog -> candidate filter -> bounding box
shortlist -> exact haversine + inclusive radius check -> sort by distance
(ties on id) -> limit -> assemble.
"""
import logging
import math
from collections.abc import Callable

from backend.config import settings
from backend.errors import InvalidCoordinate, InvalidLimit, InvalidRadius
from backend.models.search import SearchRequest, WorkerSearchHit
from backend.models.worker import LocatedEntity
from backend.services.candidate_filter import filter_candidates
from backend.services.catalog import WorkerCatalog
from backend.services.result_assembler import assemble
from backend.utils.geo import bounding_box, haversine_km

# Distances in the same 1e-9 km bucket are ties and fall back to id order.
# Two distances closer than that can still land in neighbouring buckets.
TIE_EPSILON_KM = 1e-9


def validate_request(request: SearchRequest) -> None:
    lat = request.query_point.latitude
    lon = request.query_point.longitude
    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise InvalidCoordinate(f"latitude must be within [-90, 90], got {lat}")
    if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
        raise InvalidCoordinate(f"longitude must be within [-180, 180], got {lon}")
    if not math.isfinite(request.radius_km) or request.radius_km <= 0:
        raise InvalidRadius(f"radius_km must be a positive number, got {request.radius_km}")
    if request.limit <= 0:
        raise InvalidLimit(f"limit must be positive, got {request.limit}")


def rank_within_radius(
    candidates: list[LocatedEntity], request: SearchRequest
) -> list[tuple[LocatedEntity, float]]:
    """Exact distances for ``candidates``, radius-filtered, sorted and truncated."""
    origin = request.query_point
    in_radius = []
    for entity in candidates:
        distance = haversine_km(
            origin.latitude, origin.longitude,
            entity.position.latitude, entity.position.longitude,
        )
        if distance <= request.radius_km:
            in_radius.append((entity, distance))

    in_radius.sort(key=lambda pair: (math.floor(pair[1] / TIE_EPSILON_KM), pair[0].id))
    return in_radius[: request.limit]


def search(
    catalog: WorkerCatalog,
    request: SearchRequest,
    sign_url: Callable[[str], str | None] | None = None,
) -> list[WorkerSearchHit]:
    """Approved workers within ``request.radius_km`` of the query point, nearest first.

    Raises the ``InvalidSearchRequest`` family for bad input and
    ``UpstreamUnavailable`` when the catalog cannot be read. An empty list
    always means a valid query with no matches.
    """
    validate_request(request)

    box = bounding_box(request.query_point, request.radius_km) if settings.bounding_box_prefilter else None
    entities = catalog.fetch_approved_entities_with_position(request.attribute_filter, box)

    candidates = filter_candidates(
        entities,
        request.attribute_filter,
        district_filter=request.district_filter,
        min_rating=request.min_rating,
        max_hourly_rate=request.max_hourly_rate,
    )
    if box is not None:
        candidates = [e for e in candidates if box.contains(e.position)]

    ranked = rank_within_radius(candidates, request)
    logging.info(
        "Worker search at (%.4f, %.4f) r=%.1fkm: %d candidates, %d returned",
        request.query_point.latitude, request.query_point.longitude,
        request.radius_km, len(candidates), len(ranked),
    )
    return assemble(ranked, sign_url=sign_url)
