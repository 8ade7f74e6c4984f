from collections.abc import Iterable

from backend.models.common import WorkerStatus
from backend.models.worker import LocatedEntity

# Eligibility is fixed; callers cannot widen it through filters.
ELIGIBLE_STATUS = WorkerStatus.approved


def _contains_ci(value, needle: str) -> bool:
    if not isinstance(value, str):
        return False
    return needle.casefold() in value.casefold()


def filter_candidates(
    entities: Iterable[LocatedEntity],
    attribute_filter: str | None = None,
    *,
    district_filter: str | None = None,
    min_rating: float | None = None,
    max_hourly_rate: float | None = None,
) -> list[LocatedEntity]:
    """Drop workers that can never be a radius search result.

    Keeps approved workers with a position whose profession contains
    ``attribute_filter`` (case-insensitive, partial: "plomb" matches "Plombier").
    Blank filters are ignored.
    """
    profession_needle = (attribute_filter or "").strip()
    district_needle = (district_filter or "").strip()

    candidates = []
    for entity in entities:
        if entity.status != ELIGIBLE_STATUS or entity.position is None:
            continue
        if profession_needle and not _contains_ci(entity.attributes.get("profession"), profession_needle):
            continue
        if district_needle and not _contains_ci(entity.attributes.get("district"), district_needle):
            continue
        if min_rating is not None:
            if entity.rating.average is None or entity.rating.average < min_rating:
                continue
        if max_hourly_rate is not None:
            rate = entity.attributes.get("hourly_rate")
            if rate is None or rate > max_hourly_rate:
                continue
        candidates.append(entity)
    return candidates
