"""Public result shape for worker search.

This is the only place search hits are built, so anything not listed in
``WorkerSearchHit`` (contact details, raw coordinates, status) never reaches a
caller.
"""
from collections.abc import Callable, Sequence

from backend.config import settings
from backend.models.search import WorkerSearchHit
from backend.models.worker import LocatedEntity


def _text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _display_name(attributes: dict) -> str:
    first = _text(attributes.get("first_name")) or ""
    last = _text(attributes.get("last_name")) or ""
    return f"{first} {last}".strip() or settings.default_worker_label


def _location_label(district: str | None, commune: str | None, city: str | None) -> str | None:
    parts = [p for p in (district, commune, city) if p]
    return ", ".join(parts) if parts else None


def assemble(
    ranked: Sequence[tuple[LocatedEntity, float]],
    sign_url: Callable[[str], str | None] | None = None,
) -> list[WorkerSearchHit]:
    """Map (entity, distance) pairs, already sorted, to public hits.

    ``distance_km`` is rounded to one decimal here and nowhere else.
    """
    hits = []
    for entity, distance in ranked:
        attrs = entity.attributes
        city = _text(attrs.get("city"))
        commune = _text(attrs.get("commune"))
        district = _text(attrs.get("district"))

        hourly_rate = attrs.get("hourly_rate")
        currency = None
        if hourly_rate is not None:
            currency = _text(attrs.get("currency")) or settings.default_currency

        avatar_url = None
        avatar_path = _text(attrs.get("avatar_path"))
        if avatar_path and sign_url is not None:
            avatar_url = sign_url(avatar_path)

        hits.append(WorkerSearchHit(
            id=entity.id,
            name=_display_name(attrs),
            profession=_text(attrs.get("profession")),
            city=city,
            commune=commune,
            district=district,
            location_label=_location_label(district, commune, city),
            rating_average=entity.rating.average,
            rating_count=entity.rating.count,
            hourly_rate=hourly_rate,
            currency=currency,
            avatar_url=avatar_url,
            distance_km=round(distance, 1),
        ))
    return hits
