from fastapi import APIRouter

from backend import dependencies
from backend.models.search import WorkerSearchBody, WorkerSearchHit
from backend.services import search_engine, storage_service

router = APIRouter(prefix="/api/v1/search", tags=["search"])


@router.post("/workers", response_model=list[WorkerSearchHit])
def search_workers(body: WorkerSearchBody):
    """
    Approved workers within radius_km of (latitude, longitude), nearest first,
    optionally narrowed by profession substring.
    """
    catalog = dependencies.get_worker_catalog()
    bucket = dependencies.get_storage_bucket()
    return search_engine.search(
        catalog,
        body.to_request(),
        sign_url=storage_service.avatar_signer(bucket),
    )
