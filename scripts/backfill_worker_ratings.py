#!/usr/bin/env python3
"""
Recompute rating_average / rating_count on every worker from its reviews.

Search results read the denormalized fields on the worker document, so run
this after bulk review imports or moderation sweeps.

Run from project root. Uses .env for credentials.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from backend.config import settings
from backend.services import firestore_service


def backfill(db) -> tuple[int, int]:
    """Update workers whose stored rating differs from their reviews. Returns (updated, skipped)."""
    updated = 0
    skipped = 0

    for doc in db.collection(settings.workers_collection).stream():
        data = doc.to_dict()
        ratings = firestore_service.list_worker_review_ratings(db, doc.id)
        count = len(ratings)
        average = round(sum(ratings) / count, 2) if count else None

        if data.get("rating_average") == average and data.get("rating_count", 0) == count:
            skipped += 1
            continue

        firestore_service.update_worker_rating(db, doc.id, average, count)
        updated += 1

    return updated, skipped


def main():
    from backend.dependencies import get_firestore_client

    try:
        db = get_firestore_client()
    except Exception as e:
        print(f"Firestore connection failed: {e}")
        return 1

    updated, skipped = backfill(db)
    print(f"Done: {updated} workers updated, {skipped} already up to date.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
