from datetime import timedelta

from google.cloud.storage import Bucket

from backend.config import settings
from backend.dependencies import is_emulator


def generate_signed_url(bucket: Bucket, storage_path: str) -> str | None:
    if is_emulator():
        # Emulator doesn't support signed URLs; return a direct emulator URL instead.
        return f"http://127.0.0.1:9199/v0/b/{bucket.name}/o/{storage_path.replace('/', '%2F')}?alt=media"
    blob = bucket.blob(storage_path)
    if not blob.exists():
        return None
    return blob.generate_signed_url(
        expiration=timedelta(minutes=settings.signed_url_expiration_minutes),
        method="GET",
    )


def avatar_signer(bucket: Bucket):
    """Bind ``generate_signed_url`` to a bucket for the result assembler."""
    def sign(storage_path: str) -> str | None:
        return generate_signed_url(bucket, storage_path)
    return sign
