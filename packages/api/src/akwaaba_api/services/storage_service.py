"""Object storage uploads (Supabase Storage)."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass

import structlog
from fastapi import UploadFile

from akwaaba_shared.config import settings
from akwaaba_shared.constants import ALLOWED_IMAGE_TYPES
from akwaaba_shared.db import get_supabase_client
from akwaaba_shared.errors import StorageError

logger = structlog.get_logger(__name__)


class UploadRejected(ValueError):
    """The uploaded file failed size or type checks."""


@dataclass
class StoredObject:
    bucket: str
    path: str
    public_url: str
    size: int
    content_type: str


async def read_image(upload: UploadFile) -> tuple[bytes, str]:
    """Read an uploaded image and enforce the size/type limits."""
    content_type = upload.content_type or ""
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise UploadRejected("Only JPEG, PNG, WebP, and AVIF images are allowed")
    payload = await upload.read()
    if not payload:
        raise UploadRejected("No file provided")
    if len(payload) > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise UploadRejected(f"File size must be less than {limit_mb}MB")
    return payload, content_type


def object_path(prefix: str, content_type: str) -> str:
    ext = ALLOWED_IMAGE_TYPES[content_type]
    return f"{prefix}/{int(time.time() * 1000)}-{secrets.token_hex(6)}.{ext}"


def upload(bucket: str, path: str, payload: bytes, content_type: str) -> StoredObject:
    supabase = get_supabase_client(service_role=True)
    store = supabase.storage.from_(bucket)
    try:
        store.upload(
            path=path,
            file=payload,
            file_options={"content-type": content_type, "cache-control": "3600", "upsert": "false"},
        )
    except Exception as exc:
        logger.error("storage_upload_failed", bucket=bucket, path=path, error=str(exc))
        raise StorageError("Failed to upload file") from exc
    public_url = store.get_public_url(path)
    logger.info("storage_uploaded", bucket=bucket, path=path, size=len(payload))
    return StoredObject(
        bucket=bucket,
        path=path,
        public_url=public_url,
        size=len(payload),
        content_type=content_type,
    )


def remove(obj: StoredObject) -> bool:
    """Best-effort delete of an object whose database row could not be written."""
    supabase = get_supabase_client(service_role=True)
    try:
        supabase.storage.from_(obj.bucket).remove([obj.path])
    except Exception as exc:
        logger.error("storage_cleanup_failed", bucket=obj.bucket, path=obj.path, error=str(exc))
        return False
    logger.info("storage_removed", bucket=obj.bucket, path=obj.path)
    return True
