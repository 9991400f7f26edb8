"""Supabase storage helpers for uploaded resource files."""

import logging
import secrets
import string
import time
from typing import Optional

from app import config
from app.exceptions import PortalValidationError, StorageError

logger = logging.getLogger(__name__)

_KEY_ALPHABET = string.ascii_lowercase + string.digits


def file_extension(filename: str) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def check_extension(filename: str) -> str:
    ext = file_extension(filename)
    if ext not in config.ALLOWED_EXTENSIONS:
        allowed = ", ".join(sorted(config.ALLOWED_EXTENSIONS))
        raise PortalValidationError(f"Unsupported file type. Allowed: {allowed}", field="file")
    return ext


def generate_storage_key(filename: str, now_ms: Optional[int] = None) -> str:
    """`<epoch-ms>_<random>.<ext>`, unique enough for one bucket."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(6))
    ext = file_extension(filename)
    key = f"{now_ms}_{suffix}"
    return f"{key}.{ext}" if ext else key


def storage_path_from_url(file_url: str, bucket: str = None) -> Optional[str]:
    """Object path inside the bucket, or None when the URL is not a bucket URL."""
    bucket = bucket or config.STORAGE_BUCKET
    parts = (file_url or "").split(f"/{bucket}/", 1)
    if len(parts) > 1 and parts[1]:
        return parts[1]
    return None


def upload_file(client, path: str, content: bytes, content_type: Optional[str] = None) -> str:
    """Upload to the resource bucket and return the public URL."""
    bucket = client.storage.from_(config.STORAGE_BUCKET)
    try:
        bucket.upload(
            path=path,
            file=content,
            file_options={"content-type": content_type or "application/octet-stream"},
        )
    except Exception as e:
        logger.error("Upload of %s failed: %s", path, e)
        raise StorageError(f"File upload failed: {e}", path=path) from e
    return bucket.get_public_url(path)


def remove_file(client, path: str) -> None:
    try:
        client.storage.from_(config.STORAGE_BUCKET).remove([path])
    except Exception as e:
        logger.error("Removing %s from storage failed: %s", path, e)
        raise StorageError(f"File removal failed: {e}", path=path) from e
