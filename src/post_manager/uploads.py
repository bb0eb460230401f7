from __future__ import annotations

import time
from pathlib import Path

from fastapi import UploadFile

IMAGE_FIELD = "image"
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png"}
MAX_UPLOAD_BYTES = 2 * 1024 * 1024  # 2 MiB
UPLOAD_URL_PREFIX = "/uploads"

_EXT_BY_TYPE = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
}


class UploadError(Exception):
    """Upload was rejected or could not be written."""


def _suffix_for(filename: str | None, content_type: str) -> str:
    suffix = Path(filename or "").suffix.lower()
    if len(suffix) > 1 and suffix[1:].isalnum():
        return suffix
    return _EXT_BY_TYPE.get(content_type, "")


def _free_path(target_dir: Path, suffix: str) -> Path:
    """Timestamp-based name; bumps the millis until the name is unused."""
    stamp = int(time.time() * 1000)
    path = target_dir / f"{stamp}{suffix}"
    while path.exists():
        stamp += 1
        path = target_dir / f"{stamp}{suffix}"
    return path


async def save_upload(upload: UploadFile | None, target_dir: Path) -> str:
    """
    Validate and store one uploaded image.

    - no file            -> UploadError
    - MIME not JPEG/PNG  -> UploadError
    - more than 2 MiB    -> UploadError
    Returns the public URL (/uploads/<name>). The filename is always
    generated, the client's name only contributes its extension.
    """
    if upload is None or not upload.filename:
        raise UploadError("No file received")

    content_type = (upload.content_type or "").lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise UploadError("Only JPEG and PNG allowed")

    # ein Byte mehr lesen reicht, um "zu groß" zu erkennen
    content = await upload.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise UploadError("File too large (max 2 MB)")

    target_dir.mkdir(parents=True, exist_ok=True)
    file_path = _free_path(target_dir, _suffix_for(upload.filename, content_type))

    try:
        with open(file_path, "wb") as f:
            f.write(content)
    except OSError as exc:
        file_path.unlink(missing_ok=True)
        raise UploadError(f"Could not store file: {exc}") from exc

    return f"{UPLOAD_URL_PREFIX}/{file_path.name}"
