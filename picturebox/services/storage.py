import secrets
import time
from pathlib import Path
from urllib.parse import quote

from fastapi import UploadFile
from loguru import logger
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from picturebox.config import Settings
from picturebox.models.upload import StoredImage

UPLOADS_MOUNT = "/uploads"
UPLOAD_FIELD = "picture"
PARTIAL_SUFFIX = ".part"

ALLOWED_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

INVALID_TYPE_MESSAGE = "Error: invalid file type"
MISSING_FILE_MESSAGE = "Error: no file uploaded"


class UploadRejected(ValueError):
    pass


def public_url(storage_key: str) -> str:
    return f"{UPLOADS_MOUNT}/{quote(storage_key)}"


def has_file(upload: UploadFile | str | None) -> bool:
    # Form values arrive as starlette UploadFile instances; plain strings are not files.
    return isinstance(upload, StarletteUploadFile) and bool(upload.filename)


def validate_image_type(upload: UploadFile) -> None:
    suffix = Path(upload.filename or "").suffix.lower()
    content_type = (upload.content_type or "").split(";", 1)[0].strip().lower()
    if content_type not in ALLOWED_TYPES or suffix not in ALLOWED_EXTENSIONS:
        raise UploadRejected(INVALID_TYPE_MESSAGE)


def generate_storage_key(filename: str) -> str:
    """Build ``<epoch-ms>-<random><ext>``, keeping the original extension as given."""
    timestamp_ms = time.time_ns() // 1_000_000
    return f"{timestamp_ms}-{secrets.randbelow(1_000_000_000)}{Path(filename).suffix}"


def _write_atomically(data: bytes, partial: Path, destination: Path) -> None:
    # Written under a non-image name first so listings never see a half-written file.
    try:
        partial.write_bytes(data)
        partial.replace(destination)
    except OSError:
        partial.unlink(missing_ok=True)
        raise


def too_large_message(max_bytes: int) -> str:
    if max_bytes >= 1024 * 1024:
        return f"Error: file too large (max {max_bytes / (1024 * 1024):g} MB)"
    return f"Error: file too large (max {max_bytes} bytes)"


async def save_upload(upload: UploadFile | str | None, app_settings: Settings) -> StoredImage:
    if not has_file(upload):
        raise UploadRejected(MISSING_FILE_MESSAGE)
    validate_image_type(upload)

    max_bytes = app_settings.max_upload_bytes
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadRejected(too_large_message(max_bytes))

    storage_key = generate_storage_key(upload.filename)
    destination = app_settings.upload_path / storage_key
    partial = destination.with_name(storage_key + PARTIAL_SUFFIX)

    try:
        await run_in_threadpool(_write_atomically, data, partial, destination)
    except OSError:
        logger.exception("File write failed storage_key={} destination={}", storage_key, str(destination))
        raise
    logger.debug(
        "File saved storage_key={} destination={} size_bytes={}",
        storage_key,
        str(destination),
        len(data),
    )

    return StoredImage(
        id=Path(storage_key).stem,
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
        storage_key=storage_key,
        size_bytes=len(data),
        url=public_url(storage_key),
    )
