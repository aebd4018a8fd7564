import re
from pathlib import Path

from loguru import logger

from picturebox.models.upload import GalleryImage
from picturebox.services.storage import public_url

IMAGE_NAME_PATTERN = re.compile(r"\.(jpe?g|png|gif|webp)$", re.IGNORECASE)


def is_image_name(name: str) -> bool:
    return IMAGE_NAME_PATTERN.search(name) is not None


def list_images(upload_path: Path) -> list[GalleryImage]:
    """Scan the upload directory for images.

    Always reads the directory fresh, so files added or removed out-of-band
    show up on the next call. Entries come back in directory order, which is
    not sorted. OS errors from the scan propagate to the caller.
    """
    images = [
        GalleryImage(name=entry.name, url=public_url(entry.name))
        for entry in upload_path.iterdir()
        if entry.is_file() and is_image_name(entry.name)
    ]
    logger.debug("Gallery scanned upload_path={} image_count={}", str(upload_path), len(images))
    return images
