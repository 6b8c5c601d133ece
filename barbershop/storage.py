# barbershop/storage.py

import logging
import uuid
from pathlib import Path

from .config import settings

logger = logging.getLogger(__name__)

PHOTO_ROUTE = "/media/barber-photos"

# stored suffix comes from here, never from the client's filename
PHOTO_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


def photo_dir() -> Path:
    path = Path(settings.photo_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def public_url(name: str) -> str:
    return f"{settings.public_base_url.rstrip('/')}{PHOTO_ROUTE}/{name}"


def store_photo(data: bytes, content_type: str) -> str:
    """Write the image under a fresh name and return its public URL."""
    name = f"{uuid.uuid4().hex}{PHOTO_TYPES[content_type]}"
    (photo_dir() / name).write_bytes(data)
    logger.info("Stored barber photo %s (%d bytes)", name, len(data))
    return public_url(name)
