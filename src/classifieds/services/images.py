"""Local disk storage for uploaded ad images."""
from __future__ import annotations

import logging
import os
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from classifieds.core.settings import settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})


@dataclass(frozen=True)
class StoredImage:
    """Reference to an image persisted by the store."""

    image_id: str
    image_url: str


def guess_ext(filename: str | None) -> str:
    """Return the lowercased extension of a filename (e.g. ``".png"``)."""
    _, ext = os.path.splitext(filename or "")
    return ext.lower()


class ImageStore:
    """Saves uploads under ``root`` and exposes them below ``base_url``."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def save(self, stream: BinaryIO, filename: str | None) -> StoredImage:
        """Copy an uploaded stream to disk under a random name.

        Unknown or missing extensions are stored without one.
        """
        ext = guess_ext(filename)
        if ext not in ALLOWED_IMAGE_EXTENSIONS:
            ext = ""
        image_id = uuid.uuid4().hex
        self.root.mkdir(parents=True, exist_ok=True)
        dest = self.root / f"{image_id}{ext}"
        with dest.open("wb") as out:
            shutil.copyfileobj(stream, out)
        logger.debug("Stored image %s at %s", image_id, dest)
        return StoredImage(image_id=image_id, image_url=f"{self.base_url}/{dest.name}")

    def delete(self, image_url: str) -> None:
        """Remove a previously stored image; missing files are ignored."""
        name = image_url.rsplit("/", 1)[-1]
        if not name:
            return
        (self.root / name).unlink(missing_ok=True)


_image_store: ImageStore | None = None


def get_image_store() -> ImageStore:
    """Return the process-wide image store built from settings."""
    global _image_store
    if _image_store is None:
        _image_store = ImageStore(settings.image_upload_dir, settings.image_base_url)
    return _image_store
