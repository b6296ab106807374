"""Filesystem-backed storage for uploaded images."""

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from photo_gallery.domain.images import ImageUpload

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads/"

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

_RASTER_SUFFIXES = frozenset(
    {
        ".avif", ".bmp", ".gif", ".heic", ".heif", ".ico",
        ".jpeg", ".jpg", ".png", ".tif", ".tiff", ".webp",
    }
)


class ImageStore(Protocol):
    """Interface for persisting image blobs."""

    def save(self, upload: ImageUpload) -> str:
        """Persist an upload and return the reference stored on the photo."""

    def delete(self, reference: str) -> None:
        """Remove a previously saved blob. Unknown references are ignored."""


@dataclass
class LocalImageStore(ImageStore):
    """Writes uploads under a directory served at ``/uploads``."""

    root: Path

    @classmethod
    def create(cls, upload_dir: str) -> "LocalImageStore":
        """Create the store, making sure the upload directory exists."""
        root = Path(upload_dir)
        root.mkdir(parents=True, exist_ok=True)
        return cls(root=root)

    def save(self, upload: ImageUpload) -> str:
        """Write the upload under a random name and return its URL path."""
        filename = f"{uuid4().hex}{_extension_for(upload)}"
        (self.root / filename).write_bytes(upload.content)
        return f"{UPLOADS_URL_PREFIX}{filename}"

    def delete(self, reference: str) -> None:
        """Delete a blob saved by this store."""
        path = self._path_for(reference)
        if path is None:
            return
        path.unlink(missing_ok=True)

    def _path_for(self, reference: str) -> Path | None:
        if not reference.startswith(UPLOADS_URL_PREFIX):
            return None
        name = reference.removeprefix(UPLOADS_URL_PREFIX)
        if not name or "/" in name or "\\" in name or name.startswith("."):
            logger.warning("Refusing to delete unexpected upload path %s", reference)
            return None
        return self.root / name


def _extension_for(upload: ImageUpload) -> str:
    extension = _EXTENSIONS.get(upload.content_type)
    if extension:
        return extension
    if upload.filename:
        suffix = Path(upload.filename).suffix.lower()
        if suffix in _RASTER_SUFFIXES:
            return suffix
    guessed = mimetypes.guess_extension(upload.content_type) or ""
    return guessed if guessed in _RASTER_SUFFIXES else ""
