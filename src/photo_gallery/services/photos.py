"""Photo management service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from photo_gallery.adapters.local_image_store import ImageStore
from photo_gallery.domain.gallery import Photo
from photo_gallery.domain.images import ImageUpload
from photo_gallery.errors import (
    LimitExceededError,
    NotFoundError,
    ValidationError,
)
from photo_gallery.services.categories import CategoryRepository

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 8
DEFAULT_MAX_PHOTOS_PER_CATEGORY = 20
DEFAULT_MAX_IMAGE_BYTES = 2 * 1024 * 1024

# Image types that can carry script.
REJECTED_IMAGE_TYPES = frozenset({"image/svg+xml"})


class PhotoRepository(Protocol):
    """Persistence interface for photos."""

    def list_photos(
        self, category_id: int | None = None, limit: int | None = None
    ) -> list[Photo]:
        """Return photos newest first, optionally scoped and truncated."""

    def get_photo(self, photo_id: int) -> Photo | None:
        """Return a photo by id, if present."""

    def create_photo(self, payload: dict[str, object], max_per_category: int) -> Photo | None:
        """Insert a photo unless its category already holds the maximum.

        Counting and inserting happen as one atomic step. Returns None when
        the category is full.
        """

    def update_photo(self, photo_id: int, payload: dict[str, object]) -> Photo | None:
        """Update a photo and return it, or None when it does not exist."""

    def delete_photo(self, photo_id: int) -> bool:
        """Delete a photo and return whether a row was removed."""

    def count_photos(self, category_id: int | None = None) -> int:
        """Return the number of photos, optionally scoped to a category."""

    def count_photos_by_uploader(self, user_id: int) -> int:
        """Return the number of photos uploaded by a user."""


@dataclass
class PhotoService:
    """Application service for photo CRUD and upload rules."""

    repository: PhotoRepository
    category_repository: CategoryRepository
    image_store: ImageStore
    max_per_category: int = DEFAULT_MAX_PHOTOS_PER_CATEGORY
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES

    def list_photos(self, category_id: int | None = None) -> list[Photo]:
        """Return photos newest first."""
        return self.repository.list_photos(category_id)

    def list_recent_photos(
        self, category_id: int, limit: int = DEFAULT_RECENT_LIMIT
    ) -> list[Photo]:
        """Return the newest photos of a category, used for gallery previews."""
        if limit < 1:
            raise ValidationError("Limit must be a positive number")
        return self.repository.list_photos(category_id, limit=limit)

    def get_photo(self, photo_id: int) -> Photo:
        """Return a photo or raise NotFoundError."""
        photo = self.repository.get_photo(photo_id)
        if photo is None:
            raise NotFoundError("Photo", photo_id)
        return photo

    def count_photos(self, category_id: int | None = None) -> int:
        """Return the number of photos, optionally scoped to a category."""
        return self.repository.count_photos(category_id)

    def create_photo(  # noqa: PLR0913
        self,
        title: str | None,
        category_id: int | None,
        uploaded_by: int,
        image: ImageUpload | str | None,
        description: str | None = None,
        external_link: str | None = None,
    ) -> Photo:
        """Create a photo, storing uploaded bytes first.

        ``image`` is either raw upload bytes or an external http(s) URL.
        """
        title = (title or "").strip()
        if not title or category_id is None:
            raise ValidationError("Title and category are required")
        if image is None or (isinstance(image, str) and not image.strip()):
            raise ValidationError("Image is required")
        if self.category_repository.get_category(category_id) is None:
            raise NotFoundError("Category", category_id)

        if isinstance(image, ImageUpload):
            self._check_upload(image)
            image_url = self.image_store.save(image)
            stored = True
        else:
            image_url = _check_image_url(image)
            stored = False

        payload: dict[str, object] = {
            "title": title,
            "description": _blank_to_none(description),
            "image_url": image_url,
            "external_link": _blank_to_none(external_link),
            "category_id": category_id,
            "uploaded_by": uploaded_by,
        }
        try:
            photo = self.repository.create_photo(
                payload, max_per_category=self.max_per_category
            )
        except Exception:
            if stored:
                self._discard_image(image_url)
            raise
        if photo is None:
            if stored:
                self._discard_image(image_url)
            raise LimitExceededError(category_id, self.max_per_category)
        logger.info(
            "Created photo",
            extra={"photo_id": photo.id, "category_id": category_id},
        )
        return photo

    def update_photo(
        self,
        photo_id: int,
        title: str | None = None,
        description: str | None = None,
        external_link: str | None = None,
    ) -> Photo:
        """Update descriptive fields. Image and category never change."""
        current = self.get_photo(photo_id)
        payload: dict[str, object] = {}
        if title is not None:
            cleaned = title.strip()
            if not cleaned:
                raise ValidationError("Title cannot be empty")
            payload["title"] = cleaned
        if description is not None:
            payload["description"] = _blank_to_none(description)
        if external_link is not None:
            payload["external_link"] = _blank_to_none(external_link)
        if not payload:
            return current
        updated = self.repository.update_photo(photo_id, payload)
        if updated is None:
            raise NotFoundError("Photo", photo_id)
        logger.info("Updated photo", extra={"photo_id": photo_id})
        return updated

    def delete_photo(self, photo_id: int) -> None:
        """Delete a photo row, then try to remove its stored image."""
        photo = self.get_photo(photo_id)
        if not self.repository.delete_photo(photo_id):
            raise NotFoundError("Photo", photo_id)
        self._discard_image(photo.image_url)
        logger.info("Deleted photo", extra={"photo_id": photo_id})

    def _check_upload(self, upload: ImageUpload) -> None:
        if not upload.content_type.startswith("image/"):
            raise ValidationError("Only image files are allowed")
        if upload.content_type.lower() in REJECTED_IMAGE_TYPES:
            raise ValidationError("SVG images are not allowed")
        if upload.size == 0:
            raise ValidationError("Image is required")
        if upload.size > self.max_image_bytes:
            max_mb = self.max_image_bytes / 1024 / 1024
            raise ValidationError(f"Image must be at most {max_mb:g}MB")

    def _discard_image(self, image_url: str) -> None:
        try:
            self.image_store.delete(image_url)
        except OSError:
            logger.warning(
                "Failed to remove stored image", extra={"image_url": image_url}
            )


def _check_image_url(value: str) -> str:
    url = value.strip()
    if not url.startswith(("http://", "https://")):
        raise ValidationError("Image must be an uploaded file or an http(s) URL")
    return url


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
