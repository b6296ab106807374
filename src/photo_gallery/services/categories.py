"""Category management and slug derivation."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from photo_gallery.domain.gallery import Category
from photo_gallery.errors import (
    CategoryNotEmptyError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(name: str) -> str:
    """Derive the URL slug for a category name.

    ``"  Casamentos & Cia!! "`` becomes ``"casamentos-cia"``.
    """
    slug = _DISALLOWED.sub("", name.lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-").strip()


class CategoryRepository(Protocol):
    """Persistence interface for categories."""

    def list_categories(self) -> list[Category]:
        """Return all categories, newest first."""

    def get_category(self, category_id: int) -> Category | None:
        """Return a category by id, if present."""

    def get_by_slug(self, slug: str) -> Category | None:
        """Return a category by slug, if present."""

    def get_by_name(self, name: str) -> Category | None:
        """Return a category by exact name, if present."""

    def create_category(self, payload: dict[str, object]) -> Category:
        """Create a category and return it."""

    def update_category(
        self, category_id: int, payload: dict[str, object]
    ) -> Category | None:
        """Update a category and return it, or None when it does not exist."""

    def delete_category(self, category_id: int) -> bool:
        """Delete a category and return whether a row was removed."""

    def count_categories(self) -> int:
        """Return the number of categories."""


class PhotoCounter(Protocol):
    """Counts the photos filed under a category."""

    def count_photos(self, category_id: int | None = None) -> int:
        """Return the number of photos, optionally scoped to a category."""


@dataclass
class CategoryService:
    """Application service for category CRUD."""

    repository: CategoryRepository
    photo_counter: PhotoCounter

    def list_categories(self) -> list[Category]:
        """Return all categories, newest first."""
        return self.repository.list_categories()

    def get_category(self, category_id: int) -> Category:
        """Return a category or raise NotFoundError."""
        category = self.repository.get_category(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def get_category_by_slug(self, slug: str) -> Category:
        """Return a category by slug or raise NotFoundError."""
        category = self.repository.get_by_slug(slug)
        if category is None:
            raise NotFoundError("Category", slug)
        return category

    def create_category(
        self, name: str | None, description: str | None = None
    ) -> Category:
        """Create a category, deriving its slug from the name."""
        name, slug = self._name_and_slug(name)
        self._ensure_unique(name, slug)
        category = self.repository.create_category(
            {"name": name, "description": _blank_to_none(description), "slug": slug}
        )
        logger.info(
            "Created category", extra={"category_id": category.id, "slug": slug}
        )
        return category

    def update_category(
        self,
        category_id: int,
        name: str | None = None,
        description: str | None = None,
    ) -> Category:
        """Update a category. The slug follows the name when one is given."""
        current = self.get_category(category_id)
        payload: dict[str, object] = {}
        if name is not None:
            cleaned, slug = self._name_and_slug(name)
            self._ensure_unique(cleaned, slug, exclude_id=category_id)
            payload["name"] = cleaned
            payload["slug"] = slug
        if description is not None:
            payload["description"] = _blank_to_none(description)
        if not payload:
            return current
        updated = self.repository.update_category(category_id, payload)
        if updated is None:
            raise NotFoundError("Category", category_id)
        logger.info("Updated category", extra={"category_id": category_id})
        return updated

    def delete_category(self, category_id: int) -> None:
        """Delete an empty category.

        Categories that still own photos are never removed; the caller gets
        the current photo count back instead.
        """
        self.get_category(category_id)
        photo_count = self.photo_counter.count_photos(category_id)
        if photo_count > 0:
            raise CategoryNotEmptyError(category_id, photo_count)
        if not self.repository.delete_category(category_id):
            raise NotFoundError("Category", category_id)
        logger.info("Deleted category", extra={"category_id": category_id})

    def count_categories(self) -> int:
        """Return the number of categories."""
        return self.repository.count_categories()

    @staticmethod
    def _name_and_slug(name: str | None) -> tuple[str, str]:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Category name is required")
        slug = slugify(cleaned)
        if not slug:
            raise ValidationError("Category name must contain letters or digits")
        return cleaned, slug

    def _ensure_unique(
        self, name: str, slug: str, exclude_id: int | None = None
    ) -> None:
        for existing in (
            self.repository.get_by_name(name),
            self.repository.get_by_slug(slug),
        ):
            if existing is not None and existing.id != exclude_id:
                raise ConflictError("A category with this name already exists")


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
