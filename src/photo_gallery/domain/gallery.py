"""Domain models for categories and photos."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Category:
    """A named group of photos."""

    id: int
    name: str
    description: str | None
    slug: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Photo:
    """A photo published inside a category."""

    id: int
    title: str
    description: str | None
    image_url: str
    external_link: str | None
    category_id: int
    uploaded_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CategoryGallery:
    """A category together with its photos, newest first."""

    category: Category
    photos: list[Photo]
