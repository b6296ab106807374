"""Domain model to JSON conversion for API responses."""

from datetime import datetime

from photo_gallery.domain.auth import AuthSession
from photo_gallery.domain.gallery import Category, CategoryGallery, Photo
from photo_gallery.domain.models import UserRecord


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Public view of a user. Password hashes never leave the server."""
    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "createdAt": _isoformat(user.created_at),
        "updatedAt": _isoformat(user.updated_at),
    }


def serialize_session(session: AuthSession) -> dict[str, object]:
    return {
        "user": serialize_user(session.user),
        "token": session.token,
        "expiresAt": session.expires_at.isoformat(),
    }


def serialize_category(category: Category) -> dict[str, object]:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "slug": category.slug,
        "createdAt": _isoformat(category.created_at),
        "updatedAt": _isoformat(category.updated_at),
    }


def serialize_photo(photo: Photo) -> dict[str, object]:
    return {
        "id": photo.id,
        "title": photo.title,
        "description": photo.description,
        "imageUrl": photo.image_url,
        "externalLink": photo.external_link,
        "categoryId": photo.category_id,
        "uploadedBy": photo.uploaded_by,
        "createdAt": _isoformat(photo.created_at),
        "updatedAt": _isoformat(photo.updated_at),
    }


def serialize_category_gallery(entry: CategoryGallery) -> dict[str, object]:
    return {
        "category": serialize_category(entry.category),
        "photos": [serialize_photo(photo) for photo in entry.photos],
    }


def serialize_stats(stats: dict[str, object]) -> dict[str, object]:
    """Convert dashboard stats to camelCase JSON."""
    recent_photos = stats["recent_photos"]
    recent_categories = stats["recent_categories"]
    return {
        "totalCategories": stats["total_categories"],
        "totalPhotos": stats["total_photos"],
        "totalUsers": stats["total_users"],
        "recentPhotos": [serialize_photo(photo) for photo in recent_photos],
        "recentCategories": [
            serialize_category(category) for category in recent_categories
        ],
    }


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
