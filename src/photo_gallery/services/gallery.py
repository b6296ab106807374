"""Read models for the public gallery and the admin dashboard."""

from dataclasses import dataclass

from photo_gallery.domain.gallery import Category, CategoryGallery
from photo_gallery.services.categories import CategoryService
from photo_gallery.services.photos import PhotoService
from photo_gallery.services.users import UserService

DASHBOARD_RECENT_LIMIT = 5


@dataclass
class GalleryService:
    """Combines categories and photos for browsing."""

    category_service: CategoryService
    photo_service: PhotoService
    user_service: UserService

    def get_gallery(self) -> list[CategoryGallery]:
        """Return every category with its photos."""
        return [
            self._with_photos(category)
            for category in self.category_service.list_categories()
        ]

    def get_category_gallery(self, category_id: int) -> CategoryGallery:
        """Return a single category with its photos."""
        return self._with_photos(self.category_service.get_category(category_id))

    def get_category_gallery_by_slug(self, slug: str) -> CategoryGallery:
        """Return a single category, looked up by slug, with its photos."""
        return self._with_photos(self.category_service.get_category_by_slug(slug))

    def get_dashboard_stats(self) -> dict[str, object]:
        """Return totals and the latest items for the admin dashboard."""
        categories = self.category_service.list_categories()
        photos = self.photo_service.list_photos()
        return {
            "total_categories": len(categories),
            "total_photos": len(photos),
            "total_users": self.user_service.count_users(),
            "recent_photos": photos[:DASHBOARD_RECENT_LIMIT],
            "recent_categories": categories[:DASHBOARD_RECENT_LIMIT],
        }

    def _with_photos(self, category: Category) -> CategoryGallery:
        return CategoryGallery(
            category=category,
            photos=self.photo_service.list_photos(category.id),
        )
