"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from photo_gallery.adapters.local_image_store import ImageStore, LocalImageStore
from photo_gallery.adapters.supabase_category_repository import (
    SupabaseCategoryRepository,
)
from photo_gallery.adapters.supabase_photo_repository import SupabasePhotoRepository
from photo_gallery.adapters.supabase_user_repository import SupabaseUserRepository
from photo_gallery.config import Settings
from photo_gallery.services.auth import TokenService
from photo_gallery.services.categories import CategoryRepository, CategoryService
from photo_gallery.services.gallery import GalleryService
from photo_gallery.services.photos import PhotoRepository, PhotoService
from photo_gallery.services.users import UserRepository, UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    image_store: ImageStore
    user_service: UserService
    token_service: TokenService
    category_service: CategoryService
    photo_service: PhotoService
    gallery_service: GalleryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    category_repository = SupabaseCategoryRepository(supabase_client)
    photo_repository = SupabasePhotoRepository(supabase_client)
    image_store = LocalImageStore.create(resolved_settings.upload_dir)
    return wire_container(
        settings=resolved_settings,
        user_repository=user_repository,
        category_repository=category_repository,
        photo_repository=photo_repository,
        image_store=image_store,
    )


def wire_container(
    settings: Settings,
    user_repository: UserRepository,
    category_repository: CategoryRepository,
    photo_repository: PhotoRepository,
    image_store: ImageStore,
) -> AppContainer:
    """Build services on top of the given repositories."""
    user_service = UserService(
        repository=user_repository, upload_counter=photo_repository
    )
    category_service = CategoryService(
        repository=category_repository,
        photo_counter=photo_repository,
    )
    photo_service = PhotoService(
        repository=photo_repository,
        category_repository=category_repository,
        image_store=image_store,
        max_per_category=settings.max_photos_per_category,
        max_image_bytes=settings.max_image_bytes,
    )
    gallery_service = GalleryService(
        category_service=category_service,
        photo_service=photo_service,
        user_service=user_service,
    )
    token_service = TokenService(
        secret_key=settings.secret_key,
        ttl=timedelta(minutes=settings.token_ttl_minutes),
    )
    return AppContainer(
        settings=settings,
        image_store=image_store,
        user_service=user_service,
        token_service=token_service,
        category_service=category_service,
        photo_service=photo_service,
        gallery_service=gallery_service,
    )
