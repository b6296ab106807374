"""Supabase-backed photo repository."""

from dataclasses import dataclass

from supabase import Client

from photo_gallery.adapters.supabase_rows import now_iso, optional_str, parse_timestamp
from photo_gallery.domain.gallery import Photo
from photo_gallery.services.photos import PhotoRepository

CREATE_WITHIN_LIMIT_FUNCTION = "create_photo_within_limit"


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo persistence."""

    client: Client

    def list_photos(
        self, category_id: int | None = None, limit: int | None = None
    ) -> list[Photo]:
        """Return photos newest first."""
        query = self.client.table("photos").select("*")
        if category_id is not None:
            query = query.eq("category_id", category_id)
        query = query.order("created_at", desc=True).order("id", desc=True)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_parse_photo(row) for row in response.data or []]

    def get_photo(self, photo_id: int) -> Photo | None:
        """Return a photo by id, if present."""
        response = (
            self.client.table("photos")
            .select("*")
            .eq("id", photo_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    def create_photo(
        self, payload: dict[str, object], max_per_category: int
    ) -> Photo | None:
        """Insert through the database function that enforces the cap."""
        response = self.client.rpc(
            CREATE_WITHIN_LIMIT_FUNCTION,
            {
                "p_title": payload["title"],
                "p_description": payload.get("description"),
                "p_image_url": payload["image_url"],
                "p_external_link": payload.get("external_link"),
                "p_category_id": payload["category_id"],
                "p_uploaded_by": payload["uploaded_by"],
                "p_max_photos": max_per_category,
            },
        ).execute()
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    def update_photo(self, photo_id: int, payload: dict[str, object]) -> Photo | None:
        """Update a photo row and return it."""
        response = (
            self.client.table("photos")
            .update({**payload, "updated_at": now_iso()})
            .eq("id", photo_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])

    def delete_photo(self, photo_id: int) -> bool:
        """Delete a photo row."""
        response = self.client.table("photos").delete().eq("id", photo_id).execute()
        return bool(response.data)

    def count_photos(self, category_id: int | None = None) -> int:
        """Return the number of photos, optionally for one category."""
        query = self.client.table("photos").select("id", count="exact")
        if category_id is not None:
            query = query.eq("category_id", category_id)
        return query.execute().count or 0

    def count_photos_by_uploader(self, user_id: int) -> int:
        """Return the number of photos uploaded by a user."""
        response = (
            self.client.table("photos")
            .select("id", count="exact")
            .eq("uploaded_by", user_id)
            .execute()
        )
        return response.count or 0


def _parse_photo(row: dict[str, object]) -> Photo:
    """Parse a photos row into a domain model."""
    return Photo(
        id=int(row["id"]),
        title=str(row.get("title", "")),
        description=optional_str(row.get("description")),
        image_url=str(row.get("image_url", "")),
        external_link=optional_str(row.get("external_link")),
        category_id=int(row["category_id"]),
        uploaded_by=int(row["uploaded_by"]),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
