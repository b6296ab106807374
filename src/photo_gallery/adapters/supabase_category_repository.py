"""Supabase-backed category repository."""

from dataclasses import dataclass

from supabase import Client

from photo_gallery.adapters.supabase_rows import now_iso, optional_str, parse_timestamp
from photo_gallery.domain.gallery import Category
from photo_gallery.services.categories import CategoryRepository


@dataclass
class SupabaseCategoryRepository(CategoryRepository):
    """Supabase implementation for category persistence."""

    client: Client

    def list_categories(self) -> list[Category]:
        """Return all categories, newest first."""
        response = (
            self.client.table("categories")
            .select("*")
            .order("created_at", desc=True)
            .order("id", desc=True)
            .execute()
        )
        return [_parse_category(row) for row in response.data or []]

    def get_category(self, category_id: int) -> Category | None:
        """Return a category by id, if present."""
        return self._first("id", category_id)

    def get_by_slug(self, slug: str) -> Category | None:
        """Return a category by slug, if present."""
        return self._first("slug", slug)

    def get_by_name(self, name: str) -> Category | None:
        """Return a category by name, if present."""
        return self._first("name", name)

    def create_category(self, payload: dict[str, object]) -> Category:
        """Create a category row and return it."""
        response = self.client.table("categories").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create category")
        return _parse_category(response.data[0])

    def update_category(
        self, category_id: int, payload: dict[str, object]
    ) -> Category | None:
        """Update a category row and return it."""
        response = (
            self.client.table("categories")
            .update({**payload, "updated_at": now_iso()})
            .eq("id", category_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_category(response.data[0])

    def delete_category(self, category_id: int) -> bool:
        """Delete a category row."""
        response = (
            self.client.table("categories").delete().eq("id", category_id).execute()
        )
        return bool(response.data)

    def count_categories(self) -> int:
        """Return the number of categories."""
        response = (
            self.client.table("categories").select("id", count="exact").execute()
        )
        return response.count or 0

    def _first(self, column: str, value: object) -> Category | None:
        response = (
            self.client.table("categories")
            .select("*")
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_category(response.data[0])


def _parse_category(row: dict[str, object]) -> Category:
    """Parse a categories row into a domain model."""
    return Category(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        description=optional_str(row.get("description")),
        slug=str(row.get("slug", "")),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
