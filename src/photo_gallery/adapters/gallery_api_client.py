"""HTTP client for the gallery API with a response cache."""

from dataclasses import dataclass, field
from typing import Any

import httpx

from photo_gallery.services.cache import Cache, InMemoryCache

DEFAULT_TTL_SECONDS = 60

CATEGORIES_KEY = "categories"
GALLERY_KEY = "gallery"
PHOTOS_KEY = "photos"
USERS_KEY = "users"
STATS_KEY = "stats"


class ApiError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _category_photos_key(category_id: int) -> str:
    return f"{PHOTOS_KEY}:category:{category_id}"


@dataclass
class GalleryApiClient:
    """Async client for the gallery API.

    GET responses are cached per key; every write drops the keys whose
    content it changes so the next read goes back to the server.
    """

    base_url: str
    http_client: httpx.AsyncClient
    cache: Cache = field(default_factory=InMemoryCache)
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    token: str | None = None

    @classmethod
    def create(cls, base_url: str) -> "GalleryApiClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def login(self, username: str, password: str) -> dict[str, Any]:
        """Log in and keep the bearer token for later calls."""
        data = await self._request(
            "POST",
            "/api/auth/login",
            json={"username": username, "password": password},
        )
        self.token = data["token"]
        self.cache.clear()
        return data

    def logout(self) -> None:
        """Forget the token and any cached responses."""
        self.token = None
        self.cache.clear()

    async def register(
        self, username: str, password: str, name: str | None = None
    ) -> dict[str, Any]:
        """Create a regular user account."""
        data = await self._request(
            "POST",
            "/api/auth/register",
            json={"username": username, "password": password, "name": name},
        )
        self.cache.invalidate(USERS_KEY, STATS_KEY)
        return data

    async def list_categories(self) -> list[dict[str, Any]]:
        """Return categories, newest first."""
        return await self._cached_get(CATEGORIES_KEY, "/api/categories")

    async def get_gallery(self) -> list[dict[str, Any]]:
        """Return the public gallery."""
        return await self._cached_get(GALLERY_KEY, "/api/gallery")

    async def list_photos(self, category_id: int | None = None) -> list[dict[str, Any]]:
        """Return photos, optionally for one category."""
        if category_id is None:
            return await self._cached_get(PHOTOS_KEY, "/api/photos")
        return await self._cached_get(
            _category_photos_key(category_id),
            f"/api/photos/category/{category_id}",
        )

    async def list_recent_photos(
        self, category_id: int, limit: int = 8
    ) -> list[dict[str, Any]]:
        """Return the newest photos of a category."""
        return await self._cached_get(
            f"{_category_photos_key(category_id)}:recent:{limit}",
            f"/api/photos/category/{category_id}/recent",
            params={"limit": limit},
        )

    async def list_users(self) -> list[dict[str, Any]]:
        """Return all users (admin only)."""
        return await self._cached_get(USERS_KEY, "/api/users")

    async def get_stats(self) -> dict[str, Any]:
        """Return admin dashboard stats."""
        return await self._cached_get(STATS_KEY, "/api/admin/stats")

    async def create_category(
        self, name: str, description: str | None = None
    ) -> dict[str, Any]:
        """Create a category."""
        data = await self._request(
            "POST",
            "/api/categories",
            json={"name": name, "description": description},
        )
        self.cache.invalidate(CATEGORIES_KEY, GALLERY_KEY, STATS_KEY)
        return data

    async def update_category(
        self,
        category_id: int,
        name: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        """Update a category."""
        data = await self._request(
            "PUT",
            f"/api/categories/{category_id}",
            json=_without_none({"name": name, "description": description}),
        )
        self.cache.invalidate(CATEGORIES_KEY, GALLERY_KEY, STATS_KEY)
        return data

    async def delete_category(self, category_id: int) -> None:
        """Delete an empty category."""
        await self._request("DELETE", f"/api/categories/{category_id}")
        self.cache.invalidate(
            CATEGORIES_KEY,
            GALLERY_KEY,
            STATS_KEY,
            _category_photos_key(category_id),
        )

    async def create_photo(  # noqa: PLR0913
        self,
        title: str,
        category_id: int,
        *,
        image_bytes: bytes | None = None,
        content_type: str = "image/jpeg",
        filename: str = "image.jpg",
        image_url: str | None = None,
        description: str | None = None,
        external_link: str | None = None,
    ) -> dict[str, Any]:
        """Upload a photo as a multipart file or by URL."""
        fields = _without_none(
            {
                "title": title,
                "categoryId": str(category_id),
                "description": description,
                "externalLink": external_link,
            }
        )
        if image_bytes is not None:
            data = await self._request(
                "POST",
                "/api/photos",
                data=fields,
                files={"image": (filename, image_bytes, content_type)},
            )
        else:
            data = await self._request(
                "POST",
                "/api/photos",
                json={**fields, "categoryId": category_id, "imageUrl": image_url},
            )
        self._invalidate_photos(category_id)
        return data

    async def update_photo(
        self,
        photo_id: int,
        title: str | None = None,
        description: str | None = None,
        external_link: str | None = None,
    ) -> dict[str, Any]:
        """Update a photo's descriptive fields."""
        data = await self._request(
            "PUT",
            f"/api/photos/{photo_id}",
            json=_without_none(
                {
                    "title": title,
                    "description": description,
                    "externalLink": external_link,
                }
            ),
        )
        self._invalidate_photos(data.get("categoryId"))
        return data

    async def delete_photo(self, photo_id: int) -> None:
        """Delete a photo."""
        await self._request("DELETE", f"/api/photos/{photo_id}")
        self._invalidate_photos(None)

    async def create_user(  # noqa: PLR0913
        self,
        username: str,
        password: str,
        role: str = "user",
        name: str | None = None,
        email: str | None = None,
    ) -> dict[str, Any]:
        """Create a user account (admin only)."""
        data = await self._request(
            "POST",
            "/api/users",
            json=_without_none(
                {
                    "username": username,
                    "password": password,
                    "role": role,
                    "name": name,
                    "email": email,
                }
            ),
        )
        self.cache.invalidate(USERS_KEY, STATS_KEY)
        return data

    async def update_user(self, user_id: int, **changes: str) -> dict[str, Any]:
        """Update a user account (admin only)."""
        data = await self._request("PUT", f"/api/users/{user_id}", json=changes)
        self.cache.invalidate(USERS_KEY)
        return data

    async def delete_user(self, user_id: int) -> None:
        """Delete a user account (admin only)."""
        await self._request("DELETE", f"/api/users/{user_id}")
        self.cache.invalidate(USERS_KEY, STATS_KEY)

    def _invalidate_photos(self, category_id: int | None) -> None:
        keys = [PHOTOS_KEY, GALLERY_KEY, CATEGORIES_KEY, STATS_KEY]
        if category_id is not None:
            keys.append(_category_photos_key(category_id))
        self.cache.invalidate(*keys)

    async def _cached_get(
        self, key: str, path: str, params: dict[str, Any] | None = None
    ) -> Any:
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        data = await self._request("GET", path, params=params)
        self.cache.set(key, data, ttl_seconds=self.ttl_seconds)
        return data

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = await self.http_client.request(
            method, f"{self.base_url}{path}", headers=headers, timeout=10, **kwargs
        )
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"HTTP {response.status_code}"


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
