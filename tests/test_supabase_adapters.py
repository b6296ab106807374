"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

from photo_gallery.adapters.supabase_category_repository import (
    SupabaseCategoryRepository,
)
from photo_gallery.adapters.supabase_photo_repository import (
    CREATE_WITHIN_LIMIT_FUNCTION,
    SupabasePhotoRepository,
)
from photo_gallery.adapters.supabase_user_repository import SupabaseUserRepository

TIMESTAMP = "2024-05-01T12:00:00+00:00"


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None
    count: int | None = None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    counts: list[int] = field(default_factory=list)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: list[tuple[str, bool]] = field(default_factory=list)
    last_limit: int | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args, count: str | None = None) -> "FakeTable":
        self._action = "select"
        self._counting = count is not None
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order.append((column, desc))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        if action == "select" and getattr(self, "_counting", False):
            return FakeResponse(data=[], count=self.counts.pop(0) if self.counts else None)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeRpc:
    data: list[dict[str, object]]

    def execute(self) -> FakeResponse:
        return FakeResponse(data=self.data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    rpc_results: list[list[dict[str, object]]] = field(default_factory=list)
    rpc_calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]

    def rpc(self, function: str, params: dict[str, object]) -> FakeRpc:
        self.rpc_calls.append((function, params))
        return FakeRpc(self.rpc_results.pop(0) if self.rpc_results else [])


def _photo_row(photo_id: int = 1, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": photo_id,
        "title": "Sunset",
        "description": None,
        "image_url": "/uploads/abc.png",
        "external_link": None,
        "category_id": 3,
        "uploaded_by": 1,
        "created_at": TIMESTAMP,
        "updated_at": TIMESTAMP,
    }
    row.update(overrides)
    return row


def test_supabase_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    row = {
        "id": 1,
        "username": "admin",
        "name": "Administrator",
        "email": None,
        "password_hash": "hash",
        "role": "admin",
        "created_at": TIMESTAMP,
        "updated_at": TIMESTAMP,
    }
    users_table.queue("insert", [row])
    users_table.queue("select", [row])

    repository = SupabaseUserRepository(client)
    created = repository.create_user({"username": "admin", "password_hash": "hash"})
    fetched = repository.get_by_username("admin")

    assert created.id == 1
    assert created.is_seed_admin
    assert created.email is None
    assert fetched == created
    assert users_table.last_filters == [("username", "admin")]
    assert users_table.last_limit == 1


def test_supabase_user_repository_missing_user() -> None:
    client = FakeSupabaseClient()

    repository = SupabaseUserRepository(client)

    assert repository.get_user(99) is None
    assert repository.update_user(99, {"name": "x"}) is None
    assert repository.delete_user(99) is False


def test_supabase_user_repository_update_stamps_updated_at() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    users_table.queue(
        "update",
        [{"id": 2, "username": "ana", "name": "Ana", "role": "user"}],
    )

    repository = SupabaseUserRepository(client)
    updated = repository.update_user(2, {"name": "Ana"})

    assert updated is not None
    assert updated.name == "Ana"
    assert isinstance(users_table.last_payload, dict)
    assert users_table.last_payload["name"] == "Ana"
    assert "updated_at" in users_table.last_payload
    assert users_table.last_filters == [("id", 2)]


def test_supabase_category_repository_lists_newest_first() -> None:
    client = FakeSupabaseClient()
    table = client.table("categories")
    table.queue(
        "select",
        [
            {"id": 2, "name": "B", "slug": "b", "created_at": TIMESTAMP},
            {"id": 1, "name": "A", "slug": "a", "description": "first"},
        ],
    )

    repository = SupabaseCategoryRepository(client)
    categories = repository.list_categories()

    assert [category.slug for category in categories] == ["b", "a"]
    assert categories[0].created_at is not None
    assert categories[1].description == "first"
    assert table.last_order == [("created_at", True), ("id", True)]


def test_supabase_category_repository_count_and_delete() -> None:
    client = FakeSupabaseClient()
    table = client.table("categories")
    table.counts.append(4)
    table.queue("delete", [{"id": 1}])

    repository = SupabaseCategoryRepository(client)

    assert repository.count_categories() == 4
    assert repository.delete_category(1) is True
    assert table.last_filters == [("id", 1)]


def test_supabase_photo_repository_filters_and_limits() -> None:
    client = FakeSupabaseClient()
    table = client.table("photos")
    table.queue("select", [_photo_row(2), _photo_row(1)])

    repository = SupabasePhotoRepository(client)
    photos = repository.list_photos(category_id=3, limit=8)

    assert [photo.id for photo in photos] == [2, 1]
    assert table.last_filters == [("category_id", 3)]
    assert table.last_limit == 8
    assert table.last_order == [("created_at", True), ("id", True)]


def test_supabase_photo_repository_count_by_category() -> None:
    client = FakeSupabaseClient()
    table = client.table("photos")
    table.counts.append(20)

    repository = SupabasePhotoRepository(client)

    assert repository.count_photos(3) == 20
    assert table.last_filters == [("category_id", 3)]


def test_supabase_photo_repository_counts_by_uploader() -> None:
    client = FakeSupabaseClient()
    table = client.table("photos")
    table.counts.append(2)

    repository = SupabasePhotoRepository(client)

    assert repository.count_photos_by_uploader(7) == 2
    assert table.last_filters == [("uploaded_by", 7)]


def test_supabase_photo_repository_creates_through_rpc() -> None:
    client = FakeSupabaseClient(rpc_results=[[_photo_row(5)]])

    repository = SupabasePhotoRepository(client)
    photo = repository.create_photo(
        {
            "title": "Sunset",
            "description": None,
            "image_url": "/uploads/abc.png",
            "external_link": None,
            "category_id": 3,
            "uploaded_by": 1,
        },
        max_per_category=20,
    )

    assert photo is not None
    assert photo.id == 5
    function, params = client.rpc_calls[0]
    assert function == CREATE_WITHIN_LIMIT_FUNCTION
    assert params["p_category_id"] == 3
    assert params["p_max_photos"] == 20
    assert "photos" not in client.tables


def test_supabase_photo_repository_reports_full_category() -> None:
    client = FakeSupabaseClient(rpc_results=[[]])

    repository = SupabasePhotoRepository(client)
    photo = repository.create_photo(
        {
            "title": "Extra",
            "image_url": "https://cdn.example.com/x.jpg",
            "category_id": 3,
            "uploaded_by": 1,
        },
        max_per_category=20,
    )

    assert photo is None
