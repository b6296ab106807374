"""Category endpoints."""

from fastapi import APIRouter, Depends, Request

from photo_gallery.api.auth import get_container, require_admin
from photo_gallery.api.requests import CategoryRequest
from photo_gallery.api.serializers import (
    serialize_category,
    serialize_category_gallery,
)

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
async def list_categories(request: Request) -> list[dict[str, object]]:
    """Return all categories, newest first."""
    container = get_container(request)
    return [
        serialize_category(category)
        for category in container.category_service.list_categories()
    ]


@router.get("/slug/{slug}")
async def category_by_slug(slug: str, request: Request) -> dict[str, object]:
    """Return a category and its photos, looked up by slug."""
    container = get_container(request)
    return serialize_category_gallery(
        container.gallery_service.get_category_gallery_by_slug(slug)
    )


@router.get("/{category_id}")
async def category_detail(category_id: int, request: Request) -> dict[str, object]:
    """Return a category and its photos."""
    container = get_container(request)
    return serialize_category_gallery(
        container.gallery_service.get_category_gallery(category_id)
    )


@router.post("", dependencies=[Depends(require_admin)])
async def create_category(
    payload: CategoryRequest, request: Request
) -> dict[str, object]:
    """Create a category."""
    container = get_container(request)
    category = container.category_service.create_category(
        payload.name, payload.description
    )
    return serialize_category(category)


@router.put("/{category_id}", dependencies=[Depends(require_admin)])
async def update_category(
    category_id: int, payload: CategoryRequest, request: Request
) -> dict[str, object]:
    """Update a category's name and/or description."""
    container = get_container(request)
    category = container.category_service.update_category(
        category_id, name=payload.name, description=payload.description
    )
    return serialize_category(category)


@router.delete("/{category_id}", dependencies=[Depends(require_admin)])
async def delete_category(category_id: int, request: Request) -> dict[str, object]:
    """Delete an empty category."""
    container = get_container(request)
    container.category_service.delete_category(category_id)
    return {"success": True}
