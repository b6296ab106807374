"""User administration endpoints."""

from fastapi import APIRouter, Depends, Request

from photo_gallery.api.auth import get_container, require_admin
from photo_gallery.api.requests import UserCreateRequest, UserUpdateRequest
from photo_gallery.api.serializers import serialize_user

router = APIRouter(
    prefix="/api/users", tags=["users"], dependencies=[Depends(require_admin)]
)


@router.get("")
async def list_users(request: Request) -> list[dict[str, object]]:
    """Return all users."""
    container = get_container(request)
    return [serialize_user(user) for user in container.user_service.list_users()]


@router.post("")
async def create_user(
    payload: UserCreateRequest, request: Request
) -> dict[str, object]:
    """Create a user with an explicit role."""
    container = get_container(request)
    user = container.user_service.create_user(
        username=payload.username,
        password=payload.password,
        name=payload.name,
        email=payload.email,
        role=payload.role,
    )
    return serialize_user(user)


@router.put("/{user_id}")
async def update_user(
    user_id: int, payload: UserUpdateRequest, request: Request
) -> dict[str, object]:
    """Update a user's profile, role or password."""
    container = get_container(request)
    user = container.user_service.update_user(
        user_id,
        name=payload.name,
        email=payload.email,
        role=payload.role,
        password=payload.password,
    )
    return serialize_user(user)


@router.delete("/{user_id}")
async def delete_user(user_id: int, request: Request) -> dict[str, object]:
    """Delete a user. The default administrator is protected."""
    container = get_container(request)
    container.user_service.delete_user(user_id)
    return {"success": True}
