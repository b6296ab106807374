"""Authentication endpoints and request guards."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request

from photo_gallery.api.requests import LoginRequest, RegisterRequest
from photo_gallery.api.serializers import serialize_session, serialize_user
from photo_gallery.domain.models import UserRecord  # noqa: TC001
from photo_gallery.errors import ForbiddenError, UnauthorizedError

if TYPE_CHECKING:
    from photo_gallery.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])

_BEARER_PREFIX = "Bearer "


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> UserRecord:
    """Resolve the bearer token to a current user."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise UnauthorizedError("Access token required")
    container = get_container(request)
    token = authorization.removeprefix(_BEARER_PREFIX).strip()
    claims = container.token_service.decode(token)
    user = container.user_service.repository.get_user(claims.user_id)
    if user is None:
        raise UnauthorizedError("Invalid access token")
    return user


async def require_admin(user: UserRecord = Depends(require_user)) -> UserRecord:
    """Ensure the current user is an administrator."""
    if not user.is_admin:
        raise ForbiddenError("Access denied. Administrators only.")
    return user


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange credentials for a signed access token."""
    container = get_container(request)
    user = container.user_service.authenticate(payload.login, payload.password)
    return serialize_session(container.token_service.issue(user))


@router.post("/register")
async def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
    """Create a regular user account."""
    container = get_container(request)
    user = container.user_service.register(
        username=payload.username,
        password=payload.password,
        name=payload.name,
        email=payload.email,
    )
    return {"user": serialize_user(user)}


@router.get("/me")
async def me(user: UserRecord = Depends(require_user)) -> dict[str, object]:
    """Return the user behind the presented token."""
    return {"user": serialize_user(user)}
