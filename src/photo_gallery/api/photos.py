"""Photo endpoints.

``POST /api/photos`` accepts either a JSON body whose ``imageUrl`` is a
base64 data URI or an http(s) URL, or a multipart form with an ``image``
file. Both are normalised here before reaching the photo service.
"""

import base64
import binascii
import re

import pydantic
from fastapi import APIRouter, Depends, Query, Request
from starlette.datastructures import UploadFile

from photo_gallery.api.auth import get_container, require_admin
from photo_gallery.api.requests import PhotoCreateRequest, PhotoUpdateRequest
from photo_gallery.api.serializers import serialize_photo
from photo_gallery.domain.images import ImageUpload
from photo_gallery.domain.models import UserRecord  # noqa: TC001
from photo_gallery.errors import ValidationError
from photo_gallery.services.photos import DEFAULT_RECENT_LIMIT

router = APIRouter(prefix="/api/photos", tags=["photos"])

_DATA_URI = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL
)


@router.get("")
async def list_photos(
    request: Request,
    category_id: int | None = Query(default=None, alias="categoryId"),
) -> list[dict[str, object]]:
    """Return photos newest first, optionally for one category."""
    container = get_container(request)
    return [
        serialize_photo(photo)
        for photo in container.photo_service.list_photos(category_id)
    ]


@router.get("/category/{category_id}")
async def photos_by_category(
    category_id: int, request: Request
) -> list[dict[str, object]]:
    """Return the photos of one category."""
    container = get_container(request)
    return [
        serialize_photo(photo)
        for photo in container.photo_service.list_photos(category_id)
    ]


@router.get("/category/{category_id}/recent")
async def recent_photos(
    category_id: int, request: Request, limit: int = DEFAULT_RECENT_LIMIT
) -> list[dict[str, object]]:
    """Return the newest photos of a category for gallery previews."""
    container = get_container(request)
    return [
        serialize_photo(photo)
        for photo in container.photo_service.list_recent_photos(category_id, limit)
    ]


@router.get("/{photo_id}")
async def photo_detail(photo_id: int, request: Request) -> dict[str, object]:
    """Return a single photo."""
    container = get_container(request)
    return serialize_photo(container.photo_service.get_photo(photo_id))


@router.post("")
async def create_photo(
    request: Request, user: UserRecord = Depends(require_admin)
) -> dict[str, object]:
    """Create a photo from an upload, a data URI or an external URL."""
    container = get_container(request)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        fields = _parse_fields(
            {key: value for key, value in form.items() if isinstance(value, str)}
        )
        upload = form.get("image")
        if isinstance(upload, UploadFile):
            image: ImageUpload | str | None = await _read_upload(
                upload, container.settings.max_image_bytes
            )
        else:
            image = _normalise_image_url(fields.image_url)
    else:
        fields = _parse_fields(await _json_body(request))
        image = _normalise_image_url(fields.image_url)

    photo = container.photo_service.create_photo(
        title=fields.title,
        category_id=fields.category_id,
        uploaded_by=user.id,
        image=image,
        description=fields.description,
        external_link=fields.external_link,
    )
    return serialize_photo(photo)


@router.put("/{photo_id}", dependencies=[Depends(require_admin)])
async def update_photo(
    photo_id: int, payload: PhotoUpdateRequest, request: Request
) -> dict[str, object]:
    """Update a photo's title, description or external link."""
    container = get_container(request)
    photo = container.photo_service.update_photo(
        photo_id,
        title=payload.title,
        description=payload.description,
        external_link=payload.external_link,
    )
    return serialize_photo(photo)


@router.delete("/{photo_id}", dependencies=[Depends(require_admin)])
async def delete_photo(photo_id: int, request: Request) -> dict[str, object]:
    """Delete a photo and its stored image."""
    container = get_container(request)
    container.photo_service.delete_photo(photo_id)
    return {"success": True}


async def _json_body(request: Request) -> dict[str, object]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise ValidationError("Request body must be JSON") from exc
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _parse_fields(raw: dict[str, object]) -> PhotoCreateRequest:
    cleaned = {key: value for key, value in raw.items() if value != ""}
    try:
        return PhotoCreateRequest.model_validate(cleaned)
    except pydantic.ValidationError as exc:
        field = ".".join(str(part) for part in exc.errors()[0]["loc"])
        raise ValidationError(f"Invalid value for {field}") from exc


async def _read_upload(upload: UploadFile, max_bytes: int) -> ImageUpload:
    # One byte past the ceiling is enough for the service to reject it.
    content = await upload.read(max_bytes + 1)
    return ImageUpload(
        content=content,
        content_type=upload.content_type or "application/octet-stream",
        filename=upload.filename,
    )


def _normalise_image_url(value: str | None) -> ImageUpload | str | None:
    if value is None:
        return None
    match = _DATA_URI.match(value.strip())
    if match is None:
        return value
    try:
        content = base64.b64decode(
            re.sub(r"\s+", "", match.group("data")), validate=True
        )
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Image data is not valid base64") from exc
    return ImageUpload(content=content, content_type=match.group("mime"))
