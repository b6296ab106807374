"""Domain error taxonomy shared by services and the HTTP layer."""

from http import HTTPStatus


class GalleryError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def payload(self) -> dict[str, object]:
        """Return the JSON body sent to clients."""
        return {"error": self.message}


class ValidationError(GalleryError):
    """Missing or malformed input."""

    status_code = HTTPStatus.BAD_REQUEST


class ConflictError(GalleryError):
    """The write would break a uniqueness or ownership rule."""

    status_code = HTTPStatus.BAD_REQUEST


class CategoryNotEmptyError(ConflictError):
    """A category still owns photos and cannot be removed."""

    def __init__(self, category_id: int, photo_count: int) -> None:
        super().__init__(
            f"Category has {photo_count} photo(s); remove them before deleting it"
        )
        self.category_id = category_id
        self.photo_count = photo_count

    def payload(self) -> dict[str, object]:
        return {"error": self.message, "photoCount": self.photo_count}


class LimitExceededError(ConflictError):
    """The category already holds the maximum number of photos."""

    def __init__(self, category_id: int, limit: int) -> None:
        super().__init__(
            f"Category already has {limit} photos (maximum). "
            "Remove some photos before adding new ones."
        )
        self.category_id = category_id
        self.limit = limit


class UserHasPhotosError(ConflictError):
    """A user still owns uploaded photos and cannot be removed."""

    def __init__(self, user_id: int, photo_count: int) -> None:
        super().__init__(
            f"User has uploaded {photo_count} photo(s); "
            "remove them before deleting the user"
        )
        self.user_id = user_id
        self.photo_count = photo_count

    def payload(self) -> dict[str, object]:
        return {"error": self.message, "photoCount": self.photo_count}


class UnauthorizedError(GalleryError):
    """Missing, malformed or expired credentials."""

    status_code = HTTPStatus.UNAUTHORIZED


class ForbiddenError(GalleryError):
    """Authenticated, but not allowed to perform the action."""

    status_code = HTTPStatus.FORBIDDEN


class NotFoundError(GalleryError):
    """The requested entity does not exist."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id
