"""Pydantic models for API request bodies."""

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LoginRequest(_Body):
    """Credentials posted to the login endpoint."""

    username: str | None = None
    email: str | None = None
    password: str | None = None

    @property
    def login(self) -> str | None:
        return self.username or self.email


class RegisterRequest(_Body):
    """Self-service sign up payload."""

    username: str | None = None
    password: str | None = None
    name: str | None = None
    email: str | None = None


class UserCreateRequest(RegisterRequest):
    """Admin-created account payload."""

    role: str = "user"


class UserUpdateRequest(_Body):
    """Partial user update."""

    name: str | None = None
    email: str | None = None
    role: str | None = None
    password: str | None = None


class CategoryRequest(_Body):
    """Category create or partial update."""

    name: str | None = None
    description: str | None = None


class PhotoCreateRequest(_Body):
    """Photo fields posted as JSON or multipart form fields."""

    title: str | None = None
    description: str | None = None
    category_id: int | None = Field(default=None, alias="categoryId")
    image_url: str | None = Field(default=None, alias="imageUrl")
    external_link: str | None = Field(default=None, alias="externalLink")


class PhotoUpdateRequest(_Body):
    """Partial photo update. Image and category are not accepted."""

    title: str | None = None
    description: str | None = None
    external_link: str | None = Field(default=None, alias="externalLink")
