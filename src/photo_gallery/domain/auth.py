"""Domain models for authentication."""

from dataclasses import dataclass
from datetime import datetime

from photo_gallery.domain.models import UserRecord


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a bearer token."""

    user_id: int
    username: str
    role: str
    expires_at: datetime


@dataclass(frozen=True)
class AuthSession:
    """A successful login: the user and the token issued for them."""

    user: UserRecord
    token: str
    expires_at: datetime
