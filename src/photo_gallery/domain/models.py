"""Domain models for gallery users."""

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = frozenset({ROLE_ADMIN, ROLE_USER})

SEED_ADMIN_ID = 1


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    username: str
    name: str | None
    email: str | None
    password_hash: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_seed_admin(self) -> bool:
        return self.id == SEED_ADMIN_ID and self.role == ROLE_ADMIN
