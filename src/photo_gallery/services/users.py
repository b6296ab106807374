"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol

from photo_gallery.domain.models import ROLE_ADMIN, ROLE_USER, ROLES, UserRecord
from photo_gallery.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    UserHasPhotosError,
    ValidationError,
)
from photo_gallery.services.auth import hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def list_users(self) -> list[UserRecord]:
        """Return all users, oldest first."""

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return a user by id, if present."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with this username, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create and return a new user record."""

    def update_user(self, user_id: int, payload: dict[str, object]) -> UserRecord | None:
        """Update a user and return it, or None when it does not exist."""

    def delete_user(self, user_id: int) -> bool:
        """Delete a user and return whether a row was removed."""

    def count_users(self) -> int:
        """Return the number of users."""


class UploadCounter(Protocol):
    """Counts the photos a user has uploaded."""

    def count_photos_by_uploader(self, user_id: int) -> int:
        """Return the number of photos uploaded by a user."""


@dataclass
class UserService:
    """Application service for user accounts."""

    repository: UserRepository
    upload_counter: UploadCounter

    def list_users(self) -> list[UserRecord]:
        """Return all users."""
        return self.repository.list_users()

    def get_user(self, user_id: int) -> UserRecord:
        """Return a user or raise NotFoundError."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def register(
        self,
        username: str | None,
        password: str | None,
        name: str | None = None,
        email: str | None = None,
    ) -> UserRecord:
        """Self-service sign up. New accounts always get the user role."""
        return self.create_user(
            username=username,
            password=password,
            name=name,
            email=email,
            role=ROLE_USER,
        )

    def create_user(  # noqa: PLR0913
        self,
        username: str | None,
        password: str | None,
        name: str | None = None,
        email: str | None = None,
        role: str = ROLE_USER,
    ) -> UserRecord:
        """Create a user account with a hashed password."""
        username = _clean(username)
        email = _clean(email)
        if not username:
            raise ValidationError("Username is required")
        _check_password(password)
        _check_role(role)
        if self.repository.get_by_username(username):
            raise ConflictError("Username already exists")
        if email and self.repository.get_by_email(email):
            raise ConflictError("Email already in use")
        user = self.repository.create_user(
            {
                "username": username,
                "name": _clean(name),
                "email": email,
                "password_hash": hash_password(password),
                "role": role,
            }
        )
        logger.info("Created user", extra={"user_id": user.id, "role": user.role})
        return user

    def update_user(  # noqa: PLR0913
        self,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
        role: str | None = None,
        password: str | None = None,
    ) -> UserRecord:
        """Apply a partial update to a user."""
        current = self.get_user(user_id)
        payload: dict[str, object] = {}
        if name is not None:
            payload["name"] = _clean(name)
        if email is not None:
            cleaned_email = _clean(email)
            if cleaned_email and cleaned_email != current.email:
                existing = self.repository.get_by_email(cleaned_email)
                if existing and existing.id != user_id:
                    raise ConflictError("Email already in use")
            payload["email"] = cleaned_email
        if role is not None and role != current.role:
            _check_role(role)
            if current.is_seed_admin:
                raise ForbiddenError("The default administrator's role cannot change")
            payload["role"] = role
        if password:
            _check_password(password)
            payload["password_hash"] = hash_password(password)
        if not payload:
            return current
        updated = self.repository.update_user(user_id, payload)
        if updated is None:
            raise NotFoundError("User", user_id)
        logger.info("Updated user", extra={"user_id": user_id})
        return updated

    def delete_user(self, user_id: int) -> None:
        """Delete a user. The seed admin is protected."""
        user = self.get_user(user_id)
        if user.is_seed_admin:
            raise ForbiddenError("The default administrator cannot be deleted")
        photo_count = self.upload_counter.count_photos_by_uploader(user_id)
        if photo_count > 0:
            raise UserHasPhotosError(user_id, photo_count)
        if not self.repository.delete_user(user_id):
            raise NotFoundError("User", user_id)
        logger.info("Deleted user", extra={"user_id": user_id})

    def authenticate(self, login: str | None, password: str | None) -> UserRecord:
        """Return the user matching the credentials."""
        login = _clean(login)
        if not login or not password:
            raise ValidationError("Username and password are required")
        user = self.repository.get_by_username(login)
        if user is None and "@" in login:
            user = self.repository.get_by_email(login)
        if user is None or not verify_password(user.password_hash, password):
            raise UnauthorizedError("Invalid credentials")
        return user

    def ensure_seed_admin(
        self, username: str, password: str, email: str | None = None
    ) -> UserRecord:
        """Create the default administrator when it does not exist yet.

        An existing account under the same username is only accepted when it
        already holds the admin role.
        """
        existing = self.repository.get_by_username(username)
        if existing is not None:
            if not existing.is_admin:
                raise ConflictError(
                    f"Username '{username}' belongs to a non-admin account; "
                    "cannot seed the default administrator"
                )
            return existing
        admin = self.create_user(
            username=username,
            password=password,
            name="Administrator",
            email=email,
            role=ROLE_ADMIN,
        )
        logger.info("Seeded default admin", extra={"user_id": admin.id})
        return admin

    def count_users(self) -> int:
        """Return the number of user accounts."""
        return self.repository.count_users()


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _check_password(password: str | None) -> None:
    if not password:
        raise ValidationError("Password is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def _check_role(role: str) -> None:
    if role not in ROLES:
        raise ValidationError("Role must be 'admin' or 'user'")
