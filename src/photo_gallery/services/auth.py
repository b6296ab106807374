"""Password hashing and signed bearer tokens."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from photo_gallery.domain.auth import AuthSession, TokenClaims
from photo_gallery.domain.models import UserRecord
from photo_gallery.errors import UnauthorizedError

_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Return a salted hash suitable for storage."""
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Return True when the password matches the stored hash."""
    return check_password_hash(password_hash, password)


@dataclass
class TokenService:
    """Issues and verifies HS256-signed tokens."""

    secret_key: str
    ttl: timedelta = timedelta(hours=12)

    def issue(self, user: UserRecord) -> AuthSession:
        """Issue a token for the given user."""
        issued_at = datetime.now(tz=UTC)
        expires_at = issued_at + self.ttl
        claims = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self.secret_key, algorithm=_ALGORITHM)
        return AuthSession(user=user, token=token, expires_at=expires_at)

    def decode(self, token: str) -> TokenClaims:
        """Verify a token and return its claims."""
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError("Session expired, please log in again") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError("Invalid access token") from exc
        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise UnauthorizedError("Invalid access token") from exc
        return TokenClaims(
            user_id=user_id,
            username=str(claims.get("username", "")),
            role=str(claims.get("role", "")),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=UTC),
        )
