"""Domain models for authentication state."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class AuthUser:
    """Authenticated identity."""

    id: UUID
    email: str | None


@dataclass(frozen=True)
class AuthSession:
    """Session issued by the identity provider."""

    user: AuthUser
    access_token: str
    expires_at: datetime | None = None


@dataclass(frozen=True)
class Loading:
    """Initial session lookup has not resolved yet."""


@dataclass(frozen=True)
class Unauthenticated:
    """No user is signed in."""


@dataclass(frozen=True)
class Authenticated:
    """A user is signed in."""

    session: AuthSession


AuthState = Loading | Unauthenticated | Authenticated
