"""Route guarding over the current auth state."""

from dataclasses import dataclass
from urllib.parse import urlencode

from item_inventory.domain.auth import (
    Authenticated,
    AuthSession,
    AuthState,
    Loading,
)

DEFAULT_LOGIN_PATH = "/login"
LOADING_TEXT = "Checking authentication..."


@dataclass(frozen=True)
class Placeholder:
    """Show a placeholder while the session is being resolved."""

    text: str = LOADING_TEXT


@dataclass(frozen=True)
class Redirect:
    """Send the visitor to the login page, remembering where they were going."""

    login_path: str
    next_path: str

    @property
    def location(self) -> str:
        return f"{self.login_path}?{urlencode({'next': self.next_path})}"


@dataclass(frozen=True)
class Allow:
    """Render the protected content."""

    session: AuthSession


RouteDecision = Placeholder | Redirect | Allow


def guard_route(
    state: AuthState, requested_path: str, login_path: str = DEFAULT_LOGIN_PATH
) -> RouteDecision:
    """Decide how to handle a request for a protected page."""
    if isinstance(state, Loading):
        return Placeholder()
    if isinstance(state, Authenticated):
        return Allow(state.session)
    return Redirect(login_path=login_path, next_path=requested_path)


def safe_next_path(raw: str | None, default: str = "/") -> str:
    """Return a same-site path to continue to after login."""
    if not raw or not raw.startswith("/") or raw.startswith("//"):
        return default
    return raw
