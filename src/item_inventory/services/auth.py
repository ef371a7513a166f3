"""Authentication session tracking."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from item_inventory.domain.auth import (
    Authenticated,
    AuthSession,
    AuthState,
    AuthUser,
    Loading,
    Unauthenticated,
)
from item_inventory.errors import AuthError, CollaboratorError

logger = logging.getLogger(__name__)

SessionCallback = Callable[[AuthSession | None], None]
StateListener = Callable[[AuthState], None]


class Subscription(Protocol):
    """Handle for a session change subscription."""

    def unsubscribe(self) -> None:
        """Stop receiving session change notifications."""


class AuthClient(Protocol):
    """Interface for the identity provider."""

    async def get_current_user(self) -> AuthUser | None:
        """Return the user for the current session, if any."""

    async def get_session(self) -> AuthSession | None:
        """Return the stored session, if any."""

    async def sign_in_with_password(self, email: str, password: str) -> None:
        """Sign in with email and password."""

    async def sign_out(self) -> None:
        """End the current session."""

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        """Register a callback invoked with the new session on every change."""


async def require_user(client: AuthClient) -> AuthUser:
    """Return the signed-in user or raise AuthError."""
    try:
        user = await client.get_current_user()
    except CollaboratorError as exc:
        raise AuthError(
            f"Failed to resolve authenticated user: {exc.reason}"
        ) from exc
    if user is None:
        raise AuthError("No authenticated user found.")
    return user


@dataclass
class SessionContext:
    """Holds the current auth state for the lifetime of the application.

    The state starts as Loading, resolves once from the initial session lookup
    and is then overwritten by every change notification from the provider.
    Sign-in and sign-out never touch the state directly; the notification that
    follows them is the only update path.
    """

    client: AuthClient
    _state: AuthState = field(default_factory=Loading, init=False)
    _subscription: Subscription | None = field(default=None, init=False)
    _listeners: list[StateListener] = field(default_factory=list, init=False)
    _notified: bool = field(default=False, init=False)
    _closed: bool = field(default=False, init=False)

    @property
    def state(self) -> AuthState:
        """Return the current auth state."""
        return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def is_authenticated(self) -> bool:
        return isinstance(self._state, Authenticated)

    @property
    def session(self) -> AuthSession | None:
        if isinstance(self._state, Authenticated):
            return self._state.session
        return None

    @property
    def user(self) -> AuthUser | None:
        session = self.session
        return session.user if session else None

    async def start(self) -> None:
        """Subscribe to session changes and resolve the initial session."""
        if self._subscription is not None:
            return
        self._closed = False
        self._notified = False
        self._subscription = self.client.on_session_change(self._handle_change)
        try:
            session = await self.client.get_session()
        except Exception:
            if not self._closed and not self._notified:
                self._set_state(Unauthenticated())
            raise
        # A notification that arrived while the lookup was in flight is newer.
        if self._closed or self._notified:
            return
        self._set_state(_state_for(session))

    async def sign_in(self, email: str, password: str) -> None:
        """Sign in through the identity provider."""
        await self.client.sign_in_with_password(email, password)
        logger.info("Signed in %s", email)

    async def sign_out(self) -> None:
        """Sign out through the identity provider."""
        await self.client.sign_out()
        logger.info("Signed out")

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Stop listening for session changes."""
        self._closed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    def _handle_change(self, session: AuthSession | None) -> None:
        if self._closed:
            return
        self._notified = True
        self._set_state(_state_for(session))

    def _set_state(self, state: AuthState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)


def _state_for(session: AuthSession | None) -> AuthState:
    if session is None:
        return Unauthenticated()
    return Authenticated(session)
