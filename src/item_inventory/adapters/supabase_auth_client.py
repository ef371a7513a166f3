"""Supabase Auth adapter."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from supabase import AsyncClient

from item_inventory.adapters.supabase_errors import collaborator_errors
from item_inventory.domain.auth import AuthSession, AuthUser
from item_inventory.services.auth import AuthClient, SessionCallback, Subscription


@dataclass
class SupabaseAuthClient(AuthClient):
    """Identity provider backed by Supabase Auth."""

    client: AsyncClient

    async def get_current_user(self) -> AuthUser | None:
        """Return the user for the current session, validated by the server."""
        with collaborator_errors("resolve authenticated user"):
            response = await self.client.auth.get_user()
        if response is None or response.user is None:
            return None
        return _parse_user(response.user)

    async def get_session(self) -> AuthSession | None:
        """Return the locally stored session, refreshing it if expired."""
        with collaborator_errors("load session"):
            session = await self.client.auth.get_session()
        return _parse_session(session)

    async def sign_in_with_password(self, email: str, password: str) -> None:
        """Sign in with email and password."""
        with collaborator_errors("sign in"):
            await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )

    async def sign_out(self) -> None:
        """Sign out and drop the stored session."""
        with collaborator_errors("sign out"):
            await self.client.auth.sign_out()

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        """Forward Supabase auth state changes as domain sessions."""

        def listener(_event: object, session: Any | None) -> None:
            callback(_parse_session(session))

        return self.client.auth.on_auth_state_change(listener)


def _parse_user(user: Any) -> AuthUser:
    return AuthUser(id=UUID(str(user.id)), email=getattr(user, "email", None))


def _parse_session(session: Any | None) -> AuthSession | None:
    if session is None or getattr(session, "user", None) is None:
        return None
    expires_at_raw = getattr(session, "expires_at", None)
    return AuthSession(
        user=_parse_user(session.user),
        access_token=str(session.access_token),
        expires_at=(
            datetime.fromtimestamp(expires_at_raw, tz=UTC)
            if expires_at_raw is not None
            else None
        ),
    )
