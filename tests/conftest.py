"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import NAMESPACE_URL, UUID, uuid4, uuid5

import pytest

from item_inventory.config import Settings
from item_inventory.containers import AppContainer
from item_inventory.domain.auth import AuthSession, AuthUser
from item_inventory.domain.items import Item
from item_inventory.domain.photos import ItemPhoto
from item_inventory.domain.usage import UsageLogEntry
from item_inventory.errors import CollaboratorError
from item_inventory.services.auth import (
    AuthClient,
    SessionCallback,
    SessionContext,
)
from item_inventory.services.items import ItemRepository, ItemService
from item_inventory.services.photos import (
    ItemPhotoRepository,
    PhotoStorage,
    PhotoUploadService,
)
from item_inventory.services.usage import UsageLogRepository, UsageService

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def user_for(email: str) -> AuthUser:
    """Return a stable user for an email address."""
    return AuthUser(id=uuid5(NAMESPACE_URL, email), email=email)


def session_for(user: AuthUser) -> AuthSession:
    return AuthSession(user=user, access_token=f"token-{user.id}")


@dataclass
class FakeSubscription:
    """Subscription handle returned by the fake auth client."""

    client: "FakeAuthClient"
    callback: SessionCallback

    def unsubscribe(self) -> None:
        if self.callback in self.client.callbacks:
            self.client.callbacks.remove(self.callback)


@dataclass
class FakeAuthClient(AuthClient):
    """Fake identity provider with email/password accounts."""

    user: AuthUser | None = None
    accounts: dict[str, str] = field(default_factory=dict)
    callbacks: list[SessionCallback] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)
    session_gate: asyncio.Event | None = None
    session_error: Exception | None = None
    sign_out_error: CollaboratorError | None = None

    async def get_current_user(self) -> AuthUser | None:
        self.calls.append("get_current_user")
        return self.user

    async def get_session(self) -> AuthSession | None:
        self.calls.append("get_session")
        if self.session_gate is not None:
            await self.session_gate.wait()
        if self.session_error is not None:
            raise self.session_error
        return session_for(self.user) if self.user else None

    async def sign_in_with_password(self, email: str, password: str) -> None:
        self.calls.append("sign_in_with_password")
        if self.accounts.get(email) != password:
            raise CollaboratorError("sign in", "Invalid login credentials")
        self.user = user_for(email)
        self.emit(session_for(self.user))

    async def sign_out(self) -> None:
        self.calls.append("sign_out")
        if self.sign_out_error is not None:
            raise self.sign_out_error
        self.user = None
        self.emit(None)

    def on_session_change(self, callback: SessionCallback) -> FakeSubscription:
        self.callbacks.append(callback)
        return FakeSubscription(client=self, callback=callback)

    def emit(self, session: AuthSession | None) -> None:
        for callback in list(self.callbacks):
            callback(session)


@dataclass
class InMemoryItemRepository(ItemRepository):
    """In-memory item table shared by every user."""

    items: list[Item] = field(default_factory=list)

    async def create_item(self, user_id: UUID, payload: dict[str, object]) -> Item:
        item = Item(
            id=uuid4(),
            user_id=user_id,
            name=str(payload["name"]),
            category=str(payload["category"]),
            brand_or_shop=payload["brand_or_shop"],
            notes=payload["notes"],
            created_at=BASE_TIME + timedelta(seconds=len(self.items)),
        )
        self.items.append(item)
        return item

    async def list_items(self, user_id: UUID) -> list[Item]:
        owned = [item for item in self.items if item.user_id == user_id]
        return sorted(owned, key=lambda item: item.created_at, reverse=True)

    async def delete_item(self, item_id: UUID, user_id: UUID) -> int:
        before = len(self.items)
        self.items = [
            item
            for item in self.items
            if not (item.id == item_id and item.user_id == user_id)
        ]
        return before - len(self.items)


@dataclass
class FakePhotoStorage(PhotoStorage):
    """In-memory bucket storage that can fail selected uploads."""

    blobs: dict[tuple[str, str], bytes] = field(default_factory=dict)
    failing_uploads: set[int] = field(default_factory=set)
    remove_error: Exception | None = None
    url_error: Exception | None = None
    calls: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    upload_count: int = 0

    async def upload(
        self, bucket: str, path: str, content: bytes, content_type: str
    ) -> None:
        self.calls.append("upload")
        self.upload_count += 1
        if self.upload_count in self.failing_uploads:
            raise CollaboratorError("upload photo", "Payload too large")
        if (bucket, path) in self.blobs:
            raise CollaboratorError("upload photo", "The resource already exists")
        self.blobs[(bucket, path)] = content

    async def get_public_url(self, bucket: str, path: str) -> str:
        self.calls.append("get_public_url")
        if self.url_error is not None:
            raise self.url_error
        return f"https://cdn.example.com/{bucket}/{path}"

    async def remove(self, bucket: str, paths: list[str]) -> None:
        self.calls.append("remove")
        if self.remove_error is not None:
            raise self.remove_error
        for path in paths:
            self.blobs.pop((bucket, path), None)
            self.removed.append(path)


@dataclass
class InMemoryItemPhotoRepository(ItemPhotoRepository):
    """In-memory photo metadata table."""

    photos: list[ItemPhoto] = field(default_factory=list)
    failing_inserts: set[int] = field(default_factory=set)
    insert_error: Exception | None = None
    insert_count: int = 0

    async def create_photo(self, item_id: str, image_url: str) -> ItemPhoto:
        self.insert_count += 1
        if self.insert_error is not None:
            raise self.insert_error
        if self.insert_count in self.failing_inserts:
            raise CollaboratorError(
                "save photo metadata", "violates foreign key constraint"
            )
        photo = ItemPhoto(
            id=len(self.photos) + 1,
            item_id=item_id,
            image_url=image_url,
            created_at=BASE_TIME,
        )
        self.photos.append(photo)
        return photo


@dataclass
class InMemoryUsageLogRepository(UsageLogRepository):
    """In-memory usage log table."""

    entries: list[UsageLogEntry] = field(default_factory=list)

    async def create_entry(
        self, item_id: str, user_id: UUID, scene_tag: str, used_at: datetime
    ) -> UsageLogEntry:
        entry = UsageLogEntry(
            id=len(self.entries) + 1,
            item_id=item_id,
            user_id=user_id,
            scene_tag=scene_tag,
            used_at=used_at,
            created_at=used_at,
        )
        self.entries.append(entry)
        return entry

    async def list_entries(self, item_id: str) -> list[UsageLogEntry]:
        return [entry for entry in self.entries if entry.item_id == item_id]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon-key",
    )


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient(accounts={"alice@example.com": "secret"})


@pytest.fixture
def container(settings: Settings, auth_client: FakeAuthClient) -> AppContainer:
    session_context = SessionContext(auth_client)

    async def close_resources() -> None:
        session_context.close()

    return AppContainer(
        settings=settings,
        session_context=session_context,
        item_service=ItemService(
            auth_client=auth_client, repository=InMemoryItemRepository()
        ),
        photo_upload_service=PhotoUploadService(
            storage=FakePhotoStorage(), repository=InMemoryItemPhotoRepository()
        ),
        usage_service=UsageService(
            auth_client=auth_client, repository=InMemoryUsageLogRepository()
        ),
        close_resources=close_resources,
    )
