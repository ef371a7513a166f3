"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import AsyncClient, acreate_client

from item_inventory.adapters.supabase_auth_client import SupabaseAuthClient
from item_inventory.adapters.supabase_item_photo_repository import (
    SupabaseItemPhotoRepository,
)
from item_inventory.adapters.supabase_item_repository import SupabaseItemRepository
from item_inventory.adapters.supabase_photo_storage import SupabasePhotoStorage
from item_inventory.adapters.supabase_usage_log_repository import (
    SupabaseUsageLogRepository,
)
from item_inventory.config import Settings
from item_inventory.services.auth import SessionContext
from item_inventory.services.items import ItemService
from item_inventory.services.photos import PhotoUploadService
from item_inventory.services.usage import UsageService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_context: SessionContext
    item_service: ItemService
    photo_upload_service: PhotoUploadService
    usage_service: UsageService
    close_resources: Callable[[], Awaitable[None]]


async def build_container(
    settings: Settings | None = None, client: AsyncClient | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = client or await acreate_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    auth_client = SupabaseAuthClient(supabase_client)
    session_context = SessionContext(auth_client)
    item_service = ItemService(
        auth_client=auth_client,
        repository=SupabaseItemRepository(supabase_client),
    )
    photo_upload_service = PhotoUploadService(
        storage=SupabasePhotoStorage(supabase_client),
        repository=SupabaseItemPhotoRepository(supabase_client),
        default_bucket=resolved_settings.photo_bucket,
    )
    usage_service = UsageService(
        auth_client=auth_client,
        repository=SupabaseUsageLogRepository(supabase_client),
    )

    async def close_resources() -> None:
        session_context.close()

    return AppContainer(
        settings=resolved_settings,
        session_context=session_context,
        item_service=item_service,
        photo_upload_service=photo_upload_service,
        usage_service=usage_service,
        close_resources=close_resources,
    )
