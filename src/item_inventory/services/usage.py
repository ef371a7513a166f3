"""Usage logging and statistics for items."""

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from item_inventory.domain.usage import UsageLogEntry, UsageStats
from item_inventory.errors import ValidationError
from item_inventory.services.auth import AuthClient, require_user


class UsageLogRepository(Protocol):
    """Persistence interface for usage logs."""

    async def create_entry(
        self, item_id: str, user_id: UUID, scene_tag: str, used_at: datetime
    ) -> UsageLogEntry:
        """Insert a usage log row and return it."""

    async def list_entries(self, item_id: str) -> list[UsageLogEntry]:
        """Return all usage log rows for an item."""


@dataclass
class UsageService:
    """Service for recording item usage and summarising it.

    Usage logs are a shared ledger: any signed-in user may log usage against
    any item and read its aggregate stats, which is what gives
    ``unique_users`` its meaning. Item ownership is not checked here.
    """

    auth_client: AuthClient
    repository: UsageLogRepository

    async def log_usage(self, item_id: str, scene_tag: str) -> UsageLogEntry:
        """Record that the signed-in user used an item now."""
        user = await require_user(self.auth_client)
        if not item_id:
            raise ValidationError("Missing itemId.")
        if not scene_tag.strip():
            raise ValidationError("Scene tag is required.")
        return await self.repository.create_entry(
            item_id=item_id,
            user_id=user.id,
            scene_tag=scene_tag,
            used_at=datetime.now(tz=UTC),
        )

    async def compute_stats(self, item_id: str) -> UsageStats:
        """Return aggregate usage for an item."""
        entries = await self.repository.list_entries(item_id)
        return aggregate_usage(item_id, entries)


def aggregate_usage(item_id: str, entries: list[UsageLogEntry]) -> UsageStats:
    """Summarise usage log entries for an item."""
    if not entries:
        return UsageStats(item_id=item_id)
    return UsageStats(
        item_id=item_id,
        total_uses=len(entries),
        unique_users=len({entry.user_id for entry in entries}),
        last_used_at=max(entry.used_at for entry in entries),
        by_scene=dict(Counter(entry.scene_tag for entry in entries)),
    )
