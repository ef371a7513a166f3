"""Supabase repository for item usage logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from item_inventory.adapters.supabase_errors import collaborator_errors
from item_inventory.domain.usage import UsageLogEntry
from item_inventory.errors import CollaboratorError
from item_inventory.services.usage import UsageLogRepository


@dataclass
class SupabaseUsageLogRepository(UsageLogRepository):
    """Supabase implementation for usage logs."""

    client: AsyncClient

    async def create_entry(
        self, item_id: str, user_id: UUID, scene_tag: str, used_at: datetime
    ) -> UsageLogEntry:
        """Insert a usage log row and return it."""
        with collaborator_errors("log item usage"):
            response = (
                await self.client.table("usage_logs")
                .insert(
                    {
                        "item_id": item_id,
                        "user_id": str(user_id),
                        "scene_tag": scene_tag,
                        "used_at": used_at.isoformat(),
                    }
                )
                .execute()
            )
        if not response.data:
            raise CollaboratorError("log item usage", "no row returned")
        return _parse_entry(response.data[0])

    async def list_entries(self, item_id: str) -> list[UsageLogEntry]:
        """Return all usage log rows for an item."""
        with collaborator_errors("load usage logs"):
            response = (
                await self.client.table("usage_logs")
                .select("id, item_id, user_id, scene_tag, used_at, created_at")
                .eq("item_id", item_id)
                .execute()
            )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> UsageLogEntry:
    used_at = datetime.fromisoformat(str(row["used_at"]))
    created_at_raw = row.get("created_at")
    return UsageLogEntry(
        id=int(row["id"]),
        item_id=str(row["item_id"]),
        user_id=UUID(str(row["user_id"])),
        scene_tag=str(row.get("scene_tag", "")),
        used_at=used_at,
        created_at=(
            datetime.fromisoformat(created_at_raw)
            if isinstance(created_at_raw, str) and created_at_raw
            else used_at
        ),
    )
