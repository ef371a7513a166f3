"""Supabase-backed item repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from item_inventory.adapters.supabase_errors import collaborator_errors
from item_inventory.domain.items import Item
from item_inventory.errors import CollaboratorError
from item_inventory.services.items import ItemRepository

_ITEM_COLUMNS = "id, user_id, name, category, brand_or_shop, notes, created_at"


@dataclass
class SupabaseItemRepository(ItemRepository):
    """Supabase implementation for item persistence."""

    client: AsyncClient

    async def create_item(self, user_id: UUID, payload: dict[str, object]) -> Item:
        """Insert an item row and return it."""
        with collaborator_errors("create item"):
            response = (
                await self.client.table("items")
                .insert({"user_id": str(user_id), **payload})
                .execute()
            )
        if not response.data:
            raise CollaboratorError("create item", "no row returned")
        return _parse_item(response.data[0])

    async def list_items(self, user_id: UUID) -> list[Item]:
        """Return items owned by a user, newest first."""
        with collaborator_errors("load items"):
            response = (
                await self.client.table("items")
                .select(_ITEM_COLUMNS)
                .eq("user_id", str(user_id))
                .order("created_at", desc=True)
                .execute()
            )
        return [_parse_item(row) for row in response.data or []]

    async def delete_item(self, item_id: UUID, user_id: UUID) -> int:
        """Delete an item owned by a user and return the number of rows removed."""
        with collaborator_errors("delete item"):
            response = (
                await self.client.table("items")
                .delete()
                .eq("id", str(item_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        return len(response.data or [])


def _parse_item(row: dict[str, object]) -> Item:
    return Item(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        category=str(row.get("category", "")),
        brand_or_shop=row.get("brand_or_shop"),
        notes=row.get("notes"),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
