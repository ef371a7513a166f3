"""Supabase-backed item photo metadata repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import AsyncClient

from item_inventory.adapters.supabase_errors import collaborator_errors
from item_inventory.domain.photos import ItemPhoto
from item_inventory.errors import CollaboratorError
from item_inventory.services.photos import ItemPhotoRepository


@dataclass
class SupabaseItemPhotoRepository(ItemPhotoRepository):
    """Supabase implementation for photo metadata persistence."""

    client: AsyncClient

    async def create_photo(self, item_id: str, image_url: str) -> ItemPhoto:
        """Create a photo metadata row and return it."""
        with collaborator_errors("save photo metadata"):
            response = (
                await self.client.table("item_photos")
                .insert({"item_id": item_id, "image_url": image_url})
                .execute()
            )
        if not response.data:
            raise CollaboratorError("save photo metadata", "no row returned")
        row = response.data[0]
        try:
            return ItemPhoto(
                id=int(row["id"]),
                item_id=str(row["item_id"]),
                image_url=str(row["image_url"]),
                created_at=datetime.fromisoformat(str(row["created_at"])),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CollaboratorError(
                "save photo metadata", f"malformed row: {exc}"
            ) from exc
