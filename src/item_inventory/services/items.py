"""Item inventory business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from item_inventory.domain.items import Item, ItemInput
from item_inventory.errors import NotFoundError, ValidationError
from item_inventory.services.auth import AuthClient, require_user

logger = logging.getLogger(__name__)


class ItemRepository(Protocol):
    """Persistence interface for items."""

    async def create_item(self, user_id: UUID, payload: dict[str, object]) -> Item:
        """Insert an item row and return it."""

    async def list_items(self, user_id: UUID) -> list[Item]:
        """Return items owned by a user, newest first."""

    async def delete_item(self, item_id: UUID, user_id: UUID) -> int:
        """Delete an item owned by a user and return the number of rows removed."""


@dataclass
class ItemService:
    """Application service for a user's items."""

    auth_client: AuthClient
    repository: ItemRepository

    async def create(self, item_input: ItemInput) -> Item:
        """Create an item owned by the signed-in user."""
        user = await require_user(self.auth_client)
        if not item_input.name.strip():
            raise ValidationError("Item name is required.")
        if not item_input.category.strip():
            raise ValidationError("Item category is required.")
        item = await self.repository.create_item(
            user.id,
            {
                "name": item_input.name,
                "category": item_input.category,
                "brand_or_shop": item_input.brand_or_shop or None,
                "notes": item_input.notes or None,
            },
        )
        logger.info("Created item %s for user %s", item.id, user.id)
        return item

    async def list_mine(self) -> list[Item]:
        """Return the signed-in user's items, newest first."""
        user = await require_user(self.auth_client)
        return await self.repository.list_items(user.id)

    async def delete(self, item_id: UUID) -> None:
        """Delete an item if it belongs to the signed-in user.

        Missing and foreign items are reported the same way so callers cannot
        discover other users' ids.
        """
        user = await require_user(self.auth_client)
        deleted = await self.repository.delete_item(item_id, user.id)
        if deleted == 0:
            raise NotFoundError(f"Item {item_id} not found.")
        logger.info("Deleted item %s for user %s", item_id, user.id)
