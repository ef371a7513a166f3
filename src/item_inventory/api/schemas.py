"""Request models for the HTTP API."""

from pydantic import BaseModel, Field

from item_inventory.domain.items import ItemInput


class ItemCreateRequest(BaseModel):
    """Payload for creating an item."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    brand_or_shop: str | None = None
    notes: str | None = None

    def to_input(self) -> ItemInput:
        """Convert the request into a domain input."""
        return ItemInput(
            name=self.name,
            category=self.category,
            brand_or_shop=self.brand_or_shop,
            notes=self.notes,
        )


class UsageLogRequest(BaseModel):
    """Payload for logging an item usage."""

    scene_tag: str = Field(min_length=1)
