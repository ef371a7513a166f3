"""Domain models for inventory items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ItemInput:
    """Fields a user supplies when creating an item."""

    name: str
    category: str
    brand_or_shop: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Item:
    """Represents an item stored in the database."""

    id: UUID
    user_id: UUID
    name: str
    category: str
    brand_or_shop: str | None
    notes: str | None
    created_at: datetime
