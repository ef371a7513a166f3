"""Domain models for item usage logs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UsageLogEntry:
    """Single usage event for an item."""

    id: int
    item_id: str
    user_id: UUID
    scene_tag: str
    used_at: datetime
    created_at: datetime


@dataclass(frozen=True)
class UsageStats:
    """Aggregated usage for an item."""

    item_id: str
    total_uses: int = 0
    unique_users: int = 0
    last_used_at: datetime | None = None
    by_scene: dict[str, int] = field(default_factory=dict)
