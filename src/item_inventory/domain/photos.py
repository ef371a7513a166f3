"""Domain models for item photos."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PhotoFile:
    """An image selected for upload."""

    filename: str
    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class ItemPhoto:
    """Photo metadata row with its public URL."""

    id: int
    item_id: str
    image_url: str
    created_at: datetime


@dataclass(frozen=True)
class PhotoUploadResult:
    """Outcome of a photo upload batch."""

    photos: list[ItemPhoto] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
