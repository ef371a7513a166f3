"""Supabase Storage adapter for photo blobs."""

from dataclasses import dataclass

from supabase import AsyncClient

from item_inventory.adapters.supabase_errors import collaborator_errors
from item_inventory.services.photos import PhotoStorage

CACHE_CONTROL_SECONDS = "3600"


@dataclass
class SupabasePhotoStorage(PhotoStorage):
    """Stores photo blobs in Supabase Storage buckets."""

    client: AsyncClient

    async def upload(
        self, bucket: str, path: str, content: bytes, content_type: str
    ) -> None:
        """Upload a blob without overwriting an existing path."""
        with collaborator_errors("upload photo"):
            await self.client.storage.from_(bucket).upload(
                path,
                content,
                {
                    "content-type": content_type,
                    "cache-control": CACHE_CONTROL_SECONDS,
                    "upsert": "false",
                },
            )

    async def get_public_url(self, bucket: str, path: str) -> str:
        """Return the public URL for a stored blob."""
        with collaborator_errors("resolve photo URL"):
            return await self.client.storage.from_(bucket).get_public_url(path)

    async def remove(self, bucket: str, paths: list[str]) -> None:
        """Delete blobs from a bucket."""
        with collaborator_errors("remove photo"):
            await self.client.storage.from_(bucket).remove(paths)
