"""Photo upload orchestration for items."""

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Protocol
from uuid import uuid4

from item_inventory.domain.photos import ItemPhoto, PhotoFile, PhotoUploadResult
from item_inventory.errors import CollaboratorError

logger = logging.getLogger(__name__)

MAX_PHOTOS_PER_ITEM = 3
DEFAULT_BUCKET = "item-photos"
DEFAULT_EXTENSION = "jpg"


class PhotoStorage(Protocol):
    """Object storage interface for photo blobs."""

    async def upload(
        self, bucket: str, path: str, content: bytes, content_type: str
    ) -> None:
        """Store a blob at path, failing if the path already exists."""

    async def get_public_url(self, bucket: str, path: str) -> str:
        """Return the public URL for a stored blob."""

    async def remove(self, bucket: str, paths: list[str]) -> None:
        """Delete stored blobs."""


class ItemPhotoRepository(Protocol):
    """Persistence interface for photo metadata."""

    async def create_photo(self, item_id: str, image_url: str) -> ItemPhoto:
        """Insert a photo metadata row and return it."""


@dataclass
class PhotoUploadService:
    """Uploads item photos and records their metadata.

    Each file is stored and then registered in ``item_photos``. A file that
    fails after its blob is stored has the blob removed again. Failures are
    reported per file in the result and never abort the rest of the batch.
    """

    storage: PhotoStorage
    repository: ItemPhotoRepository
    default_bucket: str = DEFAULT_BUCKET

    async def upload(
        self, item_id: str, files: list[PhotoFile], bucket: str | None = None
    ) -> PhotoUploadResult:
        """Upload up to MAX_PHOTOS_PER_ITEM files for an item."""
        if not item_id:
            return PhotoUploadResult(errors=["Missing itemId."])

        selected = files[:MAX_PHOTOS_PER_ITEM]
        if not selected:
            return PhotoUploadResult(errors=["Please select at least one image."])

        resolved_bucket = bucket or self.default_bucket
        result = PhotoUploadResult()
        for index, photo_file in enumerate(selected, start=1):
            error = await self._upload_one(item_id, photo_file, resolved_bucket, result)
            if error:
                result.errors.append(f"Image {index}: {error}")

        if len(files) > MAX_PHOTOS_PER_ITEM:
            result.errors.append(
                f"Only the first {MAX_PHOTOS_PER_ITEM} images were processed."
            )
        logger.info(
            "Uploaded %d of %d photos for item %s",
            len(result.photos),
            len(selected),
            item_id,
        )
        return result

    async def _upload_one(
        self,
        item_id: str,
        photo_file: PhotoFile,
        bucket: str,
        result: PhotoUploadResult,
    ) -> str | None:
        path = build_photo_path(item_id, photo_file.filename)
        try:
            await self.storage.upload(
                bucket, path, photo_file.content, _content_type(photo_file)
            )
        except Exception as exc:
            return _failure_reason(exc, "upload", path)

        try:
            image_url = await self.storage.get_public_url(bucket, path)
            photo = await self.repository.create_photo(item_id, image_url)
        except Exception as exc:
            reason = _failure_reason(exc, "register", path)
            await self._discard_blob(bucket, path)
            return reason

        result.photos.append(photo)
        return None

    async def _discard_blob(self, bucket: str, path: str) -> None:
        try:
            await self.storage.remove(bucket, [path])
        except Exception as exc:
            logger.warning(
                "Could not remove orphaned photo %s/%s: %s", bucket, path, exc
            )


def _failure_reason(exc: Exception, step: str, path: str) -> str:
    if isinstance(exc, CollaboratorError):
        return exc.reason
    logger.exception("Unexpected failure trying to %s photo %s", step, path)
    return str(exc) or type(exc).__name__


def build_photo_path(item_id: str, filename: str) -> str:
    """Return a fresh storage path for a photo of an item."""
    extension = PurePosixPath(filename).suffix.lstrip(".") or DEFAULT_EXTENSION
    return f"{item_id}/{uuid4()}.{extension}"


def _content_type(photo_file: PhotoFile) -> str:
    if photo_file.content_type:
        return photo_file.content_type
    guessed, _ = mimetypes.guess_type(photo_file.filename)
    return guessed or "image/jpeg"
