"""Item, photo and usage API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, File, Request, Response, UploadFile, status

from item_inventory.api.schemas import ItemCreateRequest, UsageLogRequest
from item_inventory.domain.items import Item  # noqa: TC001
from item_inventory.domain.photos import PhotoFile
from item_inventory.domain.usage import UsageLogEntry, UsageStats  # noqa: TC001
from item_inventory.services.auth import require_user

if TYPE_CHECKING:
    from item_inventory.containers import AppContainer

router = APIRouter(prefix="/api", tags=["items"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/items")
async def list_items(request: Request) -> dict[str, list[Item]]:
    """Return the signed-in user's items, newest first."""
    items = await _container(request).item_service.list_mine()
    return {"items": items}


@router.post("/items", status_code=status.HTTP_201_CREATED)
async def create_item(payload: ItemCreateRequest, request: Request) -> Item:
    """Create an item for the signed-in user."""
    return await _container(request).item_service.create(payload.to_input())


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: UUID, request: Request) -> Response:
    """Delete one of the signed-in user's items."""
    await _container(request).item_service.delete(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/items/{item_id}/photos")
async def upload_photos(
    item_id: str,
    request: Request,
    files: list[UploadFile] | None = File(default=None),  # noqa: B008
) -> dict[str, object]:
    """Upload up to three photos for an item."""
    container = _container(request)
    await require_user(container.item_service.auth_client)
    photo_files = [
        PhotoFile(
            filename=upload.filename or "",
            content=await upload.read(),
            content_type=upload.content_type,
        )
        for upload in files or []
    ]
    result = await container.photo_upload_service.upload(item_id, photo_files)
    return {"photos": result.photos, "errors": result.errors}


@router.post("/items/{item_id}/usage", status_code=status.HTTP_201_CREATED)
async def log_usage(
    item_id: str, payload: UsageLogRequest, request: Request
) -> UsageLogEntry:
    """Record that the signed-in user used an item."""
    return await _container(request).usage_service.log_usage(
        item_id, payload.scene_tag
    )


@router.get("/items/{item_id}/stats")
async def usage_stats(item_id: str, request: Request) -> UsageStats:
    """Return aggregate usage for an item."""
    container = _container(request)
    # Stats are shared across users but still need a signed-in visitor.
    await require_user(container.usage_service.auth_client)
    return await container.usage_service.compute_stats(item_id)
