"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from item_inventory.api.items import router as items_router
from item_inventory.api.pages import router as pages_router
from item_inventory.app_logging import configure_logging
from item_inventory.containers import AppContainer, build_container
from item_inventory.errors import (
    AuthError,
    CollaboratorError,
    ItemInventoryError,
    NotFoundError,
    ValidationError,
)

_ERROR_STATUS: dict[type[ItemInventoryError], int] = {
    AuthError: status.HTTP_401_UNAUTHORIZED,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    CollaboratorError: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer | None = None) -> FastAPI:
    """Create a FastAPI app configured with dependencies.

    Without a container the default one is built on startup.
    """
    configure_logging(container.settings.log_level if container else logging.INFO)
    logger = logging.getLogger(__name__)

    async def start_session(app_container: AppContainer) -> None:
        try:
            await app_container.session_context.start()
        except Exception:
            logger.exception("Failed to load the initial session")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.container is None:
            app.state.container = await build_container()
            configure_logging(app.state.container.settings.log_level)
        session_task = asyncio.create_task(start_session(app.state.container))
        yield
        if not session_task.done():
            session_task.cancel()
            with suppress(asyncio.CancelledError):
                await session_task
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(pages_router)
    app.include_router(items_router)

    @app.exception_handler(ItemInventoryError)
    async def handle_app_error(
        request: Request, exc: ItemInventoryError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: ItemInventoryError) -> int:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
