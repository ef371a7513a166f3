"""ASGI entrypoint for the item inventory API."""

from item_inventory.api.app import create_app

app = create_app()
