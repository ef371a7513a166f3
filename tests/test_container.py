"""Tests for container wiring."""

import asyncio

from item_inventory.adapters.supabase_auth_client import SupabaseAuthClient
from item_inventory.containers import build_container
from tests.test_supabase_adapters import FakeSupabaseClient


def test_build_container_wires_services(settings) -> None:
    client = FakeSupabaseClient()
    container = asyncio.run(build_container(settings, client=client))

    assert isinstance(container.session_context.client, SupabaseAuthClient)
    assert container.photo_upload_service.default_bucket == "item-photos"
    assert container.item_service.auth_client is container.usage_service.auth_client

    asyncio.run(container.session_context.start())
    assert client.auth.listeners
    asyncio.run(container.close_resources())
    assert client.auth.listeners == []
