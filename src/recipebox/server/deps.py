"""Dependency definitions for the recipebox API server."""

from __future__ import annotations

from typing import Callable

import httpx
from fastapi import Depends

from recipebox.config import Settings, get_settings
from recipebox.db.kv_store import KeyValueStore, MemoryKeyValueStore
from recipebox.integrations.spoonacular import SpoonacularClient

PageStoreFactory = Callable[[], KeyValueStore]


def get_upstream_client(settings: Settings = Depends(get_settings)) -> SpoonacularClient:
    """Return the upstream provider client configured from settings."""

    return SpoonacularClient(
        api_key=settings.spoonacular_key,
        base_url=settings.upstream_base_url,
        timeout=settings.upstream_timeout,
    )


def get_page_store_factory() -> PageStoreFactory:
    """Return the store factory used when pre-rendering pages.

    Pages are rendered without any visitor state, so each render gets an empty
    in-memory store.
    """

    return MemoryKeyValueStore


def get_page_transport_factory() -> Callable[[object], httpx.AsyncBaseTransport]:
    """Return how pre-rendered pages reach this application's own proxy endpoints."""

    return lambda app: httpx.ASGITransport(app=app)
