"""
Pytest fixtures for the development Section Store.
"""

from __future__ import annotations

import httpx
import pytest_asyncio

from admin.stores.memory import MemorySectionStore
from store.main import create_app
from store.seed import seed_demo


@pytest_asyncio.fixture
async def backing():
    store = MemorySectionStore()
    seed_demo(store)
    return store


@pytest_asyncio.fixture
async def client(backing):
    """HTTP client talking to the app in-process."""
    transport = httpx.ASGITransport(app=create_app(backing))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
