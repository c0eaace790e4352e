"""FastAPI dependencies for the development Section Store."""

from __future__ import annotations

from fastapi import Request

from admin.stores.memory import MemorySectionStore


def get_store(request: Request) -> MemorySectionStore:
    return request.app.state.store
