"""Media library listing and the session user."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from admin.stores.memory import MemorySectionStore
from store.deps import get_store
from store.models import MediaResponse

router = APIRouter(tags=["media"])


@router.get("/media", status_code=200)
async def list_media(store: MemorySectionStore = Depends(get_store)) -> list[MediaResponse]:
    return [MediaResponse.from_model(m) for m in await store.list_media()]


@router.get("/auth/me", status_code=200)
async def me(store: MemorySectionStore = Depends(get_store)) -> dict[str, Any]:
    """The development store has a single built-in user."""
    user = await store.current_user()
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not signed in.")
    return user
