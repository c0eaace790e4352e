"""Section routes: update payload and/or order, delete."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from admin.stores.memory import MemorySectionStore
from store.deps import get_store
from store.models import OkResponse, SectionResponse, UpdateSectionRequest

router = APIRouter(prefix="/sections", tags=["sections"])


@router.put("/{section_id}", status_code=200)
async def update_section(
    section_id: str,
    req: UpdateSectionRequest,
    store: MemorySectionStore = Depends(get_store),
) -> SectionResponse:
    """Update a section. Fields left out of the body are not touched."""
    section = await store.update_section(section_id, data=req.data, order=req.order)
    return SectionResponse.from_model(section)


@router.delete("/{section_id}", status_code=200)
async def delete_section(section_id: str, store: MemorySectionStore = Depends(get_store)) -> OkResponse:
    await store.delete_section(section_id)
    return OkResponse()
