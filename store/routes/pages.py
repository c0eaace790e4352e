"""Page routes: list pages, get one page, add a section to a page."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from admin.stores.memory import MemorySectionStore
from store.deps import get_store
from store.models import CreateSectionRequest, PageResponse, SectionResponse

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("", status_code=200)
async def list_pages(store: MemorySectionStore = Depends(get_store)) -> list[PageResponse]:
    """All pages with their sections."""
    return [PageResponse.from_model(p) for p in await store.list_pages()]


@router.get("/{slug}", status_code=200)
async def get_page(slug: str, store: MemorySectionStore = Depends(get_store)) -> PageResponse:
    """One page with its sections in order."""
    return PageResponse.from_model(await store.get_page(slug))


@router.post("/{slug}/sections", status_code=status.HTTP_201_CREATED)
async def create_section(
    slug: str,
    req: CreateSectionRequest,
    store: MemorySectionStore = Depends(get_store),
) -> SectionResponse:
    """
    Create a section. The payload is validated against its kind; an invalid
    payload is answered with 400 and per-field details.
    """
    section = await store.create_section(slug, req.kind, req.data, req.order)
    return SectionResponse.from_model(section)
