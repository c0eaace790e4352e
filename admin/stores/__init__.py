"""
Section Store — the external system of record for pages and sections.

SectionStore is the interface the admin talks to. Implemented over HTTP for
the real backend (stores.http) and in memory for tests and the development
server (stores.memory).

Every method raises StoreError on failure. Nothing is retried here.
"""

from __future__ import annotations

from typing import Any

from content.kernel.types import MediaAsset, Page, Section


class SectionStore:
    """
    Abstract store interface.
    Implement with HTTP for production, or in-memory for tests.
    """

    async def list_pages(self) -> list[Page]:
        """All pages. Sections may be omitted."""
        raise NotImplementedError

    async def get_page(self, slug: str) -> Page:
        """One page with its sections. Raises StoreError(404) if unknown."""
        raise NotImplementedError

    async def create_section(self, slug: str, kind: str, data: Any, order: int | None = None) -> Section:
        """Create a section on a page. The store assigns the id."""
        raise NotImplementedError

    async def update_section(self, section_id: str, *, data: Any = None, order: int | None = None) -> Section:
        """Update payload and/or order. Omitted fields are left untouched."""
        raise NotImplementedError

    async def delete_section(self, section_id: str) -> None:
        raise NotImplementedError

    async def list_media(self) -> list[MediaAsset]:
        raise NotImplementedError

    async def current_user(self) -> dict[str, Any] | None:
        """The user the session belongs to, or None if the session is not valid."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release connections. Safe to call more than once."""
        return None
