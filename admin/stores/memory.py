"""
In-memory Section Store.

Used by the tests and by the development server. Validates payloads with the
kernel registry the way the real backend does, answering StoreError(400)
with per-field details.

Failure injection for tests:
  fail_updates   section id → StoreError raised by update_section
  fail_reads     number of upcoming get_page calls that fail
  delay          seconds every call sleeps before doing anything
"""

from __future__ import annotations

import asyncio
import copy
import logging
import uuid
from typing import Any

from admin.errors import StoreError
from admin.stores import SectionStore
from content.kernel import registry
from content.kernel.types import MediaAsset, Page, Section

logger = logging.getLogger(__name__)


class MemorySectionStore(SectionStore):
    """In-memory store for testing and local development."""

    def __init__(self, *, validate: bool = True) -> None:
        self.validate = validate
        self.titles: dict[str, str] = {}
        self.sections: dict[str, Section] = {}
        self.section_page: dict[str, str] = {}
        self.media: dict[str, MediaAsset] = {}
        self.user: dict[str, Any] | None = {"id": "u_dev", "email": "admin@localhost", "role": "ADMIN"}

        self.fail_updates: dict[str, StoreError] = {}
        self.fail_reads: int = 0
        self.delay: float = 0.0
        self.calls: list[tuple[str, Any]] = []

    # -- Seeding -------------------------------------------------------------

    def add_page(self, slug: str, title: str = "", sections: list[Section] | None = None) -> Page:
        self.titles[slug] = title
        for s in sections or []:
            self.sections[s.id] = copy.deepcopy(s)
            self.section_page[s.id] = slug
        return self._page(slug)

    def add_media(self, asset: MediaAsset) -> None:
        self.media[asset.id] = asset

    # -- SectionStore --------------------------------------------------------

    async def list_pages(self) -> list[Page]:
        await self._enter("list_pages", None)
        return [self._page(slug) for slug in self.titles]

    async def get_page(self, slug: str) -> Page:
        await self._enter("get_page", slug)
        if self.fail_reads > 0:
            self.fail_reads -= 1
            raise StoreError(503, "Store unavailable")
        if slug not in self.titles:
            raise StoreError(404, f"Page '{slug}' not found")
        return self._page(slug)

    async def create_section(self, slug: str, kind: str, data: Any, order: int | None = None) -> Section:
        await self._enter("create_section", (slug, kind))
        if slug not in self.titles:
            raise StoreError(404, f"Page '{slug}' not found")
        data = self._checked(kind, data)
        if order is None:
            orders = [s.order for sid, s in self.sections.items() if self.section_page[sid] == slug]
            order = max(orders, default=0) + 1
        section = Section(id=f"sec_{uuid.uuid4().hex[:12]}", kind=kind, order=order, data=data)
        self.sections[section.id] = section
        self.section_page[section.id] = slug
        logger.info("Created section %s (%s) on %s at order %d", section.id, kind, slug, order)
        return copy.deepcopy(section)

    async def update_section(self, section_id: str, *, data: Any = None, order: int | None = None) -> Section:
        await self._enter("update_section", (section_id, order))
        if section_id in self.fail_updates:
            raise self.fail_updates[section_id]
        section = self.sections.get(section_id)
        if section is None:
            raise StoreError(404, f"Section '{section_id}' not found")
        if data is not None:
            section.data = self._checked(section.kind, data)
        if order is not None:
            section.order = order
        return copy.deepcopy(section)

    async def delete_section(self, section_id: str) -> None:
        await self._enter("delete_section", section_id)
        if self.sections.pop(section_id, None) is None:
            raise StoreError(404, f"Section '{section_id}' not found")
        self.section_page.pop(section_id, None)

    async def list_media(self) -> list[MediaAsset]:
        await self._enter("list_media", None)
        return list(self.media.values())

    async def current_user(self) -> dict[str, Any] | None:
        await self._enter("current_user", None)
        return copy.deepcopy(self.user)

    # -- Internals -----------------------------------------------------------

    async def _enter(self, op: str, arg: Any) -> None:
        self.calls.append((op, arg))
        if self.delay:
            await asyncio.sleep(self.delay)

    def _checked(self, kind: str, data: Any) -> Any:
        if not self.validate:
            return copy.deepcopy(data)
        result = registry.validate(kind, data)
        if not result.ok:
            raise StoreError(400, "Validation failed", result.errors)
        return result.payload

    def _page(self, slug: str) -> Page:
        sections = [
            copy.deepcopy(s) for sid, s in self.sections.items() if self.section_page[sid] == slug
        ]
        sections.sort(key=lambda s: (s.order, s.id))
        return Page(slug=slug, title=self.titles[slug], sections=sections)
