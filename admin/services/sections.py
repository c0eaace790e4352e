"""
Single-section persistence: add, edit, delete.

Unlike reorders these are not optimistic. The payload is validated first
(malformed or invalid payloads never reach the store), the store is called,
and only a successful call changes the page: by re-fetching it, or by merging
the store's response when re-fetching is off or fails.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from admin.errors import MalformedPayload, NoPageLoaded, PayloadInvalid, SectionNotFound, StoreError, check_result
from admin.stores import SectionStore
from content.kernel import registry
from content.kernel.aggregate import SectionAggregate
from content.kernel.types import Section, ValidationResult

logger = logging.getLogger(__name__)


class SectionService:
    """Validated writes for one section at a time."""

    def __init__(
        self,
        store: SectionStore,
        get_page: Callable[[], SectionAggregate | None],
        set_page: Callable[[SectionAggregate], None],
        *,
        refetch_after_write: bool = True,
        lock: asyncio.Lock | None = None,
        mark_stale: Callable[[], None] | None = None,
    ):
        self.store = store
        self._get_page = get_page
        self._set_page = set_page
        self.refetch_after_write = refetch_after_write
        self.lock = lock or asyncio.Lock()
        self._mark_stale = mark_stale

    # -- Writes --------------------------------------------------------------

    async def add_section(self, kind: str, raw: Any, at_order: int | None = None) -> Section:
        """
        Create a section. Without `at_order` it is appended; with one, the
        sections in the way are moved up first so orders stay unique.
        """
        payload = _require_valid(kind, registry.validate(kind, raw))
        async with self.lock:
            page = self._current()
            planned = page.copy()
            placeholder = Section(id="__new__", kind=kind, order=0, data=payload)
            shift = planned.insert(placeholder, at_order)
            check_result(shift)

            try:
                for change in sorted(shift.changes, key=lambda c: c.new, reverse=True):
                    await self.store.update_section(change.id, order=change.new)
                created = await self.store.create_section(page.slug, kind, payload, order=placeholder.order)
            except Exception:
                # Shifts that did land stay written; show the store's orders.
                await self._reload_after_failure(page)
                raise
            logger.info("Added %s section %s to %s at order %d", kind, created.id, page.slug, created.order)

            planned.remove(placeholder.id)
            planned.insert(created, created.order)
            await self._refresh(page.slug, planned)
            return created

    async def update_payload(self, section_id: str, raw: Any) -> Section:
        """Replace a section's payload after validating it against the section's kind."""
        async with self.lock:
            section = self._section(section_id)
            payload = _require_valid(section.kind, registry.validate(section.kind, raw))
            return await self._save_payload(section, payload)

    async def update_payload_json(self, section_id: str, text: str) -> Section:
        """Same as update_payload, from JSON editor text."""
        async with self.lock:
            section = self._section(section_id)
            result = registry.validate_json(section.kind, text)
            if result.malformed:
                raise MalformedPayload(result.error_text())
            payload = _require_valid(section.kind, result)
            return await self._save_payload(section, payload)

    async def delete_section(self, section_id: str) -> None:
        """Delete a section. Remaining orders are not renumbered."""
        async with self.lock:
            page = self._current()
            self._section(section_id)
            await self.store.delete_section(section_id)
            logger.info("Deleted section %s from %s", section_id, page.slug)

            merged = page.copy()
            merged.remove(section_id)
            await self._refresh(page.slug, merged)

    # -- Internals -----------------------------------------------------------

    def _current(self) -> SectionAggregate:
        page = self._get_page()
        if page is None:
            raise NoPageLoaded("No page is open")
        return page

    def _section(self, section_id: str) -> Section:
        section = self._current().get(section_id)
        if section is None:
            raise SectionNotFound(section_id)
        return section

    async def _save_payload(self, section: Section, payload: Any) -> Section:
        page = self._current()
        saved = await self.store.update_section(section.id, data=payload)
        logger.info("Saved %s section %s on %s", section.kind, section.id, page.slug)

        merged = page.copy()
        merged.replace(saved)
        await self._refresh(page.slug, merged)
        return saved

    async def _reload_after_failure(self, page: SectionAggregate) -> None:
        """Replace `page` with the store's copy, or keep it marked stale if that fails too."""
        try:
            fresh = SectionAggregate.from_page(await self.store.get_page(page.slug))
        except StoreError as e:
            logger.warning("Reload of %s after failed add also failed: %s", page.slug, e)
            self._set_page(page)
            if self._mark_stale is not None:
                self._mark_stale()
            return
        logger.warning("Add to %s failed, reloaded page from store", page.slug)
        self._set_page(fresh)

    async def _refresh(self, slug: str, merged: SectionAggregate) -> None:
        """Publish the store's page, or `merged` when re-fetching is off or fails."""
        if self.refetch_after_write:
            try:
                self._set_page(SectionAggregate.from_page(await self.store.get_page(slug)))
                return
            except StoreError as e:
                logger.warning("Re-fetch of %s after write failed, merging locally: %s", slug, e)
        self._set_page(merged)


def _require_valid(kind: str, result: ValidationResult) -> Any:
    if not result.ok:
        raise PayloadInvalid(kind, result.errors)
    return result.payload
