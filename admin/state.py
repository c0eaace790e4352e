"""
Admin application state.

One explicitly constructed container per session: settings, the store, the
signed-in user, the page being edited, and the services that change it.
Listeners are notified after every page or user change.

    async with AppState.open(settings) as app:
        await app.open_page("home")
        await app.reorder.move(section_id, 0)

Reorders and single-section writes share one lock, so they never interleave
on the same page.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from admin.config import Settings
from admin.errors import NoPageLoaded, SectionNotFound
from admin.services.reorder import ReorderCoordinator
from admin.services.sections import SectionService
from admin.stores import SectionStore
from admin.stores.http import HttpSectionStore
from content.kernel import registry
from content.kernel.aggregate import SectionAggregate
from content.kernel.media import MediaRef, resolve_media

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class AppState:
    """Current user and page, plus the services that act on them."""

    def __init__(self, settings: Settings, store: SectionStore):
        self.settings = settings
        self.store = store
        self.user: dict[str, Any] | None = None
        self.page: SectionAggregate | None = None
        self.stale = False
        self._listeners: set[Listener] = set()

        lock = asyncio.Lock()
        self.reorder = ReorderCoordinator(
            store,
            self.get_page,
            self.set_page,
            timeout=settings.REORDER_TIMEOUT,
            refetch_on_success=settings.REFETCH_AFTER_WRITE,
            lock=lock,
            mark_stale=self.mark_stale,
        )
        self.sections = SectionService(
            store,
            self.get_page,
            self.set_page,
            refetch_after_write=settings.REFETCH_AFTER_WRITE,
            lock=lock,
            mark_stale=self.mark_stale,
        )

    @classmethod
    @asynccontextmanager
    async def open(cls, settings: Settings, store: SectionStore | None = None) -> AsyncIterator[AppState]:
        """Create the state (and an HTTP store unless one is given), close the store on exit."""
        if store is None:
            store = HttpSectionStore(
                settings.API_URL,
                settings.SESSION_COOKIE,
                cookie_name=settings.SESSION_COOKIE_NAME,
                timeout=settings.REQUEST_TIMEOUT,
            )
        state = cls(settings, store)
        try:
            yield state
        finally:
            state._listeners.clear()
            await store.close()

    # -- Subscriptions -------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.add(listener)

        def unsubscribe() -> None:
            self._listeners.discard(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # -- User ----------------------------------------------------------------

    async def load_user(self) -> dict[str, Any] | None:
        self.user = await self.store.current_user()
        self._notify()
        return self.user

    # -- Page ----------------------------------------------------------------

    def get_page(self) -> SectionAggregate | None:
        return self.page

    def set_page(self, page: SectionAggregate | None) -> None:
        self.page = page
        self.stale = False
        self._notify()

    def require_page(self) -> SectionAggregate:
        if self.page is None:
            raise NoPageLoaded("No page is open")
        return self.page

    async def open_page(self, slug: str) -> SectionAggregate:
        """Load a page from the store and make it current."""
        page = SectionAggregate.from_page(await self.store.get_page(slug))
        logger.info("Opened page %s (%d sections)", slug, len(page))
        self.set_page(page)
        return page

    async def reload(self) -> SectionAggregate:
        return await self.open_page(self.require_page().slug)

    def mark_stale(self) -> None:
        """The page shown may no longer match the store (a reload failed)."""
        self.stale = True
        self._notify()

    # -- Media ---------------------------------------------------------------

    async def media_for(self, section_id: str) -> list[MediaRef]:
        """Resolve the media a section references. Deleted assets come back missing."""
        section = self.require_page().get(section_id)
        if section is None:
            raise SectionNotFound(section_id)
        ids = registry.media_ids(section)
        if not ids:
            return []
        library = {m.id: m.url for m in await self.store.list_media()}
        return resolve_media(ids, library, self.settings.MEDIA_BASE_URL)
