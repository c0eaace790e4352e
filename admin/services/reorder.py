"""
Reorder coordinator.

Drives one reorder end to end:
  1. apply the permutation to a copy of the current page and show it
     (optimistic), keeping the pre-reorder page as the last known-good state
  2. write every changed order concurrently, one PUT per section
  3. all writes succeed → keep the result, optionally re-fetch the page
     any write fails  → throw the optimistic state away and reload the page
                         from the store, so the page never shows a mix of
                         old and new orders

The store has no batch endpoint, so there is no transaction to roll back:
writes that did succeed stay written, and the reload shows exactly that.

Reorders are serialised by a lock. A second reorder waits for the first to
settle and then works on whatever page the first one left behind. Two
editors on the same page still overwrite each other (last write wins).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from admin.errors import (
    InvalidPermutation,
    NoPageLoaded,
    ReorderFailed,
    SectionNotFound,
    StoreError,
    check_result,
)
from admin.stores import SectionStore
from content.kernel.aggregate import SectionAggregate
from content.kernel.types import OrderChange

logger = logging.getLogger(__name__)

PageGetter = Callable[[], SectionAggregate | None]
PageSetter = Callable[[SectionAggregate], None]


class ReorderCoordinator:
    """
    Optimistic reorder with reload-on-failure.

    `get_page` / `set_page` read and publish the page being edited; the
    coordinator never keeps its own copy between calls.
    """

    def __init__(
        self,
        store: SectionStore,
        get_page: PageGetter,
        set_page: PageSetter,
        *,
        timeout: float | None = None,
        refetch_on_success: bool = True,
        lock: asyncio.Lock | None = None,
        mark_stale: Callable[[], None] | None = None,
    ):
        self.store = store
        self._get_page = get_page
        self._set_page = set_page
        self.timeout = timeout
        self.refetch_on_success = refetch_on_success
        self.lock = lock or asyncio.Lock()
        self._mark_stale = mark_stale

    # -- Entry points --------------------------------------------------------

    async def reorder(self, ids: list[str]) -> SectionAggregate:
        """Apply a permutation of some or all of the page's section ids."""
        async with self.lock:
            return await self._run(self._current(), ids)

    async def move(self, section_id: str, to_index: int) -> SectionAggregate:
        """Drag one section to a zero-based position."""
        async with self.lock:
            page = self._current()
            if page.get(section_id) is None:
                raise SectionNotFound(section_id)
            return await self._run(page, page.permutation_for_move(section_id, to_index))

    async def reorder_kind(self, kind: str, ids: list[str]) -> SectionAggregate:
        """
        Reorder the sections of one kind. `ids` must list exactly those
        sections; they are spliced back into the slots they occupy.
        """
        async with self.lock:
            page = self._current()
            expected = {s.id for s in page.of_kind(kind)}
            if set(ids) != expected or len(ids) != len(expected):
                raise InvalidPermutation(f"Expected a permutation of the {kind} sections {sorted(expected)}, got {ids}")
            return await self._run(page, ids)

    # -- Internals -----------------------------------------------------------

    def _current(self) -> SectionAggregate:
        page = self._get_page()
        if page is None:
            raise NoPageLoaded("No page is open")
        return page

    async def _run(self, page: SectionAggregate, ids: list[str]) -> SectionAggregate:
        baseline = page.copy()
        optimistic = page.copy()
        result = optimistic.reorder(ids)
        check_result(result)
        if not result.changes:
            return page

        self._set_page(optimistic)
        logger.info("Reordering %s: %d order write(s)", page.slug, len(result.changes))

        outcomes = await asyncio.gather(
            *(self._write(change) for change in result.changes),
            return_exceptions=True,
        )
        failures: dict[str, str] = {}
        for change, outcome in zip(result.changes, outcomes):
            if isinstance(outcome, BaseException):
                failures[change.id] = _describe(outcome)

        if failures:
            logger.warning("Reorder of %s failed for %s, reloading", page.slug, ", ".join(failures))
            await self._reconcile(baseline, failures)

        if self.refetch_on_success:
            try:
                fresh = SectionAggregate.from_page(await self.store.get_page(page.slug))
            except StoreError as e:
                logger.warning("Re-fetch after reorder of %s failed, keeping local order: %s", page.slug, e)
                return optimistic
            self._set_page(fresh)
            return fresh
        return optimistic

    async def _write(self, change: OrderChange) -> None:
        call = self.store.update_section(change.id, order=change.new)
        if self.timeout is None:
            await call
        else:
            await asyncio.wait_for(call, self.timeout)

    async def _reconcile(self, baseline: SectionAggregate, failures: dict[str, str]) -> None:
        """Replace the optimistic page with the store's, then raise ReorderFailed."""
        try:
            fresh = SectionAggregate.from_page(await self.store.get_page(baseline.slug))
        except StoreError as e:
            logger.warning("Reload of %s after failed reorder also failed: %s", baseline.slug, e)
            self._set_page(baseline)
            if self._mark_stale is not None:
                self._mark_stale()
            raise ReorderFailed(failures, reconciled=False, page=baseline) from e
        self._set_page(fresh)
        raise ReorderFailed(failures, reconciled=True, page=fresh)


def _describe(exc: BaseException) -> str:
    if isinstance(exc, TimeoutError):
        return "timed out"
    return str(exc) or type(exc).__name__
