"""
Content Kernel — Section Aggregate

The in-memory ordered list of sections for one page. All mutations are
pure and synchronous; nothing here talks to the store.

Every mutation returns an AggregateResult instead of raising. A refused
mutation (unknown id, bad permutation) changes nothing and carries a
"CODE: detail" error. A successful one lists the OrderChanges it made,
which is exactly the set of order writes a caller needs to persist.

Ordering scope is the whole page. Reordering a subset (e.g. the sections of
one kind) splices the subset's new sequence into the slots it already
occupies, then renumbers the page 1..N. Sections outside the subset keep
their relative positions.

Invariants after every successful mutation:
  - order values are unique positive integers
  - the internal list is sorted by order
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from content.kernel.types import AggregateResult, OrderChange, Page, Section

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _ok(changes: list[OrderChange] | None = None) -> AggregateResult:
    return AggregateResult(applied=True, changes=changes or [])


def _reject(code: str, detail: str) -> AggregateResult:
    return AggregateResult(applied=False, error=f"{code}: {detail}")


def _sort_key(section: Section) -> tuple[int, str]:
    return (section.order, section.id)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------


class SectionAggregate:
    """Ordered sections of one page."""

    def __init__(self, slug: str, title: str = "", sections: Iterable[Section] = ()):
        self.slug = slug
        self.title = title
        self._sections: list[Section] = sorted(sections, key=_sort_key)

    @classmethod
    def from_page(cls, page: Page) -> SectionAggregate:
        return cls(page.slug, page.title, [copy.deepcopy(s) for s in page.sections])

    def copy(self) -> SectionAggregate:
        """Deep copy. Used as the known-good snapshot before optimistic changes."""
        return SectionAggregate(self.slug, self.title, [copy.deepcopy(s) for s in self._sections])

    def to_page(self) -> Page:
        return Page(slug=self.slug, title=self.title, sections=[copy.deepcopy(s) for s in self._sections])

    def to_dict(self) -> dict[str, Any]:
        return self.to_page().to_dict()

    # -- Reads ---------------------------------------------------------------

    @property
    def sections(self) -> list[Section]:
        return list(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self):
        return iter(list(self._sections))

    def get(self, section_id: str) -> Section | None:
        for s in self._sections:
            if s.id == section_id:
                return s
        return None

    def ids(self) -> list[str]:
        return [s.id for s in self._sections]

    def of_kind(self, kind: str) -> list[Section]:
        return [s for s in self._sections if s.kind == kind]

    def orders(self) -> dict[str, int]:
        return {s.id: s.order for s in self._sections}

    def next_order(self) -> int:
        """max(order) + 1, or 1 for an empty page."""
        if not self._sections:
            return 1
        return max(s.order for s in self._sections) + 1

    def check_invariants(self) -> list[str]:
        """Human-readable violations. Empty means the aggregate is consistent."""
        problems: list[str] = []
        seen: dict[int, str] = {}
        for s in self._sections:
            if s.order < 1:
                problems.append(f"Section '{s.id}' has non-positive order {s.order}")
            if s.order in seen:
                problems.append(f"Sections '{seen[s.order]}' and '{s.id}' share order {s.order}")
            else:
                seen[s.order] = s.id
        return problems

    # -- Mutations -----------------------------------------------------------

    def insert(self, section: Section, at_order: int | None = None) -> AggregateResult:
        """
        Add a section. Without `at_order` it goes to the end (max+1).

        With an `at_order` that is already taken, the contiguous run of
        sections starting there shifts up by one to make room.
        """
        if self.get(section.id) is not None:
            return _reject("SECTION_ALREADY_EXISTS", section.id)
        if at_order is None:
            section.order = self.next_order()
            self._sections.append(section)
            return _ok()
        if at_order < 1:
            return _reject("INVALID_ORDER", str(at_order))

        changes: list[OrderChange] = []
        taken = {s.order: s for s in self._sections}
        cursor = at_order
        run: list[Section] = []
        while cursor in taken:
            run.append(taken[cursor])
            cursor += 1
        # Shift from the top so no two sections ever share an order.
        for s in reversed(run):
            changes.append(OrderChange(id=s.id, old=s.order, new=s.order + 1))
            s.order += 1
        changes.reverse()

        section.order = at_order
        self._sections.append(section)
        self._sections.sort(key=_sort_key)
        return _ok(changes)

    def remove(self, section_id: str) -> AggregateResult:
        """Remove a section. Remaining orders are left as they are (gaps allowed)."""
        s = self.get(section_id)
        if s is None:
            return _reject("SECTION_NOT_FOUND", section_id)
        self._sections.remove(s)
        return _ok()

    def replace(self, section: Section) -> AggregateResult:
        """Swap in a server copy of a section (same id), keeping the list sorted."""
        for i, s in enumerate(self._sections):
            if s.id == section.id:
                self._sections[i] = section
                self._sections.sort(key=_sort_key)
                return _ok()
        return _reject("SECTION_NOT_FOUND", section.id)

    def move(self, section_id: str, to_index: int) -> AggregateResult:
        """Drag one section to a zero-based position in the page. Out-of-range indexes clamp."""
        if self.get(section_id) is None:
            return _reject("SECTION_NOT_FOUND", section_id)
        return self.reorder(self.permutation_for_move(section_id, to_index))

    def permutation_for_move(self, section_id: str, to_index: int) -> list[str]:
        ids = [i for i in self.ids() if i != section_id]
        to_index = max(0, min(to_index, len(ids)))
        ids.insert(to_index, section_id)
        return ids

    def reorder(self, ids: list[str]) -> AggregateResult:
        """
        Apply a permutation of some or all section ids.

        The listed sections take, in the given sequence, the page slots they
        already occupy; then the whole page is renumbered 1..N. Unknown or
        duplicate ids refuse the whole reorder.
        """
        by_id = {s.id: s for s in self._sections}
        seen: set[str] = set()
        for sid in ids:
            if sid not in by_id:
                return _reject("SECTION_NOT_FOUND", sid)
            if sid in seen:
                return _reject("DUPLICATE_ID", sid)
            seen.add(sid)

        sequence = list(self._sections)
        slots = [i for i, s in enumerate(sequence) if s.id in seen]
        for slot, sid in zip(slots, ids):
            sequence[slot] = by_id[sid]
        self._sections = sequence
        return self.renumber()

    def renumber(self) -> AggregateResult:
        """Assign contiguous orders 1..N in the current sequence."""
        changes: list[OrderChange] = []
        for position, s in enumerate(self._sections, start=1):
            if s.order != position:
                changes.append(OrderChange(id=s.id, old=s.order, new=position))
                s.order = position
        return _ok(changes)

    def __repr__(self) -> str:
        return f"SectionAggregate({self.slug!r}, {[(s.id, s.order) for s in self._sections]})"
