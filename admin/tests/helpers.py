"""Shared test helpers for the admin tests."""

from __future__ import annotations

from admin.stores.memory import MemorySectionStore
from content.kernel.aggregate import SectionAggregate
from content.kernel.types import Section


class PageHolder:
    """Current page plus a record of every page published."""

    def __init__(self, page: SectionAggregate | None = None):
        self.page = page
        self.published: list[SectionAggregate] = []
        self.stale = False

    def get(self) -> SectionAggregate | None:
        return self.page

    def set(self, page: SectionAggregate) -> None:
        self.page = page
        self.stale = False
        self.published.append(page)

    def mark_stale(self) -> None:
        self.stale = True


def home_sections() -> list[Section]:
    """A (HERO, 1), B (GALLERY, 2), C (CTA, 3)."""
    return [
        Section(id="A", kind="HERO", order=1, data={"title": "Welcome", "backgroundMediaId": "m_hero"}),
        Section(
            id="B",
            kind="GALLERY",
            order=2,
            data={"items": [{"mediaId": "m_dish"}, {"mediaId": "m_deleted"}]},
        ),
        Section(
            id="C",
            kind="CTA",
            order=3,
            data={"title": "Hungry?", "button": {"label": "Menu", "href": "https://example.com/menu"}},
        ),
    ]


def store_orders(store: MemorySectionStore) -> dict[str, int]:
    return {sid: s.order for sid, s in store.sections.items()}


def update_calls(store: MemorySectionStore) -> list:
    return [arg for op, arg in store.calls if op == "update_section"]


def calls_named(store: MemorySectionStore, name: str) -> list:
    return [arg for op, arg in store.calls if op == name]
