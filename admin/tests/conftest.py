"""
Admin test fixtures.

The "home" page holds A (HERO, 1), B (GALLERY, 2), C (CTA, 3) in an
in-memory store; `holder` starts out showing the same page.
"""

from __future__ import annotations

import pytest

from admin.stores.memory import MemorySectionStore
from admin.tests.helpers import PageHolder, home_sections
from content.kernel.aggregate import SectionAggregate
from content.kernel.types import MediaAsset


@pytest.fixture
def store() -> MemorySectionStore:
    s = MemorySectionStore()
    s.add_page("home", "Home", home_sections())
    s.add_media(MediaAsset(id="m_hero", url="/uploads/hero.jpg"))
    s.add_media(MediaAsset(id="m_dish", url="https://cdn.example.com/dish.jpg"))
    return s


@pytest.fixture
def holder() -> PageHolder:
    return PageHolder(SectionAggregate("home", "Home", home_sections()))
