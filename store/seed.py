"""Demo content for the development Section Store."""

from __future__ import annotations

from admin.stores.memory import MemorySectionStore
from content.kernel.types import MediaAsset, Section


def seed_demo(store: MemorySectionStore) -> None:
    """A "home" page with a hero, a gallery and a call to action, plus its media."""
    store.add_media(MediaAsset(id="m_hero", url="/uploads/hero.jpg", alt="Dining room", mime_type="image/jpeg"))
    store.add_media(MediaAsset(id="m_dish1", url="/uploads/dish1.jpg", alt="Grilled fish", mime_type="image/jpeg"))
    store.add_media(MediaAsset(id="m_dish2", url="/uploads/dish2.jpg", alt="Pho", mime_type="image/jpeg"))

    store.add_page(
        "home",
        "Home",
        [
            Section(
                id="sec_hero",
                kind="HERO",
                order=1,
                data={
                    "title": "Fresh from the harbour",
                    "subtitle": "Seafood, every day",
                    "backgroundMediaId": "m_hero",
                    "cta": {"label": "Book a table", "href": "https://example.com/book"},
                },
            ),
            Section(
                id="sec_gallery",
                kind="GALLERY",
                order=2,
                data={
                    "items": [
                        {"mediaId": "m_dish1", "caption": "Grilled fish"},
                        {"mediaId": "m_dish2", "caption": "Pho"},
                    ],
                    "autoplay": True,
                },
            ),
            Section(
                id="sec_cta",
                kind="CTA",
                order=3,
                data={
                    "title": "Hungry?",
                    "button": {"label": "See the menu", "href": "https://example.com/menu"},
                },
            ),
        ],
    )
    store.add_page("about", "About", [])
