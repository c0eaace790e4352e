"""
Content Kernel — Registry and Media Reference Tests

The registry is the single place kind dispatch happens: labels, summaries,
media paths. Media references are weak: extraction tolerates any payload
shape, and resolution marks deleted assets as missing.
"""

import pytest

from content.kernel import registry
from content.kernel.media import MediaRef, absolute_url, collect_ids, resolve_media
from content.kernel.types import Section, SectionKind, parse_kind

# ============================================================================
# Registry
# ============================================================================


class TestRegistry:
    def test_all_kinds_registered(self):
        assert registry.known_kinds() == [k.value for k in SectionKind]

    def test_spec_for_known_kind(self):
        spec = registry.spec_for("HERO")
        assert spec.known
        assert spec.label == "Hero Section"
        assert spec.media_paths == ("backgroundMediaId",)

    def test_spec_for_unknown_kind_is_permissive(self):
        spec = registry.spec_for("RESTAURANT_MENU")
        assert not spec.known
        assert spec.label == "Restaurant Menu"
        assert spec.media_paths == ()

    def test_parse_kind(self):
        assert parse_kind("CTA") is SectionKind.CTA
        assert parse_kind("cta") is None


class TestSummaries:
    @pytest.mark.parametrize(
        "kind,data,expected",
        [
            ("HERO", {"title": "Welcome"}, "Welcome"),
            ("CTA", {"title": "Hungry?", "button": {}}, "Hungry?"),
            ("FEATURED_MENU", {"items": [{"title": "Pho"}, {"title": "Bun"}]}, "Pho"),
            ("TESTIMONIALS", {"items": [{"name": "Lan", "text": "Great"}]}, "Lan"),
            ("BANNER", {"text": "Open Sundays"}, "Open Sundays"),
            ("GALLERY", {"items": [{"mediaId": "a", "caption": "Fish"}]}, "Fish"),
            ("GALLERY", {"items": [{"mediaId": "a"}, {"mediaId": "b"}]}, "2 images"),
            ("RICH_TEXT", {"html": "<p>x</p>"}, "Rich text"),
            ("STATS", {"title": "By the Numbers", "stats": []}, "By the Numbers"),
        ],
    )
    def test_summary(self, kind, data, expected):
        assert registry.summarize(Section(id="s", kind=kind, order=1, data=data)) == expected

    @pytest.mark.parametrize("data", [None, "text", [], {"items": "nope"}, {"title": 5}])
    def test_summary_tolerates_any_shape(self, data):
        for kind in registry.known_kinds():
            assert registry.summarize(Section(id="s", kind=kind, order=1, data=data)) == ""

    def test_unknown_kind_summary(self):
        assert registry.summarize(Section(id="s", kind="NEW", order=1, data={"title": "x"})) == ""


# ============================================================================
# Media references
# ============================================================================


class TestMediaRefs:
    def test_hero_background(self):
        assert registry.media_refs("HERO", {"title": "t", "backgroundMediaId": "m1"}) == ["m1"]

    def test_gallery_items_deduplicated_in_order(self):
        data = {"items": [{"mediaId": "b"}, {"mediaId": "a"}, {"mediaId": "b"}]}
        assert registry.media_refs("GALLERY", data) == ["b", "a"]

    def test_testimonial_avatars(self):
        data = {"items": [{"name": "n", "text": "t", "avatarMediaId": "av"}, {"name": "m", "text": "t"}]}
        assert registry.media_refs("TESTIMONIALS", data) == ["av"]

    @pytest.mark.parametrize("data", [None, 5, "x", {"items": "x"}, {"items": [None, 3, {"mediaId": 7}]}])
    def test_shape_mismatch_yields_nothing(self, data):
        assert registry.media_refs("GALLERY", data) == []

    def test_kinds_without_media(self):
        assert registry.media_refs("CTA", {"title": "t"}) == []
        assert registry.media_refs("UNKNOWN", {"mediaId": "m"}) == []

    def test_media_ids_of_section(self):
        section = Section(id="s", kind="BANNER", order=1, data={"text": "t", "mediaId": "m9"})
        assert registry.media_ids(section) == ["m9"]

    def test_collect_ids_empty_strings_skipped(self):
        assert collect_ids({"mediaId": ""}, ["mediaId"]) == []


class TestResolveMedia:
    def test_resolves_and_marks_missing(self):
        refs = resolve_media(["a", "gone"], {"a": "/uploads/a.jpg"}, "http://localhost:4202/")
        assert refs == [
            MediaRef(id="a", url="http://localhost:4202/uploads/a.jpg"),
            MediaRef(id="gone", url=None),
        ]
        assert not refs[0].missing
        assert refs[1].missing

    def test_absolute_urls_untouched(self):
        assert absolute_url("https://cdn.example.com/a.jpg", "http://localhost:4202") == "https://cdn.example.com/a.jpg"

    def test_no_base_url(self):
        refs = resolve_media(["a"], {"a": "/uploads/a.jpg"})
        assert refs[0].url == "/uploads/a.jpg"
