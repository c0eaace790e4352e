"""
Content Kernel — Payload Validation Tests

Structural validation of section payloads per kind:
  - required fields and primitive types (no number/string coercion)
  - non-empty lists, URL fields, ISO dates
  - canonicalisation: unknown keys dropped, nulls removed
  - dotted field paths, whole-payload errors on "(root)"
  - JSON text parsing reported separately (malformed)
  - canonical output validates to itself
"""

import pytest

from content.kernel.registry import known_kinds, validate, validate_json
from content.kernel.types import ROOT_FIELD

# ============================================================================
# Fixtures
# ============================================================================

VALID_PAYLOADS = {
    "HERO": {
        "title": "Fresh from the harbour",
        "subtitle": "Seafood, every day",
        "backgroundMediaId": "m_hero",
        "cta": {"label": "Book", "href": "https://example.com/book"},
    },
    "GALLERY": {"items": [{"mediaId": "m1", "caption": "Fish"}, {"mediaId": "m2"}], "autoplay": False},
    "FEATURED_MENU": {"items": [{"title": "Pho", "price": 9.5, "mediaId": "m3"}, {"title": "Bun", "price": 8}]},
    "CTA": {"title": "Hungry?", "button": {"label": "Menu", "href": "https://example.com/menu"}},
    "TESTIMONIALS": {"items": [{"name": "Lan", "text": "Great food", "avatarMediaId": "m4"}]},
    "RICH_TEXT": {"html": "<p>Hello!</p>"},
    "BANNER": {"text": "Open on Sundays", "href": "https://example.com"},
    "RESERVATION_FORM": {"title": "Book a table", "timeSlots": ["18:00", "19:00"], "maxPartySize": 8},
    "SPECIAL_OFFERS": {
        "title": "Offers",
        "offers": [
            {
                "id": "o1",
                "title": "Happy hour",
                "description": "Half price drinks",
                "discount": 50,
                "validFrom": "2026-01-01",
                "validUntil": "2026-02-01T00:00:00",
            }
        ],
    },
    "CONTACT_INFO": {
        "title": "Contact",
        "phone": "0901 234 567",
        "hours": [{"day": "Mon - Fri", "time": "10:00 - 22:00", "_id": "h1"}],
        "socialLinks": [{"platform": "facebook", "url": "https://facebook.com"}],
    },
    "STATS": {"stats": [{"icon": "ri-star-fill", "value": 4.9, "label": "Rating", "suffix": "/5"}]},
}


def field_names(result) -> list[str]:
    return [e.field for e in result.errors]


# ============================================================================
# Valid payloads and idempotence
# ============================================================================


class TestValidPayloads:
    def test_every_kind_has_a_sample(self):
        assert set(VALID_PAYLOADS) == set(known_kinds())

    @pytest.mark.parametrize("kind", sorted(VALID_PAYLOADS))
    def test_valid_payload_accepted(self, kind):
        result = validate(kind, VALID_PAYLOADS[kind])
        assert result.ok, result.error_text()
        assert result.errors == []

    @pytest.mark.parametrize("kind", sorted(VALID_PAYLOADS))
    def test_canonical_output_is_a_fixed_point(self, kind):
        """Validating the canonical payload again yields the same payload."""
        first = validate(kind, VALID_PAYLOADS[kind])
        second = validate(kind, first.payload)
        assert second.ok
        assert second.payload == first.payload

    def test_validation_is_deterministic(self):
        a = validate("HERO", {"subtitle": 3})
        b = validate("HERO", {"subtitle": 3})
        assert a == b


# ============================================================================
# Rejections
# ============================================================================


class TestRejections:
    def test_hero_without_title(self):
        """HERO missing title is rejected on `title` with no payload."""
        result = validate("HERO", {"subtitle": "No headline"})
        assert not result.ok
        assert result.payload is None
        assert "title" in field_names(result)

    def test_hero_empty_title(self):
        result = validate("HERO", {"title": ""})
        assert not result.ok
        assert field_names(result) == ["title"]

    def test_number_where_url_expected(self):
        result = validate("CTA", {"title": "Go", "button": {"label": "x", "href": 42}})
        assert not result.ok
        assert field_names(result) == ["button.href"]

    def test_malformed_url(self):
        result = validate("BANNER", {"text": "Hi", "href": "not a url"})
        assert not result.ok
        assert result.errors[0].field == "href"
        assert result.errors[0].message == "Invalid URL"

    def test_url_string_kept_as_written(self):
        result = validate("BANNER", {"text": "Hi", "href": "https://example.com"})
        assert result.payload["href"] == "https://example.com"

    def test_empty_gallery_rejected(self):
        result = validate("GALLERY", {"items": []})
        assert not result.ok
        assert field_names(result) == ["items"]

    def test_nested_path_uses_wire_name_and_index(self):
        result = validate("GALLERY", {"items": [{"mediaId": "m1"}, {"caption": "no id"}]})
        assert field_names(result) == ["items.1.mediaId"]

    def test_string_not_coerced_to_number(self):
        result = validate("STATS", {"stats": [{"icon": "i", "value": "15", "label": "Years"}]})
        assert field_names(result) == ["stats.0.value"]
        assert result.errors[0].message == "Expected a number"

    def test_bool_is_not_a_number(self):
        result = validate("RESERVATION_FORM", {"maxPartySize": True})
        assert field_names(result) == ["maxPartySize"]

    def test_number_not_coerced_to_string(self):
        result = validate("BANNER", {"text": 5})
        assert field_names(result) == ["text"]

    def test_bad_offer_date(self):
        payload = {
            "offers": [
                {"id": "o1", "title": "t", "description": "d", "validFrom": "tomorrow", "validUntil": "2026-02-01"}
            ]
        }
        result = validate("SPECIAL_OFFERS", payload)
        assert field_names(result) == ["offers.0.validFrom"]

    def test_errors_are_ordered_and_complete(self):
        result = validate("CTA", {})
        assert field_names(result) == ["title", "button"]

    @pytest.mark.parametrize("raw", ["just text", 12, None, ["a", "b"]])
    def test_non_object_payload_reported_on_root(self, raw):
        result = validate("HERO", raw)
        assert not result.ok
        assert field_names(result) == [ROOT_FIELD]


# ============================================================================
# Canonicalisation
# ============================================================================


class TestCanonicalisation:
    def test_unknown_keys_dropped(self):
        result = validate("HERO", {"title": "Hi", "color": "red"})
        assert result.payload == {"title": "Hi"}

    def test_null_optionals_removed(self):
        result = validate("HERO", {"title": "Hi", "subtitle": None, "cta": None})
        assert result.payload == {"title": "Hi"}

    def test_nested_unknown_keys_dropped(self):
        result = validate("GALLERY", {"items": [{"mediaId": "m1", "width": 300}]})
        assert result.payload == {"items": [{"mediaId": "m1"}]}

    def test_underscore_id_kept_on_wire(self):
        result = validate("CONTACT_INFO", {"hours": [{"day": "Mon", "time": "9-5", "_id": "h1"}]})
        assert result.payload["hours"][0]["_id"] == "h1"

    def test_int_stays_int(self):
        result = validate("FEATURED_MENU", {"items": [{"title": "Pho", "price": 9}]})
        assert result.payload["items"][0]["price"] == 9
        assert isinstance(result.payload["items"][0]["price"], int)


# ============================================================================
# Media references
# ============================================================================


class TestMediaReferences:
    def test_dangling_media_id_accepted(self):
        """Existence of media is not checked by validation."""
        result = validate("GALLERY", {"items": [{"mediaId": "deleted-long-ago"}]})
        assert result.ok

    def test_media_id_must_be_string(self):
        result = validate("HERO", {"title": "Hi", "backgroundMediaId": 17})
        assert field_names(result) == ["backgroundMediaId"]


# ============================================================================
# JSON text
# ============================================================================


class TestValidateJson:
    def test_parse_failure_is_malformed(self):
        result = validate_json("HERO", '{"title": "Hi",')
        assert not result.ok
        assert result.malformed
        assert len(result.errors) == 1
        assert result.errors[0].field == ROOT_FIELD
        assert result.errors[0].message.startswith("Invalid JSON")

    def test_valid_json_but_invalid_payload_is_not_malformed(self):
        result = validate_json("HERO", "{}")
        assert not result.ok
        assert not result.malformed
        assert field_names(result) == ["title"]

    def test_valid_json(self):
        result = validate_json("RICH_TEXT", '{"html": "<p>x</p>"}')
        assert result.ok
        assert result.payload == {"html": "<p>x</p>"}


# ============================================================================
# Unknown kinds
# ============================================================================


class TestUnknownKind:
    def test_anything_accepted_unchanged(self):
        raw = {"whatever": [1, 2, {"x": None}]}
        result = validate("RESTAURANT_MENU", raw)
        assert result.ok
        assert result.payload == raw

    def test_unknown_kind_still_checks_json_syntax(self):
        result = validate_json("RESTAURANT_MENU", "{oops")
        assert result.malformed
