"""
Content Kernel — Section Editor Forms

Kind-specific forms over flat form state, plus a generic JSON form that
edits any kind.

A form never decides on its own whether a payload is acceptable. It maps
form state to a raw payload (`build`) and hands that to the kind's
validator (`submit`), so every form is a thin constructor over the same
validator the JSON editor uses.

Form state is what an input widget holds: strings for text and number
inputs, bools for checkboxes, comma-separated strings for list inputs, and
lists of row dicts for repeatable groups. Field names are dotted wire paths
(`button.href` → {"button": {"href": ...}}).
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any

from content.kernel.types import ValidationResult
from content.kernel.validator import Validator, parse_json, validate_text

FIELD_TYPES: set[str] = {
    "text",
    "textarea",
    "url",
    "media",
    "number",
    "checkbox",
    "list",
    "rows",
}


@dataclass(frozen=True)
class FormField:
    """One input. `columns` is only used by "rows" fields."""

    name: str
    label: str
    type: str = "text"
    default: Any = None
    required: bool = False
    columns: tuple[FormField, ...] = field(default_factory=tuple)

    def empty(self) -> Any:
        if self.default is not None:
            return copy.deepcopy(self.default)
        if self.type == "checkbox":
            return False
        if self.type == "rows":
            return []
        return ""

    def to_payload(self, value: Any) -> Any:
        """Form value → wire value. None means "leave the key out"."""
        if self.type == "checkbox":
            return bool(value)
        if self.type == "number":
            return _to_number(value)
        if self.type == "list":
            if isinstance(value, list):
                return [str(v).strip() for v in value if str(v).strip()] or None
            items = [part.strip() for part in str(value or "").split(",")]
            return [i for i in items if i] or None
        if self.type == "rows":
            rows = [_build(self.columns, row) for row in value or [] if not _row_blank(self.columns, row)]
            return rows if rows or self.required else None
        if value is None:
            return None
        if value == "" and not self.required:
            return None
        return value

    def to_state(self, value: Any) -> Any:
        """Wire value → form value."""
        if value is None:
            return self.empty()
        if self.type == "checkbox":
            return bool(value)
        if self.type == "number":
            return str(value)
        if self.type == "list":
            return ", ".join(str(v) for v in value) if isinstance(value, list) else str(value)
        if self.type == "rows":
            if not isinstance(value, list):
                return []
            return [_state(self.columns, row if isinstance(row, dict) else {}) for row in value]
        return value if isinstance(value, str) else json.dumps(value)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_number(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (bool, int, float)):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        # Let the validator report it against the right field.
        return text


def _get_path(data: Any, path: str) -> Any:
    node = data
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def _set_path(data: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    node = data
    for part in parts[:-1]:
        node = node.setdefault(part, {})
    node[parts[-1]] = value


def _build(fields: tuple[FormField, ...], state: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for f in fields:
        value = f.to_payload(state.get(f.name, f.empty()))
        if value is not None:
            _set_path(payload, f.name, value)
    return payload


def _state(fields: tuple[FormField, ...], payload: dict[str, Any]) -> dict[str, Any]:
    return {f.name: f.to_state(_get_path(payload, f.name)) for f in fields}


def _row_blank(columns: tuple[FormField, ...], row: dict[str, Any]) -> bool:
    return all(row.get(c.name) in (None, "", []) for c in columns)


# ---------------------------------------------------------------------------
# Base form
# ---------------------------------------------------------------------------


class SectionForm:
    """Structured editor for one kind."""

    fields: tuple[FormField, ...] = ()

    def __init__(self, kind: str, validator: Validator):
        self.kind = kind
        self.validator = validator

    def defaults(self) -> dict[str, Any]:
        return {f.name: f.empty() for f in self.fields}

    def initial(self, payload: Any = None) -> dict[str, Any]:
        """Form state for editing `payload`, or the defaults for a new section."""
        if payload is None:
            return self.defaults()
        return _state(self.fields, payload if isinstance(payload, dict) else {})

    def build(self, state: dict[str, Any]) -> Any:
        return _build(self.fields, state)

    def submit(self, state: dict[str, Any]) -> ValidationResult:
        return self.validator.validate(self.build(state))


class JsonForm(SectionForm):
    """Raw JSON editor. Works for every kind, including unknown ones."""

    fields = (FormField("json", "JSON payload", "textarea", default="{}"),)

    def initial(self, payload: Any = None) -> dict[str, Any]:
        if payload is None:
            return self.defaults()
        return {"json": json.dumps(payload, indent=2, ensure_ascii=False)}

    def build(self, state: dict[str, Any]) -> Any:
        """The parsed text, or None when it is not JSON (`submit` reports why)."""
        value, _ = parse_json(state.get("json") or "null")
        return value

    def submit(self, state: dict[str, Any]) -> ValidationResult:
        return validate_text(self.validator, state.get("json") or "")


# ---------------------------------------------------------------------------
# Kind-specific forms
# ---------------------------------------------------------------------------


class HeroForm(SectionForm):
    fields = (
        FormField("title", "Headline", required=True),
        FormField("subtitle", "Subtitle"),
        FormField("backgroundMediaId", "Background image", "media"),
        FormField("cta.label", "Button label"),
        FormField("cta.href", "Button link", "url"),
    )


class GalleryForm(SectionForm):
    fields = (
        FormField(
            "items",
            "Images",
            "rows",
            required=True,
            columns=(
                FormField("mediaId", "Image", "media", required=True),
                FormField("caption", "Caption"),
            ),
        ),
        FormField("autoplay", "Autoplay", "checkbox", default=True),
    )


class FeaturedMenuForm(SectionForm):
    fields = (
        FormField(
            "items",
            "Dishes",
            "rows",
            required=True,
            columns=(
                FormField("title", "Dish name", required=True),
                FormField("description", "Description", "textarea"),
                FormField("price", "Price", "number"),
                FormField("mediaId", "Photo", "media"),
            ),
        ),
    )


class CtaForm(SectionForm):
    fields = (
        FormField("title", "Headline", required=True),
        FormField("description", "Short description"),
        FormField("button.label", "Button label", required=True),
        FormField("button.href", "Button link", "url", required=True),
    )


class TestimonialsForm(SectionForm):
    fields = (
        FormField(
            "items",
            "Reviews",
            "rows",
            required=True,
            columns=(
                FormField("name", "Customer name", required=True),
                FormField("text", "Review", "textarea", required=True),
                FormField("avatarMediaId", "Avatar", "media"),
            ),
        ),
    )


class RichTextForm(SectionForm):
    fields = (FormField("html", "HTML content", "textarea", default="<p>Hello!</p>", required=True),)


class BannerForm(SectionForm):
    fields = (
        FormField("text", "Text", required=True),
        FormField("mediaId", "Image", "media"),
        FormField("href", "Link", "url"),
    )


class ReservationFormForm(SectionForm):
    fields = (
        FormField("title", "Title", default="Book a table"),
        FormField(
            "description",
            "Description",
            "textarea",
            default="Fill in your details to book a table. We will confirm within 24 hours.",
        ),
        FormField("timeSlots", "Time slots (comma separated)", "list"),
        FormField("maxPartySize", "Max party size", "number"),
    )


class SpecialOffersForm(SectionForm):
    fields = (
        FormField("title", "Title", default="Special Offers"),
        FormField("subtitle", "Subtitle", default="Great deals picked for you"),
        FormField(
            "offers",
            "Offers",
            "rows",
            columns=(
                FormField("id", "Offer id", required=True),
                FormField("title", "Title", required=True),
                FormField("description", "Description", "textarea", required=True),
                FormField("discount", "Discount", "number"),
                FormField("validFrom", "Valid from", required=True),
                FormField("validUntil", "Valid until", required=True),
                FormField("imageUrl", "Image URL", "url"),
            ),
        ),
    )


class ContactInfoForm(SectionForm):
    fields = (
        FormField("title", "Title", default="Contact & Address"),
        FormField("address", "Address", default="25 Bayside Road, Harbour District"),
        FormField("phone", "Phone", default="0901 234 567"),
        FormField("email", "Email", default="info@restaurant.com"),
        FormField("mapEmbedUrl", "Map embed URL", "url"),
        FormField(
            "hours",
            "Opening hours",
            "rows",
            default=[
                {"day": "Mon - Fri", "time": "10:00 - 22:00", "_id": ""},
                {"day": "Sat - Sun", "time": "09:00 - 23:00", "_id": ""},
            ],
            columns=(
                FormField("day", "Day", required=True),
                FormField("time", "Time", required=True),
                FormField("_id", "Row id"),
            ),
        ),
        FormField(
            "socialLinks",
            "Social links",
            "rows",
            default=[
                {"platform": "facebook", "url": "https://facebook.com", "_id": ""},
                {"platform": "instagram", "url": "https://instagram.com", "_id": ""},
            ],
            columns=(
                FormField("platform", "Platform", required=True),
                FormField("url", "URL", "url"),
                FormField("_id", "Row id"),
            ),
        ),
    )


class StatsForm(SectionForm):
    fields = (
        FormField("title", "Title", default="By the Numbers"),
        FormField("subtitle", "Subtitle", default="Milestones we are proud of"),
        FormField(
            "stats",
            "Stats",
            "rows",
            required=True,
            default=[
                {"icon": "ri-calendar-line", "value": "15", "label": "Years of experience", "suffix": "+", "prefix": "", "color": "#f59e0b"},
                {"icon": "ri-team-line", "value": "50000", "label": "Happy guests", "suffix": "+", "prefix": "", "color": "#10b981"},
                {"icon": "ri-restaurant-line", "value": "200", "label": "Signature dishes", "suffix": "+", "prefix": "", "color": "#ef4444"},
                {"icon": "ri-star-fill", "value": "4.9", "label": "Average rating", "suffix": "/5", "prefix": "", "color": "#f59e0b"},
            ],
            columns=(
                FormField("icon", "Icon", required=True),
                FormField("value", "Value", "number", required=True),
                FormField("label", "Label", required=True),
                FormField("suffix", "Suffix"),
                FormField("prefix", "Prefix"),
                FormField("color", "Color"),
            ),
        ),
    )
