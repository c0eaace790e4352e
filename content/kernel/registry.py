"""
Content Kernel — Section Kind Registry

The one place where a kind tag is mapped to everything that depends on it:
payload validator, editor form, display label, list summary and media
reference paths. Every kind-dependent decision goes through spec_for().

Lookups are total. A tag outside the closed kind set gets a permissive
spec: any JSON is accepted unchanged and edited through the JSON form, so a
section of a newer kind still loads and saves.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from content.kernel import forms
from content.kernel.media import collect_ids
from content.kernel.schemas import PAYLOAD_MODELS
from content.kernel.types import Section, SectionKind, ValidationResult
from content.kernel.validator import PayloadValidator, PermissiveValidator, Validator, validate_text

# ---------------------------------------------------------------------------
# Summaries (one line for list rows)
# ---------------------------------------------------------------------------


def _text_at(data: Any, *path: str | int) -> str:
    node = data
    for part in path:
        if isinstance(part, int):
            if not isinstance(node, list) or len(node) <= part:
                return ""
        elif not isinstance(node, dict) or part not in node:
            return ""
        node = node[part]
    return node if isinstance(node, str) else ""


def _count(data: Any, key: str, noun: str) -> str:
    items = data.get(key) if isinstance(data, dict) else None
    if not isinstance(items, list) or not items:
        return ""
    return f"{len(items)} {noun}{'' if len(items) == 1 else 's'}"


def _summary_title(data: Any) -> str:
    return _text_at(data, "title")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KindSpec:
    """Everything the admin needs to know about one kind."""

    kind: str
    label: str
    category: str
    validator: Validator
    form: type[forms.SectionForm]
    summarize: Callable[[Any], str] = _summary_title
    media_paths: tuple[str, ...] = field(default_factory=tuple)
    known: bool = True


def _spec(
    kind: SectionKind,
    label: str,
    category: str,
    form: type[forms.SectionForm],
    summarize: Callable[[Any], str] = _summary_title,
    media_paths: tuple[str, ...] = (),
) -> KindSpec:
    return KindSpec(
        kind=kind.value,
        label=label,
        category=category,
        validator=PayloadValidator(PAYLOAD_MODELS[kind]),
        form=form,
        summarize=summarize,
        media_paths=media_paths,
    )


_REGISTRY: dict[str, KindSpec] = {
    spec.kind: spec
    for spec in (
        _spec(
            SectionKind.HERO,
            "Hero Section",
            "Hero & Banners",
            forms.HeroForm,
            media_paths=("backgroundMediaId",),
        ),
        _spec(
            SectionKind.GALLERY,
            "Gallery Grid",
            "Gallery & Media",
            forms.GalleryForm,
            summarize=lambda d: _text_at(d, "items", 0, "caption") or _count(d, "items", "image"),
            media_paths=("items.*.mediaId",),
        ),
        _spec(
            SectionKind.FEATURED_MENU,
            "Featured Menu",
            "Menu & Offers",
            forms.FeaturedMenuForm,
            summarize=lambda d: _text_at(d, "items", 0, "title"),
            media_paths=("items.*.mediaId",),
        ),
        _spec(SectionKind.CTA, "Call to Action", "Call to Action", forms.CtaForm),
        _spec(
            SectionKind.TESTIMONIALS,
            "Testimonials",
            "Social Proof",
            forms.TestimonialsForm,
            summarize=lambda d: _text_at(d, "items", 0, "name"),
            media_paths=("items.*.avatarMediaId",),
        ),
        _spec(
            SectionKind.RICH_TEXT,
            "Rich Text",
            "Content",
            forms.RichTextForm,
            summarize=lambda d: "Rich text" if _text_at(d, "html") else "",
        ),
        _spec(
            SectionKind.BANNER,
            "Banner",
            "Hero & Banners",
            forms.BannerForm,
            summarize=lambda d: _text_at(d, "text"),
            media_paths=("mediaId",),
        ),
        _spec(SectionKind.RESERVATION_FORM, "Reservation Form", "Forms & Contact", forms.ReservationFormForm),
        _spec(SectionKind.SPECIAL_OFFERS, "Special Offers", "Menu & Offers", forms.SpecialOffersForm),
        _spec(SectionKind.CONTACT_INFO, "Contact Info", "Forms & Contact", forms.ContactInfoForm),
        _spec(SectionKind.STATS, "Statistics", "Social Proof", forms.StatsForm),
    )
}

_PERMISSIVE = PermissiveValidator()


def _fallback(kind: str) -> KindSpec:
    return KindSpec(
        kind=kind,
        label=kind.replace("_", " ").title(),
        category="Other",
        validator=_PERMISSIVE,
        form=forms.JsonForm,
        summarize=lambda d: "",
        known=False,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def known_kinds() -> list[str]:
    """All registered kind tags, in registry order."""
    return list(_REGISTRY)


def spec_for(kind: str) -> KindSpec:
    """Registry entry for a kind. Unknown kinds get a permissive entry."""
    return _REGISTRY.get(kind) or _fallback(kind)


def schema_for(kind: str) -> Validator:
    """The payload validator for a kind."""
    return spec_for(kind).validator


def validate(kind: str, raw: Any) -> ValidationResult:
    """Validate a raw (already parsed) payload for a kind."""
    return schema_for(kind).validate(raw)


def validate_json(kind: str, text: str) -> ValidationResult:
    """Parse editor text then validate. Parse failures come back with malformed=True."""
    return validate_text(schema_for(kind), text)


def form_for(kind: str) -> forms.SectionForm:
    """The structured editor for a kind, bound to that kind's validator."""
    spec = spec_for(kind)
    return spec.form(spec.kind, spec.validator)


def json_form_for(kind: str) -> forms.SectionForm:
    """The raw JSON editor for a kind, bound to that kind's validator."""
    spec = spec_for(kind)
    return forms.JsonForm(spec.kind, spec.validator)


def summarize(section: Section) -> str:
    """One-line description of a section for list rows."""
    return spec_for(section.kind).summarize(section.data)


def media_refs(kind: str, data: Any) -> list[str]:
    """Media ids referenced by a payload of `kind`. Shape mismatches yield nothing."""
    return collect_ids(data, spec_for(kind).media_paths)


def media_ids(section: Section) -> list[str]:
    return media_refs(section.kind, section.data)
