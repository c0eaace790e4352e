"""
Content Kernel — Shared Types

Data classes used across the registry, validator, aggregate and editor forms.
These are the contracts that bind the kernel together.

A page is an ordered list of sections. Each section carries a kind tag and a
kind-shaped JSON payload (`data`). Kinds are a closed set, but sections with
unknown kinds coming from the store are still representable: their kind stays
a plain string and their payload is treated as opaque JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

# ---------------------------------------------------------------------------
# Section kinds
# ---------------------------------------------------------------------------


class SectionKind(StrEnum):
    HERO = "HERO"
    GALLERY = "GALLERY"
    FEATURED_MENU = "FEATURED_MENU"
    CTA = "CTA"
    TESTIMONIALS = "TESTIMONIALS"
    RICH_TEXT = "RICH_TEXT"
    BANNER = "BANNER"
    RESERVATION_FORM = "RESERVATION_FORM"
    SPECIAL_OFFERS = "SPECIAL_OFFERS"
    CONTACT_INFO = "CONTACT_INFO"
    STATS = "STATS"


KIND_TAGS: set[str] = {k.value for k in SectionKind}

ROOT_FIELD = "(root)"


def parse_kind(tag: str) -> SectionKind | None:
    """Return the SectionKind for a tag, or None if the tag is not a known kind."""
    if tag in KIND_TAGS:
        return SectionKind(tag)
    return None


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class Section:
    """
    One content block on a page.

    `id` is assigned by the store and never changes. `kind` is fixed at
    creation. `order` is the page-relative position. `data` is the payload,
    shaped by `kind`.
    """

    id: str
    kind: str
    order: int
    data: Any = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "order": self.order,
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Section:
        return cls(
            id=str(d["id"]),
            kind=str(d["kind"]),
            order=int(d.get("order", 0)),
            data=d.get("data", {}),
        )


@dataclass
class Page:
    """A page as returned by GET /pages/{slug}."""

    slug: str
    title: str = ""
    sections: list[Section] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "sections": [s.to_dict() for s in self.sections],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Page:
        return cls(
            slug=d["slug"],
            title=d.get("title", ""),
            sections=[Section.from_dict(s) for s in d.get("sections") or []],
        )


@dataclass
class MediaAsset:
    """A media library entry. Owned by the media collaborator; referenced by id only."""

    id: str
    url: str
    alt: str | None = None
    mime_type: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MediaAsset:
        return cls(
            id=str(d["id"]),
            url=d.get("url", ""),
            alt=d.get("alt"),
            mime_type=d.get("mimeType"),
        )


@dataclass
class FieldError:
    """One validation failure. `field` is a dotted path like `items.0.mediaId`."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """
    Result of validating a raw payload against a kind.
    The validator never throws: it always returns one of these.

    `malformed` is set when the input text was not JSON at all; in that case
    no structural validation ran.
    """

    ok: bool
    payload: Any = None
    errors: list[FieldError] = field(default_factory=list)
    malformed: bool = False

    @classmethod
    def success(cls, payload: Any) -> ValidationResult:
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, errors: list[FieldError], *, malformed: bool = False) -> ValidationResult:
        return cls(ok=False, errors=errors, malformed=malformed)

    def error_text(self) -> str:
        """Errors joined one per line as `field: message`."""
        return "\n".join(f"{e.field}: {e.message}" for e in self.errors)


@dataclass
class OrderChange:
    """A section whose order moved from `old` to `new`."""

    id: str
    old: int
    new: int


@dataclass
class AggregateResult:
    """
    Result of one aggregate mutation.

    `applied` is False when the mutation was refused (unknown id, bad
    permutation); `error` then carries a CODE: detail string and nothing
    changed. `changes` lists every section whose order moved.
    """

    applied: bool
    changes: list[OrderChange] = field(default_factory=list)
    error: str | None = None
