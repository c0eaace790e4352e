"""
Content Kernel — the pure page-section model.

Components:
  registry   — kind tag → validator, form, label, summary, media paths
  validator  — raw JSON → canonical payload or field errors (never raises)
  aggregate  — ordered sections of one page, whole-page ordering scope
  forms      — flat form state ↔ payload, submitted through the validator
  media      — weak media-id references and their resolution
"""

from content.kernel.aggregate import SectionAggregate
from content.kernel.registry import (
    form_for,
    known_kinds,
    media_refs,
    schema_for,
    spec_for,
    summarize,
    validate,
    validate_json,
)
from content.kernel.types import (
    AggregateResult,
    FieldError,
    MediaAsset,
    OrderChange,
    Page,
    Section,
    SectionKind,
    ValidationResult,
)

__all__ = [
    "AggregateResult",
    "FieldError",
    "MediaAsset",
    "OrderChange",
    "Page",
    "Section",
    "SectionAggregate",
    "SectionKind",
    "ValidationResult",
    "form_for",
    "known_kinds",
    "media_refs",
    "schema_for",
    "spec_for",
    "summarize",
    "validate",
    "validate_json",
]
