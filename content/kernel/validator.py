"""
Content Kernel — Payload Validation

Turns arbitrary JSON (edited text, form state, API responses) into either a
canonical payload for a kind or an ordered list of field errors.

Validation is structural (right shape for the kind?), not referential: media
ids are never looked up. Nothing here raises for bad input and nothing has
side effects, so it is safe to run on every keystroke.

Two validator flavours:
- PayloadValidator wraps a pydantic payload model (one per known kind).
- PermissiveValidator accepts any JSON unchanged (unknown kinds).
"""

from __future__ import annotations

import json
from typing import Any, Protocol

from pydantic import ValidationError

from content.kernel.schemas import Payload
from content.kernel.types import ROOT_FIELD, FieldError, ValidationResult

# ---------------------------------------------------------------------------
# Validator protocol
# ---------------------------------------------------------------------------


class Validator(Protocol):
    def validate(self, raw: Any) -> ValidationResult: ...


class PayloadValidator:
    """Validates and canonicalises payloads against one pydantic model."""

    def __init__(self, model: type[Payload]):
        self.model = model

    def validate(self, raw: Any) -> ValidationResult:
        try:
            parsed = self.model.model_validate(raw)
        except ValidationError as e:
            return ValidationResult.failure(field_errors(e))
        return ValidationResult.success(self.canonicalize(parsed))

    def canonicalize(self, parsed: Payload) -> dict[str, Any]:
        """Dump with wire names, dropping absent/null optionals."""
        return parsed.model_dump(by_alias=True, exclude_none=True)

    def __repr__(self) -> str:
        return f"PayloadValidator({self.model.__name__})"


class PermissiveValidator:
    """Accepts anything. Unknown kinds degrade to opaque JSON instead of blocking edits."""

    def validate(self, raw: Any) -> ValidationResult:
        return ValidationResult.success(raw)

    def __repr__(self) -> str:
        return "PermissiveValidator()"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def field_path(loc: tuple[int | str, ...]) -> str:
    """
    Dotted path for a pydantic error location.

      ("items", 0, "mediaId") → "items.0.mediaId"
      ()                      → "(root)"
    """
    if not loc:
        return ROOT_FIELD
    return ".".join(str(part) for part in loc)


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Convert a pydantic ValidationError into ordered FieldErrors."""
    return [
        FieldError(field=field_path(err["loc"]), message=err["msg"])
        for err in exc.errors(include_url=False, include_context=False, include_input=False)
    ]


def parse_json(text: str) -> tuple[Any, FieldError | None]:
    """
    Parse editor text. Returns (value, None) or (None, error).

    Parse failures are a separate category from validation failures and are
    reported against the root field.
    """
    try:
        return json.loads(text), None
    except json.JSONDecodeError as e:
        return None, FieldError(field=ROOT_FIELD, message=f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})")


def validate_text(validator: Validator, text: str) -> ValidationResult:
    """Parse then validate. A parse failure short-circuits with malformed=True."""
    raw, error = parse_json(text)
    if error is not None:
        return ValidationResult.failure([error], malformed=True)
    return validator.validate(raw)
