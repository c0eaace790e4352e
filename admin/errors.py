"""
CMS admin errors.

The kernel never raises for bad input; it returns result objects. These are
raised at the service boundary, where a refused result or a failed store call
has to reach whoever asked for it.
"""

from __future__ import annotations

from typing import Any

from content.kernel.types import FieldError


class AdminError(Exception):
    """Base class for admin errors."""

    pass


class MalformedPayload(AdminError):
    """Editor text is not JSON at all. No structural validation ran."""

    pass


class PayloadInvalid(AdminError):
    """Payload does not match its kind's shape."""

    def __init__(self, kind: str, errors: list[FieldError]):
        self.kind = kind
        self.errors = errors
        lines = "\n".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(f"Invalid {kind} payload:\n{lines}")


class SectionNotFound(AdminError):
    """An operation named a section id the current page does not have."""

    pass


class NoPageLoaded(AdminError):
    """An operation needs a current page and none is open."""

    pass


class StoreError(AdminError):
    """
    A Section Store call failed.

    `status` is the HTTP status (0 when no response arrived). `details` are
    the server's per-field validation errors, if it sent any.
    """

    def __init__(self, status: int, message: str, details: list[FieldError] | None = None):
        self.status = status
        self.message = message
        self.details = details or []
        super().__init__(self.formatted())

    def formatted(self) -> str:
        if not self.details:
            return self.message
        lines = "\n".join(f"{d.field}: {d.message}" for d in self.details)
        return f"{self.message}\n\nValidation Errors:\n{lines}"


class ReorderFailed(AdminError):
    """
    One or more order writes of a reorder failed.

    `failures` maps section id → error text. `reconciled` is True when the
    page was reloaded from the store afterwards, False when the reload also
    failed and the pre-reorder snapshot was restored (possibly stale).
    `page` is the aggregate now shown: the reload, or the restored snapshot.
    """

    def __init__(self, failures: dict[str, str], reconciled: bool, page: Any = None):
        self.failures = failures
        self.reconciled = reconciled
        self.page = page
        state = "page reloaded from store" if reconciled else "reload failed, showing last known state"
        super().__init__(f"Reorder failed for {len(failures)} section(s): {', '.join(failures)} ({state})")


class InvalidPermutation(AdminError):
    """A reorder named duplicate ids, or did not cover the sections it claims to reorder."""

    pass


def check_result(result: Any) -> None:
    """Raise for a refused AggregateResult ("CODE: detail")."""
    if result.applied:
        return
    code, _, detail = (result.error or "").partition(": ")
    if code == "SECTION_NOT_FOUND":
        raise SectionNotFound(detail)
    if code == "DUPLICATE_ID":
        raise InvalidPermutation(f"Duplicate id in permutation: {detail}")
    raise AdminError(result.error)
