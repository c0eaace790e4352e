"""
Content Kernel — Media References

Section payloads point at media assets by id (`mediaId`, `backgroundMediaId`,
`avatarMediaId`). These are weak references: the asset may have been deleted.
This module finds the ids inside a payload and resolves them against a media
library snapshot, marking dangling ids as missing instead of failing.

Paths use dots; `*` fans out over a list:
  "backgroundMediaId"  → data["backgroundMediaId"]
  "items.*.mediaId"    → [item["mediaId"] for item in data["items"]]
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass
class MediaRef:
    """A media id found in a payload, with its resolved URL if the asset is known."""

    id: str
    url: str | None = None

    @property
    def missing(self) -> bool:
        return self.url is None


def collect_ids(data: Any, paths: Iterable[str]) -> list[str]:
    """
    Collect non-empty string ids at the given paths, in path order, deduplicated.
    Anything of the wrong shape along a path is skipped.
    """
    found: list[str] = []
    for path in paths:
        for value in _walk(data, path.split(".")):
            if isinstance(value, str) and value and value not in found:
                found.append(value)
    return found


def _walk(node: Any, parts: list[str]) -> list[Any]:
    if not parts:
        return [node]
    head, rest = parts[0], parts[1:]
    if head == "*":
        if not isinstance(node, list):
            return []
        out: list[Any] = []
        for item in node:
            out.extend(_walk(item, rest))
        return out
    if not isinstance(node, Mapping) or head not in node:
        return []
    return _walk(node[head], rest)


def absolute_url(url: str, base_url: str) -> str:
    """Store URLs may be relative (`/uploads/x.jpg`); prefix the store base URL."""
    if url.startswith("http://") or url.startswith("https://"):
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def resolve_media(ids: Iterable[str], library: Mapping[str, str], base_url: str = "") -> list[MediaRef]:
    """
    Resolve ids against an id → url mapping.

    Unknown ids come back with url=None (rendered as "missing").
    """
    refs: list[MediaRef] = []
    for media_id in ids:
        url = library.get(media_id)
        if url is None:
            refs.append(MediaRef(id=media_id))
        else:
            refs.append(MediaRef(id=media_id, url=absolute_url(url, base_url) if base_url else url))
    return refs
