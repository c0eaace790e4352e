"""HTTP client for the Section Store REST API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from admin.errors import StoreError
from admin.stores import SectionStore
from content.kernel.types import FieldError, MediaAsset, Page, Section

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _seg(value: str) -> str:
    """One URL path segment: slugs and ids may contain `/`, `?` or `#`."""
    return quote(value, safe="")


def _error_from_response(res: httpx.Response) -> StoreError:
    """Build a StoreError from a non-2xx response: `{error|message, details?}`."""
    try:
        body = res.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    message = body.get("error") or body.get("message") or f"HTTP {res.status_code}: {res.reason_phrase}"
    details: list[FieldError] = []
    raw_details = body.get("details")
    if isinstance(raw_details, list):
        for d in raw_details:
            if isinstance(d, dict):
                details.append(FieldError(field=str(d.get("field", "")), message=str(d.get("message", ""))))
    return StoreError(res.status_code, str(message), details)


class HttpSectionStore(SectionStore):
    """
    Section Store over HTTP.

    The session cookie is sent with every request as-is. `transport` lets
    tests point the client at an ASGI app or a MockTransport.
    """

    def __init__(
        self,
        api_url: str,
        session_cookie: str = "",
        *,
        cookie_name: str = "session",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if session_cookie:
            headers["Cookie"] = f"{cookie_name}={session_cookie}"
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        parse: Callable[[Any], T] | None = None,
    ) -> Any:
        """
        Send one request. Non-2xx answers, transport failures and 2xx bodies
        that are not JSON (or that `parse` cannot read) all raise StoreError.
        """
        try:
            res = await self.client.request(method, path, json=body)
        except httpx.TimeoutException as e:
            logger.warning("Store request timed out: %s %s", method, path)
            raise StoreError(0, f"Request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            logger.warning("Store request failed: %s %s: %s", method, path, e)
            raise StoreError(0, f"Request failed: {e}") from e

        if res.is_error:
            err = _error_from_response(res)
            logger.warning("Store error [%s %s]: %d %s", method, path, err.status, err.message)
            raise err

        try:
            data = res.json()
            return data if parse is None else parse(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Unreadable store response [%s %s]: %r", method, path, e)
            raise StoreError(res.status_code, f"Invalid response from {method} {path}") from e

    # -- SectionStore --------------------------------------------------------

    async def list_pages(self) -> list[Page]:
        return await self._request("GET", "/pages", parse=lambda data: [Page.from_dict(p) for p in data])

    async def get_page(self, slug: str) -> Page:
        return await self._request("GET", f"/pages/{_seg(slug)}", parse=Page.from_dict)

    async def create_section(self, slug: str, kind: str, data: Any, order: int | None = None) -> Section:
        body: dict[str, Any] = {"kind": kind, "data": data}
        if order is not None:
            body["order"] = order
        return await self._request("POST", f"/pages/{_seg(slug)}/sections", body, parse=Section.from_dict)

    async def update_section(self, section_id: str, *, data: Any = None, order: int | None = None) -> Section:
        body: dict[str, Any] = {}
        if data is not None:
            body["data"] = data
        if order is not None:
            body["order"] = order
        return await self._request("PUT", f"/sections/{_seg(section_id)}", body, parse=Section.from_dict)

    async def delete_section(self, section_id: str) -> None:
        await self._request("DELETE", f"/sections/{_seg(section_id)}")

    async def list_media(self) -> list[MediaAsset]:
        return await self._request("GET", "/media", parse=lambda data: [MediaAsset.from_dict(m) for m in data])

    async def current_user(self) -> dict[str, Any] | None:
        try:
            return await self._request("GET", "/auth/me")
        except StoreError as e:
            if e.status in (401, 403):
                return None
            raise

    async def close(self) -> None:
        await self.client.aclose()
