"""Thin request helpers used by vendor adapters.

Every helper raises ``httpx.HTTPStatusError`` for 4xx/5xx answers so the
shared error normalizer can read the status; none of them retries.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx


def clean_params(params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Drop query parameters whose value is ``None`` or an empty string."""
    return {k: v for k, v in (params or {}).items() if v is not None and v != ""}


def path_segment(value: Any, *, keep_slashes: bool = False) -> str:
    """Percent-encode a caller value for use inside a URL path."""
    return quote(str(value), safe="/" if keep_slashes else "")


def read_body(resp: httpx.Response) -> Any:
    """Return decoded JSON for JSON answers, text otherwise, ``None`` when empty."""
    if not resp.content:
        return None
    ctype = resp.headers.get("content-type", "")
    if "json" in ctype:
        return resp.json()
    return resp.text


def get_json(client: httpx.Client, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
    resp = client.get(path, params=clean_params(params))
    resp.raise_for_status()
    return read_body(resp)


def post_json(client: httpx.Client, path: str, payload: Mapping[str, Any]) -> Any:
    resp = client.post(path, json=dict(payload))
    resp.raise_for_status()
    return read_body(resp)


__all__ = ["clean_params", "get_json", "path_segment", "post_json", "read_body"]
