"""
Status extraction helpers for transport and provider failures.

Vendor adapters receive failures in several shapes: ``httpx.HTTPStatusError``
(``exc.response.status_code``), already-normalized :class:`ProviderError`
(``exc.status_code``) or foreign objects carrying ``status`` / ``statusCode``
as an int or a numeric string. These helpers reduce all of them to one
optional integer so the normalizer can apply a single policy.
"""
from __future__ import annotations

from typing import Any, Optional


def _coerce_status(value: Any) -> Optional[int]:
    """Return ``value`` as an HTTP status integer, or ``None`` when invalid."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            return None
        value = int(value)
    if isinstance(value, int) and 100 <= value < 600:
        return value
    return None


def extract_status(exc: Any) -> Optional[int]:
    """Attempt to extract an HTTP status code from a failure object.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.statusCode``
    - ``exc.status``
    - ``exc.response.status_code``
    - ``exc.response.status``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "statusCode", "status"):
        status = _coerce_status(getattr(exc, attr, None))
        if status is not None:
            return status
    resp = getattr(exc, "response", None)
    if resp is not None:
        for attr in ("status_code", "status"):
            status = _coerce_status(getattr(resp, attr, None))
            if status is not None:
                return status
    return None


def is_not_found(exc: Any) -> bool:
    """Return True when the failure carries a 404 status."""
    return extract_status(exc) == 404


def is_auth_rejection(exc: Any) -> bool:
    """Return True when the vendor rejected the credentials (401/403)."""
    return extract_status(exc) in (401, 403)


__all__ = ["extract_status", "is_not_found", "is_auth_rejection"]
