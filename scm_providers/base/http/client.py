"""HTTP client construction for SCM vendor adapters.

Purpose:
    Build the authenticated ``httpx.Client`` each provider binds to its
    vendor's base URL. Timeouts derive exclusively from
    :func:`get_timeout_config`; no numeric literals are introduced here.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Lifecycle & cleanup:
    - Clients are owned by a single ``ProviderState``. Re-running ``init()``
      replaces the state and closes the previous client via
      :func:`close_quietly`.
    - Every client built here is tracked so :func:`close_all_clients` can
      release connections at interpreter exit or in test teardown.

Testing:
    Callers may pass ``transport`` (for example ``httpx.MockTransport``) to
    route requests to an in-process handler instead of the network.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
import weakref
from typing import Mapping, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: "weakref.WeakSet[httpx.Client]" = weakref.WeakSet()
_LOCK = threading.RLock()


def build_client(
    base_url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    basic_auth: Optional[Tuple[str, str]] = None,
    bearer_token: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Return a new ``httpx.Client`` bound to ``base_url``.

    Parameters:
        base_url: Vendor API root; requests use paths relative to it.
        headers: Default headers sent with every request.
        basic_auth: Optional ``(username, password)`` pair.
        bearer_token: Optional token injected as ``Authorization: Bearer``.
        transport: Optional transport override (tests, proxies).

    Returns:
        A configured client. The caller owns it and must close it.
    """
    merged = dict(headers or {})
    if bearer_token:
        merged["Authorization"] = f"Bearer {bearer_token}"
    client = httpx.Client(
        base_url=base_url.rstrip("/"),
        headers=merged,
        auth=httpx.BasicAuth(*basic_auth) if basic_auth else None,
        timeout=get_timeout_config().as_httpx(),
        transport=transport,
    )
    with _LOCK:
        _CLIENTS.add(client)
    return client


def close_quietly(client: Optional[httpx.Client]) -> None:
    """Close ``client`` if present; shutdown errors are not actionable."""
    if client is None:
        return
    with contextlib.suppress(Exception):  # nosec B110 - best-effort shutdown
        client.close()


def close_all_clients() -> None:
    """Close every client built by :func:`build_client` that is still alive."""
    with _LOCK:
        clients = list(_CLIENTS)
        _CLIENTS.clear()
    for c in clients:
        close_quietly(c)


atexit.register(close_all_clients)

__all__ = ["build_client", "close_quietly", "close_all_clients"]
