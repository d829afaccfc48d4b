"""Centralized HTTP timeout configuration for SCM providers.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and whenever the relevant variables change. Supported
    environment variables (all optional):
        SCM_HTTP_TIMEOUT_SECONDS
        SCM_CONNECT_TIMEOUT_SECONDS

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache after first read).
3. This layer never retries; timeouts surface as normalized 500 errors.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Read/write/pool timeout for individual REST calls.
        connect_timeout_seconds: Timeout for establishing the TCP/TLS connection.
    """

    http_timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0

    def as_httpx(self) -> httpx.Timeout:
        """Return an ``httpx.Timeout`` built from this configuration."""
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:  # pragma: no cover
        return default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    cur_guard = "/".join(
        [
            os.getenv("SCM_HTTP_TIMEOUT_SECONDS", ""),
            os.getenv("SCM_CONNECT_TIMEOUT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("SCM_HTTP_TIMEOUT_SECONDS", 30.0),
        connect_timeout_seconds=_parse_env_float("SCM_CONNECT_TIMEOUT_SECONDS", 10.0),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
