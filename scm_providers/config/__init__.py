"""Unified configuration layer for SCM providers.

Goals
-----
* Centralize vendor defaults (base URLs, API versions, page sizes).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by SCM_PROVIDERS_CONFIG_FILE
    3. Environment variables (e.g. GITHUB_API_BASE_URL, BITBUCKET_PAGE_SIZE)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

Credentials are *not* resolved here: they live in the configuration store as
``ConfigGroup`` parameters (see ``scm_providers.config.schema``).

External Config File
--------------------
```
github:
  api_base_url: https://github.example.com/api/v3
bitbucket:
  page_size: 25
```
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    BITBUCKET_DEFAULT_API_BASE_URL,
    DEFAULT_PAGE_SIZE,
    GITHUB_DEFAULT_API_BASE_URL,
    GITHUB_DEFAULT_API_VERSION,
)

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "github": {
        "api_base_url": GITHUB_DEFAULT_API_BASE_URL,
        "api_version": GITHUB_DEFAULT_API_VERSION,
        "page_size": DEFAULT_PAGE_SIZE,
    },
    "bitbucket": {
        "api_base_url": BITBUCKET_DEFAULT_API_BASE_URL,
        "page_size": DEFAULT_PAGE_SIZE,
    },
}

ENV_FIELD_MAP = {
    "api_base_url": "API_BASE_URL",
    "api_version": "API_VERSION",
    "page_size": "PAGE_SIZE",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load (and cache per path) the file named by ``SCM_PROVIDERS_CONFIG_FILE``.

    JSON is tried first; YAML is the fallback. A missing file, an unparsable
    file or a non-mapping document yields an empty mapping.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv("SCM_PROVIDERS_CONFIG_FILE") or ""
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    p = Path(path) if path else None
    if p is not None and p.is_file():
        text = p.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE, _FILE_CACHE_PATH = data, path
    return data


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    return out


def _coerce_page_size(value: Any) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PAGE_SIZE
    return size if size > 0 else DEFAULT_PAGE_SIZE


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    if "page_size" in cfg:
        cfg["page_size"] = _coerce_page_size(cfg["page_size"])
    return cfg


__all__ = ["DEFAULTS", "get_provider_config"]
