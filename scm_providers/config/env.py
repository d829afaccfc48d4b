"""scm_providers.config.env
========================

Environment variable mapping for provider credentials.

Purpose
-------
- Single source of truth mapping each provider's config parameter keys to the
  environment variables that may supply them.
- ``seed_group_from_env`` fills empty values of a ``ConfigGroup`` from the
  environment so a fresh store can start with usable credentials.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; values that look
like placeholders (``changeme``, ``example``...) are ignored.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

from ..base.models import ConfigGroup

# Provider → {config param key → ordered env var names (canonical first)}
ENV_MAP: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "github": {
        "token": ("GITHUB_TOKEN", "GH_TOKEN"),
        "owner": ("GITHUB_OWNER",),
    },
    "bitbucket": {
        "username": ("BITBUCKET_USERNAME",),
        "appPassword": ("BITBUCKET_APP_PASSWORD",),
        "owner": ("BITBUCKET_WORKSPACE", "BITBUCKET_OWNER"),
    },
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive, tolerant of surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def resolve_env(provider: str, key: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for a provider parameter key."""
    names = ENV_MAP.get((provider or "").lower().strip(), {}).get(key, ())
    for name in names:
        val = os.getenv(name)
        if val and val.strip() and not is_placeholder(val):
            return val.strip(), name
    return None, None


def seed_group_from_env(provider: str, group: ConfigGroup) -> ConfigGroup:
    """Return a copy of ``group`` with empty parameters filled from env vars."""
    seeded = group.model_copy(deep=True)
    for param in seeded.params:
        if param.first() not in (None, ""):
            continue
        val, _ = resolve_env(provider, param.key)
        if val is not None:
            param.value = [val]
    return seeded


__all__ = ["ENV_MAP", "is_placeholder", "resolve_env", "seed_group_from_env"]
