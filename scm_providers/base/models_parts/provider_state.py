"""ProviderState value object (single-class module).

Per-provider runtime state. Instances are immutable: ``init()`` builds a new
state and swaps it in with one assignment, so a reader never observes a
half-populated client/owner pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import httpx


class ProviderStatus(str, Enum):
    """Lifecycle states of a provider instance."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED_AUTH = "failed_auth"
    FAILED = "failed"


@dataclass(frozen=True)
class ProviderState:
    """Authenticated client handle plus the owner scope it operates under.

    Attributes:
        status: Current lifecycle status.
        client: Authenticated ``httpx.Client``; ``None`` unless READY.
        owner: Account/workspace under which repository paths resolve.
        profile: Profile returned by the credential check (``GET /user``).
    """

    status: ProviderStatus = ProviderStatus.UNINITIALIZED
    client: Optional[httpx.Client] = None
    owner: str = ""
    profile: Dict[str, Any] = field(default_factory=dict)

    @property
    def ready(self) -> bool:
        return self.status is ProviderStatus.READY and self.client is not None

    @classmethod
    def empty(cls, status: ProviderStatus = ProviderStatus.UNINITIALIZED) -> "ProviderState":
        """Return a client-less state carrying ``status``."""
        return cls(status=status)


__all__ = ["ProviderState", "ProviderStatus"]
