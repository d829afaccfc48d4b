"""SCMProvider Protocol (single-class module).

Defines the capability set every vendor adapter implements. Adapters are
independent types; they share helpers (``base.actions``, ``base.lifecycle``)
but no base class or mutable base state.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol, runtime_checkable

from ..actions import ActionBinding, ActionName
from ..models import ProviderState


@runtime_checkable
class SCMProvider(Protocol):
    """Provider contract: lifecycle, client construction and a closed action menu."""

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"github"``."""
        ...

    @property
    def config_group_name(self) -> str:
        """Name of the ``ConfigGroup`` this provider reads from the store."""
        ...

    @property
    def state(self) -> ProviderState:
        """Current immutable runtime state."""
        ...

    def init(self) -> ProviderState:
        """Read configuration, authenticate and swap in a READY state.

        Fails with ``AUTH_FAILED`` (401) when credentials or the owner are
        missing or rejected; any other failure is ``INIT_FAILED`` (500). A
        failure never leaves a stale client behind.
        """
        ...

    def create_client(self, credentials: Mapping[str, str]) -> Dict[str, Any]:
        """Build the authenticated client and return the vendor user profile."""
        ...

    def actions(self) -> Mapping[ActionName, ActionBinding]:
        """Return the provider's action table."""
        ...

    def run(self, action: ActionName, options: Any = None) -> Any:
        """Execute one action from :meth:`actions`."""
        ...

    def update_plugin_config(self, options: Any = None) -> Dict[str, Any]:
        """Persist replacement config groups and re-run :meth:`init`."""
        ...
