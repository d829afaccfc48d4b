"""Name-based dispatch onto a provider's closed action table.

Callers that only hold an external action name (``"actionListRepos"``, the
service layer, plugin hosts) go through :class:`ActionDispatcher`. Names are
resolved against :class:`~scm_providers.base.actions.ActionName` (plus the
accepted legacy spellings); a name that resolves to nothing, or to an action
the provider does not bind, is rejected with :class:`UnknownActionError`
before any provider code runs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .actions import ActionName, resolve_action_name
from .interfaces import SCMProvider
from .logging import LogContext, get_logger, log_event


class UnknownActionError(Exception):
    """Raised when an action name is not in the provider's action table."""

    def __init__(self, provider: str, action: str) -> None:
        super().__init__(f"Unknown action '{action}' for provider '{provider}'")
        self.provider = provider
        self.action = action

    def to_dict(self) -> Dict[str, Any]:
        return {"message": str(self), "statusCode": 404, "errorCode": "UNKNOWN_ACTION"}


class ActionDispatcher:
    """Route external action names to ``provider.run``."""

    def __init__(self, provider: SCMProvider, logger: Optional[logging.Logger] = None) -> None:
        self._provider = provider
        self._logger = logger or get_logger("scm_providers.dispatch")

    @property
    def provider(self) -> SCMProvider:
        return self._provider

    def resolve(self, action_name: Any) -> ActionName:
        """Return the bound :class:`ActionName` for ``action_name``.

        Raises:
            UnknownActionError: if the name is unknown or not bound.
        """
        action = resolve_action_name(action_name)
        if action is None or action not in self._provider.actions():
            log_event(
                self._logger,
                "dispatch.unknown_action",
                LogContext(provider=self._provider.provider_name, action=str(action_name)),
                level=logging.WARNING,
            )
            raise UnknownActionError(self._provider.provider_name, str(action_name))
        return action

    def invoke(self, action_name: Any, options: Any = None) -> Any:
        """Resolve ``action_name`` and run it with ``options``."""
        return self._provider.run(self.resolve(action_name), options)

    def resolve_field(self, action_name: Any, logical: str) -> str:
        """Return the physical parameter key for a logical field on this vendor.

        ``logical`` names without an alias map to themselves.
        """
        binding = self._provider.actions()[self.resolve(action_name)]
        return binding.aliases.get(logical, logical)

    def names(self) -> List[str]:
        """External names of every bound action, in declaration order."""
        return [action.value for action in self._provider.actions()]

    def describe(self) -> List[Dict[str, Any]]:
        """Manifest entries of every bound action."""
        return [binding.describe(action) for action, binding in self._provider.actions().items()]


__all__ = ["ActionDispatcher", "UnknownActionError"]
