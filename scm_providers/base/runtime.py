"""Per-instance runtime shared by vendor adapters through composition.

``ProviderRuntime`` owns the adapter's :class:`ProviderState` and implements
the parts of the lifecycle that do not depend on the vendor:

- atomic state swaps that close the replaced client,
- the ``init()`` envelope (normalize failures, fall back to a failed state),
- action execution against a state snapshot,
- configuration updates followed by re-initialization.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Mapping

from .actions import ActionBinding, ActionName, execute
from .dispatch import UnknownActionError
from .http import close_quietly
from .lifecycle import apply_config_update, failed_state, init_error
from .logging import LogContext, log_event
from .models import ProviderState


class ProviderRuntime:
    """State holder and lifecycle envelope for one provider instance."""

    def __init__(self, provider: str, title: str, store: Any, logger: logging.Logger) -> None:
        self.provider = provider
        self.title = title
        self.store = store
        self.logger = logger
        self._state = ProviderState()
        self._lock = threading.Lock()

    @property
    def state(self) -> ProviderState:
        return self._state

    def swap(self, new: ProviderState) -> ProviderState:
        """Install ``new`` and close the client of the state it replaces."""
        with self._lock:
            old, self._state = self._state, new
        if old.client is not None and old.client is not new.client:
            close_quietly(old.client)
        return new

    def initialize(self, connect: Callable[[], Any]) -> ProviderState:
        """Run ``connect`` (which swaps in a READY state) as an ``init()`` call.

        Raises:
            ProviderError: ``AUTH_FAILED`` (401) or ``INIT_FAILED`` (500); the
                state is left client-less with the matching failure status.
        """
        try:
            connect()
        except Exception as exc:
            err = init_error(self.provider, self.title, exc)
            self.swap(failed_state(err))
            log_event(
                self.logger,
                "provider.init.error",
                LogContext(provider=self.provider),
                level=logging.WARNING,
                error_code=err.code.value,
                status_code=err.status_code,
                cause=type(exc).__name__,
            )
            if err is exc:
                raise
            raise err from exc
        state = self._state
        log_event(self.logger, "provider.init.ok", LogContext(provider=self.provider, owner=state.owner or None))
        return state

    def run(self, bindings: Mapping[ActionName, ActionBinding], action: ActionName, options: Any) -> Any:
        """Execute ``action`` against a snapshot of the current state."""
        binding = bindings.get(action)
        if binding is None:
            raise UnknownActionError(self.provider, getattr(action, "value", str(action)))
        return execute(self.provider, action, binding, options, self._state, self.logger)

    def update_config(self, options: Any, init: Callable[[], ProviderState]) -> Dict[str, Any]:
        """Persist new config groups, drop to UNINITIALIZED, then call ``init``."""

        def reinitialize() -> ProviderState:
            self.swap(ProviderState.empty())
            return init()

        return apply_config_update(self.provider, self.store, options, reinitialize, self.logger)


__all__ = ["ProviderRuntime"]
