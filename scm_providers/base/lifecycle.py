"""Lifecycle helpers shared by vendor adapters (init and config updates).

State machine per provider instance::

    UNINITIALIZED --init() ok--> READY
    READY --update_plugin_config--> UNINITIALIZED --init()--> READY | FAILED_AUTH | FAILED

``init()`` failures never leave a stale client: the previous client is closed
and the state becomes an empty state tagged with the failure status.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional

from .errors import ErrorCode, ProviderError, is_auth_rejection
from .logging import LogContext, log_event
from .models import ConfigGroup, ProviderState, ProviderStatus

CONFIG_UPDATED_MESSAGE = "Configuration updated successfully"


def auth_failed(provider: str, message: str, raw: Optional[BaseException] = None) -> ProviderError:
    """Return the 401 ``AUTH_FAILED`` error for ``provider``."""
    return ProviderError(
        code=ErrorCode.AUTH_FAILED,
        message=message,
        status_code=401,
        provider=provider,
        raw=raw,
    )


def init_error(provider: str, title: str, exc: BaseException) -> ProviderError:
    """Normalize a failure raised during ``init()``.

    401 taxonomy errors pass through unchanged; a vendor 401/403 becomes
    ``AUTH_FAILED``; everything else becomes a 500 ``INIT_FAILED``.
    """
    if isinstance(exc, ProviderError) and exc.status_code == 401:
        return exc
    if is_auth_rejection(exc):
        return auth_failed(provider, f"{title} authentication failed", raw=exc)
    return ProviderError(
        code=ErrorCode.INIT_FAILED,
        message=f"Failed to initialize {title} provider",
        status_code=500,
        provider=provider,
        raw=exc,
    )


def failed_state(err: ProviderError) -> ProviderState:
    status = ProviderStatus.FAILED_AUTH if err.status_code == 401 else ProviderStatus.FAILED
    return ProviderState.empty(status)


def _manifest_secrets(provider: str) -> Dict[str, FrozenSet[str]]:
    """Map manifest group names to their secret keys; ``""`` holds ``provider``'s own."""
    from ..config.schema import default_config_group, default_config_groups

    secrets = {g.name: frozenset(p.key for p in g.params if p.attr.secret) for g in default_config_groups()}
    try:
        own = default_config_group(provider)
    except KeyError:
        secrets[""] = frozenset()
    else:
        secrets[""] = secrets[own.name]
    return secrets


def _masked_dump(provider: str, groups: List[ConfigGroup]) -> List[Dict[str, Any]]:
    secrets = _manifest_secrets(provider)
    return [g.masked(secrets.get(g.name, secrets[""])).model_dump(mode="json") for g in groups]


def _coerce_groups(options: Any) -> List[ConfigGroup]:
    raw = options.get("configs") if isinstance(options, Mapping) else getattr(options, "configs", None)
    if raw is None:
        raise ValueError("configs is required")
    if isinstance(raw, (ConfigGroup, Mapping)):
        raw = [raw]
    return [ConfigGroup.model_validate(g) for g in raw]


def apply_config_update(
    provider: str,
    store: Any,
    options: Any,
    reinitialize: Callable[[], ProviderState],
    logger: logging.Logger,
) -> Dict[str, Any]:
    """Persist replacement config groups, then re-run ``init()``.

    Parameters:
        provider: Provider key used on errors and log events.
        store: ``ConfigStore`` receiving the groups.
        options: Mapping (or object) whose ``configs`` holds the groups.
        reinitialize: Callable dropping the provider to UNINITIALIZED and
            running ``init()``.
        logger: Provider logger.

    Returns:
        ``{"message": "Configuration updated successfully", "configs": ...}``
        where ``configs`` is the value supplied by the caller.

    Raises:
        ProviderError: ``CONFIG_UPDATE_FAILED`` (500) for any failure,
            including invalid values and a failed re-initialization.
    """
    try:
        groups = _coerce_groups(options)
        problems = [p for g in groups for p in g.violations(check_required=False)]
        if problems:
            raise ValueError("; ".join(problems))
        store.save_configs(groups)
        state = reinitialize()
    except Exception as exc:
        log_event(
            logger,
            "provider.config.update_failed",
            LogContext(provider=provider),
            level=logging.WARNING,
            cause=type(exc).__name__,
        )
        raise ProviderError(
            code=ErrorCode.CONFIG_UPDATE_FAILED,
            message="Failed to update plugin configuration",
            status_code=500,
            provider=provider,
            raw=exc,
        ) from exc
    log_event(
        logger,
        "provider.config.updated",
        LogContext(provider=provider, owner=state.owner or None),
        groups=_masked_dump(provider, groups),
    )
    configs = options.get("configs") if isinstance(options, Mapping) else getattr(options, "configs", None)
    return {"message": CONFIG_UPDATED_MESSAGE, "configs": configs}


__all__ = [
    "CONFIG_UPDATED_MESSAGE",
    "apply_config_update",
    "auth_failed",
    "failed_state",
    "init_error",
]
