"""
SCM Providers Base Package

Exports provider-agnostic contracts, DTOs, the action catalog, error taxonomy
and the provider factory:
- Interfaces: the ``SCMProvider`` protocol
- Models (DTOs): parameter specs, config groups, call options, runtime state
- Actions: closed action names, bindings and the shared execution path
- Factory: lazy creation of provider adapters by canonical name
"""

from .actions import ActionBinding, ActionCall, ActionName, execute, resolve_action_name
from .dispatch import ActionDispatcher, UnknownActionError
from .errors import ErrorCode, ProviderError, normalize_error
from .factory import ProviderFactory, UnknownProviderError, create_provider
from .interfaces import SCMProvider
from .logging import get_logger, log_event
from .models import (
    CallOptions,
    ConfigGroup,
    ParameterAttr,
    ParameterSpec,
    ProviderState,
    ProviderStatus,
    RegexPattern,
)
from .params import ActionArgs, get_param
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "ActionArgs",
    "ActionBinding",
    "ActionCall",
    "ActionDispatcher",
    "ActionName",
    "CallOptions",
    "ConfigGroup",
    "ErrorCode",
    "ParameterAttr",
    "ParameterSpec",
    "ProviderError",
    "ProviderFactory",
    "ProviderState",
    "ProviderStatus",
    "RegexPattern",
    "SCMProvider",
    "TimeoutConfig",
    "UnknownActionError",
    "UnknownProviderError",
    "create_provider",
    "execute",
    "get_logger",
    "get_param",
    "get_timeout_config",
    "log_event",
    "normalize_error",
    "resolve_action_name",
]
