"""Single-class DTO modules re-exported by ``scm_providers.base.models``."""

from .parameter_spec import ParameterAttr, ParameterOption, ParameterSpec, RegexPattern
from .config_group import MASK, ConfigGroup
from .call_options import CallConfigs, CallOptions
from .provider_state import ProviderState, ProviderStatus

__all__ = [
    "ParameterSpec",
    "ParameterAttr",
    "ParameterOption",
    "RegexPattern",
    "ConfigGroup",
    "MASK",
    "CallConfigs",
    "CallOptions",
    "ProviderState",
    "ProviderStatus",
]
