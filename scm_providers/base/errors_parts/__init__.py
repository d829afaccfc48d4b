"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `scm_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import extract_status, is_auth_rejection, is_not_found
from .normalize import normalize_error

__all__ = [
    "ErrorCode",
    "ProviderError",
    "extract_status",
    "is_auth_rejection",
    "is_not_found",
    "normalize_error",
]
