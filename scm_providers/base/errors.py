"""Unified SCM provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``scm_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import extract_status, is_auth_rejection, is_not_found
from .errors_parts.normalize import normalize_error

__all__ = [
    "ErrorCode",
    "ProviderError",
    "extract_status",
    "is_auth_rejection",
    "is_not_found",
    "normalize_error",
]
