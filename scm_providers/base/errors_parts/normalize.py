"""
Error normalization policy shared by every vendor adapter.

Policy (identical for all providers and all actions; only the literal codes
and messages differ per action):

1. A :class:`ProviderError` whose status is in ``passthrough`` is returned
   unchanged. ``passthrough=None`` means every status: inside actions, errors
   already in the taxonomy are never re-wrapped.
2. Any failure carrying a 404 becomes a 404 with the action's not-found code
   (``RESOURCE_NOT_FOUND`` or a more specific variant).
3. Everything else becomes a 500 with the action's failure code.

Raw transport exceptions are kept on ``ProviderError.raw`` for diagnostics and
never propagate past the adapter.
"""
from __future__ import annotations

from typing import Collection, Optional

from .classification import extract_status
from .error_code import ErrorCode
from .provider_error import ProviderError


def normalize_error(
    exc: BaseException,
    *,
    provider: str,
    failure_code: ErrorCode,
    failure_message: str,
    action: Optional[str] = None,
    not_found_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    not_found_message: str = "Resource not found",
    passthrough: Optional[Collection[int]] = None,
) -> ProviderError:
    """Map ``exc`` onto exactly one :class:`ProviderError`.

    Parameters:
        exc: The caught failure (transport error, ``ProviderError`` or other).
        provider: Provider key recorded on the normalized error.
        failure_code: Code used for the generic 500 fallback.
        failure_message: Message used for the generic 500 fallback.
        action: External action name recorded on the normalized error.
        not_found_code: Code used when the failure carries a 404.
        not_found_message: Message used when the failure carries a 404.
        passthrough: Statuses for which an existing ``ProviderError`` is
            returned untouched. ``None`` passes every ``ProviderError``.

    Returns:
        The normalized error; the caller raises it.
    """
    if isinstance(exc, ProviderError):
        if passthrough is None or exc.status_code in passthrough:
            return exc
    status = extract_status(exc)
    if status == 404:
        return ProviderError(
            code=not_found_code,
            message=not_found_message,
            status_code=404,
            provider=provider,
            action=action,
            raw=exc,
        )
    return ProviderError(
        code=failure_code,
        message=failure_message,
        status_code=500,
        provider=provider,
        action=action,
        raw=exc,
    )


__all__ = ["normalize_error"]
