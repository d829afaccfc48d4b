"""scm_providers package

Unified abstraction over source-control hosting providers (GitHub and
Bitbucket Cloud).

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Factory: :func:`create`, :class:`ProviderFactory`
    - Contract: :class:`SCMProvider`, :class:`ActionName`,
      :class:`ActionDispatcher`

Typical use::

    provider = create("github")
    provider.init()
    repos = provider.list_repos()
"""

from typing import Any

from .base.actions import ActionName
from .base.dispatch import ActionDispatcher, UnknownActionError
from .base.errors import ErrorCode, ProviderError
from .base.factory import ProviderFactory, UnknownProviderError
from .base.interfaces import SCMProvider
from .base.models import CallOptions, ConfigGroup, ParameterSpec, ProviderState, ProviderStatus

__version__ = "0.1.0"


def create(provider: str, **kwargs: Any) -> SCMProvider:
    """Create an (uninitialized) provider adapter by canonical name.

    Raises:
        ProviderError: ``INIT_FAILED`` (500) when the name is unknown or the
            adapter cannot be constructed.
    """
    try:
        return ProviderFactory.create(provider, **kwargs)
    except UnknownProviderError as exc:
        raise ProviderError(
            code=ErrorCode.INIT_FAILED,
            message=str(exc),
            status_code=500,
            provider=(provider or "unknown").lower().strip() or "unknown",
            raw=exc,
        ) from exc


__all__ = [
    "ActionDispatcher",
    "ActionName",
    "CallOptions",
    "ConfigGroup",
    "ErrorCode",
    "ParameterSpec",
    "ProviderError",
    "ProviderFactory",
    "ProviderState",
    "ProviderStatus",
    "SCMProvider",
    "UnknownActionError",
    "UnknownProviderError",
    "__version__",
    "create",
]
