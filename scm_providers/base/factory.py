"""Provider factory.

Purpose
-------
Create SCM adapters implementing :class:`SCMProvider` from a canonical name.
Adapter modules are imported lazily with ``importlib`` so importing the
factory never pulls in every vendor.

Failure modes
-------------
Unknown names, import failures, missing classes and constructor errors all
surface as :class:`UnknownProviderError`. The factory never calls ``init()``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or constructed."""


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create provider adapters based on a canonical name (e.g. ``"github"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "github": {"module": "scm_providers.github.client", "class": "GithubProvider"},
        "bitbucket": {"module": "scm_providers.bitbucket.client", "class": "BitbucketProvider"},
    }

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider name, case-insensitive.
        **kwargs:
            Adapter constructor kwargs (``store``, ``transport``...).

        Raises
        ------
        UnknownProviderError
            If the provider is unknown, its module fails to import, the class
            is missing, or the constructor raises.
        """
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except Exception as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc
        except Exception as exc:  # pragma: no cover - adapter runtime init error
            raise UnknownProviderError(f"Failed to initialize provider '{provider}': {exc}") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in declaration order."""
        return tuple(cls._PROVIDERS.keys())


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
